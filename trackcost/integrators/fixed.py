"""Constant step-size integration."""

import logging
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from trackcost.core.tableau import ButcherTableau, StageType
from trackcost.errors import ConfigurationError
from trackcost.integrators.base import (
    RHS,
    Integrator,
    check_window,
    explicit_stages,
)
from trackcost.methods.runge_kutta import rk4

logger = logging.getLogger(__name__)


class FixedStepIntegrator(Integrator):
    """Explicit Runge-Kutta with constant dt; the last step is shortened to hit t1."""

    def __init__(self, tableau: Optional[ButcherTableau] = None):
        tableau = tableau if tableau is not None else rk4()
        if tableau.stage_type != StageType.EXPLICIT:
            raise ConfigurationError("fixed-step integration needs an explicit tableau")
        self.tableau = tableau

    def integrate(
        self,
        rhs: RHS,
        y0: NDArray,
        t0: float,
        t1: float,
        dt: float,
        grid: Optional[NDArray] = None,
    ) -> tuple[NDArray, int]:
        check_window(t0, t1)
        if not dt > 0.0:
            raise ConfigurationError(f"step size must be positive, got {dt!r}")

        y = np.array(y0, dtype=float)
        # Step boundaries t0, t0 + dt, ..., t1
        n = int(np.ceil((t1 - t0) / dt - 1e-12)) if t1 > t0 else 0
        times = np.minimum(t0 + dt * np.arange(n + 1), t1)
        if n:
            times[-1] = t1

        for step in range(n):
            h = times[step + 1] - times[step]
            K = explicit_stages(rhs, self.tableau, y, times[step], h)
            y = y + h * (self.tableau.b @ K)

        logger.debug("fixed-step integration [%g, %g]: %d steps", t0, t1, n)
        return y, n

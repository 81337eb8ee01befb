"""Adaptive-step integration with an embedded Runge-Kutta pair."""

import logging
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from trackcost.core.tableau import ButcherTableau, StageType
from trackcost.errors import ConfigurationError, IntegrationStall
from trackcost.integrators.base import (
    RHS,
    Integrator,
    check_window,
    explicit_stages,
)
from trackcost.methods.runge_kutta import dopri5

logger = logging.getLogger(__name__)


class AdaptiveIntegrator(Integrator):
    """
    Error-controlled integration with an embedded explicit pair.

    The local error of component i is scaled as

        err_i = |e_i| / (atol + rtol * (|y_i| + dt * |f_i|))

    with y and f = rhs(y, t) taken at the start of the step. A step is
    accepted when max_i err_i <= 1. Rejected steps shrink dt by at most a
    factor of 5; accepted steps with err < 0.5 grow it by at most a factor
    of 5.
    """

    def __init__(
        self,
        tableau: Optional[ButcherTableau] = None,
        atol: float = 1e-5,
        rtol: float = 1e-5,
        max_rejections: int = 500,
        max_steps: int = 100_000,
        min_dt: float = 1e-12,
    ):
        """
        Initialize adaptive integrator.

        Args:
            tableau: Embedded explicit pair (Dormand-Prince 5(4) if omitted)
            atol: Absolute local error tolerance
            rtol: Relative local error tolerance
            max_rejections: Consecutive rejected trials before giving up
            max_steps: Accepted steps before giving up
            min_dt: Step-size floor
        """
        tableau = tableau if tableau is not None else dopri5()
        if tableau.stage_type != StageType.EXPLICIT:
            raise ConfigurationError("adaptive integration needs an explicit tableau")
        if not tableau.is_embedded:
            raise ConfigurationError("adaptive integration needs an embedded pair")
        if tableau.error_order < 2:
            raise ConfigurationError("embedded method must be at least 2nd order")

        self.tableau = tableau
        self.atol = atol
        self.rtol = rtol
        self.max_rejections = max_rejections
        self.max_steps = max_steps
        self.min_dt = min_dt

    def integrate(
        self,
        rhs: RHS,
        y0: NDArray,
        t0: float,
        t1: float,
        dt: float,
        grid: Optional[NDArray] = None,
    ) -> tuple[NDArray, int]:
        """Integrate with step-size control; the last step lands on t1."""
        check_window(t0, t1)
        if not dt > 0.0:
            raise ConfigurationError(f"initial step size must be positive, got {dt!r}")

        y = np.array(y0, dtype=float)
        if t0 == t1:
            return y, 0

        p = self.tableau.order
        q = self.tableau.error_order
        t = t0
        steps = 0
        f = np.asarray(rhs(y, t), dtype=float)

        while t < t1:
            last = t + dt >= t1
            if last:
                dt = t1 - t

            rejections = 0
            while True:
                y_new, err, f_new = self._try_step(rhs, y, f, t, dt)
                if not np.isfinite(err):
                    self._stall("non-finite error estimate", t, dt, steps)
                if err <= 1.0:
                    break

                rejections += 1
                if rejections >= self.max_rejections:
                    self._stall("too many rejected steps", t, dt, steps)
                dt *= max(0.9 * err ** (-1.0 / (q - 1)), 0.2)
                last = False
                if dt < self.min_dt:
                    self._stall("step size underflow", t, dt, steps)

            t = t1 if last else t + dt
            y, f = y_new, f_new
            steps += 1
            if steps >= self.max_steps and t < t1:
                self._stall("step limit reached", t, dt, steps)

            if err < 0.5:
                err = max(5.0 ** (-p), err)
                dt *= 0.9 * err ** (-1.0 / p)

        logger.debug("adaptive integration [%g, %g]: %d steps", t0, t1, steps)
        return y, steps

    def _try_step(
        self,
        rhs: RHS,
        y: NDArray,
        f: NDArray,
        t: float,
        dt: float,
    ) -> tuple[NDArray, float, NDArray]:
        """One trial step: new value, scaled error norm, derivative at new value."""
        tab = self.tableau
        K = explicit_stages(rhs, tab, y, t, dt, k0=f)

        y_new = y + dt * (tab.b @ K)
        y_err = dt * (tab.error_weights @ K)

        scale = self.atol + self.rtol * (np.abs(y) + dt * np.abs(f))
        err = float(np.max(np.abs(y_err) / scale))

        if tab.is_fsal:
            f_new = K[-1]
        else:
            f_new = np.asarray(rhs(y_new, t + dt), dtype=float)
        return y_new, err, f_new

    def _stall(self, reason: str, t: float, dt: float, steps: int) -> None:
        logger.warning("integration stalled: %s at t=%g (dt=%g)", reason, t, dt)
        raise IntegrationStall(reason, t=t, dt=dt, steps=steps)

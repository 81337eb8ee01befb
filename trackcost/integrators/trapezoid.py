"""Trapezoidal quadrature of the running cost on a sample grid."""

import logging
from typing import Optional
import numpy as np
from numpy.typing import NDArray
from scipy.integrate import trapezoid

from trackcost.errors import ConfigurationError
from trackcost.integrators.base import RHS, Integrator, check_window

logger = logging.getLogger(__name__)


class TrapezoidIntegrator(Integrator):
    """
    Trapezoidal rule over the trajectory's own sample times.

    Only valid when rhs does not depend on y, which holds for running cost
    integrands dJ/dt = l(x(t)). The integrand is evaluated at every grid
    time inside [t0, t1] plus both endpoints; without a grid a uniform
    spacing of dt is used. The step count is the number of intervals.
    """

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
        y = np.array(y0, dtype=float)
        if t0 == t1:
            return y, 0

        if grid is None:
            if not dt > 0.0:
                raise ConfigurationError(f"step size must be positive, got {dt!r}")
            grid = np.arange(t0, t1, dt)
        times = _window_grid(np.asarray(grid, dtype=float), t0, t1)

        values = np.array([rhs(y, t) for t in times])  # (len(times), len(y))
        y = y + trapezoid(values, x=times, axis=0)

        steps = len(times) - 1
        logger.debug("trapezoid quadrature [%g, %g]: %d intervals", t0, t1, steps)
        return y, steps


def _window_grid(grid: NDArray, t0: float, t1: float) -> NDArray:
    """Sorted grid points strictly inside (t0, t1), framed by t0 and t1."""
    inner = np.unique(grid[(grid > t0) & (grid < t1)])
    return np.concatenate(([t0], inner, [t1]))

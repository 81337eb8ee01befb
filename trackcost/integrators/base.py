"""Base integrator interface."""

import math
from abc import ABC, abstractmethod
from typing import Callable, Optional
import numpy as np
from numpy.typing import NDArray

from trackcost.core.tableau import ButcherTableau
from trackcost.errors import InvalidWindow

RHS = Callable[[NDArray, float], NDArray]


class Integrator(ABC):
    """Integrates dy/dt = rhs(y, t) across one window."""

    @abstractmethod
    def integrate(
        self,
        rhs: RHS,
        y0: NDArray,
        t0: float,
        t1: float,
        dt: float,
        grid: Optional[NDArray] = None,
    ) -> tuple[NDArray, int]:
        """
        Integrate from t0 to t1.

        Args:
            rhs: Right-hand side rhs(y, t)
            y0: Initial value (not modified)
            t0: Start time
            t1: End time, t1 >= t0
            dt: Initial or constant step size
            grid: Optional sample times of the underlying trajectory

        Returns:
            y: Value at t1
            steps: Number of accepted steps

        Raises:
            InvalidWindow: if t0 > t1 or either bound is NaN
        """
        ...


def check_window(t0: float, t1: float) -> None:
    """Reject NaN bounds and backward windows."""
    if math.isnan(t0) or math.isnan(t1) or t0 > t1:
        raise InvalidWindow(t0, t1)


def explicit_stages(
    rhs: RHS,
    tableau: ButcherTableau,
    y: NDArray,
    t: float,
    dt: float,
    k0: Optional[NDArray] = None,
) -> NDArray:
    """
    Stage derivatives of one explicit Runge-Kutta step.

    Args:
        rhs: Right-hand side rhs(y, t)
        tableau: Explicit tableau
        y: Value at the start of the step
        t: Time at the start of the step
        dt: Step size
        k0: Derivative at (y, t) if already known

    Returns:
        K: Stage derivatives (s, len(y))
    """
    s = tableau.s
    A, c = tableau.A, tableau.c

    K = np.zeros((s, y.shape[0]))
    for i in range(s):
        if i == 0 and k0 is not None:
            K[0] = k0
            continue
        # Y_i = y + dt Σ_{j<i} a_ij k_j
        y_stage = y + dt * (A[i, :i] @ K[:i])
        K[i] = rhs(y_stage, t + c[i] * dt)
    return K

"""Standard explicit Runge-Kutta tableaux."""

import numpy as np
from trackcost.core.tableau import ButcherTableau


def rk4() -> ButcherTableau:
    """Classic 4th-order Runge-Kutta method."""
    A = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [0.5, 0.0, 0.0, 0.0],
        [0.0, 0.5, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
    ])
    b = np.array([1.0/6.0, 1.0/3.0, 1.0/3.0, 1.0/6.0])
    c = np.array([0.0, 0.5, 0.5, 1.0])
    return ButcherTableau(A=A, b=b, c=c, order=4)


def bogacki_shampine() -> ButcherTableau:
    """Bogacki-Shampine 3(2) pair."""
    A = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [0.5, 0.0, 0.0, 0.0],
        [0.0, 0.75, 0.0, 0.0],
        [2.0/9.0, 1.0/3.0, 4.0/9.0, 0.0],
    ])
    b = np.array([2.0/9.0, 1.0/3.0, 4.0/9.0, 0.0])
    b_hat = np.array([7.0/24.0, 0.25, 1.0/3.0, 0.125])
    c = np.array([0.0, 0.5, 0.75, 1.0])
    return ButcherTableau(A=A, b=b, c=c, order=3, b_hat=b_hat, error_order=2)


def dopri5() -> ButcherTableau:
    """
    Dormand-Prince 5(4) pair.

    The 7th stage is evaluated at the new solution (first same as last),
    so b and the last row of A coincide.
    """
    A = np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [1.0/5.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [3.0/40.0, 9.0/40.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [44.0/45.0, -56.0/15.0, 32.0/9.0, 0.0, 0.0, 0.0, 0.0],
        [19372.0/6561.0, -25360.0/2187.0, 64448.0/6561.0, -212.0/729.0,
         0.0, 0.0, 0.0],
        [9017.0/3168.0, -355.0/33.0, 46732.0/5247.0, 49.0/176.0,
         -5103.0/18656.0, 0.0, 0.0],
        [35.0/384.0, 0.0, 500.0/1113.0, 125.0/192.0, -2187.0/6784.0,
         11.0/84.0, 0.0],
    ])
    b = np.array([
        35.0/384.0, 0.0, 500.0/1113.0, 125.0/192.0, -2187.0/6784.0,
        11.0/84.0, 0.0,
    ])
    b_hat = np.array([
        5179.0/57600.0, 0.0, 7571.0/16695.0, 393.0/640.0,
        -92097.0/339200.0, 187.0/2100.0, 1.0/40.0,
    ])
    c = np.array([0.0, 1.0/5.0, 3.0/10.0, 4.0/5.0, 8.0/9.0, 1.0, 1.0])
    return ButcherTableau(A=A, b=b, c=c, order=5, b_hat=b_hat, error_order=4)

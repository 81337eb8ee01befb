"""Runge-Kutta tableaux used by the integrators."""

from trackcost.methods.runge_kutta import rk4, bogacki_shampine, dopri5

__all__ = [
    "rk4",
    "bogacki_shampine",
    "dopri5",
]

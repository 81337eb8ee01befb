"""Integrators for the running cost ODE."""

from trackcost.integrators.base import Integrator
from trackcost.integrators.adaptive import AdaptiveIntegrator
from trackcost.integrators.fixed import FixedStepIntegrator
from trackcost.integrators.trapezoid import TrapezoidIntegrator
from trackcost.integrators.factory import create_integrator

__all__ = [
    "Integrator",
    "AdaptiveIntegrator",
    "FixedStepIntegrator",
    "TrapezoidIntegrator",
    "create_integrator",
]

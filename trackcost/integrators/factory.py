"""Integrator factory and dispatch logic."""

from trackcost.core.config import CostConfig, Quadrature
from trackcost.integrators.base import Integrator
from trackcost.integrators.adaptive import AdaptiveIntegrator
from trackcost.integrators.fixed import FixedStepIntegrator
from trackcost.integrators.trapezoid import TrapezoidIntegrator


def create_integrator(config: CostConfig) -> Integrator:
    """
    Select the running cost quadrature named by the configuration.

    Args:
        config: Cost configuration

    Returns:
        Integrator for config.quadrature
    """

    if config.quadrature == Quadrature.FIXED_STEP:
        return FixedStepIntegrator()

    if config.quadrature == Quadrature.TRAPEZOID:
        return TrapezoidIntegrator()

    return AdaptiveIntegrator(
        atol=config.atol,
        rtol=config.rtol,
        max_rejections=config.max_rejections,
        max_steps=config.max_steps,
        min_dt=config.min_dt,
    )

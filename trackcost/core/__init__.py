"""Core abstractions for trajectory cost evaluation."""

from trackcost.core.tableau import ButcherTableau, StageType
from trackcost.core.config import CostConfig, Quadrature
from trackcost.core.protocols import (
    StateInterpolator,
    ReferenceTrajectory,
    StateProjector,
    RunningCost,
)

__all__ = [
    "ButcherTableau",
    "StageType",
    "CostConfig",
    "Quadrature",
    "StateInterpolator",
    "ReferenceTrajectory",
    "StateProjector",
    "RunningCost",
]

"""Terminal, running and total trajectory tracking cost."""

from trackcost.cost.angles import wrap_angle, wrap_angles
from trackcost.cost.projection import (
    IdentityProjector,
    SelectionProjector,
    LinearProjector,
)
from trackcost.cost.terminal import (
    TerminalCost,
    QuadraticTerminalCost,
    TerminalCostEvaluator,
)
from trackcost.cost.running import QuadraticRunningCost
from trackcost.cost.trajectory_cost import CostResult, TrajectoryCost

__all__ = [
    "wrap_angle",
    "wrap_angles",
    "IdentityProjector",
    "SelectionProjector",
    "LinearProjector",
    "TerminalCost",
    "QuadraticTerminalCost",
    "TerminalCostEvaluator",
    "QuadraticRunningCost",
    "CostResult",
    "TrajectoryCost",
]

"""
Trackcost: trajectory tracking cost for receding-horizon control loops.

Scores a candidate state trajectory over a time window with

    J1 = ∫_{t0}^{tf} l(x(t)) dt + m(x(tf))

and provides the terminal cost gradient. Features:
- Quadratic terminal cost with pluggable alternatives
- Angle wrapping and state projection before cost evaluation
- Adaptive-step (Dormand-Prince), fixed-step and trapezoidal quadrature
"""

__version__ = "0.1.0"

from trackcost.core.config import CostConfig, Quadrature
from trackcost.cost.trajectory_cost import CostResult, TrajectoryCost
from trackcost.errors import (
    TrackCostError,
    ConfigurationError,
    SamplingOutOfRange,
    InvalidWindow,
    IntegrationStall,
    NotEvaluatedError,
)

__all__ = [
    "CostConfig",
    "Quadrature",
    "CostResult",
    "TrajectoryCost",
    "TrackCostError",
    "ConfigurationError",
    "SamplingOutOfRange",
    "InvalidWindow",
    "IntegrationStall",
    "NotEvaluatedError",
]

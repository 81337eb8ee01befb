"""Terminal cost m(x(tf)) and its gradient."""

from abc import ABC, abstractmethod
from typing import Sequence
import numpy as np
from numpy.typing import NDArray

from trackcost.core.protocols import (
    StateInterpolator,
    ReferenceTrajectory,
    StateProjector,
)
from trackcost.cost.tracking import projected_states
from trackcost.errors import ConfigurationError


class TerminalCost(ABC):
    """Terminal cost model in projected coordinates."""

    @abstractmethod
    def value(self, x: NDArray, x_des: NDArray) -> float:
        """
        Terminal cost m(x).

        Args:
            x: Projected terminal state (dim,)
            x_des: Desired projected state (dim,)

        Returns:
            Cost value
        """
        ...

    @abstractmethod
    def gradient(self, x: NDArray, x_des: NDArray) -> NDArray:
        """
        Gradient D_x m(x) as a row, shape (dim,).
        """
        ...


class QuadraticTerminalCost(TerminalCost):
    """m(x) = (x - x_des)^T P (x - x_des)."""

    def __init__(self, P: NDArray):
        P = np.array(P, dtype=float)
        if P.ndim != 2 or P.shape[0] != P.shape[1]:
            raise ConfigurationError(f"P must be a square matrix, got shape {P.shape}")
        P.setflags(write=False)
        self.P = P

    @property
    def dim(self) -> int:
        return self.P.shape[0]

    def value(self, x: NDArray, x_des: NDArray) -> float:
        e = x - x_des
        return float(e @ self.P @ e)

    def gradient(self, x: NDArray, x_des: NDArray) -> NDArray:
        # (x - x_des)^T P, half of dm/dx for symmetric P
        return (x - x_des) @ self.P


class TerminalCostEvaluator:
    """
    Samples the trajectory at tf and evaluates a terminal cost model.

    Every call recomputes the sampled state from scratch; nothing is cached
    between calls.
    """

    def __init__(
        self,
        interpolator: StateInterpolator,
        reference: ReferenceTrajectory,
        projector: StateProjector,
        terminal_cost: TerminalCost,
        wrap_indices: Sequence[int] = (),
    ):
        self.interpolator = interpolator
        self.reference = reference
        self.projector = projector
        self.model = terminal_cost
        self.wrap_indices = tuple(wrap_indices)

    def terminal_cost(self, tf: float) -> float:
        """
        Terminal cost at tf.

        Raises:
            SamplingOutOfRange: if the interpolator does not cover tf
        """
        x, x_des = self._states(tf)
        return self.model.value(x, x_des)

    def terminal_cost_gradient(self, tf: float) -> NDArray:
        """
        Terminal cost gradient w.r.t. the projected state at tf.

        Raises:
            SamplingOutOfRange: if the interpolator does not cover tf
        """
        x, x_des = self._states(tf)
        return self.model.gradient(x, x_des)

    def _states(self, tf: float) -> tuple[NDArray, NDArray]:
        return projected_states(
            self.interpolator,
            self.reference,
            self.projector,
            self.wrap_indices,
            tf,
        )

"""Collaborator protocols consumed by the cost evaluator."""

from typing import Protocol
from numpy.typing import NDArray


class StateInterpolator(Protocol):
    """Produces full system states along the current trajectory."""

    @property
    def state_dim(self) -> int:
        """State dimension xlen."""
        ...

    def sample(self, t: float) -> NDArray:
        """
        State at time t.

        Raises:
            SamplingOutOfRange: if t lies outside the known trajectory
        """
        ...


class ReferenceTrajectory(Protocol):
    """Desired trajectory in projected coordinates."""

    def desired_state(self, t: float) -> NDArray:
        """Desired projected state at time t, shape (dim,)."""
        ...


class StateProjector(Protocol):
    """Maps a full state onto the coordinates penalized by the cost."""

    @property
    def state_dim(self) -> int:
        """Length of accepted state vectors."""
        ...

    @property
    def dim(self) -> int:
        """Length of projected vectors."""
        ...

    def __call__(self, x: NDArray) -> NDArray:
        ...


class RunningCost(Protocol):
    """
    Running cost integrand l(x(t)).

    The integrand owns the time horizon: begin() and end() are read on
    every evaluation.
    """

    def begin(self) -> float:
        """Start of the evaluation window t0."""
        ...

    def end(self) -> float:
        """End of the evaluation window tf."""
        ...

    def __call__(self, J: NDArray, t: float) -> NDArray:
        """ODE right-hand side: dJ/dt = l(x(t)), shape (1,)."""
        ...

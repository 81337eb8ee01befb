"""Sampled trajectories: state interpolation and reference helpers."""

from typing import Callable
import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import interp1d

from trackcost.errors import ConfigurationError, SamplingOutOfRange


class SampledTrajectory:
    """
    Interpolates states stored at increasing sample times.

    Sampling outside [times[0], times[-1]] raises SamplingOutOfRange;
    there is no extrapolation.
    """

    def __init__(self, times: NDArray, states: NDArray, kind: str = "linear"):
        """
        Args:
            times: Sample times (N,), strictly increasing
            states: States (N, xlen)
            kind: Interpolation kind passed to scipy.interpolate.interp1d
        """
        times = np.array(times, dtype=float)
        states = np.array(states, dtype=float)
        if times.ndim != 1 or times.size < 2:
            raise ConfigurationError("need at least two sample times")
        if np.any(np.diff(times) <= 0.0):
            raise ConfigurationError("sample times must be strictly increasing")
        if states.ndim == 1:
            states = states[:, None]
        if states.shape[0] != times.shape[0]:
            raise ConfigurationError(
                f"{times.shape[0]} sample times but {states.shape[0]} states"
            )

        times.setflags(write=False)
        self.times = times
        self.states = states
        self._interp = interp1d(times, states, kind=kind, axis=0, assume_sorted=True)

    @property
    def state_dim(self) -> int:
        return self.states.shape[1]

    def begin(self) -> float:
        return float(self.times[0])

    def end(self) -> float:
        return float(self.times[-1])

    def sample(self, t: float) -> NDArray:
        """State at time t, shape (xlen,)."""
        if not self.times[0] <= t <= self.times[-1]:
            raise SamplingOutOfRange(t, self.begin(), self.end())
        return self._interp(t)


class SampledReference(SampledTrajectory):
    """Desired trajectory given by samples in projected coordinates."""

    def desired_state(self, t: float) -> NDArray:
        return self.sample(t)


class ConstantReference:
    """Set-point reference: the same desired state at every time."""

    def __init__(self, x_des: NDArray):
        x_des = np.array(x_des, dtype=float)
        x_des.setflags(write=False)
        self.x_des = x_des

    def desired_state(self, t: float) -> NDArray:
        return self.x_des


class CallableReference:
    """Reference given by a function of time."""

    def __init__(self, fn: Callable[[float], NDArray]):
        self.fn = fn

    def desired_state(self, t: float) -> NDArray:
        return np.asarray(self.fn(t), dtype=float)

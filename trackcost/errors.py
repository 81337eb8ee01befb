"""Exception hierarchy for cost evaluation failures."""

from typing import Optional


class TrackCostError(Exception):
    """Base class for all trackcost errors."""


class ConfigurationError(TrackCostError, ValueError):
    """Malformed cost matrix, projector or wrap indices."""


class SamplingOutOfRange(TrackCostError, ValueError):
    """State requested at a time the interpolator does not cover."""

    def __init__(self, t: float, begin: float, end: float):
        self.t = t
        self.begin = begin
        self.end = end
        super().__init__(
            f"cannot sample state at t={t!r}: trajectory covers "
            f"[{begin!r}, {end!r}]"
        )


class InvalidWindow(TrackCostError, ValueError):
    """Time window with t0 > tf or NaN bounds."""

    def __init__(self, t0: float, tf: float):
        self.t0 = t0
        self.tf = tf
        super().__init__(f"invalid time window [{t0!r}, {tf!r}]")


class IntegrationStall(TrackCostError, RuntimeError):
    """Adaptive integration could not meet its error tolerance."""

    def __init__(
        self,
        message: str,
        t: float,
        dt: float,
        steps: int,
    ):
        self.t = t
        self.dt = dt
        self.steps = steps
        super().__init__(f"{message} (t={t!r}, dt={dt!r}, steps={steps})")


class NotEvaluatedError(TrackCostError, RuntimeError):
    """Cost queried before the first successful update()."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "cost has not been evaluated; call update() first")

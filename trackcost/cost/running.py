"""Quadratic tracking running cost l(x(t))."""

import math
from typing import Optional, Sequence
import numpy as np
from numpy.typing import NDArray

from trackcost.core.protocols import (
    StateInterpolator,
    ReferenceTrajectory,
    StateProjector,
)
from trackcost.core.config import (
    as_cost_matrix,
    as_index_tuple,
    check_wrap_indices,
)
from trackcost.cost.tracking import projected_states
from trackcost.errors import ConfigurationError, InvalidWindow


class QuadraticRunningCost:
    """
    l(x(t)) = (x(t) - x_des(t))^T Q (x(t) - x_des(t)).

    The integrand owns the evaluation window. It defaults to the span
    covered by the interpolator (which must then expose begin() and end())
    and is moved with set_window() as the horizon recedes.
    """

    def __init__(
        self,
        interpolator: StateInterpolator,
        reference: ReferenceTrajectory,
        projector: StateProjector,
        Q: NDArray,
        wrap_indices: Sequence[int] = (),
        window: Optional[tuple[float, float]] = None,
    ):
        Q = as_cost_matrix(Q, "Q")
        if Q.shape != (projector.dim, projector.dim):
            raise ConfigurationError(
                f"Q must be {projector.dim}x{projector.dim}, got shape {Q.shape}"
            )
        if projector.state_dim != interpolator.state_dim:
            raise ConfigurationError(
                f"projector expects states of length {projector.state_dim}, "
                f"interpolator produces {interpolator.state_dim}"
            )
        wrap_indices = as_index_tuple(wrap_indices)
        check_wrap_indices(wrap_indices, interpolator.state_dim)

        self.interpolator = interpolator
        self.reference = reference
        self.projector = projector
        self.Q = Q
        self.wrap_indices = wrap_indices

        if window is None:
            window = (interpolator.begin(), interpolator.end())
        self.set_window(*window)

    def set_window(self, t0: float, tf: float) -> None:
        """Move the evaluation window to [t0, tf]."""
        if math.isnan(t0) or math.isnan(tf) or t0 > tf:
            raise InvalidWindow(t0, tf)
        self._t0 = float(t0)
        self._tf = float(tf)

    def begin(self) -> float:
        return self._t0

    def end(self) -> float:
        return self._tf

    def __call__(self, J: NDArray, t: float) -> NDArray:
        x, x_des = projected_states(
            self.interpolator,
            self.reference,
            self.projector,
            self.wrap_indices,
            t,
        )
        e = x - x_des
        return np.array([e @ self.Q @ e])

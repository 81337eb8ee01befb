"""Sampling pipeline shared by terminal and running costs."""

from typing import Sequence
import numpy as np
from numpy.typing import NDArray

from trackcost.core.protocols import (
    StateInterpolator,
    ReferenceTrajectory,
    StateProjector,
)
from trackcost.cost.angles import wrap_angles
from trackcost.errors import ConfigurationError


def projected_states(
    interpolator: StateInterpolator,
    reference: ReferenceTrajectory,
    projector: StateProjector,
    wrap_indices: Sequence[int],
    t: float,
) -> tuple[NDArray, NDArray]:
    """
    Projected actual and desired state at time t.

    The sampled state is copied before angle wrapping so the
    interpolator's own storage is never touched.

    Raises:
        ConfigurationError: if the projector or reference returns a vector
            of the wrong length

    Returns:
        x: Projected state (dim,)
        x_des: Desired projected state (dim,)
    """
    x = np.array(interpolator.sample(t), dtype=float)
    wrap_angles(x, wrap_indices)
    x_proj = np.asarray(projector(x), dtype=float)
    if x_proj.shape != (projector.dim,):
        raise ConfigurationError(
            f"projector returned shape {x_proj.shape}, expected ({projector.dim},)"
        )
    x_des = np.asarray(reference.desired_state(t), dtype=float)
    if x_des.shape != x_proj.shape:
        raise ConfigurationError(
            f"desired state has shape {x_des.shape}, projected state {x_proj.shape}"
        )
    return x_proj, x_des

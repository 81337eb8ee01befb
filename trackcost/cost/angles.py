"""Angle wrapping for periodic state components."""

from typing import Iterable, Union
import numpy as np
from numpy.typing import NDArray

TWO_PI = 2.0 * np.pi


def wrap_angle(theta: Union[float, NDArray]) -> Union[float, NDArray]:
    """
    Map angles into (-π, π].

    Works for scalars and arrays and for values any number of periods
    away from the canonical range. NaN and inf map to NaN.
    """
    wrapped = np.pi - np.mod(np.pi - np.asarray(theta, dtype=float), TWO_PI)
    # mod can round up to 2π for tiny negative arguments
    wrapped = np.where(wrapped <= -np.pi, wrapped + TWO_PI, wrapped)
    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped


def wrap_angles(x: NDArray, indices: Iterable[int]) -> NDArray:
    """
    Wrap the components of x listed in indices, in place.

    Args:
        x: State vector (modified)
        indices: Periodic components

    Returns:
        x
    """
    idx = list(indices)
    if idx:
        x[idx] = wrap_angle(x[idx])
    return x

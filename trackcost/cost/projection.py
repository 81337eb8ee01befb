"""State projectors: full state -> coordinates penalized by the cost."""

from typing import Sequence
import numpy as np
from numpy.typing import NDArray

from trackcost.errors import ConfigurationError


class IdentityProjector:
    """Penalize the full state as-is."""

    def __init__(self, state_dim: int):
        if state_dim < 1:
            raise ConfigurationError("state_dim must be positive")
        self._state_dim = state_dim

    @property
    def state_dim(self) -> int:
        return self._state_dim

    @property
    def dim(self) -> int:
        return self._state_dim

    def __call__(self, x: NDArray) -> NDArray:
        return np.array(x, dtype=float)


class SelectionProjector:
    """Select (and optionally reorder) a subset of state components."""

    def __init__(self, indices: Sequence[int], state_dim: int):
        idx = np.asarray(indices, dtype=int)
        if idx.ndim != 1 or idx.size == 0:
            raise ConfigurationError("indices must be a non-empty sequence")
        if np.any(idx < 0) or np.any(idx >= state_dim):
            raise ConfigurationError(
                f"indices {idx.tolist()} out of range for state of length {state_dim}"
            )
        self.indices = idx
        self._state_dim = state_dim

    @property
    def state_dim(self) -> int:
        return self._state_dim

    @property
    def dim(self) -> int:
        return self.indices.shape[0]

    def __call__(self, x: NDArray) -> NDArray:
        return np.asarray(x, dtype=float)[self.indices]


class LinearProjector:
    """Linear map x -> C x, e.g. an output matrix or a linearization."""

    def __init__(self, C: NDArray):
        C = np.array(C, dtype=float)
        if C.ndim != 2 or 0 in C.shape:
            raise ConfigurationError(f"C must be a non-empty matrix, got shape {C.shape}")
        C.setflags(write=False)
        self.C = C

    @property
    def state_dim(self) -> int:
        return self.C.shape[1]

    @property
    def dim(self) -> int:
        return self.C.shape[0]

    def __call__(self, x: NDArray) -> NDArray:
        return self.C @ np.asarray(x, dtype=float)

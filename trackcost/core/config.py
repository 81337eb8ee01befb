"""Cost configuration."""

from dataclasses import dataclass, field
from typing import Optional
from enum import Enum, auto
import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from trackcost.errors import ConfigurationError


class Quadrature(Enum):
    """How the running cost is integrated over the window."""
    ADAPTIVE = auto()    # embedded pair with local error control
    FIXED_STEP = auto()  # classic RK4 at the initial step size
    TRAPEZOID = auto()   # trapezoidal rule on the trajectory sample grid


@dataclass(frozen=True)
class CostConfig:
    """
    Settings fixed for the lifetime of a cost object.

    P is copied into a read-only array so it cannot change between or
    during evaluations.
    """

    P: NDArray                          # (dim, dim) terminal cost weight
    wrap_indices: tuple[int, ...] = ()  # periodic state components
    atol: float = 1e-5
    rtol: float = 1e-5
    initial_dt: float = 0.01
    epsilon: float = 1e-7               # trimmed from the integration end
    quadrature: Quadrature = Quadrature.ADAPTIVE
    max_rejections: int = 500
    max_steps: int = 100_000
    min_dt: float = 1e-12               # adaptive step-size floor
    psd_tol: float = field(default=1e-10, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "P", as_cost_matrix(self.P, "P", self.psd_tol))
        object.__setattr__(
            self, "wrap_indices", as_index_tuple(self.wrap_indices)
        )

        if self.atol <= 0.0 or self.rtol < 0.0:
            raise ConfigurationError("atol must be positive and rtol non-negative")
        if not self.initial_dt > 0.0:
            raise ConfigurationError("initial_dt must be positive")
        if not self.epsilon >= 0.0:
            raise ConfigurationError("epsilon must be non-negative")
        if self.max_rejections < 1 or self.max_steps < 1:
            raise ConfigurationError("max_rejections and max_steps must be positive")
        if not 0.0 < self.min_dt < self.initial_dt:
            raise ConfigurationError("min_dt must be positive and below initial_dt")

    @property
    def dim(self) -> int:
        """Dimension of the projected state penalized by P."""
        return self.P.shape[0]

    def validate(self, state_dim: int, dim: Optional[int] = None) -> None:
        """
        Check the configuration against the bound state and projector.

        Args:
            state_dim: Length of sampled state vectors
            dim: Length of projected state vectors; the P check is skipped
                when None (terminal cost models that do not use P)

        Raises:
            ConfigurationError: on any dimension mismatch
        """
        check_wrap_indices(self.wrap_indices, state_dim)
        if dim is not None and self.dim != dim:
            raise ConfigurationError(
                f"P is {self.dim}x{self.dim} but projected state has length {dim}"
            )


def as_cost_matrix(M, name: str = "P", psd_tol: float = 1e-10) -> NDArray:
    """
    Read-only float copy of a quadratic weight matrix.

    Raises:
        ConfigurationError: unless M is square, finite, symmetric and
            positive semidefinite
    """
    M = np.array(M, dtype=float)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise ConfigurationError(f"{name} must be a square matrix, got shape {M.shape}")
    if not np.all(np.isfinite(M)):
        raise ConfigurationError(f"{name} must be finite")
    if not np.allclose(M, M.T):
        raise ConfigurationError(f"{name} must be symmetric")
    if M.size and scipy.linalg.eigvalsh(M).min() < -psd_tol:
        raise ConfigurationError(f"{name} must be positive semidefinite")
    M.setflags(write=False)
    return M


def as_index_tuple(indices) -> tuple[int, ...]:
    """Normalize wrap indices to a tuple of non-negative ints."""
    result = []
    for i in indices:
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)):
            raise ConfigurationError(f"wrap index {i!r} is not an integer")
        if i < 0:
            raise ConfigurationError(f"wrap index {i!r} is negative")
        result.append(int(i))
    return tuple(result)


def check_wrap_indices(indices: tuple[int, ...], state_dim: int) -> None:
    """Wrap indices must address components of a state of length state_dim."""
    bad = [i for i in indices if i >= state_dim]
    if bad:
        raise ConfigurationError(
            f"wrap indices {bad} out of range for state of length {state_dim}"
        )

"""Explicit Runge-Kutta tableaux."""

from dataclasses import dataclass
from functools import cached_property
from enum import Enum, auto
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from trackcost.errors import ConfigurationError


class StageType(Enum):
    """Classification of stage matrix structure."""
    EXPLICIT = auto()   # A strictly lower triangular
    IMPLICIT = auto()   # anything else


@dataclass(frozen=True)
class ButcherTableau:
    """Runge-Kutta tableau, optionally with an embedded error estimator."""

    A: NDArray  # (s, s) - stage coefficients
    b: NDArray  # (s,)   - solution weights
    c: NDArray  # (s,)   - abscissae
    order: int  # order of the propagated solution
    b_hat: Optional[NDArray] = None  # (s,) - embedded weights
    error_order: Optional[int] = None  # order of the embedded solution

    def __post_init__(self) -> None:
        s = self.A.shape[0]
        if self.A.shape != (s, s):
            raise ConfigurationError(f"A must be square, got {self.A.shape}")
        if self.b.shape != (s,) or self.c.shape != (s,):
            raise ConfigurationError("b and c must have one entry per stage")
        if (self.b_hat is None) != (self.error_order is None):
            raise ConfigurationError(
                "b_hat and error_order must be given together"
            )
        if self.b_hat is not None and self.b_hat.shape != (s,):
            raise ConfigurationError("b_hat must have one entry per stage")

    @cached_property
    def s(self) -> int:
        """Number of stages."""
        return self.A.shape[0]

    @cached_property
    def stage_type(self) -> StageType:
        """Classify the stage matrix structure."""
        return _classify_stage_structure(self.A)

    @cached_property
    def is_embedded(self) -> bool:
        """True when the tableau carries an error estimator."""
        return self.b_hat is not None

    @cached_property
    def is_fsal(self) -> bool:
        """Last stage is evaluated at the new solution (first same as last)."""
        return bool(np.allclose(self.A[-1], self.b) and np.isclose(self.c[-1], 1.0))

    @cached_property
    def error_weights(self) -> NDArray:
        """b - b_hat, the weights of the local error estimate."""
        if self.b_hat is None:
            raise ConfigurationError("tableau has no embedded method")
        return self.b - self.b_hat


def _classify_stage_structure(A: NDArray) -> StageType:
    """Classify stage matrix structure."""
    if np.allclose(A, np.tril(A, -1)):
        return StageType.EXPLICIT
    return StageType.IMPLICIT

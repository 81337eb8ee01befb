"""Trajectory tracking cost J1 = ∫ l(x(t)) dt + m(x(tf))."""

import logging
import math
from dataclasses import dataclass
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from trackcost.core.config import CostConfig
from trackcost.core.protocols import (
    StateInterpolator,
    ReferenceTrajectory,
    StateProjector,
    RunningCost,
)
from trackcost.cost.projection import IdentityProjector
from trackcost.cost.terminal import (
    TerminalCost,
    QuadraticTerminalCost,
    TerminalCostEvaluator,
)
from trackcost.errors import (
    ConfigurationError,
    InvalidWindow,
    NotEvaluatedError,
)
from trackcost.integrators.factory import create_integrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostResult:
    """Outcome of one cost evaluation."""

    total_cost: float
    integration_steps: int  # diagnostic only

    def __float__(self) -> float:
        return self.total_cost


class TrajectoryCost:
    """
    Keeps track of the trajectory tracking cost.

    The cost holds a reference to the state interpolator, so after the
    states or controls change only update() has to be called to recompute

        J1 = ∫_{t0}^{tf} l(x(t)) dt + m(x(tf)).

    The window [t0, tf] is read from the running cost on every call. The
    running cost is integrated up to tf - epsilon, starting from the
    terminal cost, so the integrated value is the total cost.

    Not safe for concurrent use of one instance.
    """

    def __init__(
        self,
        interpolator: StateInterpolator,
        reference: ReferenceTrajectory,
        running_cost: RunningCost,
        config: CostConfig,
        projector: Optional[StateProjector] = None,
        terminal_cost: Optional[TerminalCost] = None,
    ):
        """
        Initialize trajectory cost.

        Args:
            interpolator: State interpolator (referenced, not owned)
            reference: Desired trajectory in projected coordinates
            running_cost: Running cost integrand, owner of the time window
            config: Cost configuration
            projector: State projector (identity if not provided)
            terminal_cost: Terminal cost model (quadratic in config.P if
                not provided). config.P is only checked against the
                projected dimension for quadratic models.

        Raises:
            ConfigurationError: on dimension mismatches
        """
        if projector is None:
            projector = IdentityProjector(interpolator.state_dim)
        if terminal_cost is None:
            terminal_cost = QuadraticTerminalCost(config.P)

        if projector.state_dim != interpolator.state_dim:
            raise ConfigurationError(
                f"projector expects states of length {projector.state_dim}, "
                f"interpolator produces {interpolator.state_dim}"
            )
        if isinstance(terminal_cost, QuadraticTerminalCost):
            config.validate(interpolator.state_dim, projector.dim)
        else:
            config.validate(interpolator.state_dim)

        self.config = config
        self.running_cost = running_cost
        self.interpolator = interpolator
        self.evaluator = TerminalCostEvaluator(
            interpolator,
            reference,
            projector,
            terminal_cost,
            config.wrap_indices,
        )
        self.integrator = create_integrator(config)
        self._result: Optional[CostResult] = None

    @property
    def result(self) -> Optional[CostResult]:
        """Last computed result, None before the first update()."""
        return self._result

    def update(self) -> CostResult:
        """
        Recompute the cost after states or controls changed.

        The previous result is kept if evaluation fails.

        Raises:
            InvalidWindow: if t0 > tf or a bound is NaN
            SamplingOutOfRange: if the window leaves the interpolated trajectory
            IntegrationStall: if the running cost cannot be integrated
        """
        t0, tf = self._window()

        J1 = np.array([self.evaluator.terminal_cost(tf)])
        t_end = max(t0, tf - self.config.epsilon)
        J1, steps = self.integrator.integrate(
            self.running_cost,
            J1,
            t0,
            t_end,
            self.config.initial_dt,
            grid=getattr(self.interpolator, "times", None),
        )

        self._result = CostResult(total_cost=float(J1[0]), integration_steps=steps)
        logger.debug(
            "cost over [%g, %g]: J1=%.6g (%d steps)", t0, tf, J1[0], steps
        )
        return self._result

    def value(self) -> float:
        """
        Total cost J1 from the last update().

        Raises:
            NotEvaluatedError: before the first update()
        """
        return self._require_result().total_cost

    total_cost = value

    def __float__(self) -> float:
        return self.value()

    def steps(self) -> int:
        """
        Integration steps taken by the last update().

        Raises:
            NotEvaluatedError: before the first update()
        """
        return self._require_result().integration_steps

    def terminal_cost(self, tf: Optional[float] = None) -> float:
        """m(x(tf)), at the end of the current window if tf is omitted."""
        if tf is None:
            tf = self._window()[1]
        return self.evaluator.terminal_cost(tf)

    def terminal_cost_gradient(self, tf: Optional[float] = None) -> NDArray:
        """
        D_x m(x(tf)) = (x(tf) - x_des(tf))^T P, shape (dim,).

        Evaluated at the end of the current window if tf is omitted; does
        not require update().
        """
        if tf is None:
            tf = self._window()[1]
        return self.evaluator.terminal_cost_gradient(tf)

    def _window(self) -> tuple[float, float]:
        t0 = float(self.running_cost.begin())
        tf = float(self.running_cost.end())
        if math.isnan(t0) or math.isnan(tf) or t0 > tf:
            raise InvalidWindow(t0, tf)
        return t0, tf

    def _require_result(self) -> CostResult:
        if self._result is None:
            raise NotEvaluatedError()
        return self._result

"""Tests for the trajectory tracking cost aggregator."""

import numpy as np
import pytest

from trackcost import (
    CostConfig,
    CostResult,
    Quadrature,
    TrajectoryCost,
    ConfigurationError,
    InvalidWindow,
    NotEvaluatedError,
    SamplingOutOfRange,
)
from trackcost.cost.projection import SelectionProjector
from trackcost.cost.running import QuadraticRunningCost
from trackcost.cost.terminal import TerminalCost
from trackcost.trajectories import ConstantReference, SampledTrajectory


class ConstantRunningCost:
    """l(x(t)) = c over a movable window."""

    def __init__(self, c, t0, tf):
        self.c = c
        self.t0 = t0
        self.tf = tf

    def begin(self):
        return self.t0

    def end(self):
        return self.tf

    def __call__(self, J, t):
        return np.array([self.c])


class AbsoluteTerminalCost(TerminalCost):
    """m(x) = Σ |x - x_des|"""

    def value(self, x, x_des):
        return float(np.sum(np.abs(x - x_des)))

    def gradient(self, x, x_des):
        return np.sign(x - x_des)


def make_interpolator():
    """x(t) = [t, 2t, 2π + 0.25] sampled on [0, 2]."""
    times = np.linspace(0.0, 2.0, 21)
    states = np.column_stack(
        [times, 2.0 * times, np.full_like(times, 2.0 * np.pi + 0.25)]
    )
    return SampledTrajectory(times, states)


def make_cost(running_cost, **config_kwargs):
    config = CostConfig(P=np.diag([1.0, 0.5, 10.0]), wrap_indices=(2,), **config_kwargs)
    return TrajectoryCost(
        make_interpolator(),
        ConstantReference([0.0, 0.0, 0.25]),
        running_cost,
        config,
    )


def test_not_evaluated_before_update():
    cost = make_cost(ConstantRunningCost(1.0, 0.0, 1.0))

    assert cost.result is None
    with pytest.raises(NotEvaluatedError):
        cost.value()
    with pytest.raises(NotEvaluatedError):
        cost.steps()
    with pytest.raises(NotEvaluatedError):
        float(cost)


def test_terminal_cost_at_window_end():
    """x(1) = [1, 2, 0.25 (wrapped)] -> m = 1 + 0.5 * 4 = 3."""
    cost = make_cost(ConstantRunningCost(0.0, 0.0, 1.0))

    assert np.isclose(cost.terminal_cost(), 3.0)
    assert np.isclose(cost.terminal_cost(2.0), 4.0 + 0.5 * 16.0)


def test_terminal_cost_gradient_without_update():
    cost = make_cost(ConstantRunningCost(0.0, 0.0, 1.0))

    grad = cost.terminal_cost_gradient()
    assert np.allclose(grad, [1.0, 1.0, 0.0], atol=1e-12)
    assert cost.result is None


def test_gradient_follows_window():
    running = ConstantRunningCost(0.0, 0.0, 1.0)
    cost = make_cost(running)

    running.tf = 2.0
    assert np.allclose(cost.terminal_cost_gradient(), [2.0, 2.0, 0.0], atol=1e-12)


def test_zero_length_window():
    """t0 == tf: total cost is the terminal cost, with no steps."""
    cost = make_cost(ConstantRunningCost(5.0, 1.0, 1.0))
    result = cost.update()

    assert isinstance(result, CostResult)
    assert result.total_cost == cost.terminal_cost(1.0)
    assert result.integration_steps == 0
    assert cost.steps() == 0
    assert float(cost) == cost.value() == cost.total_cost()
    assert float(result) == result.total_cost


def test_window_shorter_than_epsilon():
    cost = make_cost(ConstantRunningCost(5.0, 1.0, 1.0 + 1e-9))
    cost.update()

    assert cost.steps() == 0
    assert cost.value() == cost.terminal_cost()


@pytest.mark.parametrize(
    "quadrature", [Quadrature.ADAPTIVE, Quadrature.FIXED_STEP, Quadrature.TRAPEZOID]
)
def test_constant_running_cost(quadrature):
    """Total = m(x(tf)) + c (tf - t0) within tolerance."""
    c, t0, tf = 2.0, 0.0, 1.5
    cost = make_cost(ConstantRunningCost(c, t0, tf), quadrature=quadrature)
    cost.update()

    expected = cost.terminal_cost(tf) + c * (tf - t0)
    assert np.isclose(cost.value(), expected, atol=1e-5)
    assert cost.steps() > 0


def test_trapezoid_uses_trajectory_samples():
    cost = make_cost(ConstantRunningCost(1.0, 0.0, 1.5), quadrature=Quadrature.TRAPEZOID)
    cost.update()

    # samples 0.1, ..., 1.4 lie inside [0, 1.5 - epsilon]
    assert cost.steps() == 15


def test_repeated_update_idempotent():
    cost = make_cost(ConstantRunningCost(0.7, 0.2, 1.8))

    first = cost.update()
    second = cost.update()
    assert first.total_cost == second.total_cost
    assert first.integration_steps == second.integration_steps
    assert first == second


def test_window_read_on_every_update():
    running = ConstantRunningCost(1.0, 0.0, 1.0)
    cost = make_cost(running)

    short = cost.update().total_cost
    running.tf = 2.0
    long = cost.update().total_cost

    assert np.isclose(short, 3.0 + 1.0, atol=1e-5)
    assert np.isclose(long, 12.0 + 2.0, atol=1e-5)


def test_window_beyond_trajectory():
    cost = make_cost(ConstantRunningCost(1.0, 0.0, 3.0))

    with pytest.raises(SamplingOutOfRange):
        cost.update()
    assert cost.result is None


def test_invalid_window_keeps_previous_result():
    running = ConstantRunningCost(1.0, 0.0, 1.0)
    cost = make_cost(running)
    previous = cost.update()

    running.t0, running.tf = 1.0, 0.5
    with pytest.raises(InvalidWindow):
        cost.update()
    assert cost.result == previous

    running.t0, running.tf = float("nan"), 1.0
    with pytest.raises(InvalidWindow):
        cost.update()
    with pytest.raises(InvalidWindow):
        cost.terminal_cost_gradient()


def test_quadratic_running_cost():
    """l = x_0(t)^2 = t^2 integrates to 1/3 over [0, 1]."""
    interpolator = make_interpolator()
    reference = ConstantReference([0.0, 0.0, 0.25])
    running = QuadraticRunningCost(
        interpolator,
        reference,
        SelectionProjector([0, 1, 2], state_dim=3),
        np.diag([1.0, 0.0, 0.0]),
        wrap_indices=(2,),
    )
    assert running.begin() == 0.0
    assert running.end() == 2.0

    running.set_window(0.0, 1.0)
    config = CostConfig(P=np.diag([1.0, 0.5, 10.0]), wrap_indices=(2,))
    cost = TrajectoryCost(interpolator, reference, running, config)
    cost.update()

    assert np.isclose(cost.value(), 3.0 + 1.0 / 3.0, atol=1e-5)


def test_quadratic_running_cost_validation():
    interpolator = make_interpolator()
    reference = ConstantReference([0.0, 0.0, 0.0])
    projector = SelectionProjector([0, 1, 2], state_dim=3)

    with pytest.raises(ConfigurationError):
        QuadraticRunningCost(interpolator, reference, projector, np.eye(2))

    running = QuadraticRunningCost(interpolator, reference, projector, np.eye(3))
    with pytest.raises(InvalidWindow):
        running.set_window(1.0, 0.0)
    with pytest.raises(InvalidWindow):
        QuadraticRunningCost(
            interpolator, reference, projector, np.eye(3), window=(0.0, float("nan"))
        )


@pytest.mark.parametrize("wrap_indices", [(-1,), (3,), (5,), (0.5,)])
def test_quadratic_running_cost_wrap_indices_checked(wrap_indices):
    """Wrap indices are validated against the state at construction."""
    with pytest.raises(ConfigurationError):
        QuadraticRunningCost(
            make_interpolator(),
            ConstantReference([0.0, 0.0, 0.0]),
            SelectionProjector([0, 1, 2], state_dim=3),
            np.eye(3),
            wrap_indices=wrap_indices,
        )


@pytest.mark.parametrize(
    "Q",
    [
        np.array([[1.0, 2.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]),
        np.diag([1.0, -1.0, 1.0]),
        np.diag([1.0, np.inf, 1.0]),
    ],
)
def test_quadratic_running_cost_Q_checked(Q):
    with pytest.raises(ConfigurationError):
        QuadraticRunningCost(
            make_interpolator(),
            ConstantReference([0.0, 0.0, 0.0]),
            SelectionProjector([0, 1, 2], state_dim=3),
            Q,
        )


def test_quadratic_running_cost_projector_state_dim_checked():
    with pytest.raises(ConfigurationError):
        QuadraticRunningCost(
            make_interpolator(),
            ConstantReference([0.0, 0.0]),
            SelectionProjector([0, 1], state_dim=4),
            np.eye(2),
        )


def test_reference_of_wrong_length_fails_update():
    """A short reference must not broadcast into a plausible cost."""
    cost = TrajectoryCost(
        make_interpolator(),
        ConstantReference([0.0]),
        ConstantRunningCost(1.0, 0.0, 1.0),
        CostConfig(P=np.eye(3)),
    )

    with pytest.raises(ConfigurationError):
        cost.update()
    with pytest.raises(ConfigurationError):
        cost.terminal_cost_gradient()
    assert cost.result is None


def test_custom_terminal_cost_ignores_P_dimension():
    """P is not checked against the projection when a custom model is used."""
    cost = TrajectoryCost(
        make_interpolator(),
        ConstantReference([0.0, 0.0, 0.25]),
        ConstantRunningCost(0.0, 1.0, 1.0),
        CostConfig(P=np.eye(2), wrap_indices=(2,)),
        terminal_cost=AbsoluteTerminalCost(),
    )
    cost.update()

    assert np.isclose(cost.value(), 3.0)


def test_custom_terminal_cost_still_checks_wrap_indices():
    with pytest.raises(ConfigurationError):
        TrajectoryCost(
            make_interpolator(),
            ConstantReference([0.0, 0.0, 0.0]),
            ConstantRunningCost(0.0, 1.0, 1.0),
            CostConfig(P=np.eye(3), wrap_indices=(4,)),
            terminal_cost=AbsoluteTerminalCost(),
        )


def test_custom_terminal_cost():
    config = CostConfig(P=np.eye(3), wrap_indices=(2,))
    cost = TrajectoryCost(
        make_interpolator(),
        ConstantReference([0.0, 0.0, 0.25]),
        ConstantRunningCost(0.0, 1.0, 1.0),
        config,
        terminal_cost=AbsoluteTerminalCost(),
    )
    cost.update()

    assert np.isclose(cost.value(), 1.0 + 2.0)
    assert np.allclose(cost.terminal_cost_gradient()[:2], [1.0, 1.0])


def test_projector_with_config():
    """P sized for the projected coordinates, not the full state."""
    config = CostConfig(P=np.diag([1.0, 4.0]))
    cost = TrajectoryCost(
        make_interpolator(),
        ConstantReference([0.0, 0.0]),
        ConstantRunningCost(0.0, 1.0, 1.0),
        config,
        projector=SelectionProjector([1, 0], state_dim=3),
    )
    cost.update()

    # projected x(1) = [2, 1]
    assert np.isclose(cost.value(), 4.0 + 4.0)


def test_configuration_errors_at_construction():
    interpolator = make_interpolator()
    reference = ConstantReference([0.0, 0.0, 0.0])
    running = ConstantRunningCost(0.0, 0.0, 1.0)

    with pytest.raises(ConfigurationError):
        TrajectoryCost(interpolator, reference, running, CostConfig(P=np.eye(2)))

    with pytest.raises(ConfigurationError):
        TrajectoryCost(
            interpolator, reference, running,
            CostConfig(P=np.eye(3), wrap_indices=(3,)),
        )

    with pytest.raises(ConfigurationError):
        TrajectoryCost(
            interpolator, reference, running, CostConfig(P=np.eye(2)),
            projector=SelectionProjector([0, 1], state_dim=4),
        )

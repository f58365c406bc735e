import math

import pytest

from physlab.core.kinematics import (
    CircularEvaluator,
    PendulumEvaluator,
    ProjectileEvaluator,
    SpringEvaluator,
)
from physlab.core.model import AngularState, LinearState
from physlab.data.scenarios import ParameterSet

DT = 0.016


def test_projectile_closed_form_position_and_velocity():
    ev = ProjectileEvaluator(speed=25.0, angle_deg=45.0, g=9.81)
    t = 1.5
    x, y = ev.position(t)
    c = 25.0 * math.cos(math.pi / 4)
    assert x == pytest.approx(c * t)
    assert y == pytest.approx(c * t - 0.5 * 9.81 * t * t)
    assert ev.vertical_velocity(t) == pytest.approx(c - 9.81 * t)


def test_projectile_is_not_stopped_by_the_ground():
    ev = ProjectileEvaluator(speed=10.0, angle_deg=30.0, g=9.81)
    state = ev.initial_state()
    for _ in range(500):
        state = ev.advance(state, DT)
    assert state.t == pytest.approx(500 * DT)
    assert ev.position(state.t)[1] < 0.0


def test_projectile_path_samples_from_launch():
    ev = ProjectileEvaluator.from_params(ParameterSet.defaults("projectile"))
    path = ev.path(0.1, 0.02)
    assert len(path) == 6
    assert path[0] == (0.0, 0.0)
    assert ev.path(0.0, 0.02) == [(0.0, 0.0)]


def test_pendulum_step_uses_linear_restoring_term():
    ev = PendulumEvaluator(length=1.6, theta0=0.5, g=9.81)
    state = ev.advance(ev.initial_state(), DT)
    omega = -(9.81 / 1.6) * 0.5 * DT
    assert state.angular_velocity == pytest.approx(omega)
    assert state.angle == pytest.approx(0.5 + omega * DT)


def test_pendulum_large_angle_still_linear():
    ev = PendulumEvaluator(length=1.0, theta0=1.2, g=10.0)
    state = ev.advance(AngularState(angle=1.2), 0.01)
    # sin(1.2) would give a visibly smaller acceleration
    assert state.angular_velocity == pytest.approx(-10.0 * 1.2 * 0.01)


def test_pendulum_does_not_mutate_input():
    ev = PendulumEvaluator(length=1.6, theta0=0.5, g=9.81)
    start = ev.initial_state()
    ev.advance(start, DT)
    assert start == AngularState(angle=0.5, angular_velocity=0.0)


def test_spring_semi_implicit_euler_step():
    ev = SpringEvaluator(k=50.0, m=1.5, x0=0.6)
    state = ev.advance(LinearState(x=0.6), DT)
    v = -(50.0 / 1.5) * 0.6 * DT
    assert state.v == pytest.approx(v)
    assert state.x == pytest.approx(0.6 + v * DT)


def test_spring_oscillates_about_rest():
    ev = SpringEvaluator(k=50.0, m=1.5, x0=0.6)
    state = ev.initial_state()
    xs = []
    for _ in range(200):
        state = ev.advance(state, DT)
        xs.append(state.x)
    assert min(xs) < -0.5
    assert max(abs(x) for x in xs) < 0.7


def test_circular_angle_and_trace_growth():
    ev = CircularEvaluator(radius=100.0, angular_speed=1.2)
    state = ev.initial_state()
    state = ev.advance(state, DT)
    assert state.angle == pytest.approx(1.2 * DT)
    assert len(state.trace) == 1
    assert state.trace[-1] == pytest.approx(ev.position(1.2 * DT))


def test_circular_trace_is_bounded_fifo():
    ev = CircularEvaluator(radius=100.0, angular_speed=1.2)
    state = ev.initial_state()
    for _ in range(200):
        state = ev.advance(state, DT)
        assert len(state.trace) <= 120
    assert len(state.trace) == 120
    # tick index 80 (zero based) is the 81st advance
    oldest_angle = 81 * 1.2 * DT
    assert state.trace[0] == pytest.approx(ev.position(oldest_angle))
    assert state.trace[-1] == pytest.approx(ev.position(state.angle))


def test_circular_velocity_is_tangential():
    ev = CircularEvaluator(radius=50.0, angular_speed=2.0)
    x, y = ev.position(0.7)
    vx, vy = ev.velocity(0.7)
    assert x * vx + y * vy == pytest.approx(0.0, abs=1e-9)
    assert math.hypot(vx, vy) == pytest.approx(100.0)


@pytest.mark.parametrize("dt", [0.0, -0.016])
def test_non_positive_step_rejected(dt):
    ev = SpringEvaluator(k=1.0, m=1.0, x0=0.1)
    with pytest.raises(ValueError):
        ev.advance(ev.initial_state(), dt)


def test_projectile_path_is_bounded_for_long_flights():
    ev = ProjectileEvaluator(speed=25.0, angle_deg=45.0, g=9.81)
    path = ev.path(100.0, 0.02, max_points=600)
    assert len(path) <= 601
    assert path[0] == (0.0, 0.0)
    assert path[-1] == pytest.approx(ev.position(100.0))
    assert ev.path(0.1, 0.02, max_points=600) == ev.path(0.1, 0.02)

import math
from urllib.parse import parse_qsl

import pytest

from physlab.core.controller import SessionController
from physlab.core.logging_utils import RunLogger
from physlab.core.timekeeping import ManualScheduler
from physlab.data.scenarios import ScenarioKind


def make_controller(**kwargs):
    scheduler = ManualScheduler()
    frames = []
    controller = SessionController(scheduler, on_frame=frames.append, **kwargs)
    return controller, scheduler, frames


def test_select_starts_a_single_session():
    controller, scheduler, frames = make_controller()
    session = controller.select("pendulum")
    assert session.running
    assert scheduler.advance(3) == 3
    assert session.ticks == 3
    assert len(frames) == 3


def test_switching_scenario_closes_previous_session():
    controller, scheduler, _ = make_controller()
    first = controller.select("spring")
    scheduler.advance(2)
    second = controller.select("electric")
    assert first.closed
    scheduler.advance(4)
    assert first.ticks == 2
    assert second.ticks == 4
    assert controller.session is second


def test_parameter_change_recreates_session():
    controller, scheduler, _ = make_controller()
    first = controller.select("spring")
    scheduler.advance(10)
    second = controller.update_parameters(k=120.0)
    assert second is not first
    assert first.closed
    assert first.parameters["k"] == 50.0
    assert second.parameters["k"] == 120.0
    assert second.ticks == 0
    assert second.state.x == pytest.approx(0.6)


def test_nudge_rebuilds_with_clamped_value():
    controller, _, _ = make_controller()
    controller.select("collision")
    session = controller.nudge("e", 10)
    assert session.parameters["e"] == 1.0


def test_toggle_pause_and_reset():
    controller, scheduler, _ = make_controller()
    controller.select("circular")
    scheduler.advance(5)
    assert controller.toggle_pause() is False
    assert scheduler.advance(5) == 0
    assert controller.toggle_pause() is True
    scheduler.advance(1)
    assert controller.session.ticks == 6
    controller.reset()
    assert controller.session.ticks == 0


def test_handoff_query_carries_parameters():
    controller, _, _ = make_controller()
    controller.select("projectile")
    controller.update_parameters(speed=30.0)
    query = dict(parse_qsl(controller.handoff_query()))
    assert query == {"sim": "projectile", "speed": "30", "angle": "45", "g": "9.81"}


def test_defaults_without_session():
    controller, _, _ = make_controller()
    assert controller.parameters.kind is ScenarioKind.PROJECTILE
    with pytest.raises(RuntimeError):
        controller.reset()


def test_logger_per_session(tmp_path):
    loggers = []

    def factory(params):
        logger = RunLogger(params.kind.value, root_dir=tmp_path)
        loggers.append(logger)
        return logger

    controller, scheduler, _ = make_controller(logger_factory=factory)
    controller.select("spring")
    scheduler.advance(3)
    controller.select("pendulum")
    controller.shutdown()
    assert [logger.closed for logger in loggers] == [True, True]
    assert loggers[0].meta_path.exists()
    assert controller.session is None


@pytest.mark.parametrize(
    "kind, updates",
    [
        ("pendulum", {"length": 0.0}),
        ("spring", {"m": 0.0, "k": 0.0}),
        ("circular", {"angular_speed": 0.0}),
        ("collision", {"m1": 0.0, "m2": 0.0}),
    ],
)
def test_degenerate_live_update_still_ticks(kind, updates):
    controller, scheduler, frames = make_controller()
    controller.select(kind)
    controller.update_parameters(**updates)
    assert scheduler.advance(1) == 1
    row = frames[-1].as_row()
    assert all(math.isfinite(value) for value in row)

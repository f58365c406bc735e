"""Simulation sessions: per-scenario state plus the start/pause/reset lifecycle."""
from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from physlab.data.scenarios import ParameterSet, ScenarioKind

from .collision import CollisionEvaluator
from .config import SIM_CFG, SimCfg
from .field import FieldEvaluator
from .kinematics import (
    CircularEvaluator,
    PendulumEvaluator,
    ProjectileEvaluator,
    SpringEvaluator,
)
from .logging_utils import RunLogger
from .model import (
    AngularState,
    BodySnapshot,
    CircularSnapshot,
    CircularState,
    CollisionSnapshot,
    CollisionState,
    FieldSnapshot,
    FieldState,
    FieldVector,
    LinearState,
    PendulumSnapshot,
    ProjectileSnapshot,
    ProjectileState,
    ScenarioState,
    Snapshot,
    SpringSnapshot,
)
from .timekeeping import Scheduler

S = TypeVar("S")
Event = tuple[str, str]
FrameListener = Callable[[Snapshot], None]


class ScenarioModel(Generic[S]):
    """Binds one evaluator to the session: initial state, step and snapshot."""

    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        self.params = params
        self.cfg = cfg

    def initial_state(self) -> S:
        raise NotImplementedError

    def step(self, state: S, dt: float) -> tuple[S, list[Event]]:
        raise NotImplementedError

    def snapshot(self, state: S, time: float) -> Snapshot:
        raise NotImplementedError


class ProjectileModel(ScenarioModel[ProjectileState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = ProjectileEvaluator.from_params(params)

    def initial_state(self) -> ProjectileState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        return self.evaluator.advance(state, dt), []

    def to_pixels(self, x: float, y: float) -> tuple[float, float]:
        scale = self.cfg.projectile_px_per_m
        return (
            self.cfg.projectile_origin_px + x * scale,
            self.cfg.arena_height - self.cfg.projectile_ground_px - y * scale,
        )

    def snapshot(self, state, time):
        x, y = self.evaluator.position(state.t)
        return ProjectileSnapshot(
            time=time,
            position=(x, y),
            position_px=self.to_pixels(x, y),
            vertical_velocity=self.evaluator.vertical_velocity(state.t),
            path=tuple(
                self.evaluator.path(
                    state.t,
                    self.cfg.projectile_path_spacing,
                    self.cfg.projectile_path_max_points,
                )
            ),
        )


class PendulumModel(ScenarioModel[AngularState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = PendulumEvaluator.from_params(params)

    def initial_state(self) -> AngularState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        return self.evaluator.advance(state, dt), []

    def snapshot(self, state, time):
        return PendulumSnapshot(
            time=time,
            theta=state.angle,
            omega=state.angular_velocity,
            bob_position=self.evaluator.bob_position(state),
        )


class SpringModel(ScenarioModel[LinearState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = SpringEvaluator.from_params(params)

    def initial_state(self) -> LinearState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        return self.evaluator.advance(state, dt), []

    def snapshot(self, state, time):
        return SpringSnapshot(time=time, x=state.x, v=state.v)


class CircularModel(ScenarioModel[CircularState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = CircularEvaluator.from_params(params, cfg)

    def initial_state(self) -> CircularState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        return self.evaluator.advance(state, dt), []

    def snapshot(self, state, time):
        return CircularSnapshot(
            time=time,
            angle=state.angle,
            position=self.evaluator.position(state.angle),
            velocity=self.evaluator.velocity(state.angle),
            trace=tuple(state.trace),
        )


class CollisionModel(ScenarioModel[CollisionState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = CollisionEvaluator.from_params(params, cfg)

    def initial_state(self) -> CollisionState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        nxt, report = self.evaluator.advance_with_report(state, dt)
        events: list[Event] = [("wall", f"body{index}:{wall}") for index, wall in report.walls]
        if report.collided:
            events.append(("collision", f"e={self.evaluator.e:.3g}"))
        return nxt, events

    def snapshot(self, state, time):
        return CollisionSnapshot(
            time=time,
            body1=BodySnapshot.from_state(state.body1),
            body2=BodySnapshot.from_state(state.body2),
        )


class FieldModel(ScenarioModel[FieldState]):
    def __init__(self, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> None:
        super().__init__(params, cfg)
        self.evaluator = FieldEvaluator.from_params(params, cfg)
        self._cached: Optional[tuple[FieldState, tuple[FieldVector, ...]]] = None

    def initial_state(self) -> FieldState:
        return self.evaluator.initial_state()

    def step(self, state, dt):
        return self.evaluator.advance(state, dt), []

    def snapshot(self, state, time):
        if self._cached is None or self._cached[0] != state:
            self._cached = (state, tuple(self.evaluator.sample(state)))
        return FieldSnapshot(time=time, sources=state.sources, vectors=self._cached[1])


SCENARIO_MODELS: dict[ScenarioKind, type[ScenarioModel]] = {
    ScenarioKind.PROJECTILE: ProjectileModel,
    ScenarioKind.PENDULUM: PendulumModel,
    ScenarioKind.SPRING: SpringModel,
    ScenarioKind.CIRCULAR: CircularModel,
    ScenarioKind.COLLISION: CollisionModel,
    ScenarioKind.ELECTRIC: FieldModel,
}


class SimulationSession:
    """Runtime object for one scenario.

    A session owns its state exclusively. Parameter changes are not applied
    in place: the owner discards the session and builds a new one. Ticks are
    requested from the injected scheduler one at a time, so a paused or
    closed session simply stops asking.
    """

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"

    def __init__(
        self,
        params: ParameterSet,
        scheduler: Scheduler,
        *,
        cfg: SimCfg = SIM_CFG,
        on_frame: Optional[FrameListener] = None,
        logger: Optional[RunLogger] = None,
    ) -> None:
        self._params = params
        self._scheduler = scheduler
        self._cfg = cfg
        self._on_frame = on_frame
        self._logger = logger
        self._model: ScenarioModel = SCENARIO_MODELS[params.kind](params, cfg)
        self._state: Optional[ScenarioState] = None
        self._status = self.STOPPED
        self._closed = False
        self.elapsed = 0.0
        self.ticks = 0
        self.last_snapshot: Optional[Snapshot] = None

    # ------------------------------------------------------------------
    @property
    def parameters(self) -> ParameterSet:
        return self._params

    @property
    def kind(self) -> ScenarioKind:
        return self._params.kind

    @property
    def status(self) -> str:
        return self._status

    @property
    def running(self) -> bool:
        return self._status == self.RUNNING

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> Optional[ScenarioState]:
        return self._state

    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin or resume ticking; state is only initialised the first time."""

        self._ensure_open()
        if self._state is None:
            self._initialise()
        if self.running:
            return
        self._status = self.RUNNING
        self._log_event("start")
        self._scheduler.schedule(self._on_scheduled)

    def pause(self) -> None:
        self._ensure_open()
        if not self.running:
            return
        self._status = self.PAUSED
        self._scheduler.cancel()
        self._log_event("pause")

    def reset(self) -> Snapshot:
        """Reinitialise from the current parameters, emit a frame, resume."""

        self._ensure_open()
        self._initialise()
        self._log_event("reset")
        snapshot = self.snapshot()
        self._emit(snapshot)
        self._status = self.RUNNING
        self._scheduler.schedule(self._on_scheduled)
        return snapshot

    def close(self) -> None:
        """Stop for good; the controller calls this on scenario switch."""

        if self._closed:
            return
        if self.running:
            self._scheduler.cancel()
        self._status = self.STOPPED
        self._closed = True
        self._log_event("close")

    # ------------------------------------------------------------------
    def tick(self) -> Optional[Snapshot]:
        """Advance one fixed step. A no-op unless the session is running."""

        if self._closed or not self.running or self._state is None:
            return None
        self._state, events = self._model.step(self._state, self._cfg.dt)
        self.elapsed += self._cfg.dt
        self.ticks += 1
        for event_type, details in events:
            self._log_event(event_type, details)
        snapshot = self.snapshot()
        if self._logger is not None and self.ticks % self._cfg.log_every_ticks == 0:
            self._logger.log_ts(snapshot.as_row())
        self._emit(snapshot)
        if self.running and not self._closed:
            self._scheduler.schedule(self._on_scheduled)
        return snapshot

    def snapshot(self) -> Snapshot:
        if self._state is None:
            raise RuntimeError("Session has not been started")
        return self._model.snapshot(self._state, self.elapsed)

    # ------------------------------------------------------------------
    def _on_scheduled(self) -> None:
        self.tick()

    def _initialise(self) -> None:
        self._state = self._model.initial_state()
        self.elapsed = 0.0
        self.ticks = 0

    def _emit(self, snapshot: Snapshot) -> None:
        self.last_snapshot = snapshot
        if self._on_frame is not None:
            self._on_frame(snapshot)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Session is closed")

    def _log_event(self, event_type: str, details: str = "") -> None:
        if self._logger is not None:
            self._logger.log_event([self.elapsed, self.ticks, event_type, details])


__all__ = [
    "SCENARIO_MODELS",
    "CircularModel",
    "CollisionModel",
    "FieldModel",
    "PendulumModel",
    "ProjectileModel",
    "ScenarioModel",
    "SimulationSession",
    "SpringModel",
]

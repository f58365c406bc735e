"""Kinematics evaluators for the single-body scenarios.

Every evaluator exposes ``initial_state()`` and ``advance(state, dt)``.
``advance`` returns a new state and never mutates its input, so a tick can
be replayed or inspected without a rendering surface.
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass

from physlab.data.scenarios import ParameterSet

from .config import SIM_CFG, SimCfg
from .model import AngularState, CircularState, LinearState, ProjectileState


def _check_step(dt: float) -> None:
    if dt <= 0.0:
        raise ValueError("dt must be positive")


@dataclass(frozen=True)
class ProjectileEvaluator:
    """Closed-form projectile motion, y positive upward, no ground contact."""

    speed: float
    angle_deg: float
    g: float

    @classmethod
    def from_params(cls, params: ParameterSet) -> "ProjectileEvaluator":
        return cls(speed=params["speed"], angle_deg=params["angle"], g=params["g"])

    @property
    def angle_rad(self) -> float:
        return math.radians(self.angle_deg)

    @property
    def vx(self) -> float:
        return self.speed * math.cos(self.angle_rad)

    @property
    def vy0(self) -> float:
        return self.speed * math.sin(self.angle_rad)

    def position(self, t: float) -> tuple[float, float]:
        return self.vx * t, self.vy0 * t - 0.5 * self.g * t * t

    def vertical_velocity(self, t: float) -> float:
        return self.vy0 - self.g * t

    def path(
        self, t: float, spacing: float, max_points: int | None = None
    ) -> list[tuple[float, float]]:
        """Positions sampled every *spacing* seconds from launch up to *t*.

        With *max_points*, every n-th sample is kept so at most that many
        (plus the latest sample) are evaluated; launch is always first.
        """

        count = int(math.floor(t / spacing + 1e-9)) if t > 0.0 else 0
        stride = 1
        if max_points is not None and count + 1 > max_points:
            stride = math.ceil((count + 1) / max_points)
        indices = list(range(0, count + 1, stride))
        if indices[-1] != count:
            indices.append(count)
        return [self.position(i * spacing) for i in indices]

    def initial_state(self) -> ProjectileState:
        return ProjectileState(t=0.0)

    def advance(self, state: ProjectileState, dt: float) -> ProjectileState:
        _check_step(dt)
        return ProjectileState(t=state.t + dt)


@dataclass(frozen=True)
class PendulumEvaluator:
    """Small-angle pendulum: the restoring term is linear in theta."""

    length: float
    theta0: float
    g: float

    @classmethod
    def from_params(cls, params: ParameterSet) -> "PendulumEvaluator":
        return cls(length=params["length"], theta0=params["theta0"], g=params["g"])

    def initial_state(self) -> AngularState:
        return AngularState(angle=self.theta0, angular_velocity=0.0)

    def advance(self, state: AngularState, dt: float) -> AngularState:
        _check_step(dt)
        alpha = -(self.g / self.length) * state.angle
        omega = state.angular_velocity + alpha * dt
        theta = state.angle + omega * dt
        return AngularState(angle=theta, angular_velocity=omega)

    def bob_position(self, state: AngularState) -> tuple[float, float]:
        """Bob offset from the pivot in metres, y positive downward."""

        return (
            math.sin(state.angle) * self.length,
            math.cos(state.angle) * self.length,
        )


@dataclass(frozen=True)
class SpringEvaluator:
    k: float
    m: float
    x0: float

    @classmethod
    def from_params(cls, params: ParameterSet) -> "SpringEvaluator":
        return cls(k=params["k"], m=params["m"], x0=params["x0"])

    def initial_state(self) -> LinearState:
        return LinearState(x=self.x0, v=0.0)

    def advance(self, state: LinearState, dt: float) -> LinearState:
        _check_step(dt)
        a = -(self.k / self.m) * state.x
        v = state.v + a * dt
        x = state.x + v * dt
        return LinearState(x=x, v=v)


@dataclass(frozen=True)
class CircularEvaluator:
    """Uniform circular motion; the angle is advanced kinematically."""

    radius: float
    angular_speed: float
    trace_length: int = SIM_CFG.trace_length

    @classmethod
    def from_params(cls, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> "CircularEvaluator":
        return cls(
            radius=params["radius"],
            angular_speed=params["angular_speed"],
            trace_length=cfg.trace_length,
        )

    def position(self, angle: float) -> tuple[float, float]:
        return self.radius * math.cos(angle), self.radius * math.sin(angle)

    def velocity(self, angle: float) -> tuple[float, float]:
        speed = self.angular_speed * self.radius
        return -speed * math.sin(angle), speed * math.cos(angle)

    def initial_state(self) -> CircularState:
        return CircularState(angle=0.0, trace=deque(maxlen=self.trace_length))

    def advance(self, state: CircularState, dt: float) -> CircularState:
        _check_step(dt)
        angle = state.angle + self.angular_speed * dt
        trace = deque(state.trace, maxlen=self.trace_length)
        trace.append(self.position(angle))
        return CircularState(angle=angle, trace=trace)


__all__ = [
    "CircularEvaluator",
    "PendulumEvaluator",
    "ProjectileEvaluator",
    "SpringEvaluator",
]

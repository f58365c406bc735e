"""Data models for per-scenario simulation state and render snapshots."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Union

import numpy as np


def _vec(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    return np.array([x, y], dtype=float)


@dataclass(frozen=True)
class ProjectileState:
    t: float = 0.0


@dataclass(frozen=True)
class AngularState:
    """Pendulum angle and angular velocity (rad, rad/s)."""

    angle: float
    angular_velocity: float = 0.0


@dataclass(frozen=True)
class LinearState:
    x: float
    v: float = 0.0


@dataclass
class CircularState:
    """Angle of the orbiting particle plus its bounded trail."""

    angle: float = 0.0
    trace: deque = field(default_factory=lambda: deque(maxlen=120))

    def copy(self) -> "CircularState":
        return CircularState(angle=self.angle, trace=deque(self.trace, maxlen=self.trace.maxlen))


@dataclass
class BodyState:
    """Mutable state for one circular body in the collision arena."""

    position: np.ndarray = field(default_factory=_vec)
    velocity: np.ndarray = field(default_factory=_vec)
    mass: float = 1.0
    radius: float = 20.0

    def copy(self) -> "BodyState":
        return BodyState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            mass=self.mass,
            radius=self.radius,
        )

    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * float(self.velocity @ self.velocity)


@dataclass
class CollisionState:
    body1: BodyState
    body2: BodyState

    def copy(self) -> "CollisionState":
        return CollisionState(body1=self.body1.copy(), body2=self.body2.copy())

    def momentum(self) -> np.ndarray:
        return self.body1.mass * self.body1.velocity + self.body2.mass * self.body2.velocity


@dataclass(frozen=True)
class FieldSource:
    position: tuple[float, float]
    charge: float


@dataclass(frozen=True)
class FieldState:
    sources: tuple[FieldSource, FieldSource]


ScenarioState = Union[
    ProjectileState, AngularState, LinearState, CircularState, CollisionState, FieldState
]


# ----------------------------------------------------------------------
# Snapshots handed to the renderer once per tick.
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ProjectileSnapshot:
    time: float
    position: tuple[float, float]
    position_px: tuple[float, float]
    vertical_velocity: float
    path: tuple[tuple[float, float], ...]

    def as_row(self) -> list[float]:
        return [self.time, *self.position, self.vertical_velocity]


@dataclass(frozen=True)
class PendulumSnapshot:
    time: float
    theta: float
    omega: float
    bob_position: tuple[float, float]

    def as_row(self) -> list[float]:
        return [self.time, self.theta, self.omega]


@dataclass(frozen=True)
class SpringSnapshot:
    time: float
    x: float
    v: float

    def as_row(self) -> list[float]:
        return [self.time, self.x, self.v]


@dataclass(frozen=True)
class CircularSnapshot:
    time: float
    angle: float
    position: tuple[float, float]
    velocity: tuple[float, float]
    trace: tuple[tuple[float, float], ...]

    def as_row(self) -> list[float]:
        return [self.time, self.angle, *self.position]


@dataclass(frozen=True)
class BodySnapshot:
    position: tuple[float, float]
    velocity: tuple[float, float]
    mass: float
    radius: float

    @classmethod
    def from_state(cls, body: BodyState) -> "BodySnapshot":
        return cls(
            position=(float(body.position[0]), float(body.position[1])),
            velocity=(float(body.velocity[0]), float(body.velocity[1])),
            mass=body.mass,
            radius=body.radius,
        )


@dataclass(frozen=True)
class CollisionSnapshot:
    time: float
    body1: BodySnapshot
    body2: BodySnapshot

    def as_row(self) -> list[float]:
        return [
            self.time,
            *self.body1.position,
            *self.body1.velocity,
            *self.body2.position,
            *self.body2.velocity,
        ]


@dataclass(frozen=True)
class FieldVector:
    """One quiver arrow: sample point, unit direction and field magnitude."""

    position: tuple[float, float]
    direction: tuple[float, float]
    magnitude: float


@dataclass(frozen=True)
class FieldSnapshot:
    time: float
    sources: tuple[FieldSource, ...]
    vectors: tuple[FieldVector, ...]

    def as_row(self) -> list[float]:
        return [self.time, *(source.charge for source in self.sources)]


Snapshot = Union[
    ProjectileSnapshot,
    PendulumSnapshot,
    SpringSnapshot,
    CircularSnapshot,
    CollisionSnapshot,
    FieldSnapshot,
]


__all__ = [
    "AngularState",
    "BodySnapshot",
    "BodyState",
    "CircularSnapshot",
    "CircularState",
    "CollisionSnapshot",
    "CollisionState",
    "FieldSnapshot",
    "FieldSource",
    "FieldState",
    "FieldVector",
    "LinearState",
    "PendulumSnapshot",
    "ProjectileSnapshot",
    "ProjectileState",
    "ScenarioState",
    "Snapshot",
    "SpringSnapshot",
]

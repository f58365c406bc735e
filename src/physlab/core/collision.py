"""Two-body collision resolution and arena wall reflection."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from physlab.data.scenarios import ParameterSet

from .config import SIM_CFG, SimCfg
from .model import BodyState, CollisionState

FALLBACK_NORMAL = np.array([1.0, 0.0], dtype=float)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def clamp_restitution(e: float) -> float:
    return clamp(e, 0.0, 1.0)


def restitution_velocities(
    m1: float, m2: float, u1: float, u2: float, e: float
) -> tuple[float, float]:
    """Final 1-D velocities for a head-on impact with restitution *e*.

    Momentum is conserved for any *e*; kinetic energy only for ``e == 1``.
    *e* is clamped into ``[0, 1]`` first.
    """

    e = clamp_restitution(e)
    total = m1 + m2
    momentum = m1 * u1 + m2 * u2
    v1 = (momentum + m2 * e * (u2 - u1)) / total
    v2 = (momentum + m1 * e * (u1 - u2)) / total
    return v1, v2


def reflect_from_walls(body: BodyState, width: float, height: float) -> list[str]:
    """Keep *body* inside the arena, mirroring the velocity on contact.

    Mutates *body* in place and returns the names of the walls touched.
    """

    hits: list[str] = []
    x, y = body.position
    r = body.radius
    if x - r < 0.0:
        body.position[0] = r
        body.velocity[0] *= -1.0
        hits.append("left")
    if x + r > width:
        body.position[0] = width - r
        body.velocity[0] *= -1.0
        hits.append("right")
    if y - r < 0.0:
        body.position[1] = r
        body.velocity[1] *= -1.0
        hits.append("top")
    if y + r > height:
        body.position[1] = height - r
        body.velocity[1] *= -1.0
        hits.append("bottom")
    return hits


def resolve_pair(
    body1: BodyState,
    body2: BodyState,
    e: float,
    *,
    epsilon: float = SIM_CFG.collision_epsilon,
) -> bool:
    """Resolve an overlap between two bodies in place.

    Returns ``False`` without touching the bodies when they are apart.
    Coincident centres use :data:`FALLBACK_NORMAL` as the contact normal.
    """

    delta = body2.position - body1.position
    dist = math.hypot(delta[0], delta[1])
    if dist > body1.radius + body2.radius:
        return False

    if dist <= epsilon:
        normal = FALLBACK_NORMAL.copy()
    else:
        normal = delta / dist
    tangent = np.array([-normal[1], normal[0]])

    v1n = float(body1.velocity @ normal)
    v1t = float(body1.velocity @ tangent)
    v2n = float(body2.velocity @ normal)
    v2t = float(body2.velocity @ tangent)

    v1n_after, v2n_after = restitution_velocities(body1.mass, body2.mass, v1n, v2n, e)

    body1.velocity = v1n_after * normal + v1t * tangent
    body2.velocity = v2n_after * normal + v2t * tangent

    correction = ((body1.radius + body2.radius) - dist) / 2.0
    body1.position = body1.position - normal * correction
    body2.position = body2.position + normal * correction
    return True


@dataclass
class CollisionReport:
    walls: list[tuple[int, str]] = field(default_factory=list)
    collided: bool = False


@dataclass(frozen=True)
class CollisionEvaluator:
    """Two balls in a rectangular box, stepped with explicit Euler."""

    m1: float
    m2: float
    v1: float
    v2: float
    r1: float
    r2: float
    e: float
    width: float = SIM_CFG.arena_width
    height: float = SIM_CFG.arena_height
    px_per_mps: float = SIM_CFG.collision_px_per_mps
    epsilon: float = SIM_CFG.collision_epsilon

    @classmethod
    def from_params(cls, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> "CollisionEvaluator":
        return cls(
            m1=params["m1"],
            m2=params["m2"],
            v1=params["v1"],
            v2=params["v2"],
            r1=params["r1"],
            r2=params["r2"],
            e=clamp_restitution(params["e"]),
            width=cfg.arena_width,
            height=cfg.arena_height,
            px_per_mps=cfg.collision_px_per_mps,
            epsilon=cfg.collision_epsilon,
        )

    def initial_state(self) -> CollisionState:
        mid_y = self.height / 2.0
        return CollisionState(
            body1=BodyState(
                position=np.array([self.width * 0.25, mid_y]),
                velocity=np.array([self.v1 * self.px_per_mps, 0.0]),
                mass=self.m1,
                radius=self.r1,
            ),
            body2=BodyState(
                position=np.array([self.width * 0.75, mid_y]),
                velocity=np.array([self.v2 * self.px_per_mps, 0.0]),
                mass=self.m2,
                radius=self.r2,
            ),
        )

    def advance_with_report(
        self, state: CollisionState, dt: float
    ) -> tuple[CollisionState, CollisionReport]:
        if dt <= 0.0:
            raise ValueError("dt must be positive")
        nxt = state.copy()
        report = CollisionReport()
        bodies = (nxt.body1, nxt.body2)
        for body in bodies:
            body.position = body.position + body.velocity * dt
        for index, body in enumerate(bodies, start=1):
            for wall in reflect_from_walls(body, self.width, self.height):
                report.walls.append((index, wall))
        report.collided = resolve_pair(nxt.body1, nxt.body2, self.e, epsilon=self.epsilon)
        return nxt, report

    def advance(self, state: CollisionState, dt: float) -> CollisionState:
        return self.advance_with_report(state, dt)[0]


__all__ = [
    "FALLBACK_NORMAL",
    "CollisionEvaluator",
    "CollisionReport",
    "clamp",
    "clamp_restitution",
    "reflect_from_walls",
    "resolve_pair",
    "restitution_velocities",
]

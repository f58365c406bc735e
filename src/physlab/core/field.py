"""Electrostatic field evaluation for the two-charge scene."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from physlab.data.scenarios import ParameterSet

from .config import SIM_CFG, SimCfg
from .model import FieldSource, FieldState, FieldVector


def field_at(
    sources: Sequence[FieldSource],
    point: Sequence[float],
    *,
    min_dist_sq: float = SIM_CFG.field_min_dist_sq,
) -> np.ndarray:
    """Superposed inverse-square field at *point*.

    Sources closer than ``sqrt(min_dist_sq)`` to the point are skipped.
    """

    p = np.asarray(point, dtype=float)
    total = np.zeros(2, dtype=float)
    for source in sources:
        d = p - np.asarray(source.position, dtype=float)
        r2 = float(d @ d)
        if r2 < min_dist_sq:
            continue
        total += source.charge * d / r2**1.5
    return total


def sample_grid(
    sources: Sequence[FieldSource],
    width: float,
    height: float,
    step: float,
    *,
    min_dist_sq: float = SIM_CFG.field_min_dist_sq,
    min_magnitude: float = SIM_CFG.field_min_magnitude,
) -> list[FieldVector]:
    """Sample the field on a regular grid offset by half a cell.

    Cells whose magnitude is below *min_magnitude* are left out.
    """

    if step <= 0:
        raise ValueError("Grid step must be positive")
    xs = np.arange(step / 2.0, width, step)
    ys = np.arange(step / 2.0, height, step)
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    ex = np.zeros_like(gx)
    ey = np.zeros_like(gy)
    for source in sources:
        dx = gx - source.position[0]
        dy = gy - source.position[1]
        r2 = dx * dx + dy * dy
        keep = r2 >= min_dist_sq
        r3 = np.where(keep, r2, 1.0) ** 1.5
        ex += np.where(keep, source.charge * dx / r3, 0.0)
        ey += np.where(keep, source.charge * dy / r3, 0.0)

    magnitude = np.hypot(ex, ey)
    vectors: list[FieldVector] = []
    for i, j in zip(*np.nonzero(magnitude >= min_magnitude)):
        mag = float(magnitude[i, j])
        vectors.append(
            FieldVector(
                position=(float(gx[i, j]), float(gy[i, j])),
                direction=(float(ex[i, j]) / mag, float(ey[i, j]) / mag),
                magnitude=mag,
            )
        )
    return vectors


def axis_magnitude_profile(
    q1: float,
    q2: float,
    *,
    samples: int = SIM_CFG.probe_samples,
    positions: tuple[float, float] = SIM_CFG.field_source_fractions,
    min_distance: float = SIM_CFG.probe_min_distance,
) -> tuple[np.ndarray, np.ndarray]:
    """|E| along the unit segment through both charges.

    Each source contributes ``|q| / r**2`` and the magnitudes are added,
    so opposite charges do not cancel here the way they do on the grid.
    """

    xs = np.linspace(0.0, 1.0, samples)
    total = np.zeros_like(xs)
    for q, cx in zip((q1, q2), positions):
        r = np.abs(xs - cx)
        near = r <= min_distance
        safe = np.where(near, 1.0, r)
        total += np.where(near, 0.0, np.abs(q / (safe * safe)))
    return xs, total


@dataclass(frozen=True)
class FieldEvaluator:
    """Static two-charge scene; advancing only re-samples the grid."""

    q1: float
    q2: float
    width: float = SIM_CFG.arena_width
    height: float = SIM_CFG.arena_height
    grid_step: float = SIM_CFG.field_grid_step
    fractions: tuple[float, float] = SIM_CFG.field_source_fractions
    min_dist_sq: float = SIM_CFG.field_min_dist_sq
    min_magnitude: float = SIM_CFG.field_min_magnitude

    @classmethod
    def from_params(cls, params: ParameterSet, cfg: SimCfg = SIM_CFG) -> "FieldEvaluator":
        return cls(
            q1=params["q1"],
            q2=params["q2"],
            width=cfg.arena_width,
            height=cfg.arena_height,
            grid_step=cfg.field_grid_step,
            fractions=cfg.field_source_fractions,
            min_dist_sq=cfg.field_min_dist_sq,
            min_magnitude=cfg.field_min_magnitude,
        )

    def initial_state(self) -> FieldState:
        mid_y = self.height * 0.5
        return FieldState(
            sources=(
                FieldSource(position=(self.width * self.fractions[0], mid_y), charge=self.q1),
                FieldSource(position=(self.width * self.fractions[1], mid_y), charge=self.q2),
            )
        )

    def advance(self, state: FieldState, dt: float) -> FieldState:
        if dt <= 0.0:
            raise ValueError("dt must be positive")
        return state

    def sample(self, state: FieldState) -> list[FieldVector]:
        return sample_grid(
            state.sources,
            self.width,
            self.height,
            self.grid_step,
            min_dist_sq=self.min_dist_sq,
            min_magnitude=self.min_magnitude,
        )


__all__ = [
    "FieldEvaluator",
    "axis_magnitude_profile",
    "field_at",
    "sample_grid",
]

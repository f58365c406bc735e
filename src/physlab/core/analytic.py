"""Closed-form scenario summaries for the chart view.

These are pure functions of a :class:`ParameterSet`; nothing here touches a
running session.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Mapping

import numpy as np

from physlab.data.scenarios import ParameterSet, ScenarioKind

from .collision import clamp_restitution, restitution_velocities
from .config import SIM_CFG
from .field import axis_magnitude_profile


@dataclass(frozen=True)
class Series:
    label: str
    values: np.ndarray


@dataclass(frozen=True)
class AnalyticSummary:
    kind: ScenarioKind
    title: str
    chart: str  # "line" or "bar"
    x_label: str
    x_values: np.ndarray | tuple[str, ...]
    series: tuple[Series, ...]
    results: dict[str, float] = field(default_factory=dict)
    problem: str = ""
    answer: str = ""


def projectile_summary(params: ParameterSet, steps: int = 60) -> AnalyticSummary:
    u = params["speed"]
    a = math.radians(params["angle"])
    g = params["g"]
    flight_time = 2.0 * u * math.sin(a) / g
    flight_range = u * u * math.sin(2.0 * a) / g
    max_height = u * u * math.sin(a) ** 2 / (2.0 * g)
    ts = np.linspace(0.0, flight_time, steps + 1)
    vy = u * math.sin(a) - g * ts
    return AnalyticSummary(
        kind=ScenarioKind.PROJECTILE,
        title="Projectile: vertical velocity",
        chart="line",
        x_label="t (s)",
        x_values=ts,
        series=(Series("vy (m/s)", vy),),
        results={"T": flight_time, "range": flight_range, "max_height": max_height},
        problem=(
            f"A projectile launched at {u:g} m/s at {params['angle']:.0f} deg. "
            "Find time of flight, range, and max height."
        ),
        answer=(
            f"T={flight_time:.2f} s; Range={flight_range:.2f} m; "
            f"Max height={max_height:.2f} m"
        ),
    )


def pendulum_summary(params: ParameterSet, steps: int = 100) -> AnalyticSummary:
    length = params["length"]
    g = params["g"]
    period = 2.0 * math.pi * math.sqrt(length / g)
    ts = np.arange(steps) * (period / steps)
    # Unit-amplitude proxy; theta0 does not scale it.
    theta = np.sin(2.0 * math.pi * ts / period)
    return AnalyticSummary(
        kind=ScenarioKind.PENDULUM,
        title="Pendulum: angular displacement (a.u.)",
        chart="line",
        x_label="t (s)",
        x_values=ts,
        series=(Series("theta (a.u.)", theta),),
        results={"T": period},
        problem=f"Pendulum length {length:g} m. Find the period (small-angle).",
        answer=f"T = 2*pi*sqrt(L/g) = {period:.2f} s",
    )


def spring_summary(
    params: ParameterSet, steps: int = 120, spacing: float = 0.02
) -> AnalyticSummary:
    k = params["k"]
    m = params["m"]
    omega = math.sqrt(k / m)
    frequency = omega / (2.0 * math.pi)
    ts = np.arange(steps) * spacing
    return AnalyticSummary(
        kind=ScenarioKind.SPRING,
        title="Spring: displacement (a.u.)",
        chart="line",
        x_label="t (s)",
        x_values=ts,
        series=(Series("x (a.u.)", np.cos(omega * ts)),),
        results={"omega": omega, "f": frequency, "T": 2.0 * math.pi / omega},
        problem=f"Mass-spring with k={k:g} N/m and m={m:g} kg: find omega and f.",
        answer=(
            f"omega = sqrt(k/m) = {omega:.2f} rad/s; "
            f"f = omega / (2*pi) = {frequency:.2f} Hz"
        ),
    )


def circular_summary(params: ParameterSet, steps: int = 120) -> AnalyticSummary:
    radius = params["radius"]
    omega = params["angular_speed"]
    period = 2.0 * math.pi / omega
    ts = np.linspace(0.0, period, steps + 1)
    return AnalyticSummary(
        kind=ScenarioKind.CIRCULAR,
        title="Circular motion: x(t)",
        chart="line",
        x_label="t (s)",
        x_values=ts,
        series=(Series("x(t) (px)", radius * np.cos(omega * ts)),),
        results={"T": period},
        problem=(
            f"Uniform circular motion with radius={radius:g}px and "
            f"omega={omega:g} rad/s. What is the period T?"
        ),
        answer=f"T = 2*pi/omega = {period:.3f} s",
    )


def collision_summary(params: ParameterSet) -> AnalyticSummary:
    m1, m2 = params["m1"], params["m2"]
    u1, u2 = params["v1"], params["v2"]
    e = clamp_restitution(params["e"])
    v1, v2 = restitution_velocities(m1, m2, u1, u2, e)
    return AnalyticSummary(
        kind=ScenarioKind.COLLISION,
        title="Collision: velocities (before/after)",
        chart="bar",
        x_label="",
        x_values=("before", "after"),
        series=(
            Series("v1 (m/s)", np.array([u1, v1])),
            Series("v2 (m/s)", np.array([u2, v2])),
        ),
        results={"v1": v1, "v2": v2, "momentum": m1 * v1 + m2 * v2},
        problem=(
            f"Two masses m1={m1:g} kg and m2={m2:g} kg with initial velocities "
            f"u1={u1:g} m/s and u2={u2:g} m/s. Compute final velocities "
            f"(restitution e={e:g})."
        ),
        answer=f"v1' = {v1:.3f} m/s; v2' = {v2:.3f} m/s",
    )


def electric_summary(params: ParameterSet) -> AnalyticSummary:
    q1, q2 = params["q1"], params["q2"]
    xs, magnitude = axis_magnitude_profile(q1, q2, samples=SIM_CFG.probe_samples)
    return AnalyticSummary(
        kind=ScenarioKind.ELECTRIC,
        title="Electric field magnitude along line",
        chart="line",
        x_label="x (fraction of separation line)",
        x_values=xs,
        series=(Series("|E| (arb)", magnitude),),
        results={"peak": float(magnitude.max())},
        problem=(
            f"Two charges q1={q1:g}, q2={q2:g}. "
            "Plot |E| along the line between them (qualitative)."
        ),
        answer="Field is stronger near charges and depends on 1/r^2; signs determine direction.",
    )


SUMMARY_FUNCTIONS: dict[ScenarioKind, Callable[[ParameterSet], AnalyticSummary]] = {
    ScenarioKind.PROJECTILE: projectile_summary,
    ScenarioKind.PENDULUM: pendulum_summary,
    ScenarioKind.SPRING: spring_summary,
    ScenarioKind.CIRCULAR: circular_summary,
    ScenarioKind.COLLISION: collision_summary,
    ScenarioKind.ELECTRIC: electric_summary,
}


def summarize(params: ParameterSet) -> AnalyticSummary:
    return SUMMARY_FUNCTIONS[params.kind](params)


def summarize_query(query: Mapping[str, str]) -> AnalyticSummary:
    """Summary straight from the flat string mapping of the chart handoff."""

    return summarize(ParameterSet.from_query(query))


__all__ = [
    "AnalyticSummary",
    "SUMMARY_FUNCTIONS",
    "Series",
    "circular_summary",
    "collision_summary",
    "electric_summary",
    "pendulum_summary",
    "projectile_summary",
    "spring_summary",
    "summarize",
    "summarize_query",
]

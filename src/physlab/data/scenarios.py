"""Scenario definitions, parameter schemas and preset values."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping


class ScenarioKind(str, Enum):
    PROJECTILE = "projectile"
    PENDULUM = "pendulum"
    SPRING = "spring"
    CIRCULAR = "circular"
    COLLISION = "collision"
    ELECTRIC = "electric"

    @classmethod
    def parse(cls, value: "str | ScenarioKind") -> "ScenarioKind":
        if isinstance(value, ScenarioKind):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown scenario: {value!r}. Available: {known}") from None


@dataclass(frozen=True)
class ParamSpec:
    """Schema entry for one slider-controlled parameter."""

    name: str
    label: str
    default: float
    minimum: float
    maximum: float
    step: float

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, value))


@dataclass(frozen=True)
class Scenario:
    kind: ScenarioKind
    name: str
    description: str
    params: tuple[ParamSpec, ...]

    def spec(self, name: str) -> ParamSpec:
        for param in self.params:
            if param.name == name:
                return param
        raise KeyError(f"{self.kind.value} has no parameter {name!r}")

    def defaults(self) -> dict[str, float]:
        return {param.name: param.default for param in self.params}


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        kind=ScenarioKind.PROJECTILE,
        name="Projectile motion",
        description="Launch at an angle; the path follows closed-form kinematics.",
        params=(
            ParamSpec("speed", "Speed (m/s)", 25.0, 1.0, 80.0, 1.0),
            ParamSpec("angle", "Angle (deg)", 45.0, 0.0, 85.0, 1.0),
            ParamSpec("g", "Gravity (m/s^2)", 9.81, 1.0, 25.0, 0.01),
        ),
    ),
    Scenario(
        kind=ScenarioKind.PENDULUM,
        name="Pendulum (small-angle)",
        description="Linearised restoring torque integrated with semi-implicit Euler.",
        params=(
            ParamSpec("length", "Length (m)", 1.6, 0.2, 4.0, 0.1),
            ParamSpec("theta0", "Init angle (rad)", 0.5, -1.2, 1.2, 0.01),
            ParamSpec("g", "Gravity (m/s^2)", 9.81, 1.0, 25.0, 0.01),
        ),
    ),
    Scenario(
        kind=ScenarioKind.SPRING,
        name="Spring-mass (SHM)",
        description="Hooke's law oscillator integrated with semi-implicit Euler.",
        params=(
            ParamSpec("k", "k (N/m)", 50.0, 5.0, 200.0, 1.0),
            ParamSpec("m", "Mass (kg)", 1.5, 0.1, 10.0, 0.1),
            ParamSpec("x0", "Init disp (m)", 0.6, -2.0, 2.0, 0.01),
        ),
    ),
    Scenario(
        kind=ScenarioKind.CIRCULAR,
        name="Circular motion",
        description="Uniform circular motion with a fading trail.",
        params=(
            ParamSpec("radius", "Radius (px)", 100.0, 20.0, 240.0, 1.0),
            ParamSpec("angular_speed", "Angular speed (rad/s)", 1.2, 0.2, 6.0, 0.01),
        ),
    ),
    Scenario(
        kind=ScenarioKind.COLLISION,
        name="Collision (2 balls)",
        description="Two balls in a box with wall bounces and restitution.",
        params=(
            ParamSpec("m1", "Mass 1 (kg)", 2.0, 0.5, 10.0, 0.1),
            ParamSpec("m2", "Mass 2 (kg)", 1.0, 0.5, 10.0, 0.1),
            ParamSpec("v1", "v1 (m/s)", 3.0, -10.0, 10.0, 0.1),
            ParamSpec("v2", "v2 (m/s)", -1.0, -10.0, 10.0, 0.1),
            ParamSpec("r1", "Radius 1 (px)", 20.0, 5.0, 60.0, 1.0),
            ParamSpec("r2", "Radius 2 (px)", 20.0, 5.0, 60.0, 1.0),
            ParamSpec("e", "Restitution (e)", 1.0, 0.0, 1.0, 0.01),
        ),
    ),
    Scenario(
        kind=ScenarioKind.ELECTRIC,
        name="Electric field (vectors)",
        description="Two point charges and the superposed field on a grid.",
        params=(
            ParamSpec("q1", "Charge 1 (q1)", 3.0, -6.0, 6.0, 0.1),
            ParamSpec("q2", "Charge 2 (q2)", -3.0, -6.0, 6.0, 0.1),
        ),
    ),
)

SCENARIOS: dict[ScenarioKind, Scenario] = {
    scenario.kind: scenario for scenario in SCENARIO_DEFINITIONS
}
SCENARIO_DISPLAY_ORDER: list[ScenarioKind] = [scenario.kind for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KIND = SCENARIO_DISPLAY_ORDER[0]

# Alternative spellings accepted in query-string input.
PARAM_ALIASES: dict[str, str] = {
    "gravitationalAccel": "g",
    "angularSpeed": "angular_speed",
}


def parse_number(raw: object, default: float) -> float:
    """Parse *raw* as a finite float, falling back to *default*."""

    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    return value


@dataclass(frozen=True)
class ParameterSet(Mapping[str, float]):
    """Immutable parameter bag for one scenario kind.

    Every value is clamped into its slider range on construction, so masses,
    lengths, stiffness, gravity and angular speed stay strictly positive
    whichever channel supplied them. Non-finite values fall back to the
    preset. Sets are never changed in place; :meth:`replace` returns a new
    set, which is how the live view feeds slider changes to a fresh session.
    """

    kind: ScenarioKind
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        kind = ScenarioKind.parse(self.kind)
        scenario = SCENARIOS[kind]
        merged = scenario.defaults()
        for name, value in self.values.items():
            name = PARAM_ALIASES.get(name, name)
            spec = scenario.spec(name)
            merged[name] = spec.clamp(parse_number(value, spec.default))
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "values", MappingProxyType(merged))

    # ------------------------------------------------------------------
    @classmethod
    def defaults(cls, kind: str | ScenarioKind) -> "ParameterSet":
        return cls(ScenarioKind.parse(kind))

    # ------------------------------------------------------------------
    @classmethod
    def from_query(
        cls,
        query: Mapping[str, str],
        kind: str | ScenarioKind | None = None,
    ) -> "ParameterSet":
        """Build a set from the flat string mapping of the chart handoff.

        Missing, non-numeric and non-finite entries fall back to the
        scenario default; out-of-range numbers are clamped. Keys that do not belong to the scenario are
        ignored.
        """

        if kind is None:
            kind = query.get("sim") or DEFAULT_SCENARIO_KIND
        scenario = SCENARIOS[ScenarioKind.parse(kind)]
        normalised = {PARAM_ALIASES.get(key, key): raw for key, raw in query.items()}
        values = {
            param.name: parse_number(normalised.get(param.name), param.default)
            for param in scenario.params
        }
        return cls(scenario.kind, values)

    # ------------------------------------------------------------------
    def to_query(self) -> dict[str, str]:
        query = {"sim": self.kind.value}
        query.update({name: f"{value:.10g}" for name, value in self.values.items()})
        return query

    # ------------------------------------------------------------------
    def replace(self, **updates: float) -> "ParameterSet":
        merged = dict(self.values)
        merged.update(updates)
        return ParameterSet(self.kind, merged)

    # ------------------------------------------------------------------
    def nudge(self, name: str, steps: int) -> "ParameterSet":
        """Return a copy with *name* moved by whole slider steps, clamped."""

        spec = SCENARIOS[self.kind].spec(name)
        value = spec.clamp(self.values[name] + steps * spec.step)
        return self.replace(**{name: round(value, 6)})

    @property
    def scenario(self) -> Scenario:
        return SCENARIOS[self.kind]

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


__all__ = [
    "DEFAULT_SCENARIO_KIND",
    "PARAM_ALIASES",
    "ParamSpec",
    "ParameterSet",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
    "ScenarioKind",
    "parse_number",
]

import pytest

from physlab.data.scenarios import (
    PARAM_ALIASES,
    SCENARIO_DISPLAY_ORDER,
    SCENARIOS,
    ParameterSet,
    ScenarioKind,
    parse_number,
)


def test_presets_match_defaults():
    assert dict(ParameterSet.defaults("projectile")) == {"speed": 25.0, "angle": 45.0, "g": 9.81}
    assert dict(ParameterSet.defaults("collision")) == {
        "m1": 2.0,
        "m2": 1.0,
        "v1": 3.0,
        "v2": -1.0,
        "r1": 20.0,
        "r2": 20.0,
        "e": 1.0,
    }
    assert dict(ParameterSet.defaults("electric")) == {"q1": 3.0, "q2": -3.0}


def test_display_order_covers_every_kind():
    assert SCENARIO_DISPLAY_ORDER[0] is ScenarioKind.PROJECTILE
    assert set(SCENARIO_DISPLAY_ORDER) == set(ScenarioKind) == set(SCENARIOS)


def test_unknown_scenario_rejected():
    with pytest.raises(ValueError, match="Unknown scenario"):
        ScenarioKind.parse("orbit")


def test_unknown_parameter_rejected():
    with pytest.raises(KeyError):
        ParameterSet("spring", {"speed": 3.0})


def test_replace_returns_new_set():
    original = ParameterSet.defaults("spring")
    updated = original.replace(k=80.0)
    assert updated["k"] == 80.0
    assert original["k"] == 50.0
    assert updated is not original


def test_nudge_moves_by_step_and_clamps():
    params = ParameterSet.defaults("collision")
    assert params.nudge("e", -3)["e"] == pytest.approx(0.97)
    assert params.nudge("e", 5)["e"] == 1.0
    assert params.nudge("m1", -100)["m1"] == 0.5


@pytest.mark.parametrize(
    "raw, expected",
    [("12.5", 12.5), (" 3 ", 3.0), ("abc", 7.0), ("", 7.0), (None, 7.0), ("nan", 7.0), ("inf", 7.0), ("0", 0.0)],
)
def test_parse_number(raw, expected):
    assert parse_number(raw, 7.0) == expected


def test_from_query_substitutes_defaults():
    params = ParameterSet.from_query({"sim": "projectile", "speed": "30", "angle": "oops"})
    assert params.kind is ScenarioKind.PROJECTILE
    assert params["speed"] == 30.0
    assert params["angle"] == 45.0
    assert params["g"] == 9.81


def test_from_query_defaults_to_projectile():
    assert ParameterSet.from_query({}).kind is ScenarioKind.PROJECTILE


def test_from_query_accepts_camel_case_aliases():
    params = ParameterSet.from_query({"sim": "circular", "angularSpeed": "2.5"})
    assert params["angular_speed"] == 2.5
    params = ParameterSet.from_query({"sim": "projectile", "gravitationalAccel": "1.62"})
    assert params["g"] == 1.62


def test_from_query_ignores_foreign_keys():
    params = ParameterSet.from_query({"sim": "spring", "speed": "99", "k": "20"})
    assert dict(params) == {"k": 20.0, "m": 1.5, "x0": 0.6}


def test_query_round_trip_keeps_values():
    params = ParameterSet("collision", {"v1": 1.0 / 3.0, "e": 0.25})
    query = params.to_query()
    assert query["sim"] == "collision"
    assert all(isinstance(value, str) for value in query.values())
    assert ParameterSet.from_query(query)["v1"] == pytest.approx(1.0 / 3.0, rel=1e-9)
    assert ParameterSet.from_query(query)["e"] == 0.25


@pytest.mark.parametrize(
    "kind, name, raw, expected",
    [
        ("projectile", "g", "0", 1.0),
        ("pendulum", "length", "0", 0.2),
        ("pendulum", "length", "-3", 0.2),
        ("spring", "m", "0", 0.1),
        ("spring", "k", "-50", 5.0),
        ("circular", "angularSpeed", "0", 0.2),
        ("collision", "m1", "0", 0.5),
        ("collision", "e", "7", 1.0),
    ],
)
def test_from_query_clamps_into_slider_range(kind, name, raw, expected):
    params = ParameterSet.from_query({"sim": kind, name: raw})
    assert params[PARAM_ALIASES.get(name, name)] == expected


def test_zero_stays_valid_where_the_range_allows_it():
    assert ParameterSet.from_query({"sim": "collision", "e": "0"})["e"] == 0.0
    assert ParameterSet.from_query({"sim": "electric", "q1": "0"})["q1"] == 0.0
    assert ParameterSet.from_query({"sim": "spring", "x0": "0"})["x0"] == 0.0


def test_replace_clamps_and_rejects_non_finite():
    params = ParameterSet.defaults("pendulum")
    assert params.replace(length=0.0)["length"] == 0.2
    assert params.replace(length=99.0)["length"] == 4.0
    assert params.replace(length=float("nan"))["length"] == 1.6
    assert params.replace(g=float("inf"))["g"] == 9.81

import math

import numpy as np
import pytest

from physlab.core.analytic import (
    SUMMARY_FUNCTIONS,
    summarize,
    summarize_query,
)
from physlab.core.kinematics import SpringEvaluator
from physlab.data.scenarios import ParameterSet, ScenarioKind


def test_every_kind_has_a_summary():
    assert set(SUMMARY_FUNCTIONS) == set(ScenarioKind)


def test_projectile_reference_values():
    summary = summarize(ParameterSet.defaults("projectile"))
    assert summary.results["T"] == pytest.approx(3.602, abs=0.01)
    assert summary.results["range"] == pytest.approx(63.71, abs=0.01)
    assert summary.results["max_height"] == pytest.approx(15.93, abs=0.01)
    vy = summary.series[0].values
    assert len(vy) == 61
    assert vy[0] == pytest.approx(25 * math.sin(math.pi / 4))
    assert vy[-1] == pytest.approx(-vy[0])
    assert summary.answer == "T=3.60 s; Range=63.71 m; Max height=15.93 m"


def test_pendulum_period_and_proxy_series():
    summary = summarize(ParameterSet.defaults("pendulum"))
    period = 2 * math.pi * math.sqrt(1.6 / 9.81)
    assert summary.results["T"] == pytest.approx(period)
    assert summary.results["T"] == pytest.approx(2.543, abs=1e-3)
    values = summary.series[0].values
    assert len(values) == 100
    assert values.max() == pytest.approx(1.0, abs=1e-3)
    # amplitude is independent of theta0
    other = summarize(ParameterSet("pendulum", {"theta0": 0.1})).series[0].values
    np.testing.assert_allclose(values, other)


def test_spring_omega_and_frequency():
    summary = summarize(ParameterSet.defaults("spring"))
    assert summary.results["omega"] == pytest.approx(5.7735, abs=1e-4)
    assert summary.results["f"] == pytest.approx(0.919, abs=1e-3)
    ts = summary.x_values
    assert len(ts) == 120
    assert ts[1] == pytest.approx(0.02)
    np.testing.assert_allclose(summary.series[0].values, np.cos(summary.results["omega"] * ts))


def test_spring_period_matches_simulated_zero_crossings():
    params = ParameterSet.defaults("spring")
    period = summarize(params).results["T"]
    ev = SpringEvaluator.from_params(params)
    state = ev.initial_state()
    crossings = []
    for tick in range(1, 400):
        prev = state.x
        state = ev.advance(state, 0.016)
        if prev > 0.0 >= state.x:
            crossings.append(tick * 0.016)
    assert len(crossings) >= 2
    assert crossings[1] - crossings[0] == pytest.approx(period, rel=0.02)


def test_circular_period_and_extremes():
    summary = summarize(ParameterSet.defaults("circular"))
    assert summary.results["T"] == pytest.approx(5.236, abs=1e-3)
    xs = summary.series[0].values
    assert len(xs) == 121
    assert xs[0] == pytest.approx(100.0)
    assert xs[60] == pytest.approx(-100.0)


def test_collision_elastic_summary():
    summary = summarize(ParameterSet.defaults("collision"))
    assert summary.chart == "bar"
    assert summary.results["v1"] == pytest.approx(1 / 3)
    assert summary.results["v2"] == pytest.approx(13 / 3)
    assert summary.results["momentum"] == pytest.approx(5.0)
    np.testing.assert_allclose(summary.series[0].values, [3.0, 1 / 3])
    np.testing.assert_allclose(summary.series[1].values, [-1.0, 13 / 3])


def test_collision_inelastic_and_clamped_summaries():
    inelastic = summarize(ParameterSet("collision", {"e": 0.0}))
    assert inelastic.results["v1"] == pytest.approx(inelastic.results["v2"])
    assert inelastic.results["v1"] == pytest.approx(5.0 / 3.0)
    low = summarize(ParameterSet("collision", {"e": -0.3}))
    assert low.results == inelastic.results
    high = summarize(ParameterSet("collision", {"e": 1.5}))
    assert high.results == summarize(ParameterSet.defaults("collision")).results
    assert "e=1)" in high.problem


def test_electric_probe_series():
    summary = summarize(ParameterSet.defaults("electric"))
    assert len(summary.series[0].values) == 120
    assert summary.x_values[0] == 0.0 and summary.x_values[-1] == 1.0
    assert np.all(summary.series[0].values >= 0.0)


def test_summarize_query_parses_strings_and_defaults():
    summary = summarize_query({"sim": "projectile", "speed": "not-a-number"})
    assert summary.kind is ScenarioKind.PROJECTILE
    assert summary.results["T"] == pytest.approx(3.602, abs=0.01)
    summary = summarize_query({"sim": "spring", "k": "200", "m": "2"})
    assert summary.results["omega"] == pytest.approx(10.0)


@pytest.mark.parametrize(
    "query",
    [
        {"sim": "projectile", "g": "0"},
        {"sim": "projectile", "speed": "0", "angle": "0"},
        {"sim": "pendulum", "length": "0"},
        {"sim": "pendulum", "g": "-9.81"},
        {"sim": "spring", "m": "0"},
        {"sim": "spring", "k": "0"},
        {"sim": "circular", "angularSpeed": "0"},
        {"sim": "collision", "m1": "0", "m2": "0"},
        {"sim": "electric", "q1": "0", "q2": "0"},
    ],
)
def test_degenerate_handoff_values_give_finite_summaries(query):
    summary = summarize_query(query)
    assert all(math.isfinite(value) for value in summary.results.values())
    for series in summary.series:
        assert np.all(np.isfinite(series.values))
    if summary.chart == "line":
        assert np.all(np.isfinite(summary.x_values))

import pytest

from physlab.data.scenarios import ScenarioKind
from physlab.graph_view import main, write_chart


@pytest.mark.parametrize("kind", list(ScenarioKind))
def test_write_chart_for_every_kind(tmp_path, kind):
    path, summary = write_chart({"sim": kind.value}, tmp_path)
    assert path == tmp_path / f"{kind.value}_summary.png"
    assert path.stat().st_size > 0
    assert summary.kind is kind


def test_cli_prints_answer(tmp_path, capsys):
    code = main(["sim=collision&m1=2&m2=1&v1=3&v2=-1&e=1", "--out-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "v1' = 0.333 m/s; v2' = 4.333 m/s" in out
    assert (tmp_path / "collision_summary.png").exists()


def test_cli_rejects_unknown_scenario(tmp_path, capsys):
    assert main(["?sim=orbit", "--out-dir", str(tmp_path)]) == 2
    assert "Unknown scenario" in capsys.readouterr().out


def test_cli_handles_zero_divisor_input(tmp_path, capsys):
    assert main(["sim=circular&angularSpeed=0", "--out-dir", str(tmp_path)]) == 0
    assert "T = 2*pi/omega = 31.416 s" in capsys.readouterr().out

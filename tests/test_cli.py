import pytest

from spring_follow import main as cli
from spring_follow.core import presets
from spring_follow.core.presets import PresetManager


@pytest.fixture(autouse=True)
def isolated_presets(tmp_path, monkeypatch):
    monkeypatch.setattr(presets, "_manager", PresetManager(tmp_path))


def test_run_prints_summary(capsys):
    assert cli.main(["--motion", "orbit", "--ticks", "30", "--chain", "2"]) == 0
    out = capsys.readouterr().out
    assert "Ran 30 ticks" in out
    assert "link_1" in out


def test_run_exports(tmp_path, capsys):
    out_path = tmp_path / "run.json"
    assert cli.main(["--ticks", "5", "--seed", "1", "-o", str(out_path)]) == 0
    assert out_path.exists()


def test_list_presets(capsys):
    assert cli.main(["--list-presets"]) == 0
    out = capsys.readouterr().out
    assert "camera_lag" in out
    assert "Total:" in out


def test_preset_info(capsys):
    assert cli.main(["--preset-info", "default"]) == 0
    out = capsys.readouterr().out
    assert "Frequency: 1.0" in out
    assert "k2:" in out


def test_unknown_preset_info(capsys):
    assert cli.main(["--preset-info", "nope"]) == 1
    assert "not found" in capsys.readouterr().out


def test_invalid_tuning_reports_error(capsys):
    assert cli.main(["--frequency", "0", "--ticks", "3"]) == 1
    assert "Error:" in capsys.readouterr().out

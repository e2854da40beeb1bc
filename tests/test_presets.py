import logging

import pytest
import yaml

from spring_follow.core.presets import PresetManager, TuningPreset, BUILTIN_PRESETS
from spring_follow.core.constants import SpringTuning, InvalidTuningError


def test_builtin_presets_load(tmp_path):
    manager = PresetManager(tmp_path)
    assert manager.list_all() == sorted(BUILTIN_PRESETS)
    default = manager.get("default")
    assert default.to_tuning() == SpringTuning()


def test_missing_user_dir_is_not_created(tmp_path):
    presets_dir = tmp_path / "presets"
    PresetManager(presets_dir)
    assert not presets_dir.exists()


def test_save_and_reload(tmp_path):
    manager = PresetManager(tmp_path)
    preset = TuningPreset(name="mine", description="test", frequency=2.0,
                          damping=0.7, response=0.0, tags=["custom"])
    path = manager.save_preset(preset)

    assert path == tmp_path / "mine.yaml"
    assert yaml.safe_load(path.read_text())["frequency"] == 2.0

    reloaded = PresetManager(tmp_path).get("mine")
    assert reloaded.to_tuning() == SpringTuning(2.0, 0.7, 0.0)
    assert reloaded.tags == ["custom"]


def test_user_preset_overrides_builtin(tmp_path):
    (tmp_path / "default.yaml").write_text("frequency: 3.0\ndamping: 1.0\nresponse: 0.0\n")
    manager = PresetManager(tmp_path)
    assert manager.get("default").frequency == 3.0
    info = manager.get_preset_info("default")
    assert info["is_builtin"] and info["is_user"]


def test_multi_preset_file(tmp_path):
    (tmp_path / "pack.yaml").write_text(
        "presets:\n"
        "  one:\n    frequency: 1.5\n"
        "  two:\n    damping: 0.9\n    tags: [ui]\n"
    )
    manager = PresetManager(tmp_path)
    assert manager.get("one").frequency == 1.5
    assert manager.get("two").damping == 0.9
    assert "two" in manager.list_by_tag("UI")


def test_broken_files_are_skipped_with_warning(tmp_path, caplog):
    (tmp_path / "bad.yaml").write_text("frequency: [unclosed\n")
    (tmp_path / "zero.yaml").write_text("frequency: 0\n")
    (tmp_path / "list.yaml").write_text("- 1\n- 2\n")
    (tmp_path / "pack.yaml").write_text("presets:\n  - a\n  - b\n")

    with caplog.at_level(logging.WARNING, logger="spring_follow.core.presets"):
        manager = PresetManager(tmp_path)

    assert not manager.exists("bad")
    assert not manager.exists("zero")
    assert manager.exists("default")
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 4


def test_invalid_preset_rejected():
    with pytest.raises(InvalidTuningError):
        TuningPreset(name="x", frequency=-1.0)


def test_search_tags_and_delete(tmp_path):
    manager = PresetManager(tmp_path)
    assert "camera_lag" in manager.search("camera")
    assert "camera" in manager.list_tags()

    manager.save_preset(TuningPreset(name="temp"))
    assert manager.delete_preset("temp")
    assert not (tmp_path / "temp.yaml").exists()
    assert not manager.delete_preset("temp")
    assert not manager.delete_preset("default")


def test_preset_info_has_constants(tmp_path):
    info = PresetManager(tmp_path).get_preset_info("default")
    constants = SpringTuning().constants()
    assert info["k1"] == constants.k1
    assert info["k3"] == constants.k3
    assert PresetManager(tmp_path).get_preset_info("nope") is None

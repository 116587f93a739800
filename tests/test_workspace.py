"""Tests for the workspace bootstrapper."""
from dayz_dev_manager.constants import WorkspacePaths
from dayz_dev_manager.core.workspace import ensure_structure, list_missions


def test_ensure_structure_is_create_if_missing(tmp_path):
    paths = ensure_structure(tmp_path)
    cfg = paths[WorkspacePaths.SERVER_CFG]
    cfg.write_text("custom", encoding="utf-8")
    (tmp_path / "WorkingMods" / "MyMod").mkdir()

    ensure_structure(tmp_path)

    assert cfg.read_text(encoding="utf-8") == "custom"
    assert (tmp_path / "WorkingMods" / "MyMod").is_dir()
    assert paths[WorkspacePaths.PROFILES_DIR] == tmp_path / "Servers" / "profiles"


def test_list_missions(tmp_path):
    ensure_structure(tmp_path)
    (tmp_path / "Missions" / "dayzOffline.Enoch").mkdir()
    (tmp_path / "Missions" / "notes.txt").write_text("x")

    assert list_missions(tmp_path) == ["dayzOffline.Enoch", "example.mission"]
    assert list_missions(tmp_path / "nowhere") == []

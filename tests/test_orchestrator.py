"""Tests for the workspace facade the UI calls."""
import json
import logging

import pytest

from dayz_dev_manager.core import launcher
from dayz_dev_manager.core import orchestrator as orchestrator_module
from dayz_dev_manager.core.errors import PathNotFoundError
from dayz_dev_manager.core.orchestrator import WorkspaceOrchestrator
from dayz_dev_manager.core.server_config import read_mission_template


@pytest.fixture
def no_server(monkeypatch):
    monkeypatch.setattr(orchestrator_module, "is_dayz_server_running", lambda: False)


@pytest.fixture
def spawned(monkeypatch):
    """Records detached launches instead of spawning."""
    calls = []

    def fake_launch(executable, working_dir, args):
        calls.append((executable, working_dir, list(args)))
        return 1000 + len(calls)

    monkeypatch.setattr(launcher, "launch_detached", fake_launch)
    return calls


def saved_settings(orchestrator):
    return json.loads(orchestrator.store.settings_path.read_text(encoding="utf-8"))


def test_select_mods_saves_exact_order(orchestrator):
    orchestrator.select_mods(["@B", "A", "@B"])

    assert saved_settings(orchestrator)["extraMods"] == ["@B", "A", "@B"]
    reopened = WorkspaceOrchestrator.open(orchestrator.store)
    assert reopened.config.extra_mods == ["@B", "A", "@B"]


def test_select_mission_saves_and_patches(orchestrator, workspace, no_server):
    (workspace / "Missions" / "dayzOffline.enoch").mkdir()

    orchestrator.select_mission("dayzOffline.enoch")

    assert orchestrator.config.mission_path == "Missions/dayzOffline.enoch"
    assert saved_settings(orchestrator)["missionPath"] == "Missions/dayzOffline.enoch"
    cfg = workspace / "Servers" / "serverDZ.cfg"
    assert read_mission_template(cfg) == "dayzOffline.enoch"


def test_select_mission_warns_when_server_running(orchestrator, monkeypatch, caplog):
    monkeypatch.setattr(orchestrator_module, "is_dayz_server_running", lambda: True)

    with caplog.at_level(logging.WARNING):
        orchestrator.select_mission("example.mission")

    assert "restart" in caplog.text


def test_failed_save_is_logged_not_raised(orchestrator, tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a folder")
    orchestrator.config.settings_path = str(blocker / "settings.json")

    with caplog.at_level(logging.WARNING):
        result = orchestrator.select_mods(["@CF"])

    assert result == ["@CF"]
    assert orchestrator.config.extra_mods == ["@CF"]
    assert "Settings not saved" in caplog.text


def test_list_available_mods(orchestrator, tmp_path, workspace):
    workshop = tmp_path / "!Workshop"
    (workshop / "@CF").mkdir(parents=True)
    (workspace / "BuiltMods" / "@MyMod").mkdir()
    orchestrator.config.workshop_path = str(workshop)

    assert orchestrator.list_available_mods() == (["@CF"], ["@MyMod"])


def test_listings(orchestrator, workspace):
    (workspace / "WorkingMods" / "MyMod").mkdir()

    assert orchestrator.list_source_mods() == ["MyMod"]
    assert orchestrator.list_missions() == ["example.mission"]


def test_build_without_packager_raises(orchestrator):
    with pytest.raises(PathNotFoundError):
        orchestrator.build_mods(["MyMod"])


def test_start_without_game_folder_launches_nothing(orchestrator, spawned):
    with pytest.raises(PathNotFoundError):
        orchestrator.start()
    assert spawned == []


def test_start_launches_server_then_client(orchestrator, dayz_install, spawned, workspace):
    (workspace / "BuiltMods" / "@MyMod").mkdir()
    orchestrator.config.game_path = str(dayz_install.game)
    orchestrator.config.extra_mods = ["@MyMod"]

    result = orchestrator.start()

    assert [call[0] for call in spawned] == [result.server.executable, result.client.executable]
    assert result.resolved.built_names == ["@MyMod"]
    server_args = spawned[0][2]
    assert any(arg.startswith("-mod=") and arg.endswith("@MyMod") for arg in server_args)


def test_start_without_client(orchestrator, dayz_install, spawned):
    orchestrator.config.game_path = str(dayz_install.game)
    orchestrator.config.client_auto_launch = False

    result = orchestrator.start()

    assert result.client is None
    assert len(spawned) == 1


def test_stop_delegates_to_sweep(orchestrator, monkeypatch):
    seen = {}

    def fake_stop_all(try_elevate=True):
        seen["try_elevate"] = try_elevate
        return []

    monkeypatch.setattr(orchestrator_module, "stop_all", fake_stop_all)

    assert orchestrator.stop(try_elevate=False) == []
    assert seen == {"try_elevate": False}


def test_purge_logs_uses_profiles_folder(orchestrator, workspace):
    (workspace / "Servers" / "profiles" / "server.RPT").write_text("x")

    report = orchestrator.purge_logs()

    assert report.total == 1


def test_set_workspace_root(orchestrator, tmp_path):
    target = tmp_path / "other"

    orchestrator.set_workspace_root(target)

    assert (target / "BuiltMods").is_dir()
    assert saved_settings(orchestrator)["repoRoot"] == str(target)
    assert orchestrator.built_root == target / "BuiltMods"


def test_save_window_geometry(orchestrator):
    orchestrator.save_window_geometry(False, 10, 20, 1400, 900)

    data = saved_settings(orchestrator)
    assert data["startMaximized"] is False
    assert (data["windowX"], data["windowY"], data["windowW"], data["windowH"]) == (10, 20, 1400, 900)


def test_missing_paths_tip(orchestrator):
    assert orchestrator.missing_paths() == ["gamePath", "serverPath", "addonBuilderPath"]

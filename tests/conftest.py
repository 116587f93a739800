"""Shared fixtures: a throwaway workspace and a fake DayZ install."""
from types import SimpleNamespace

import pytest

from dayz_dev_manager.constants import EXECUTABLES
from dayz_dev_manager.core.orchestrator import WorkspaceOrchestrator
from dayz_dev_manager.core.settings_manager import ConfigStore


@pytest.fixture
def workspace(tmp_path):
    """Workspace root (not created yet)."""
    return tmp_path / "workspace"


@pytest.fixture
def store(workspace):
    return ConfigStore(workspace / "Settings" / "settings.json", base_dir=workspace)


@pytest.fixture
def orchestrator(store):
    return WorkspaceOrchestrator.open(store)


@pytest.fixture
def dayz_install(tmp_path):
    """Game folder with every client executable and a sibling DayZServer folder."""
    game = tmp_path / "Steam" / "DayZ"
    server = tmp_path / "Steam" / EXECUTABLES.SERVER_FOLDER
    game.mkdir(parents=True)
    server.mkdir(parents=True)
    for exe in (EXECUTABLES.DIAG, EXECUTABLES.CLIENT, EXECUTABLES.CLIENT_BE):
        (game / exe).write_bytes(b"")
    (server / EXECUTABLES.SERVER).write_bytes(b"")
    return SimpleNamespace(game=game, server=server)

"""
Workspace Bootstrapper
Ensures the on-disk folder skeleton exists under a workspace root.

Everything here is create-if-missing: existing folders and files are never
deleted or overwritten, so it is safe to call on every settings load.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dayz_dev_manager.constants import WorkspacePaths

logger = logging.getLogger(__name__)


DEFAULT_SERVER_CFG = f"""hostname = "DayZ Local Dev";
password = "";
passwordAdmin = "";
enableWhitelist = 0;
maxPlayers = 60;
BattlEye = 0;                    // Diag: off
verifySignatures = 0;            // Diag dev only
allowFilePatching = 1;
forceSameBuild = 1;

disableVoN = 0;
vonCodecQuality = 20;
disable3rdPerson=0;
disableCrosshair=0;
disablePersonalLight = 1;
lightingConfig = 0;

serverTime = "SystemTime";
serverTimeAcceleration = 12;
serverTimePersistent = 0;

guaranteedUpdates = 1;
loginQueueConcurrentPlayers = 5;
loginQueueMaxPlayers = 500;

instanceId = 1;
storageAutoFix = 1;
steamQueryPort = 27016;

class Missions
{{
    class DayZ
    {{
        template = "{WorkspacePaths.PLACEHOLDER_TEMPLATE}";
    }};
}};
"""

_FOLDERS = (
    WorkspacePaths.SETTINGS_DIR,
    WorkspacePaths.MISSIONS_DIR,
    WorkspacePaths.WORKING_MODS_DIR,
    WorkspacePaths.BUILT_MODS_DIR,
    WorkspacePaths.SERVERS_DIR,
    WorkspacePaths.PROFILES_DIR,
)


def ensure_structure(root: str | Path) -> dict[str, Path]:
    """
    Create the workspace skeleton under ``root`` if anything is missing.

    Creates the Settings, Missions, WorkingMods, BuiltMods, Servers and
    Servers/profiles folders, a default ``Servers/serverDZ.cfg`` with a
    placeholder mission template, and a placeholder mission folder.

    Args:
        root: Workspace root directory (created if needed)

    Returns:
        Dictionary with the ensured paths, keyed by their relative name
    """
    root_path = Path(root)
    paths: dict[str, Path] = {}

    for rel in _FOLDERS:
        folder = root_path / rel
        if not folder.is_dir():
            logger.debug("Creating workspace folder %s", folder)
        folder.mkdir(parents=True, exist_ok=True)
        paths[rel] = folder

    cfg = root_path / WorkspacePaths.SERVER_CFG
    if not cfg.exists():
        logger.info("Writing default server config: %s", cfg)
        cfg.write_text(DEFAULT_SERVER_CFG, encoding="utf-8")
    paths[WorkspacePaths.SERVER_CFG] = cfg

    mission = root_path / WorkspacePaths.EXAMPLE_MISSION
    mission.mkdir(parents=True, exist_ok=True)
    paths[WorkspacePaths.EXAMPLE_MISSION] = mission

    return paths


def list_missions(root: str | Path) -> list[str]:
    """Mission folder names under <root>/Missions, sorted case-insensitively."""
    missions_root = Path(root) / WorkspacePaths.MISSIONS_DIR
    if not missions_root.is_dir():
        return []
    return sorted((p.name for p in missions_root.iterdir() if p.is_dir()), key=str.lower)

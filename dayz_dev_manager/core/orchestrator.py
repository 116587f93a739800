"""
Workspace Orchestrator
The single entry point the UI calls for every action.

It owns one WorkspaceConfig for the session. Saving settings is a side
effect of the interactive actions and a failed save is only logged: the
in-memory config stays authoritative until the next successful save.
Everything else propagates as a typed error for the caller to display.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dayz_dev_manager.constants import WorkspacePaths
from dayz_dev_manager.core.build_pipeline import BuildResult, LineCallback, build_selected, list_source_mods
from dayz_dev_manager.core.errors import BuildError, ConfigError
from dayz_dev_manager.core.launcher import (
    LaunchPlan,
    build_client_plan,
    build_server_plan,
    launch_client,
    launch_server,
)
from dayz_dev_manager.core.maintenance import PurgeReport, purge_logs
from dayz_dev_manager.core.mod_resolver import ResolvedLoadOrder, resolve_load_order, scan_mod_folders
from dayz_dev_manager.core.process_utils import ProcessDescriptor, is_dayz_server_running, stop_all
from dayz_dev_manager.core.server_config import set_mission_template
from dayz_dev_manager.core.settings_manager import ConfigStore, WorkspaceConfig
from dayz_dev_manager.core.workspace import list_missions

logger = logging.getLogger(__name__)


@dataclass
class StartResult:
    """What :meth:`WorkspaceOrchestrator.start` launched."""
    resolved: ResolvedLoadOrder
    server: LaunchPlan
    client: Optional[LaunchPlan] = None


class WorkspaceOrchestrator:
    """
    Facade over the orchestration core for one workspace.

    Usage:
        orchestrator = WorkspaceOrchestrator.open(ConfigStore())
        orchestrator.select_mods(["@CF", "@MyMod"])
        orchestrator.select_mission("dayzOffline.chernarusplus")
        orchestrator.start()
    """

    def __init__(self, store: ConfigStore, config: WorkspaceConfig):
        self.store = store
        self.config = config

    @classmethod
    def open(cls, store: ConfigStore) -> "WorkspaceOrchestrator":
        """Load settings and bootstrap the workspace. ConfigError propagates."""
        return cls(store, store.load())

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        return Path(self.config.repo_root)

    @property
    def source_root(self) -> Path:
        return self.root / WorkspacePaths.WORKING_MODS_DIR

    @property
    def built_root(self) -> Path:
        return self.root / WorkspacePaths.BUILT_MODS_DIR

    @property
    def workshop_root(self) -> str:
        return self.config.resolve(self.config.workshop_path)

    def missing_paths(self, include_optional: bool = True) -> List[str]:
        return ConfigStore.missing_critical_paths(self.config, include_optional)

    def save(self) -> bool:
        """Persist settings; failures are logged, never raised."""
        try:
            self.store.save(self.config)
            return True
        except ConfigError as e:
            logger.warning("Settings not saved: %s", e)
            return False

    # ------------------------------------------------------------------
    # Listings for the pickers
    # ------------------------------------------------------------------

    def list_source_mods(self) -> List[str]:
        return list_source_mods(self.source_root)

    def list_available_mods(self) -> Tuple[List[str], List[str]]:
        """(workshop mods, built mods) available for the load order."""
        return scan_mod_folders(self.workshop_root), scan_mod_folders(self.built_root)

    def list_missions(self) -> List[str]:
        return list_missions(self.root)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def build_mods(
        self,
        selected: Iterable[str],
        on_output: Optional[LineCallback] = None,
        on_error: Optional[LineCallback] = None,
    ) -> List[BuildResult]:
        """
        Pack the selected source mods.

        Raises:
            PathNotFoundError: AddonBuilder is missing.
            BuildError: the BuiltMods folder cannot be created.
        """
        try:
            self.built_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildError(f"Could not create output folder: {e}", str(self.built_root)) from e
        return build_selected(
            selected,
            self.source_root,
            self.built_root,
            self.config.resolve(self.config.addon_builder_path),
            on_output=on_output,
            on_error=on_error,
        )

    def select_mods(self, names: Iterable[str]) -> List[str]:
        """Store the load order exactly as given and save."""
        self.config.extra_mods = list(names)
        self.save()
        logger.info("Saved %d selected mod(s).", len(self.config.extra_mods))
        return self.config.extra_mods

    def select_mission(self, mission_name: str) -> None:
        """
        Make ``mission_name`` (a folder under Missions) the active mission.

        Raises:
            PatchError: serverDZ.cfg could not be updated.
        """
        self.config.mission_path = f"{WorkspacePaths.MISSIONS_DIR}/{mission_name}"
        self.save()
        logger.info("MissionPath = %s", self.config.mission_path)

        set_mission_template(self.config.resolve(self.config.server_config_path), mission_name)
        if is_dayz_server_running():
            logger.warning("A DayZ server is running; the new mission applies after a restart.")

    def resolve_mods(self) -> ResolvedLoadOrder:
        return resolve_load_order(self.config.extra_mods, self.workshop_root, self.built_root)

    def start(self) -> StartResult:
        """
        Start the server and, when enabled, the client.

        Raises:
            PathNotFoundError, LaunchError: nothing was started (server) or
                the client failed after the server was already up.
        """
        resolved = self.resolve_mods()
        server_plan = build_server_plan(self.config, resolved)

        if resolved.workshop_names:
            logger.info("Workshop Mods: %s", " ".join(resolved.workshop_names))
        if resolved.built_names:
            logger.info("Your Built Mods: %s", " ".join(resolved.built_names))

        launch_server(server_plan)
        result = StartResult(resolved=resolved, server=server_plan)

        client_plan = build_client_plan(self.config, resolved)
        if client_plan is not None:
            launch_client(client_plan)
            result.client = client_plan
        return result

    def stop(self, try_elevate: bool = True) -> List[ProcessDescriptor]:
        """Stop server and client processes; returns the survivors."""
        return stop_all(try_elevate=try_elevate)

    def purge_logs(self) -> PurgeReport:
        return purge_logs(self.config.resolve(self.config.profiles_dir))

    def set_workspace_root(self, root: str | os.PathLike) -> None:
        """Switch workspace, bootstrap it and save. ConfigError if it cannot be created."""
        self.store.set_workspace_root(self.config, str(root))
        self.save()

    def save_window_geometry(self, maximized: bool, x: int, y: int, w: int, h: int) -> None:
        self.config.start_maximized = maximized
        self.config.window_x, self.config.window_y = x, y
        self.config.window_w, self.config.window_h = w, h
        self.save()

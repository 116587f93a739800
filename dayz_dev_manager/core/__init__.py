# Core orchestration modules (Qt-free; the Qt worker lives in core.build_worker)

from dayz_dev_manager.core.errors import (
    ManagerError,
    ConfigError,
    PathNotFoundError,
    LaunchError,
    BuildError,
    PatchError,
)
from dayz_dev_manager.core.settings_manager import ConfigStore, WorkspaceConfig, resolve_path
from dayz_dev_manager.core.workspace import ensure_structure, list_missions
from dayz_dev_manager.core.server_config import set_mission_template, read_mission_template
from dayz_dev_manager.core.mod_resolver import (
    ModOrigin,
    ModReference,
    ResolvedLoadOrder,
    resolve_load_order,
    scan_mod_folders,
)
from dayz_dev_manager.core.build_pipeline import BuildTask, BuildResult, build_selected, list_source_mods
from dayz_dev_manager.core.process_utils import ProcessDescriptor, launch_detached, stop_all, sweep_processes
from dayz_dev_manager.core.launcher import LaunchPlan, build_server_plan, build_client_plan
from dayz_dev_manager.core.maintenance import PurgeReport, purge_logs
from dayz_dev_manager.core.orchestrator import WorkspaceOrchestrator, StartResult

__all__ = [
    "ManagerError",
    "ConfigError",
    "PathNotFoundError",
    "LaunchError",
    "BuildError",
    "PatchError",
    "ConfigStore",
    "WorkspaceConfig",
    "resolve_path",
    "ensure_structure",
    "list_missions",
    "set_mission_template",
    "read_mission_template",
    "ModOrigin",
    "ModReference",
    "ResolvedLoadOrder",
    "resolve_load_order",
    "scan_mod_folders",
    "BuildTask",
    "BuildResult",
    "build_selected",
    "list_source_mods",
    "ProcessDescriptor",
    "launch_detached",
    "stop_all",
    "sweep_processes",
    "LaunchPlan",
    "build_server_plan",
    "build_client_plan",
    "PurgeReport",
    "purge_logs",
    "WorkspaceOrchestrator",
    "StartResult",
]

"""
Launcher
Builds the server and client command lines and starts them detached.

Path-bearing flags are single argv items (``-config=<path>``); the platform's
command-line quoting then wraps each whole flag in quotes when it contains
spaces, e.g. ``"-config=C:\\My Server\\serverDZ.cfg"``.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from dayz_dev_manager.constants import (
    CLIENT_FLAGS,
    EXECUTABLES,
    LAUNCHER_DEFAULTS,
    SERVER_LOG_FLAGS,
)
from dayz_dev_manager.core.errors import LaunchError, PathNotFoundError
from dayz_dev_manager.core.mod_resolver import ResolvedLoadOrder, mod_argument
from dayz_dev_manager.core.process_utils import launch_detached
from dayz_dev_manager.core.settings_manager import WorkspaceConfig

logger = logging.getLogger(__name__)


class LaunchRole(str, Enum):
    SERVER = "server"
    CLIENT = "client"


@dataclass
class LaunchPlan:
    """Everything needed to start one process."""
    role: LaunchRole
    executable: str
    working_dir: str
    args: List[str] = field(default_factory=list)
    label: str = ""

    def command_line(self) -> str:
        return format_command_line(self)


def format_command_line(plan: LaunchPlan) -> str:
    """Render a plan as one command line, quoted the way Windows expects."""
    return subprocess.list2cmdline([plan.executable, *plan.args])


def resolve_game_dir(config: WorkspaceConfig) -> str:
    """
    The DayZ game folder.

    Raises:
        PathNotFoundError: gamePath is unset or not a folder.
    """
    game = config.resolve(config.game_path)
    if not game or not os.path.isdir(game):
        raise PathNotFoundError("DayZ game folder (gamePath) not set or invalid in settings", game or None)
    return game


def resolve_server_dir(config: WorkspaceConfig, game_dir: str) -> str:
    """
    The DayZ server folder, guessed as ``DayZServer`` next to the game folder
    when serverPath is unset or missing.

    Returns:
        The folder, or ``""`` if it could not be found
    """
    server = config.resolve(config.server_path)
    if server and os.path.isdir(server):
        return server

    guess = os.path.join(os.path.dirname(os.path.normpath(game_dir)), EXECUTABLES.SERVER_FOLDER)
    if os.path.isdir(guess):
        logger.info("serverPath not set; using %s", guess)
        return guess
    return ""


def build_server_plan(config: WorkspaceConfig, resolved: ResolvedLoadOrder) -> LaunchPlan:
    """
    Server launch plan.

    Diagnostics mode runs ``DayZDiag_x64.exe -server`` from the game folder;
    otherwise ``DayZServer_x64.exe`` runs from the server folder.

    Raises:
        PathNotFoundError: game or server folder missing.
        LaunchError: the selected server executable is missing.
    """
    game = resolve_game_dir(config)

    if config.run_server_in_diag:
        executable = os.path.join(game, EXECUTABLES.DIAG)
        working_dir = game
        label = f"{EXECUTABLES.DIAG} (in Game folder)"
    else:
        server = resolve_server_dir(config, game)
        if not server:
            raise PathNotFoundError(
                "DayZ server folder (serverPath) not set and could not be guessed",
                config.resolve(config.server_path) or None,
            )
        executable = os.path.join(server, EXECUTABLES.SERVER)
        working_dir = server
        label = f"{EXECUTABLES.SERVER} (in Server folder)"

    if not os.path.isfile(executable):
        raise LaunchError(f"{label} not found.", executable)

    profiles = config.resolve(config.profiles_dir)
    if profiles:
        os.makedirs(profiles, exist_ok=True)

    args = ["-server"] if config.run_server_in_diag else []
    args += [
        f"-config={config.resolve(config.server_config_path)}",
        f"-profiles={profiles}",
        f"-mission={config.resolve(config.mission_path)}",
        *mod_argument(resolved.composite_arg),
        *SERVER_LOG_FLAGS,
    ]
    return LaunchPlan(LaunchRole.SERVER, executable, working_dir, args, label)


def build_client_plan(config: WorkspaceConfig, resolved: ResolvedLoadOrder) -> Optional[LaunchPlan]:
    """
    Client launch plan, or None when auto-launch is off or no client exists.

    Picks the diagnostics client when requested and present, else the
    BattlEye front end if present, else the plain x64 client. The BattlEye
    front end manages its own launcher, so it never gets ``-nolauncher``.
    """
    if not config.client_auto_launch:
        return None

    game = resolve_game_dir(config)
    diag_exe = os.path.join(game, EXECUTABLES.DIAG)
    be_exe = os.path.join(game, EXECUTABLES.CLIENT_BE)
    x64_exe = os.path.join(game, EXECUTABLES.CLIENT)

    use_diag = config.use_diag_client and os.path.isfile(diag_exe)
    if config.use_diag_client and not use_diag:
        logger.warning("%s not found; falling back to the regular client.", EXECUTABLES.DIAG)

    if use_diag:
        executable = diag_exe
    else:
        executable = be_exe if os.path.isfile(be_exe) else x64_exe

    if not os.path.isfile(executable):
        logger.warning("Client not found, skipping auto-launch.")
        return None

    is_battleye = os.path.basename(executable).lower() == EXECUTABLES.CLIENT_BE.lower()
    if use_diag:
        label = f"client ({EXECUTABLES.DIAG})"
    elif is_battleye:
        label = f"client with BattlEye ({EXECUTABLES.CLIENT_BE})"
    else:
        label = f"client ({EXECUTABLES.CLIENT})"

    client_profiles = os.path.join(config.resolve(config.profiles_dir), LAUNCHER_DEFAULTS.CLIENT_PROFILE_SUBDIR)
    os.makedirs(client_profiles, exist_ok=True)

    args = [
        f"-profiles={client_profiles}",
        *mod_argument(resolved.composite_arg),
        *CLIENT_FLAGS,
        f"-connect={LAUNCHER_DEFAULTS.CONNECT_HOST}",
        f"-port={LAUNCHER_DEFAULTS.PORT}",
    ]
    if not is_battleye:
        args.append("-nolauncher")

    return LaunchPlan(LaunchRole.CLIENT, executable, game, args, label)


def launch_server(plan: LaunchPlan) -> int:
    """Start the server detached. Raises LaunchError."""
    logger.info("Starting server...")
    logger.info("  EXE: %s", plan.executable)
    logger.debug("  CMD: %s", plan.command_line())
    return launch_detached(plan.executable, plan.working_dir, plan.args)


def launch_client(plan: LaunchPlan) -> int:
    """Start the client detached. Raises LaunchError."""
    logger.info("Launching %s ...", plan.label)
    logger.debug("  CMD: %s", plan.command_line())
    return launch_detached(plan.executable, plan.working_dir, plan.args)

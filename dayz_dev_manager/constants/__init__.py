"""
Constants Package
Centralized constants for the DayZ Dev Manager application.
"""

from dayz_dev_manager.constants.app import (
    APP_DEFAULTS,
    AppDefaults,
    WorkspacePaths,
    LOG_PURGE_PATTERNS,
)
from dayz_dev_manager.constants.launcher import (
    EXECUTABLES,
    Executables,
    KNOWN_PROCESS_NAMES,
    KNOWN_EXECUTABLE_NAMES,
    STOP_ELEVATED_FLAG,
    TERMINATE_WAIT_SECONDS,
    LAUNCHER_DEFAULTS,
    LauncherDefaults,
    SERVER_LOG_FLAGS,
    CLIENT_FLAGS,
    PACKAGER_FLAGS,
)

__all__ = [
    # App
    "APP_DEFAULTS",
    "AppDefaults",
    "WorkspacePaths",
    "LOG_PURGE_PATTERNS",
    # Launcher
    "EXECUTABLES",
    "Executables",
    "KNOWN_PROCESS_NAMES",
    "KNOWN_EXECUTABLE_NAMES",
    "STOP_ELEVATED_FLAG",
    "TERMINATE_WAIT_SECONDS",
    "LAUNCHER_DEFAULTS",
    "LauncherDefaults",
    "SERVER_LOG_FLAGS",
    "CLIENT_FLAGS",
    "PACKAGER_FLAGS",
]

"""
Application Constants
Core application metadata and fixed workspace layout.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppDefaults:
    """Default application values."""

    # App metadata
    APP_NAME: str = "DayZ Dev Manager"
    ORGANIZATION: str = "DayzDevManager"
    VERSION: str = "1.0.0"

    # Window
    WINDOW_WIDTH: int = 1280
    WINDOW_HEIGHT: int = 800
    MIN_WIDTH: int = 1100
    MIN_HEIGHT: int = 720

    # File names
    SETTINGS_DIR: str = "Settings"
    SETTINGS_FILE: str = "settings.json"


APP_DEFAULTS = AppDefaults()


# ============================================================================
# WORKSPACE LAYOUT (relative to the workspace root)
# ============================================================================

class WorkspacePaths:
    """Standard folders relative to the workspace root."""

    SETTINGS_DIR = "Settings"
    MISSIONS_DIR = "Missions"
    WORKING_MODS_DIR = "WorkingMods"
    BUILT_MODS_DIR = "BuiltMods"
    SERVERS_DIR = "Servers"
    PROFILES_DIR = "Servers/profiles"

    # Default files
    SERVER_CFG = "Servers/serverDZ.cfg"
    EXAMPLE_MISSION = "Missions/example.mission"

    # Placeholder mission written into a fresh serverDZ.cfg
    PLACEHOLDER_TEMPLATE = "empty.alteria"


# Log files removed by "purge logs" (server/client profiles)
LOG_PURGE_PATTERNS: tuple[str, ...] = ("*.log", "*.RPT", "*.mdmp", "*.adm")

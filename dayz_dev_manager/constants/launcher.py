"""
Launcher constants: executables, process names and fixed command-line flags.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Executables:
    """DayZ executable names."""

    SERVER: str = "DayZServer_x64.exe"    # in the server folder
    DIAG: str = "DayZDiag_x64.exe"        # in the game folder, server or client
    CLIENT: str = "DayZ_x64.exe"
    CLIENT_BE: str = "DayZ_BE.exe"        # BattlEye front end

    # Default server folder name, used to guess it next to the game folder
    SERVER_FOLDER: str = "DayZServer"


EXECUTABLES = Executables()


# Base names used for the first termination pass (no extension)
KNOWN_PROCESS_NAMES: tuple[str, ...] = (
    "DayZServer_x64",
    "DayZ_x64",
    "DayZDiag_x64",
    "DayZ_BE",
)

# Full image names used for the second, system-wide pass
KNOWN_EXECUTABLE_NAMES: tuple[str, ...] = (
    EXECUTABLES.SERVER,
    EXECUTABLES.CLIENT,
    EXECUTABLES.DIAG,
    EXECUTABLES.CLIENT_BE,
)

# Marker argument for the elevated "sweep and exit" mode
STOP_ELEVATED_FLAG = "--stop-elevated"

# Wait per process after a terminate/kill request (seconds)
TERMINATE_WAIT_SECONDS = 0.25


@dataclass(frozen=True)
class LauncherDefaults:
    """Fixed launch parameters."""

    CONNECT_HOST: str = "127.0.0.1"
    PORT: int = 2302
    CLIENT_PROFILE_SUBDIR: str = "client"


LAUNCHER_DEFAULTS = LauncherDefaults()

SERVER_LOG_FLAGS: tuple[str, ...] = ("-doLogs", "-adminLog", "-netLog", "-freezeChecker")
CLIENT_FLAGS: tuple[str, ...] = ("-filePatching", "-noPause", "-noSplash", "-skipIntro")

# AddonBuilder flags: wipe the destination, pack without validation dialogs
PACKAGER_FLAGS: tuple[str, ...] = ("-clear", "-packonly")

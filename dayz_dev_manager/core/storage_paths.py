"""
Storage Paths
Locates the program's base directory and the settings file beside it.
Supports different layouts for source checkouts vs frozen executables.
"""

import sys
from pathlib import Path

from dayz_dev_manager.constants import APP_DEFAULTS


def is_frozen() -> bool:
    """Check if running as compiled executable (PyInstaller)."""
    return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def get_base_path() -> Path:
    """
    Get the base path for the application.

    - If frozen (built executable): Returns the directory containing the exe
    - If running as script: Returns the project root directory
    """
    if is_frozen():
        return Path(sys.executable).parent
    return Path(__file__).resolve().parent.parent.parent


def get_settings_file_path(base: Path | None = None) -> Path:
    """
    Get the path for the settings.json file: <base>/Settings/settings.json.

    Returns:
        Path to settings.json
    """
    root = base if base is not None else get_base_path()
    return root / APP_DEFAULTS.SETTINGS_DIR / APP_DEFAULTS.SETTINGS_FILE


def get_self_command() -> list[str]:
    """Return the argv prefix that restarts this program.

    Frozen builds restart the executable itself; source checkouts run
    ``main.py`` through the current interpreter.
    """
    if is_frozen():
        return [sys.executable]
    return [sys.executable, str(get_base_path() / "main.py")]

"""
Settings Manager
Workspace settings persistence with JSON storage beside the program.

The settings document is read leniently (``//`` and ``/* */`` comments,
trailing commas) and written back canonically. All relative paths in it
resolve against the workspace root, never against the current directory.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from dayz_dev_manager.constants import WorkspacePaths
from dayz_dev_manager.core.errors import ConfigError
from dayz_dev_manager.core.storage_paths import get_base_path, get_settings_file_path
from dayz_dev_manager.core.workspace import ensure_structure

logger = logging.getLogger(__name__)


def _key(name: str, persist: bool = True) -> Dict[str, Any]:
    return {"key": name, "persist": persist}


@dataclass
class WorkspaceConfig:
    """Workspace settings document (camelCase keys on disk)."""
    # Workspace
    repo_root: str = field(default="", metadata=_key("repoRoot"))

    # Tool and game locations
    game_path: str = field(default="", metadata=_key("gamePath"))
    server_path: str = field(default="", metadata=_key("serverPath"))
    addon_builder_path: str = field(default="", metadata=_key("addonBuilderPath"))
    workshop_path: str = field(default="", metadata=_key("workshopPath"))

    # Server files, relative to repo_root unless rooted
    profiles_dir: str = field(default=WorkspacePaths.PROFILES_DIR, metadata=_key("profilesDir"))
    server_config_path: str = field(default=WorkspacePaths.SERVER_CFG, metadata=_key("serverConfigPath"))
    mission_path: str = field(default=WorkspacePaths.EXAMPLE_MISSION, metadata=_key("missionPath"))

    # Selected mods, in load order
    extra_mods: List[str] = field(default_factory=list, metadata=_key("extraMods"))

    # Launch behavior
    client_auto_launch: bool = field(default=True, metadata=_key("clientAutoLaunch"))
    use_diag_client: bool = field(default=False, metadata=_key("useDiagClient"))
    run_server_in_diag: bool = field(default=False, metadata=_key("runServerInDiag"))

    # Window state (owned by the shell)
    start_maximized: bool = field(default=True, metadata=_key("startMaximized"))
    window_x: int = field(default=-1, metadata=_key("windowX"))
    window_y: int = field(default=-1, metadata=_key("windowY"))
    window_w: int = field(default=1280, metadata=_key("windowW"))
    window_h: int = field(default=800, metadata=_key("windowH"))

    # Not persisted
    settings_path: str = field(default="", metadata=_key("settingsPath", persist=False))
    extra: Dict[str, Any] = field(default_factory=dict, metadata=_key("", persist=False))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkspaceConfig":
        """Create a config from a parsed settings document.

        Values of the wrong type fall back to the field default; unknown
        keys are kept in ``extra`` so they survive a save.
        """
        config = cls()
        known = set()
        for f in _persisted_fields():
            key = f.metadata["key"]
            known.add(key)
            if key not in data:
                continue
            value = _coerce(data[key], getattr(config, f.name))
            if value is None:
                logger.warning("Ignoring settings value for '%s': unexpected type %s",
                               key, type(data[key]).__name__)
                continue
            setattr(config, f.name, value)

        config.extra = {k: v for k, v in data.items() if k not in known}
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk dictionary."""
        data = {f.metadata["key"]: _copy_value(getattr(self, f.name)) for f in _persisted_fields()}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def resolve(self, path_or_rel: str) -> str:
        """Shortcut for :func:`resolve_path` against this workspace."""
        return resolve_path(self.repo_root, path_or_rel)


def _persisted_fields():
    return [f for f in fields(WorkspaceConfig) if f.metadata.get("persist", True)]


def _copy_value(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value


def _coerce(value: Any, default: Any) -> Any:
    """Return ``value`` converted to the type of ``default``, or None."""
    if isinstance(default, bool):
        return value if isinstance(value, bool) else None
    if isinstance(default, int):
        return value if isinstance(value, int) and not isinstance(value, bool) else None
    if isinstance(default, list):
        if value is None:
            return []
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return list(value)
        return None
    if isinstance(default, str):
        if value is None:
            return ""
        return value if isinstance(value, str) else None
    return value


# ============================================================================
# Lenient JSON
# ============================================================================

_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENTS = re.compile(rf'({_STRING})|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMAS = re.compile(rf'({_STRING})|,(\s*[}}\]])')


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas.

    Raises:
        ValueError: if the remaining text is not valid JSON.
    """
    text = _COMMENTS.sub(lambda m: m.group(1) if m.group(1) is not None else "", text)
    text = _TRAILING_COMMAS.sub(lambda m: m.group(1) if m.group(1) is not None else m.group(2), text)
    return json.loads(text)


# ============================================================================
# Path helpers
# ============================================================================

def resolve_path(repo_root: str, path_or_rel: str) -> str:
    """
    Resolve a settings path against the workspace root.

    Empty input yields ``""``; rooted input is returned unchanged; relative
    input is joined with ``repo_root`` and normalized. No I/O.
    """
    if not path_or_rel or not path_or_rel.strip():
        return ""
    if os.path.isabs(path_or_rel):
        return path_or_rel
    base = repo_root if repo_root and repo_root.strip() else str(get_base_path())
    return os.path.normpath(os.path.join(base, path_or_rel))


class ConfigStore:
    """
    Loads, creates and persists the workspace settings document.

    Usage:
        store = ConfigStore()
        config = store.load()
        config.extra_mods = ["@CF", "@MyMod"]
        store.save(config)
    """

    def __init__(self, settings_path: Optional[str | Path] = None, base_dir: Optional[str | Path] = None):
        """
        Initialize ConfigStore.

        Args:
            settings_path: Settings JSON file (default: <base>/Settings/settings.json)
            base_dir: Program base directory, the default workspace root
        """
        self._base_dir = Path(base_dir) if base_dir else get_base_path()
        if settings_path:
            self._settings_path = Path(settings_path)
        else:
            self._settings_path = get_settings_file_path(self._base_dir)

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def load(self) -> WorkspaceConfig:
        """
        Load the settings document, creating a default one if absent.

        The effective workspace root (``repoRoot`` or the program base
        directory) is bootstrapped and stamped onto the returned config.

        Raises:
            ConfigError: the file exists but cannot be read or parsed, or
                the workspace skeleton cannot be created.
        """
        self._ensure_default_settings()

        try:
            text = self._settings_path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise ConfigError(f"Could not read settings: {e}", str(self._settings_path)) from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"Settings file is not valid UTF-8: {e}", str(self._settings_path)) from e

        try:
            data = parse_jsonc(text) if text.strip() else {}
        except ValueError as e:
            raise ConfigError(f"Settings file is not valid JSON: {e}", str(self._settings_path)) from e
        if not isinstance(data, dict):
            raise ConfigError("Settings file must contain a JSON object", str(self._settings_path))

        config = WorkspaceConfig.from_dict(data)
        root = config.repo_root.strip() or str(self._base_dir)

        try:
            ensure_structure(root)
        except OSError as e:
            raise ConfigError(f"Could not prepare workspace folder: {e}", root) from e

        config.repo_root = root
        config.settings_path = str(self._settings_path)
        logger.info("Loaded settings: %s", self._settings_path)
        return config

    def save(self, config: WorkspaceConfig) -> None:
        """
        Overwrite the settings file captured during :meth:`load`.

        Raises:
            ConfigError: no prior load stamped a path, or the write failed.
        """
        if not config.settings_path:
            raise ConfigError("Settings path not set. Call ConfigStore.load() first.")

        path = Path(config.settings_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise ConfigError(f"Could not save settings: {e}", str(path)) from e

    def set_workspace_root(self, config: WorkspaceConfig, root: str | Path) -> None:
        """Point the config at a new workspace root and bootstrap it."""
        root_str = str(root)
        try:
            ensure_structure(root_str)
        except OSError as e:
            raise ConfigError(f"Could not prepare workspace folder: {e}", root_str) from e
        config.repo_root = root_str
        logger.info("Workspace set to: %s", root_str)

    @staticmethod
    def resolve(config: WorkspaceConfig, path_or_rel: str) -> str:
        """Resolve ``path_or_rel`` against the config's workspace root."""
        return resolve_path(config.repo_root, path_or_rel)

    @staticmethod
    def missing_critical_paths(config: WorkspaceConfig, include_optional: bool = False) -> List[str]:
        """
        Names of settings whose paths are unset or do not exist.

        Advisory only; no operation is blocked by this list.
        """
        missing = []
        game = config.resolve(config.game_path)
        server = config.resolve(config.server_path)
        builder = config.resolve(config.addon_builder_path)

        if not game or not os.path.isdir(game):
            missing.append("gamePath")
        if not server or not os.path.isdir(server):
            missing.append("serverPath")
        if not builder or not os.path.isfile(builder):
            missing.append("addonBuilderPath")

        if include_optional:
            workshop = config.resolve(config.workshop_path)
            if workshop and not os.path.isdir(workshop):
                missing.append("workshopPath")

        return missing

    def _ensure_default_settings(self) -> None:
        if self._settings_path.exists():
            return
        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)
            self._settings_path.write_text(
                json.dumps(WorkspaceConfig().to_dict(), indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigError(f"Could not create default settings: {e}", str(self._settings_path)) from e
        logger.info("Created default settings: %s", self._settings_path)

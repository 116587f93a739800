"""
Error Types
Typed failures raised by the orchestration core.
"""

from __future__ import annotations

from typing import Optional


class ManagerError(Exception):
    """Base class for all errors raised by the core."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path and self.path not in self.message:
            return f"{self.message}\nTried: {self.path}"
        return self.message


class ConfigError(ManagerError):
    """Settings file unreadable, unparseable or unwritable."""


class PathNotFoundError(ManagerError):
    """A required tool or folder is missing."""


class LaunchError(ManagerError):
    """An executable is missing or could not be spawned."""


class BuildError(ManagerError):
    """Packing a single mod failed. Never aborts the batch."""

    def __init__(self, message: str, path: Optional[str] = None, exit_code: Optional[int] = None):
        super().__init__(message, path)
        self.exit_code = exit_code


class PatchError(ManagerError):
    """The server configuration file could not be read or written."""

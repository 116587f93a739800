"""Process helpers: detached launches, the stop sweep and privilege elevation.

The stop sweep is best effort. Processes are re-enumerated on every call and
only observed and signaled; anything that resists termination is reported
back as a survivor rather than retried.
"""

from __future__ import annotations

import ctypes
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import psutil

from dayz_dev_manager.constants import (
    EXECUTABLES,
    KNOWN_EXECUTABLE_NAMES,
    KNOWN_PROCESS_NAMES,
    STOP_ELEVATED_FLAG,
    TERMINATE_WAIT_SECONDS,
)
from dayz_dev_manager.core.errors import LaunchError
from dayz_dev_manager.core.storage_paths import get_self_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessDescriptor:
    """A process that resisted termination."""
    name: str
    pid: int

    def __str__(self) -> str:
        return f"{self.name} (PID {self.pid})"


# ============================================================================
# Launch
# ============================================================================

def launch_detached(executable: str | Path, working_dir: str | Path | None, args: Sequence[str]) -> int:
    """
    Start a process the caller does not wait on or own.

    Existence is checked up front so a missing binary is reported with the
    attempted path instead of an OS spawn error.

    Returns:
        The child's process id

    Raises:
        LaunchError: the executable or working folder is missing, or the
            spawn itself failed.
    """
    exe = str(executable)
    if not exe or not os.path.isfile(exe):
        raise LaunchError(f"Executable not found: {exe}", exe)
    if working_dir and not os.path.isdir(str(working_dir)):
        raise LaunchError(f"Working folder not found: {working_dir}", str(working_dir))

    kwargs = {}
    if sys.platform == "win32":
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    try:
        proc = subprocess.Popen(
            [exe, *args],
            cwd=str(working_dir) if working_dir else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            **kwargs,
        )
    except OSError as e:
        raise LaunchError(f"Could not start {Path(exe).name}: {e}", exe) from e

    logger.debug("Spawned %s (PID %s)", exe, proc.pid)
    return proc.pid


# ============================================================================
# Detection
# ============================================================================

def _base_name(name: str) -> str:
    return name[:-4] if name.lower().endswith(".exe") else name


def _image_name(name: str) -> str:
    return name if name.lower().endswith(".exe") else name + ".exe"


def find_processes(base_name: str) -> List[psutil.Process]:
    """Running processes whose name, without ``.exe``, equals ``base_name``."""
    wanted = base_name.lower()
    found = []
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name")
        if name and _base_name(name).lower() == wanted:
            found.append(proc)
    return found


def is_process_running(process_name: str) -> bool:
    """Return True if a process with the given image name is running."""
    return bool(find_processes(_base_name(process_name)))


def is_dayz_server_running() -> bool:
    """Return True if a DayZ server process appears to be running."""
    return any(is_process_running(name) for name in (EXECUTABLES.SERVER, EXECUTABLES.DIAG))


# ============================================================================
# Termination
# ============================================================================

def _terminate(proc: psutil.Process, timeout: float) -> None:
    """Terminate, then kill if it is still alive after ``timeout``.

    Raises psutil.Error when the process cannot be signaled or outlives the
    kill as well. A process that is already gone counts as terminated.
    """
    try:
        proc.terminate()
        try:
            proc.wait(timeout=timeout)
        except psutil.TimeoutExpired:
            proc.kill()
            proc.wait(timeout=timeout)
    except psutil.NoSuchProcess:
        pass


def sweep_processes(
    names: Iterable[str] = KNOWN_PROCESS_NAMES,
    executable_names: Iterable[str] = KNOWN_EXECUTABLE_NAMES,
    timeout: float = TERMINATE_WAIT_SECONDS,
) -> List[ProcessDescriptor]:
    """
    Terminate every known server/client process.

    First pass: each base name, errors ignored. Second pass: all processes
    system-wide matched by full image name, catching anything the first pass
    missed; failures there are returned as survivors.
    """
    for name in names:
        for proc in find_processes(name):
            try:
                _terminate(proc, timeout)
                logger.debug("Stopped %s (PID %s)", name, proc.pid)
            except psutil.Error as e:
                logger.debug("First pass could not stop %s (PID %s): %s", name, proc.pid, e)

    wanted = {n.lower() for n in executable_names}
    survivors: List[ProcessDescriptor] = []
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name")
        if not name:
            continue
        image = _image_name(name)
        if image.lower() not in wanted:
            continue
        try:
            _terminate(proc, timeout)
        except psutil.Error as e:
            logger.debug("Could not stop %s (PID %s): %s", image, proc.pid, e)
            survivors.append(ProcessDescriptor(image, proc.pid))

    return survivors


def is_admin() -> bool:
    """True when the current process already holds elevated privileges."""
    if sys.platform == "win32":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return hasattr(os, "geteuid") and os.geteuid() == 0


def relaunch_elevated(marker: str = STOP_ELEVATED_FLAG) -> bool:
    """
    Restart this program elevated, passing ``marker`` as its mode flag.

    Fire and forget: the elevated child runs the sweep on its own and its
    outcome is not reported back.

    Returns:
        True if the elevation request was handed to the OS
    """
    if sys.platform != "win32":
        logger.warning("Elevated stop is only available on Windows.")
        return False

    command = get_self_command()
    params = subprocess.list2cmdline([*command[1:], marker])
    try:
        rc = ctypes.windll.shell32.ShellExecuteW(None, "runas", command[0], params, None, 1)
    except (AttributeError, OSError) as e:
        logger.warning("Elevated stop could not be requested: %s", e)
        return False

    if int(rc) <= 32:
        logger.warning("Elevated stop was not started (ShellExecute code %s).", rc)
        return False
    logger.info("Requested elevated stop for the remaining processes.")
    return True


def stop_all(
    names: Iterable[str] = KNOWN_PROCESS_NAMES,
    executable_names: Iterable[str] = KNOWN_EXECUTABLE_NAMES,
    try_elevate: bool = True,
    timeout: float = TERMINATE_WAIT_SECONDS,
) -> List[ProcessDescriptor]:
    """
    Stop all server and client processes.

    When some processes survive and this process is not elevated, an
    elevated copy of the program is started to sweep again.

    Returns:
        Survivors of this (non-elevated) attempt
    """
    survivors = sweep_processes(names, executable_names, timeout)

    if survivors:
        logger.warning("Some processes resisted termination: %s", ", ".join(map(str, survivors)))
        if try_elevate and not is_admin():
            relaunch_elevated()
    else:
        logger.info("All DayZ processes stopped.")

    return survivors

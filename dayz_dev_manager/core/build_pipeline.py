"""
Build Pipeline
Packs source mods into BuiltMods with the external packager (AddonBuilder).

Every mod is packed independently: a failing mod is recorded in its
BuildResult and the batch moves on to the next one.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from dayz_dev_manager.constants import PACKAGER_FLAGS
from dayz_dev_manager.core.errors import BuildError, PathNotFoundError
from dayz_dev_manager.core.mod_resolver import normalize_mod_name

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]


@dataclass(frozen=True)
class BuildTask:
    """One packaging request."""
    name: str           # "@MyMod"
    source_dir: Path
    output_root: Path   # BuiltMods/@MyMod

    @property
    def addons_dir(self) -> Path:
        return self.output_root / "addons"

    def packager_args(self) -> List[str]:
        return [str(self.source_dir), str(self.output_root), *PACKAGER_FLAGS]


@dataclass
class BuildResult:
    """Outcome of packing one mod."""
    name: str
    exit_code: Optional[int] = None   # None: the packager never ran
    pbo_count: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def list_source_mods(source_root: str | Path) -> List[str]:
    """Folders under the source root (WorkingMods), sorted case-insensitively."""
    root = Path(source_root)
    if not root.is_dir():
        return []
    return sorted((p.name for p in root.iterdir() if p.is_dir()), key=str.lower)


def count_pbos(addons_dir: Path) -> int:
    """Number of .pbo files anywhere under ``addons_dir``."""
    if not addons_dir.is_dir():
        return 0
    return sum(1 for p in addons_dir.rglob("*") if p.is_file() and p.suffix.lower() == ".pbo")


def _find_source(entry: str | Path, source_root: Path) -> Optional[Path]:
    """Source folder for a selected entry: a path, or a name with or without '@'."""
    entry_path = Path(entry)
    if entry_path.is_absolute() and entry_path.is_dir():
        return entry_path

    bare = entry_path.name.lstrip("@")
    for candidate in (source_root / entry_path, source_root / bare, source_root / f"@{bare}"):
        if candidate.is_dir():
            return candidate
    return None


def make_task(entry: str | Path, source_root: str | Path, output_root: str | Path) -> BuildTask:
    """
    Build the task for one selected entry.

    ``WorkingMods/MyMod`` and ``WorkingMods/@MyMod`` both pack into
    ``BuiltMods/@MyMod``.

    Raises:
        BuildError: the source folder does not exist.
    """
    name = normalize_mod_name(Path(entry).name)
    source = _find_source(entry, Path(source_root))
    if source is None:
        raise BuildError(f"Source folder not found for {name}", str(Path(source_root) / Path(entry).name))
    return BuildTask(name=name, source_dir=source, output_root=Path(output_root) / name)


def run_process(
    args: Sequence[str],
    working_dir: Optional[str | Path] = None,
    on_output: Optional[LineCallback] = None,
    on_error: Optional[LineCallback] = None,
) -> int:
    """
    Run a process to completion, streaming its output line by line.

    stdout and stderr are read on two threads; each line is handed to the
    matching callback as it arrives. Callbacks never run concurrently, but
    lines of the two streams are not globally ordered.

    Returns:
        The process exit code
    """
    creationflags = getattr(subprocess, "CREATE_NO_WINDOW", 0) if sys.platform == "win32" else 0
    proc = subprocess.Popen(
        list(args),
        cwd=str(working_dir) if working_dir else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
        creationflags=creationflags,
    )

    lock = threading.Lock()

    def pump(stream, callback: Optional[LineCallback]) -> None:
        with stream:
            for line in stream:
                if callback is None:
                    continue
                with lock:
                    callback(line.rstrip("\r\n"))

    readers = [
        threading.Thread(target=pump, args=(proc.stdout, on_output), daemon=True),
        threading.Thread(target=pump, args=(proc.stderr, on_error), daemon=True),
    ]
    for reader in readers:
        reader.start()

    exit_code = proc.wait()
    for reader in readers:
        reader.join()
    return exit_code


def pack_mod(
    task: BuildTask,
    packager_path: str | Path,
    on_output: Optional[LineCallback] = None,
    on_error: Optional[LineCallback] = None,
) -> BuildResult:
    """
    Pack a single mod.

    Raises:
        BuildError: the output folder could not be prepared or inspected,
            or the packager could not be started or exited non-zero.
    """
    packager = Path(packager_path)
    try:
        task.addons_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildError(f"Could not create output folder for {task.name}: {e}", str(task.addons_dir)) from e

    logger.info("Packing %s ...", task.name)
    try:
        exit_code = run_process(
            [str(packager), *task.packager_args()],
            working_dir=packager.parent,
            on_output=on_output,
            on_error=on_error,
        )
    except OSError as e:
        raise BuildError(f"Could not start packager for {task.name}: {e}", str(packager)) from e

    if exit_code != 0:
        raise BuildError(f"Packager exited {exit_code} for {task.name}", str(task.source_dir), exit_code)

    try:
        pbo_count = count_pbos(task.addons_dir)
    except OSError as e:
        raise BuildError(f"Could not inspect output of {task.name}: {e}", str(task.addons_dir)) from e
    if pbo_count == 0:
        message = f"No .pbo found under {task.addons_dir} after packing. Check the packager output settings."
        logger.warning(message)
    else:
        message = f"Built {pbo_count} .pbo file(s) @ {task.addons_dir}"
        logger.info(message)
    return BuildResult(name=task.name, exit_code=0, pbo_count=pbo_count, message=message)


def build_selected(
    selected: Iterable[str | Path],
    source_root: str | Path,
    output_root: str | Path,
    packager_path: str | Path,
    on_output: Optional[LineCallback] = None,
    on_error: Optional[LineCallback] = None,
) -> List[BuildResult]:
    """
    Pack every selected source mod, in order.

    Args:
        selected: Source folder names under ``source_root``, or paths
        source_root: WorkingMods folder
        output_root: BuiltMods folder
        packager_path: AddonBuilder executable
        on_output: Called with each stdout line of the packager
        on_error: Called with each stderr line of the packager

    Returns:
        One BuildResult per selected entry, in order

    Raises:
        PathNotFoundError: the packager executable does not exist.
    """
    if not packager_path or not os.path.isfile(str(packager_path)):
        raise PathNotFoundError("AddonBuilder not found", str(packager_path))

    results: List[BuildResult] = []
    for entry in selected:
        name = normalize_mod_name(Path(entry).name)
        try:
            task = make_task(entry, source_root, output_root)
            results.append(pack_mod(task, packager_path, on_output, on_error))
        except BuildError as e:
            logger.error("%s", e.message)
            results.append(BuildResult(name=name, exit_code=e.exit_code, message=e.message))

    built = sum(1 for r in results if r.ok)
    logger.info("Done. Built %d of %d mod(s).", built, len(results))
    return results

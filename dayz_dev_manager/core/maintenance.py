"""
Maintenance
Housekeeping for the server profiles folder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from dayz_dev_manager.constants import LOG_PURGE_PATTERNS

logger = logging.getLogger(__name__)


@dataclass
class PurgeReport:
    """Result of a log purge."""
    folder: str
    deleted: Dict[str, int] = field(default_factory=dict)   # pattern -> count
    failed: int = 0

    @property
    def total(self) -> int:
        return sum(self.deleted.values())

    def summary(self) -> str:
        by_type = ", ".join(f"{pattern}:{count}" for pattern, count in self.deleted.items())
        text = f"Purged logs in {self.folder} -> {self.total} files deleted ({by_type})."
        if self.failed:
            text += f" {self.failed} file(s) could not be deleted."
        return text


def purge_logs(profiles_dir: str | Path, patterns=LOG_PURGE_PATTERNS) -> PurgeReport:
    """
    Delete server/client log files under the profiles folder, recursively.

    Files that cannot be deleted are counted and skipped.

    Args:
        profiles_dir: Profiles folder (Servers/profiles)
        patterns: Glob patterns to delete

    Returns:
        PurgeReport; empty when the folder does not exist
    """
    root = Path(profiles_dir) if profiles_dir else None
    report = PurgeReport(folder=str(profiles_dir or ""))
    if root is None or not root.is_dir():
        logger.info("Profiles folder not found; nothing to purge.")
        return report

    for pattern in patterns:
        count = 0
        for path in root.rglob(pattern):
            if not path.is_file():
                continue
            try:
                path.unlink()
                count += 1
            except OSError as e:
                logger.debug("Could not delete %s: %s", path, e)
                report.failed += 1
        report.deleted[pattern] = count

    logger.info(report.summary())
    return report

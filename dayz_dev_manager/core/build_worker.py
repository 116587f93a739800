"""
Background worker for packing mods.
Keeps the UI responsive while AddonBuilder runs (tens of seconds per mod).
"""

import logging

from PySide6.QtCore import QThread, Signal

from dayz_dev_manager.core.errors import ManagerError

logger = logging.getLogger(__name__)


class BuildWorker(QThread):
    """Runs a build batch on a worker thread.

    Exactly one of ``finished`` or ``error`` is emitted per run.
    """

    output = Signal(str)        # one packager output line
    finished = Signal(object)   # list[BuildResult]
    error = Signal(str)

    def __init__(self, orchestrator, mods: list = None):
        super().__init__()
        self.orchestrator = orchestrator
        self.mods = list(mods or [])

    def run(self):
        try:
            results = self.orchestrator.build_mods(
                self.mods,
                on_output=self.output.emit,
                on_error=lambda line: self.output.emit(f"[err] {line}"),
            )
        except ManagerError as e:
            self.error.emit(str(e))
            return
        except Exception as e:
            # Last stop before the thread boundary; the UI waits on a signal
            logger.exception("Build batch failed")
            self.error.emit(f"Build failed: {e}")
            return
        self.finished.emit(results)

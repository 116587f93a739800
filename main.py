"""
DayZ Dev Manager
Main Application Entry Point
"""

import argparse
import logging
import sys
from typing import List, Optional

from dayz_dev_manager.constants import APP_DEFAULTS, STOP_ELEVATED_FLAG
from dayz_dev_manager.core.environment import setup_logging
from dayz_dev_manager.core.errors import ConfigError
from dayz_dev_manager.core.process_utils import sweep_processes

logger = logging.getLogger("dayz_dev_manager")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dayz-dev-manager", description=APP_DEFAULTS.APP_NAME)
    parser.add_argument(
        STOP_ELEVATED_FLAG,
        dest="stop_elevated",
        action="store_true",
        help="terminate all DayZ server/client processes and exit (used by the elevated relaunch)",
    )
    parser.add_argument("--settings", metavar="PATH", help="settings file (default: Settings/settings.json)")
    parser.add_argument("--log-level", metavar="LEVEL", help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def run_stop_elevated() -> int:
    """Elevated sweep mode: no window, no settings."""
    survivors = sweep_processes()
    for proc in survivors:
        logger.error("Could not stop %s", proc)
    return 1 if survivors else 0


def run_gui(settings_path: Optional[str]) -> int:
    from PySide6.QtWidgets import QApplication, QMessageBox

    from dayz_dev_manager.core.orchestrator import WorkspaceOrchestrator
    from dayz_dev_manager.core.settings_manager import ConfigStore
    from dayz_dev_manager.ui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName(APP_DEFAULTS.APP_NAME)
    app.setOrganizationName(APP_DEFAULTS.ORGANIZATION)
    app.setApplicationVersion(APP_DEFAULTS.VERSION)
    app.setStyle("Fusion")

    try:
        orchestrator = WorkspaceOrchestrator.open(ConfigStore(settings_path))
    except ConfigError as e:
        logger.error("%s", e)
        QMessageBox.critical(None, APP_DEFAULTS.APP_NAME, str(e))
        return 1

    window = MainWindow(orchestrator)
    window.show_restored()
    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    if args.stop_elevated:
        return run_stop_elevated()
    return run_gui(args.settings)


if __name__ == "__main__":
    sys.exit(main())

"""
Main Window
One-screen control panel: build, select, start, stop and tidy a workspace.
"""

import logging
from typing import List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QGroupBox,
    QLabel, QPushButton, QPlainTextEdit, QMessageBox, QFileDialog, QStatusBar
)
from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices, QFont

from dayz_dev_manager.constants import APP_DEFAULTS
from dayz_dev_manager.core.build_pipeline import BuildResult
from dayz_dev_manager.core.build_worker import BuildWorker
from dayz_dev_manager.core.errors import ManagerError
from dayz_dev_manager.core.orchestrator import WorkspaceOrchestrator
from dayz_dev_manager.core.server_config import read_mission_template
from dayz_dev_manager.ui.dialogs import ListPickerDialog, LoadOrderDialog, SettingsDialog
from dayz_dev_manager.ui.log_handler import QtLogHandler

logger = logging.getLogger(__name__)

MISSING_PATH_HINTS = {
    "gamePath": "DayZ game folder",
    "serverPath": "DayZ server folder",
    "addonBuilderPath": "AddonBuilder.exe",
    "workshopPath": "Workshop folder",
}


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, orchestrator: WorkspaceOrchestrator):
        super().__init__()
        self.orchestrator = orchestrator
        self._build_worker: Optional[BuildWorker] = None

        self._setup_ui()
        self._install_log_handler()
        self._restore_window_state()
        self._update_status_bar()
        self._show_missing_paths_tip()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _setup_ui(self):
        self.setWindowTitle(f"{APP_DEFAULTS.APP_NAME} v{APP_DEFAULTS.VERSION}")
        self.setMinimumSize(APP_DEFAULTS.MIN_WIDTH, APP_DEFAULTS.MIN_HEIGHT)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.lbl_workspace = QLabel()
        self.lbl_workspace.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_workspace)

        # Actions
        actions_box = QGroupBox("Actions")
        grid = QGridLayout(actions_box)
        grid.setSpacing(8)

        self.btn_build = self._action_button("Build Mods", self._on_build_mods,
                                             "Pack folders from WorkingMods into BuiltMods")
        self.btn_select_mods = self._action_button("Select Mods", self._on_select_mods,
                                                   "Choose and order the mods to load")
        self.btn_mission = self._action_button("Select Mission", self._on_select_mission,
                                               "Choose the mission folder and patch serverDZ.cfg")
        self.btn_start = self._action_button("Start", self._on_start,
                                             "Start the server, then the client")
        self.btn_stop = self._action_button("Stop", self._on_stop,
                                            "Stop every DayZ server and client process")
        self.btn_purge = self._action_button("Purge Logs", self._on_purge_logs,
                                             "Delete .log, .RPT, .mdmp and .adm files from the profiles folder")
        self.btn_workspace = self._action_button("Set Workspace", self._on_set_workspace,
                                                 "Choose the workspace root folder")
        self.btn_settings = self._action_button("Settings", self._on_settings,
                                                "Edit tool locations and launch options")
        self.btn_open_root = self._action_button("Open Workspace", self._on_open_workspace,
                                                 "Open the workspace folder in the file browser")
        self.btn_help = self._action_button("Help", self._on_help, "How the workspace is laid out")

        self._action_buttons = [
            self.btn_build, self.btn_select_mods, self.btn_mission, self.btn_start,
            self.btn_stop, self.btn_purge, self.btn_workspace, self.btn_settings,
            self.btn_open_root, self.btn_help,
        ]
        for index, button in enumerate(self._action_buttons):
            grid.addWidget(button, index // 5, index % 5)
        layout.addWidget(actions_box)

        # Log
        log_header = QHBoxLayout()
        log_header.addWidget(QLabel("<b>Output</b>"))
        log_header.addStretch()
        btn_clear = QPushButton("Clear")
        btn_clear.clicked.connect(lambda: self.log_view.clear())
        log_header.addWidget(btn_clear)
        layout.addLayout(log_header)

        self.log_view = QPlainTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumBlockCount(5000)
        self.log_view.setFont(QFont("Consolas", 9))
        layout.addWidget(self.log_view, stretch=1)

        self.setStatusBar(QStatusBar())

    def _action_button(self, text: str, slot, tooltip: str = "") -> QPushButton:
        button = QPushButton(text)
        button.setMinimumHeight(36)
        button.setToolTip(tooltip)
        button.clicked.connect(slot)
        return button

    def _install_log_handler(self):
        self._log_handler = QtLogHandler(logging.INFO)
        self._log_handler.message.connect(self.log_view.appendPlainText)
        logging.getLogger().addHandler(self._log_handler)

    def _append(self, line: str):
        self.log_view.appendPlainText(line)

    def _update_status_bar(self):
        config = self.orchestrator.config
        self.lbl_workspace.setText(f"Workspace: {config.repo_root}")

        template = read_mission_template(config.resolve(config.server_config_path))
        parts = [
            f"Mods: {len(config.extra_mods)}",
            f"Mission: {config.mission_path or '-'}",
            f"Template: {template or '-'}",
        ]
        self.statusBar().showMessage("   |   ".join(parts))

    def _show_missing_paths_tip(self):
        missing = self.orchestrator.missing_paths()
        if not missing:
            return
        names = ", ".join(MISSING_PATH_HINTS.get(key, key) for key in missing)
        logger.info("Tip: set these paths in Settings: %s", names)

    def _show_error(self, title: str, error: Exception):
        logger.error("%s: %s", title, error)
        QMessageBox.critical(self, title, str(error))

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def _on_build_mods(self):
        mods = self.orchestrator.list_source_mods()
        if not mods:
            QMessageBox.information(
                self, "Build Mods",
                f"No source folders found in:\n{self.orchestrator.source_root}"
            )
            return

        dialog = ListPickerDialog(mods, self, title="Build Mods", info="Select the mods to pack.")
        if not dialog.exec():
            return
        selected = dialog.selected_items()
        if not selected:
            return

        self._set_busy(True)
        self._build_worker = BuildWorker(self.orchestrator, selected)
        self._build_worker.output.connect(self._append)
        self._build_worker.finished.connect(self._on_build_finished)
        self._build_worker.error.connect(self._on_build_error)
        self._build_worker.start()

    def _set_busy(self, busy: bool):
        """Lock every action while a build owns the config."""
        for button in self._action_buttons:
            button.setEnabled(not busy)

    def _on_build_finished(self, results: List[BuildResult]):
        self._set_busy(False)
        failed = [r for r in results if not r.ok]
        if failed:
            details = "\n".join(f"{r.name}: {r.message}" for r in failed)
            QMessageBox.warning(
                self, "Build Mods",
                f"{len(results) - len(failed)} of {len(results)} mod(s) built.\n\n{details}"
            )

    def _on_build_error(self, message: str):
        self._set_busy(False)
        logger.error(message)
        QMessageBox.critical(self, "Build Mods", message)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _on_select_mods(self):
        workshop, built = self.orchestrator.list_available_mods()
        dialog = LoadOrderDialog(workshop, built, self.orchestrator.config.extra_mods, self)
        if not dialog.exec():
            return
        self.orchestrator.select_mods(dialog.get_selected_mods())
        self._update_status_bar()

    def _on_select_mission(self):
        missions = self.orchestrator.list_missions()
        if not missions:
            QMessageBox.information(self, "Select Mission", "No mission folders found in Missions.")
            return

        dialog = ListPickerDialog(missions, self, title="Select Mission", multi=False)
        if not dialog.exec():
            return
        mission = dialog.selected_item()
        if not mission:
            return

        try:
            self.orchestrator.select_mission(mission)
        except ManagerError as e:
            self._show_error("Select Mission", e)
        self._update_status_bar()

    # ------------------------------------------------------------------
    # Processes
    # ------------------------------------------------------------------

    def _on_start(self):
        try:
            result = self.orchestrator.start()
        except ManagerError as e:
            self._show_error("Start", e)
            return

        logger.info("Started %s.", result.server.label)
        if result.client is not None:
            logger.info("Started %s.", result.client.label)

    def _on_stop(self):
        survivors = self.orchestrator.stop()
        if survivors:
            QMessageBox.warning(
                self, "Stop",
                "These processes could not be stopped:\n" + "\n".join(map(str, survivors))
            )

    def _on_purge_logs(self):
        reply = QMessageBox.question(
            self,
            "Purge Logs",
            "Delete all log files in the profiles folder?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            return
        report = self.orchestrator.purge_logs()
        self.statusBar().showMessage(report.summary(), 8000)

    # ------------------------------------------------------------------
    # Workspace and settings
    # ------------------------------------------------------------------

    def _on_set_workspace(self):
        folder = QFileDialog.getExistingDirectory(
            self, "Select Workspace Folder", self.orchestrator.config.repo_root
        )
        if not folder:
            return
        try:
            self.orchestrator.set_workspace_root(folder)
        except ManagerError as e:
            self._show_error("Set Workspace", e)
            return
        self._update_status_bar()
        self._show_missing_paths_tip()

    def _on_settings(self):
        dialog = SettingsDialog(self.orchestrator.config, self)
        if not dialog.exec():
            return
        dialog.apply_to(self.orchestrator.config)
        if self.orchestrator.save():
            logger.info("Settings saved.")
        self._update_status_bar()
        self._show_missing_paths_tip()

    def _on_open_workspace(self):
        root = self.orchestrator.config.repo_root
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(root)):
            logger.warning("Could not open %s", root)

    def _on_help(self):
        QMessageBox.information(
            self, "Help",
            "1. Put mod sources in WorkingMods and click Build Mods.\n"
            "2. Select Mods to choose the load order (Workshop and BuiltMods).\n"
            "3. Select Mission to pick a folder from Missions; serverDZ.cfg is patched.\n"
            "4. Start launches the server, then the client.\n"
            "5. Stop ends every DayZ process; Purge Logs clears Servers/profiles.\n\n"
            "Set the game, server and AddonBuilder paths in Settings first."
        )

    # ------------------------------------------------------------------
    # Window state
    # ------------------------------------------------------------------

    def _restore_window_state(self):
        """Restore window size and position from settings."""
        config = self.orchestrator.config
        width = config.window_w if config.window_w > 0 else APP_DEFAULTS.WINDOW_WIDTH
        height = config.window_h if config.window_h > 0 else APP_DEFAULTS.WINDOW_HEIGHT
        self.resize(width, height)
        if config.window_x >= 0 and config.window_y >= 0:
            self.move(config.window_x, config.window_y)

    def show_restored(self):
        if self.orchestrator.config.start_maximized:
            self.showMaximized()
        else:
            self.show()

    def closeEvent(self, event):
        """Save window state; running builds are left to finish."""
        if self.isMaximized():
            geometry = self.normalGeometry()
        else:
            geometry = self.geometry()
        self.orchestrator.save_window_geometry(
            self.isMaximized(), geometry.x(), geometry.y(), geometry.width(), geometry.height()
        )

        if self._build_worker is not None and self._build_worker.isRunning():
            self._build_worker.wait()

        logging.getLogger().removeHandler(self._log_handler)
        event.accept()

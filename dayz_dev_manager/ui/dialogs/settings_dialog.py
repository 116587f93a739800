"""
Settings dialog for tool locations, server files and launch behavior.
"""

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QGroupBox, QCheckBox, QLabel, QDialogButtonBox
)

from dayz_dev_manager.core.settings_manager import WorkspaceConfig
from dayz_dev_manager.ui.widgets import PathSelector


class SettingsDialog(QDialog):
    """
    Edits a copy of the workspace settings.

    Nothing is written to the config until :meth:`apply_to` is called
    after the dialog was accepted.
    """

    def __init__(self, config: WorkspaceConfig, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(640)
        self.setModal(True)
        self._setup_ui(config)

    def _setup_ui(self, config: WorkspaceConfig):
        layout = QVBoxLayout(self)
        root = config.repo_root

        # Tool and game locations
        paths_box = QGroupBox("Locations")
        paths_form = QFormLayout(paths_box)
        paths_form.setSpacing(10)

        self.path_game = PathSelector(config.game_path, start_dir=root)
        paths_form.addRow("DayZ game folder:", self.path_game)

        self.path_server = PathSelector(
            config.server_path,
            placeholder="Guessed as DayZServer next to the game folder",
            start_dir=root,
        )
        paths_form.addRow("DayZ server folder:", self.path_server)

        self.path_builder = PathSelector(
            config.addon_builder_path,
            file_mode=True,
            file_filter="AddonBuilder (AddonBuilder.exe);;All files (*)",
            start_dir=root,
        )
        paths_form.addRow("AddonBuilder:", self.path_builder)

        self.path_workshop = PathSelector(config.workshop_path, placeholder="Optional", start_dir=root)
        paths_form.addRow("Workshop folder:", self.path_workshop)
        layout.addWidget(paths_box)

        # Server files
        files_box = QGroupBox("Server files")
        files_form = QFormLayout(files_box)
        files_form.setSpacing(10)

        self.path_profiles = PathSelector(config.profiles_dir, start_dir=root)
        files_form.addRow("Profiles folder:", self.path_profiles)

        self.path_server_cfg = PathSelector(
            config.server_config_path,
            file_mode=True,
            file_filter="Server config (*.cfg);;All files (*)",
            start_dir=root,
        )
        files_form.addRow("serverDZ.cfg:", self.path_server_cfg)

        self.path_mission = PathSelector(config.mission_path, start_dir=root)
        files_form.addRow("Mission folder:", self.path_mission)

        note = QLabel(f"Relative paths are resolved against the workspace: {root}")
        note.setStyleSheet("color: gray; font-size: 11px;")
        note.setWordWrap(True)
        files_form.addRow(note)
        layout.addWidget(files_box)

        # Launch behavior
        launch_box = QGroupBox("Launch")
        launch_layout = QVBoxLayout(launch_box)
        self.chk_client_auto = QCheckBox("Launch the client after the server starts")
        self.chk_client_auto.setChecked(config.client_auto_launch)
        launch_layout.addWidget(self.chk_client_auto)
        self.chk_diag_client = QCheckBox("Use the diagnostics client (DayZDiag_x64.exe)")
        self.chk_diag_client.setChecked(config.use_diag_client)
        launch_layout.addWidget(self.chk_diag_client)
        self.chk_diag_server = QCheckBox("Run the server with DayZDiag_x64.exe from the game folder")
        self.chk_diag_server.setChecked(config.run_server_in_diag)
        launch_layout.addWidget(self.chk_diag_server)
        layout.addWidget(launch_box)

        button_box = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def apply_to(self, config: WorkspaceConfig) -> None:
        """Copy the edited values into ``config``."""
        config.game_path = self.path_game.path()
        config.server_path = self.path_server.path()
        config.addon_builder_path = self.path_builder.path()
        config.workshop_path = self.path_workshop.path()
        config.profiles_dir = self.path_profiles.path()
        config.server_config_path = self.path_server_cfg.path()
        config.mission_path = self.path_mission.path()
        config.client_auto_launch = self.chk_client_auto.isChecked()
        config.use_diag_client = self.chk_diag_client.isChecked()
        config.run_server_in_diag = self.chk_diag_server.isChecked()

"""
Path Selector Widget
Editable path field with a browse button.
"""

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLineEdit, QPushButton, QFileDialog
from PySide6.QtCore import Signal


class PathSelector(QWidget):
    """
    A path field with a browse button.

    Features:
    - Free text entry (relative paths resolve against the workspace)
    - Browse for a folder, or a file in file mode
    - Emits path_changed when the text changes
    """

    path_changed = Signal(str)

    def __init__(
        self,
        path: str = "",
        placeholder: str = "Not set",
        file_mode: bool = False,
        file_filter: str = "",
        start_dir: str = "",
        parent=None
    ):
        """
        Initialize PathSelector.

        Args:
            path: Initial path
            placeholder: Placeholder text when empty
            file_mode: If True, select files instead of folders
            file_filter: File filter for file mode (e.g., "Executables (*.exe)")
            start_dir: Folder the browse dialog opens in when the field is empty
            parent: Parent widget
        """
        super().__init__(parent)
        self._file_mode = file_mode
        self._file_filter = file_filter
        self._start_dir = start_dir

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.edit = QLineEdit(path)
        self.edit.setPlaceholderText(placeholder)
        self.edit.textChanged.connect(self.path_changed.emit)
        layout.addWidget(self.edit, stretch=1)

        self.btn_browse = QPushButton("Browse...")
        self.btn_browse.clicked.connect(self._browse)
        layout.addWidget(self.btn_browse)

    def _browse(self):
        start = self.edit.text().strip() or self._start_dir
        if self._file_mode:
            path, _ = QFileDialog.getOpenFileName(self, "Select File", start, self._file_filter)
        else:
            path = QFileDialog.getExistingDirectory(self, "Select Folder", start)
        if path:
            self.edit.setText(path)

    def path(self) -> str:
        return self.edit.text().strip()

    def set_path(self, path: str):
        self.edit.setText(path or "")

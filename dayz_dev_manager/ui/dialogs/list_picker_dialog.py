"""
List picker dialog for choosing source mods or a mission.
"""

from typing import List, Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QListWidget, QListWidgetItem, QAbstractItemView, QDialogButtonBox
)
from PySide6.QtCore import Qt


class ListPickerDialog(QDialog):
    """
    Modal list of names with single or multiple selection.

    Features:
    - Checkboxes in multi-select mode, plain selection otherwise
    - Select all / none helpers in multi-select mode
    - Double-click accepts in single-select mode
    """

    def __init__(
        self,
        items: List[str],
        parent=None,
        title: str = "Select",
        info: str = "",
        multi: bool = True,
    ):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumSize(420, 400)
        self.setModal(True)
        self._multi = multi
        self._setup_ui(items, info)

    def _setup_ui(self, items: List[str], info: str):
        layout = QVBoxLayout(self)

        if info:
            info_label = QLabel(info)
            info_label.setWordWrap(True)
            info_label.setStyleSheet("color: gray; padding: 5px;")
            layout.addWidget(info_label)

        self.list_widget = QListWidget()
        self.list_widget.setStyleSheet("QListWidget::item { padding: 5px 8px; }")
        for name in items:
            item = QListWidgetItem(name)
            if self._multi:
                item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                item.setCheckState(Qt.Unchecked)
            self.list_widget.addItem(item)

        if self._multi:
            self.list_widget.setSelectionMode(QAbstractItemView.NoSelection)
            self.list_widget.itemClicked.connect(self._toggle_item)
        else:
            self.list_widget.setSelectionMode(QAbstractItemView.SingleSelection)
            self.list_widget.itemDoubleClicked.connect(lambda _: self.accept())
            if items:
                self.list_widget.setCurrentRow(0)
        layout.addWidget(self.list_widget, stretch=1)

        if self._multi:
            helpers = QHBoxLayout()
            btn_all = QPushButton("Select all")
            btn_all.clicked.connect(lambda: self._set_all(Qt.Checked))
            btn_none = QPushButton("Select none")
            btn_none.clicked.connect(lambda: self._set_all(Qt.Unchecked))
            helpers.addWidget(btn_all)
            helpers.addWidget(btn_none)
            helpers.addStretch()
            layout.addLayout(helpers)

        button_box = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _toggle_item(self, item: QListWidgetItem):
        item.setCheckState(Qt.Unchecked if item.checkState() == Qt.Checked else Qt.Checked)

    def _set_all(self, state):
        for i in range(self.list_widget.count()):
            self.list_widget.item(i).setCheckState(state)

    def selected_items(self) -> List[str]:
        """Checked names (multi) or the current name (single), in list order."""
        if not self._multi:
            current = self.list_widget.currentItem()
            return [current.text()] if current else []
        return [
            self.list_widget.item(i).text()
            for i in range(self.list_widget.count())
            if self.list_widget.item(i).checkState() == Qt.Checked
        ]

    def selected_item(self) -> Optional[str]:
        selected = self.selected_items()
        return selected[0] if selected else None

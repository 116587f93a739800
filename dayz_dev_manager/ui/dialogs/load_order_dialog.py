"""
Load order dialog for choosing which mods the server and client load.
"""

from typing import List

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QListWidget, QListWidgetItem, QAbstractItemView, QDialogButtonBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor

BUILT_COLOR = "#4CAF50"


class LoadOrderDialog(QDialog):
    """
    Pick mods from the workshop and built folders and arrange their order.

    Features:
    - Available mods grouped by origin (built mods highlighted in green)
    - Drag and drop reordering of the selection
    - Move up/down, add and remove buttons
    - Previously selected names that no longer exist on disk are kept
    """

    def __init__(
        self,
        workshop_mods: List[str],
        built_mods: List[str],
        selected: List[str],
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Select Mods")
        self.setMinimumSize(720, 480)
        self.setModal(True)
        self._built = set(built_mods)
        self._setup_ui(workshop_mods, built_mods, selected)

    def _setup_ui(self, workshop_mods: List[str], built_mods: List[str], selected: List[str]):
        layout = QVBoxLayout(self)

        info_label = QLabel(
            "Mods load top to bottom. Workshop mods are found in the workshop folder, "
            "built mods in BuiltMods; a name found in both uses the workshop copy."
        )
        info_label.setWordWrap(True)
        info_label.setStyleSheet("color: gray; padding: 5px;")
        layout.addWidget(info_label)

        content = QHBoxLayout()

        # Available mods
        left = QVBoxLayout()
        left.addWidget(QLabel("<b>Available</b>"))
        self.available_list = QListWidget()
        self.available_list.setSelectionMode(QAbstractItemView.ExtendedSelection)
        self.available_list.itemDoubleClicked.connect(lambda _: self._add_selected())
        for name in workshop_mods:
            self._add_available(name, "Workshop")
        for name in built_mods:
            self._add_available(name, "Built")
        left.addWidget(self.available_list)
        content.addLayout(left, stretch=1)

        # Transfer buttons
        middle = QVBoxLayout()
        middle.addStretch()
        btn_add = QPushButton("Add >")
        btn_add.clicked.connect(self._add_selected)
        middle.addWidget(btn_add)
        btn_remove = QPushButton("< Remove")
        btn_remove.clicked.connect(self._remove_selected)
        middle.addWidget(btn_remove)
        middle.addStretch()
        content.addLayout(middle)

        # Load order
        right = QVBoxLayout()
        right.addWidget(QLabel("<b>Load order</b>"))
        self.order_list = QListWidget()
        self.order_list.setDragDropMode(QAbstractItemView.InternalMove)
        self.order_list.setDefaultDropAction(Qt.MoveAction)
        self.order_list.setSelectionMode(QAbstractItemView.SingleSelection)
        for name in selected:
            self._append_order(name)
        right.addWidget(self.order_list)
        content.addLayout(right, stretch=1)

        # Ordering buttons
        order_btns = QVBoxLayout()
        order_btns.addStretch()
        btn_up = QPushButton("Up")
        btn_up.setFixedWidth(60)
        btn_up.clicked.connect(self._move_up)
        order_btns.addWidget(btn_up)
        btn_down = QPushButton("Down")
        btn_down.setFixedWidth(60)
        btn_down.clicked.connect(self._move_down)
        order_btns.addWidget(btn_down)
        order_btns.addStretch()
        content.addLayout(order_btns)

        layout.addLayout(content)

        button_box = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _add_available(self, name: str, origin: str):
        item = QListWidgetItem(name)
        item.setToolTip(origin)
        if origin == "Built":
            item.setForeground(QColor(BUILT_COLOR))
        self.available_list.addItem(item)

    def _append_order(self, name: str):
        item = QListWidgetItem(name)
        if name in self._built:
            item.setForeground(QColor(BUILT_COLOR))
        self.order_list.addItem(item)

    def _add_selected(self):
        current = set(self.get_selected_mods())
        for item in self.available_list.selectedItems():
            if item.text() not in current:
                self._append_order(item.text())
                current.add(item.text())

    def _remove_selected(self):
        row = self.order_list.currentRow()
        if row >= 0:
            self.order_list.takeItem(row)

    def _move_up(self):
        """Move selected item up."""
        row = self.order_list.currentRow()
        if row > 0:
            item = self.order_list.takeItem(row)
            self.order_list.insertItem(row - 1, item)
            self.order_list.setCurrentRow(row - 1)

    def _move_down(self):
        """Move selected item down."""
        row = self.order_list.currentRow()
        if 0 <= row < self.order_list.count() - 1:
            item = self.order_list.takeItem(row)
            self.order_list.insertItem(row + 1, item)
            self.order_list.setCurrentRow(row + 1)

    def get_selected_mods(self) -> List[str]:
        """Get the current load order."""
        return [self.order_list.item(i).text() for i in range(self.order_list.count())]

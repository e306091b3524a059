"""
Selection details panel: one row per box with its pixel rectangle and
Lock / Delete buttons.
"""
from typing import List, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame, QGridLayout, QGroupBox, QHBoxLayout, QLabel, QPushButton,
    QScrollArea, QVBoxLayout, QWidget
)

from bbox_annotator.core.models import PixelBox
from bbox_annotator.gui.styles.theme import Colors


class SelectionRow(QFrame):
    """Details and actions for a single box."""

    lockToggled = Signal(str)
    deleteRequested = Signal(str)

    def __init__(self, number: int, box: PixelBox, parent=None):
        super().__init__(parent)
        self.box = box
        self.setObjectName("selectionRow")
        self.setStyleSheet(
            f"#selectionRow {{ background-color: {Colors.HOVER}; border-radius: 6px; }}"
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)

        header = QHBoxLayout()
        self.title = QLabel(f"Box {number}")
        self.title.setStyleSheet(f"color: {Colors.PRIMARY_HOVER}; font-weight: bold;")
        header.addWidget(self.title)
        header.addStretch()

        self.lock_btn = QPushButton("Unlock" if box.locked else "Lock")
        self.lock_btn.setToolTip("Unlock" if box.locked else "Lock")
        self.lock_btn.clicked.connect(lambda: self.lockToggled.emit(self.box.id))
        header.addWidget(self.lock_btn)

        self.delete_btn = QPushButton("Delete")
        self.delete_btn.setToolTip("Delete")
        self.delete_btn.clicked.connect(lambda: self.deleteRequested.emit(self.box.id))
        header.addWidget(self.delete_btn)
        layout.addLayout(header)

        grid = QGridLayout()
        grid.addWidget(QLabel(f"X: {box.x} px"), 0, 0)
        grid.addWidget(QLabel(f"Y: {box.y} px"), 0, 1)
        grid.addWidget(QLabel(f"Width: {box.width} px"), 1, 0)
        grid.addWidget(QLabel(f"Height: {box.height} px"), 1, 1)
        layout.addLayout(grid)


class SelectionPanel(QGroupBox):
    """
    Lists the committed boxes. Rebuilt from scratch on every change; the
    list is short and rebuilding keeps row numbering trivially correct.
    """

    lockToggled = Signal(str)
    deleteRequested = Signal(str)

    EMPTY_TEXT = "Draw a box on the image to see selection details."

    def __init__(self, parent=None):
        super().__init__("Selection Details", parent)
        self.rows: List[SelectionRow] = []

        outer = QVBoxLayout(self)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setFrameShape(QFrame.Shape.NoFrame)
        outer.addWidget(self.scroll)

        self.container = QWidget()
        self.list_layout = QVBoxLayout(self.container)
        self.list_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.scroll.setWidget(self.container)

        self.empty_label = QLabel(self.EMPTY_TEXT)
        self.empty_label.setStyleSheet(f"color: {Colors.TEXT_DISABLED};")
        self.empty_label.setWordWrap(True)
        self.list_layout.addWidget(self.empty_label)

    def set_boxes(self, boxes: Sequence[PixelBox]) -> None:
        for row in self.rows:
            self.list_layout.removeWidget(row)
            row.deleteLater()
        self.rows = []

        # Numbering follows list position, so a skipped empty box leaves a gap
        for index, box in enumerate(boxes):
            if box.is_empty:
                continue
            row = SelectionRow(index + 1, box)
            row.lockToggled.connect(self.lockToggled)
            row.deleteRequested.connect(self.deleteRequested)
            self.list_layout.addWidget(row)
            self.rows.append(row)

        self.empty_label.setVisible(not self.rows)

"""
YOLO export panel: shows the label text with Copy and Save buttons.
"""
from typing import Optional

from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication, QGroupBox, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout
)

from bbox_annotator.gui.styles.theme import Colors, Fonts

COPY_FEEDBACK_MS = 2000


class ExportPanel(QGroupBox):
    """Read-only view of the current YOLO text."""

    saveRequested = Signal()

    PLACEHOLDER = "Selection coordinates in YOLO format will appear here."

    def __init__(self, parent=None):
        super().__init__("YOLO Bounding Box Format", parent)
        self._text: Optional[str] = None

        layout = QVBoxLayout(self)

        self.placeholder = QLabel(self.PLACEHOLDER)
        self.placeholder.setStyleSheet(f"color: {Colors.TEXT_DISABLED};")
        self.placeholder.setWordWrap(True)
        layout.addWidget(self.placeholder)

        self.text_view = QPlainTextEdit()
        self.text_view.setReadOnly(True)
        self.text_view.setMaximumHeight(192)
        self.text_view.setFont(QFont(Fonts.MONO_FONT.split(',')[0]))
        self.text_view.setStyleSheet(f"color: {Colors.TEXT_CODE};")
        layout.addWidget(self.text_view)

        buttons = QHBoxLayout()
        self.copy_btn = QPushButton("Copy")
        self.copy_btn.clicked.connect(self.copy_to_clipboard)
        buttons.addWidget(self.copy_btn)

        self.save_btn = QPushButton("Save to .txt")
        self.save_btn.clicked.connect(self.saveRequested)
        buttons.addWidget(self.save_btn)
        layout.addLayout(buttons)

        self.set_text(None)

    @property
    def text(self) -> Optional[str]:
        return self._text

    def set_text(self, text: Optional[str]) -> None:
        self._text = text
        has_text = text is not None
        self.text_view.setPlainText(text or "")
        self.text_view.setVisible(has_text)
        self.placeholder.setVisible(not has_text)
        self.copy_btn.setEnabled(has_text)
        self.save_btn.setEnabled(has_text)

    def copy_to_clipboard(self) -> None:
        if self._text is None:
            return
        QApplication.clipboard().setText(self._text)
        self.copy_btn.setText("Copied!")
        QTimer.singleShot(COPY_FEEDBACK_MS, lambda: self.copy_btn.setText("Copy"))

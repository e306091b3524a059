"""
Console widget showing the annotator's log output.
"""
from datetime import datetime
from typing import Dict, Optional, Set

from PySide6.QtCore import Slot
from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import (
    QApplication, QFileDialog, QGroupBox, QMenu, QPlainTextEdit, QSizePolicy, QVBoxLayout
)

from bbox_annotator.gui.styles.theme import Colors, Fonts

MAX_LINES = 1000

# Level name (lower case) -> text colour
LEVEL_COLORS: Dict[str, str] = {
    "info": Colors.TEXT_PRIMARY,
    "warning": Colors.WARNING,
    "warn": Colors.WARNING,
    "error": Colors.ERROR,
    "critical": Colors.ERROR,
    "success": Colors.SUCCESS,
}


def _char_format(color: str) -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    return fmt


class ConsoleWidget(QGroupBox):
    """Read-only, colour-coded log view capped at ``max_lines`` lines."""

    def __init__(self, parent=None, max_lines: int = MAX_LINES):
        super().__init__("Console Log", parent)
        self.max_lines = max_lines
        # Levels listed here are dropped, e.g. {"info"}
        self.suppressed_levels: Set[str] = set()

        # Keep the title bar visible when collapsed in a splitter
        self.setMinimumHeight(40)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.text_edit = QPlainTextEdit()
        self.text_edit.setReadOnly(True)
        self.text_edit.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        font = QFont(Fonts.MONO_FONT.split(',')[0])
        font.setPointSize(int(Fonts.CONSOLE.replace("pt", "")))
        self.text_edit.setFont(font)
        layout.addWidget(self.text_edit)

        self._formats = {level: _char_format(color) for level, color in LEVEL_COLORS.items()}

    def _format_for(self, level: str) -> QTextCharFormat:
        return self._formats.get(level, self._formats["info"])

    @Slot(str, str)
    def append_log(self, level: str, message: str):
        """Append one timestamped line coloured by ``level``."""
        key = level.lower()
        if key in self.suppressed_levels:
            return

        cursor = self.text_edit.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        timestamp = datetime.now().strftime("%H:%M:%S")
        cursor.insertText(f"[{timestamp}] [{level.upper()}] {message}\n", self._format_for(key))
        self.text_edit.setTextCursor(cursor)
        self.text_edit.ensureCursorVisible()

        self._trim()

    def _trim(self) -> None:
        doc = self.text_edit.document()
        excess = doc.blockCount() - self.max_lines
        if excess <= 0:
            return
        cursor = QTextCursor(doc)
        cursor.movePosition(QTextCursor.MoveOperation.Start)
        cursor.movePosition(QTextCursor.MoveOperation.NextBlock, QTextCursor.MoveMode.KeepAnchor, excess)
        cursor.removeSelectedText()

    def plain_text(self) -> str:
        return self.text_edit.toPlainText()

    def contextMenuEvent(self, event):
        menu = QMenu(self)
        copy_all = menu.addAction("Copy All")
        save = menu.addAction("Save to File...")
        menu.addSeparator()
        clear = menu.addAction("Clear")

        chosen = menu.exec(event.globalPos())
        if chosen == copy_all:
            QApplication.clipboard().setText(self.plain_text())
        elif chosen == save:
            filename, _ = QFileDialog.getSaveFileName(
                self, "Save Log", "annotator_log.txt", "Text Files (*.txt);;All Files (*)"
            )
            if filename:
                self.save_to(filename)
        elif chosen == clear:
            self.clear()

    def save_to(self, filename: str) -> Optional[str]:
        """Write the log to ``filename``. Returns an error message on failure."""
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(self.plain_text())
        except OSError as e:
            self.append_log("ERROR", f"Failed to save log: {e}")
            return str(e)
        return None

    def clear(self):
        self.text_edit.clear()

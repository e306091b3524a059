"""
Main Window for the Bounding Box Annotator GUI.
"""
import logging
import queue
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog, QMainWindow, QMessageBox, QSplitter, QStatusBar, QVBoxLayout, QWidget
)

from bbox_annotator import __version__
from bbox_annotator.common.images import IMAGE_FILE_FILTER, LoadedImage, load_image
from bbox_annotator.common.labels import label_path_for, write_labels
from bbox_annotator.core import DEFAULT_CONFIG, EditorConfig, GestureController, SelectionStore
from bbox_annotator.core.errors import AnnotatorError
from bbox_annotator.core.export import pixel_boxes, to_yolo
from bbox_annotator.gui.models.settings import SettingsStore
from bbox_annotator.gui.styles.theme import Colors
from bbox_annotator.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_log_queue
from bbox_annotator.gui.utils.paths import get_default_image_dir, get_settings_path
from bbox_annotator.gui.widgets.console_widget import ConsoleWidget
from bbox_annotator.gui.widgets.export_panel import ExportPanel
from bbox_annotator.gui.widgets.image_canvas import ImageCanvas
from bbox_annotator.gui.widgets.selection_panel import SelectionPanel

logger = logging.getLogger(__name__)

LOG_POLL_MS = 100


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[SettingsStore] = None, config: EditorConfig = DEFAULT_CONFIG):
        super().__init__()

        self.setWindowTitle("Bounding Box Annotator")
        self.resize(1280, 820)
        self.setMinimumSize(900, 600)

        self.settings = settings if settings is not None else SettingsStore(get_settings_path())
        self.config = config
        self.image: Optional[LoadedImage] = None

        self.store = SelectionStore()
        self.controller = GestureController(self.store, config)

        # Initialize Logging
        self.log_queue = queue.Queue()
        self._log_handler = attach_queue_handler(self.log_queue, "bbox_annotator")
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(LOG_POLL_MS)

        self._build_menus()

        # --- Layout ---
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        self.canvas = ImageCanvas(self.controller)
        self.canvas.selectionsCommitted.connect(self._refresh)
        self.canvas.imageDropped.connect(self.open_image)

        self.selection_panel = SelectionPanel()
        self.selection_panel.lockToggled.connect(self._toggle_lock)
        self.selection_panel.deleteRequested.connect(self._delete_selection)

        self.export_panel = ExportPanel()
        self.export_panel.saveRequested.connect(self.save_labels)

        self.side_splitter = QSplitter(Qt.Orientation.Vertical)
        self.side_splitter.addWidget(self.selection_panel)
        self.side_splitter.addWidget(self.export_panel)

        self.content_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.content_splitter.addWidget(self.canvas)
        self.content_splitter.addWidget(self.side_splitter)
        self.content_splitter.setStretchFactor(0, 3)
        self.content_splitter.setStretchFactor(1, 1)

        self.console = ConsoleWidget()

        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.setHandleWidth(8)
        self.splitter.setChildrenCollapsible(False)
        self.splitter.addWidget(self.content_splitter)
        self.splitter.addWidget(self.console)
        layout.addWidget(self.splitter)

        # --- Status Bar ---
        self.status_bar = QStatusBar()
        self.status_bar.setStyleSheet(f"background-color: {Colors.SURFACE}; color: {Colors.TEXT_SECONDARY};")
        self.setStatusBar(self.status_bar)

        self._restore_state()
        self._refresh()

        if self.settings.load_error:
            self.console.append_log("WARNING", "Settings could not be read; defaults in use.")
        logger.info("Bounding Box Annotator %s ready", __version__)

    # ─────────────────────────────────────────────────────────────────────────
    # Menus
    # ─────────────────────────────────────────────────────────────────────────

    def _build_menus(self) -> None:
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open Image...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.triggered.connect(self._choose_image)
        file_menu.addAction(self.open_action)

        self.save_action = QAction("Save Labels...", self)
        self.save_action.setShortcut(QKeySequence.StandardKey.Save)
        self.save_action.triggered.connect(self.save_labels)
        file_menu.addAction(self.save_action)

        self.remove_action = QAction("Remove Image", self)
        self.remove_action.triggered.connect(self.remove_image)
        file_menu.addAction(self.remove_action)

        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        edit_menu = self.menuBar().addMenu("Edit")

        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        self.undo_action.triggered.connect(self.undo)
        edit_menu.addAction(self.undo_action)

        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcut(QKeySequence.StandardKey.Redo)
        self.redo_action.triggered.connect(self.redo)
        edit_menu.addAction(self.redo_action)

        edit_menu.addSeparator()
        self.clear_action = QAction("Clear All", self)
        self.clear_action.triggered.connect(self.clear_selections)
        edit_menu.addAction(self.clear_action)

    # ─────────────────────────────────────────────────────────────────────────
    # Image
    # ─────────────────────────────────────────────────────────────────────────

    def _choose_image(self) -> None:
        start_dir = self.settings.get_last_image_dir() or str(get_default_image_dir())
        filename, _ = QFileDialog.getOpenFileName(self, "Open Image", start_dir, IMAGE_FILE_FILTER)
        if filename:
            self.open_image(filename)

    def open_image(self, path) -> bool:
        """Load an image, replacing the current one and its selections."""
        try:
            image = load_image(path)
        except AnnotatorError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Open Image", str(e))
            return False

        self.image = image
        self.canvas.set_image(image.path, image.size)
        self.store.reset()
        self.settings.set_last_image_dir(str(image.path.parent))
        self.setWindowTitle(f"{image.name} - Bounding Box Annotator")
        return True

    def remove_image(self) -> None:
        if self.image is None:
            return
        logger.info("Removed %s", self.image.name)
        self.image = None
        self.canvas.set_image(None, None)
        self.store.reset()
        self.setWindowTitle("Bounding Box Annotator")

    # ─────────────────────────────────────────────────────────────────────────
    # Labels
    # ─────────────────────────────────────────────────────────────────────────

    def current_labels(self) -> Optional[str]:
        if self.image is None:
            return None
        return to_yolo(
            self.store.selections, self.image.size,
            class_id=self.config.class_id, precision=self.config.precision,
        )

    def save_labels(self) -> Optional[Path]:
        text = self.current_labels()
        if text is None or self.image is None:
            self.status_bar.showMessage("Nothing to save", 3000)
            return None

        start_dir = self.settings.get_last_label_dir()
        default = label_path_for(self.image.path, start_dir)
        filename, _ = QFileDialog.getSaveFileName(
            self, "Save Labels", str(default), "Text Files (*.txt);;All Files (*)"
        )
        if not filename:
            return None

        try:
            path = write_labels(text, filename)
        except AnnotatorError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Save Labels", str(e))
            return None

        self.settings.set_last_label_dir(str(path.parent))
        self.status_bar.showMessage(f"Saved {path.name}", 3000)
        return path

    # ─────────────────────────────────────────────────────────────────────────
    # Edit actions
    # ─────────────────────────────────────────────────────────────────────────

    def undo(self) -> None:
        self.canvas.cancel_gesture()
        self.store.undo()

    def redo(self) -> None:
        self.canvas.cancel_gesture()
        self.store.redo()

    def clear_selections(self) -> None:
        self.canvas.cancel_gesture()
        self.store.clear()

    def _toggle_lock(self, selection_id: str) -> None:
        self.canvas.cancel_gesture()
        self.store.toggle_lock(selection_id)

    def _delete_selection(self, selection_id: str) -> None:
        self.canvas.cancel_gesture()
        self.store.delete(selection_id)

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        """Sync panels and actions with the committed selections."""
        selections = self.store.selections
        self.selection_panel.set_boxes(pixel_boxes(selections))
        labels = self.current_labels()
        self.export_panel.set_text(labels)

        self.undo_action.setEnabled(self.store.can_undo)
        self.redo_action.setEnabled(self.store.can_redo)
        self.clear_action.setEnabled(bool(selections))
        self.save_action.setEnabled(labels is not None)
        self.remove_action.setEnabled(self.image is not None)

        if self.image is None:
            self.status_bar.showMessage("Open an image to start annotating")
        else:
            size = self.image.size
            self.status_bar.showMessage(
                f"{self.image.name} ({size.width}x{size.height}) - {len(selections)} box(es)"
            )

    def _drain_log_queue(self) -> None:
        drain_log_queue(self.log_queue, self.console.append_log)

    def _restore_state(self) -> None:
        geometry = self.settings.get_window_geometry()
        if geometry:
            self.restoreGeometry(bytes.fromhex(geometry))
        splitter_state = self.settings.get_splitter_state()
        if splitter_state:
            self.splitter.restoreState(bytes.fromhex(splitter_state))
        else:
            self.splitter.setStretchFactor(0, 1)
            self.splitter.setStretchFactor(1, 0)
            self.splitter.setSizes([99999, 0])

    def closeEvent(self, event):
        self.canvas.cancel_gesture()
        self.settings.set_window_geometry(self.saveGeometry().data().hex())
        self.settings.set_splitter_state(self.splitter.saveState().data().hex())
        self.log_timer.stop()
        detach_queue_handler(self._log_handler, "bbox_annotator")
        super().closeEvent(event)

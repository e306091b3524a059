"""
Image canvas: shows the image, the selections and the loupe, and feeds
mouse and touch input to the GestureController.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QEvent, QObject, QPointF, QRect, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QPixmap
from PySide6.QtWidgets import QApplication, QSizePolicy, QWidget

from bbox_annotator.common.images import is_supported_image
from bbox_annotator.core.geometry import (
    ResizeEdge, normalize, to_image_space, to_screen_space
)
from bbox_annotator.core.gesture import GestureController, GestureKind
from bbox_annotator.core.models import ImageSize, Point, Rect, Selection
from bbox_annotator.gui.styles.theme import BoxColors, Colors

logger = logging.getLogger(__name__)

HANDLE_DRAW_RADIUS = 6.0


class PointerTracker(QObject):
    """
    Application-wide pointer tracking for the duration of one gesture.

    Installed as an event filter on the QApplication by ``acquire`` and
    removed by ``release``, so moves and releases are seen even when the
    pointer leaves the canvas. The controller calls both; the canvas never
    installs it directly.
    """

    def __init__(self, canvas: "ImageCanvas"):
        super().__init__(canvas)
        self._canvas = canvas
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def acquire(self) -> None:
        app = QApplication.instance()
        if app is not None and not self._installed:
            app.installEventFilter(self)
            self._installed = True

    def release(self) -> None:
        if not self._installed:
            return
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self._installed = False

    def eventFilter(self, watched, event) -> bool:
        etype = event.type()
        if etype == QEvent.Type.MouseMove:
            self._canvas.track_move(event.globalPosition())
        elif etype == QEvent.Type.MouseButtonRelease:
            if event.button() == Qt.MouseButton.LeftButton:
                self._canvas.track_release()
        elif etype == QEvent.Type.ApplicationDeactivate:
            self._canvas.cancel_gesture()
        return False


class LoupeOverlay(QWidget):
    """
    Frameless top-level window that shows the loupe.

    The loupe sits above the pointer and often extends past the canvas top,
    so it is drawn in its own window positioned in global coordinates
    instead of being painted (and clipped) by the canvas.
    """

    def __init__(self, canvas: "ImageCanvas"):
        super().__init__(canvas, Qt.WindowType.ToolTip | Qt.WindowType.FramelessWindowHint)
        self._canvas = canvas
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)

    def sync(self) -> None:
        """Follow the controller's current MagnifierView, hiding when there is none."""
        view = self._canvas.controller.magnifier
        if view is None or self._canvas.pixmap is None or not self._canvas.isVisible():
            self.hide()
            return

        size = int(round(view.size))
        top_left = self._canvas.mapToGlobal(QPointF(view.left, view.top)).toPoint()
        self.setGeometry(QRect(top_left, QSize(size, size)))
        if not self.isVisible():
            self.show()
        self.raise_()
        self.update()

    def paintEvent(self, event):
        view = self._canvas.controller.magnifier
        pixmap = self._canvas.pixmap
        if view is None or pixmap is None:
            return

        config = self._canvas.controller.config
        zoom = config.loupe_zoom
        border = config.loupe_border
        inner = view.size - 2 * border
        target = QRectF(border, border, inner, inner)
        source = QRectF(-view.background_x / zoom, -view.background_y / zoom, inner / zoom, inner / zoom)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.save()
        clip = QPainterPath()
        clip.addEllipse(target)
        painter.setClipPath(clip)
        painter.fillRect(target, QColor(Colors.CANVAS))
        painter.drawPixmap(target, pixmap, source)

        # Crosshair at the optical centre
        painter.setPen(QPen(QColor(*BoxColors.CROSSHAIR), 1))
        centre = target.center()
        painter.drawLine(QPointF(target.left(), centre.y()), QPointF(target.right(), centre.y()))
        painter.drawLine(QPointF(centre.x(), target.top()), QPointF(centre.x(), target.bottom()))
        painter.restore()

        painter.setPen(QPen(QColor(BoxColors.LOUPE_BORDER), border))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(QRectF(0, 0, view.size, view.size).adjusted(
            border / 2, border / 2, -border / 2, -border / 2
        ))
        painter.end()


class ImageCanvas(QWidget):
    """
    Displays one image scaled to fit (never enlarged) with its selections.

    Painting reads everything from the controller: while a gesture is
    active it renders the working copy, otherwise the committed list.
    """

    imageDropped = Signal(str)
    selectionsCommitted = Signal()

    def __init__(self, controller: GestureController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.tracker = PointerTracker(self)
        controller.set_capture(self.tracker)
        controller.store.add_listener(self._on_store_changed)

        self._pixmap: Optional[QPixmap] = None
        self.loupe = LoupeOverlay(self)

        self.setMouseTracking(True)
        self.setAcceptDrops(True)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 240)
        self.setCursor(Qt.CursorShape.CrossCursor)

    # ─────────────────────────────────────────────────────────────────────────
    # Image
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def pixmap(self) -> Optional[QPixmap]:
        return self._pixmap

    @property
    def has_image(self) -> bool:
        return self._pixmap is not None and not self.controller.image_size.is_empty

    def set_image(self, path: Optional[Path], size: Optional[ImageSize]) -> None:
        """Show a new image (or none). Ends any active gesture."""
        pixmap = QPixmap(str(path)) if path is not None else None
        if pixmap is not None and pixmap.isNull():
            logger.warning("Could not render %s", path)
            pixmap = None

        self._pixmap = pixmap
        if pixmap is None or size is None:
            self.controller.set_image_size(ImageSize.empty())
        else:
            self.controller.set_image_size(size)
        self._redraw()

    def image_rect(self) -> Rect:
        """Where the image is drawn, in widget coordinates."""
        size = self.controller.image_size
        if self._pixmap is None or size.is_empty:
            return Rect(0, 0, 0, 0)
        scale = min(1.0, self.width() / size.width, self.height() / size.height)
        width = size.width * scale
        height = size.height * scale
        return Rect((self.width() - width) / 2, (self.height() - height) / 2, width, height)

    def to_image(self, pos: QPointF) -> Point:
        return to_image_space(Point(pos.x(), pos.y()), self.image_rect(), self.controller.image_size)

    def _handle_tolerance(self) -> float:
        """Handle grab radius converted from screen to natural pixels."""
        rect = self.image_rect()
        size = self.controller.image_size
        if rect.width <= 0 or rect.height <= 0:
            return 0.0
        scale = max(size.width / rect.width, size.height / rect.height)
        return self.controller.config.handle_radius_px * scale

    # ─────────────────────────────────────────────────────────────────────────
    # Gesture plumbing
    # ─────────────────────────────────────────────────────────────────────────

    def cancel_gesture(self) -> None:
        if self.controller.is_active:
            self.controller.cancel()
            self._redraw()

    def track_move(self, global_pos: QPointF) -> None:
        """Pointer moved anywhere in the application during a gesture."""
        local = self.mapFromGlobal(global_pos)
        if self.controller.move(self.to_image(local), screen_point=Point(local.x(), local.y())):
            self._redraw()
        elif self.controller.magnifier is not None:
            self._redraw()

    def track_release(self) -> None:
        if self.controller.is_active:
            self.controller.release()
            self._redraw()

    def _on_store_changed(self, _snapshot) -> None:
        self.selectionsCommitted.emit()
        self._redraw()

    def _redraw(self) -> None:
        self.update()
        self.loupe.sync()

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self.has_image:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.controller.press(
            self.to_image(pos),
            screen_point=Point(pos.x(), pos.y()),
            handle_tolerance=self._handle_tolerance(),
        )
        self._redraw()

    def mouseMoveEvent(self, event):
        if self.controller.is_active:
            if not self.tracker.installed:
                self.track_move(event.globalPosition())
            return
        self._update_hover_cursor(event.position())

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.track_release()
        super().mouseReleaseEvent(event)

    def _update_hover_cursor(self, pos: QPointF) -> None:
        if not self.has_image:
            self.setCursor(Qt.CursorShape.ArrowCursor)
            return
        point = self.to_image(pos)
        edge = self.controller.handle_at(point, self._handle_tolerance())
        if edge is not None:
            shape = Qt.CursorShape.SizeHorCursor if edge.is_horizontal else Qt.CursorShape.SizeVerCursor
        else:
            hit = self.controller.hit_test(point)
            if hit is None:
                shape = Qt.CursorShape.CrossCursor
            elif hit.locked:
                shape = Qt.CursorShape.ArrowCursor
            else:
                shape = Qt.CursorShape.SizeAllCursor
        self.setCursor(shape)

    # ─────────────────────────────────────────────────────────────────────────
    # Touch
    # ─────────────────────────────────────────────────────────────────────────

    def event(self, event):
        etype = event.type()
        if etype in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate):
            points = event.points()
            if not points or not self.has_image:
                return True
            pos = points[0].position()
            screen_point = Point(pos.x(), pos.y())
            if etype == QEvent.Type.TouchBegin:
                self.controller.press(
                    self.to_image(pos),
                    contacts=len(points),
                    screen_point=screen_point,
                    touch=True,
                    handle_tolerance=self._handle_tolerance(),
                )
            else:
                self.controller.move(
                    self.to_image(pos),
                    contacts=len(points),
                    screen_point=screen_point,
                    touch=True,
                )
            self._redraw()
            event.accept()
            return True
        if etype in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self.track_release()
            event.accept()
            return True
        return super().event(event)

    def hideEvent(self, event):
        self.cancel_gesture()
        self.loupe.hide()
        super().hideEvent(event)

    # ─────────────────────────────────────────────────────────────────────────
    # Drag and drop
    # ─────────────────────────────────────────────────────────────────────────

    def dragEnterEvent(self, event):
        if self._dropped_path(event) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        path = self._dropped_path(event)
        if path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.imageDropped.emit(path)

    @staticmethod
    def _dropped_path(event) -> Optional[str]:
        mime = event.mimeData()
        if not mime.hasUrls():
            return None
        urls = mime.urls()
        if not urls or not urls[0].isLocalFile():
            return None
        path = urls[0].toLocalFile()
        return path if is_supported_image(path) else None

    # ─────────────────────────────────────────────────────────────────────────
    # Painting
    # ─────────────────────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(Colors.CANVAS))

        if not self.has_image:
            painter.setPen(QColor(Colors.TEXT_SECONDARY))
            painter.drawText(
                self.rect(), Qt.AlignmentFlag.AlignCenter,
                "Open an image or drop one here"
            )
            painter.end()
            return

        rect = self.image_rect()
        target = QRectF(rect.x, rect.y, rect.width, rect.height)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))

        drawing = self.controller.kind is GestureKind.DRAWING
        focused_id = self.controller.focused_id
        for selection in self.controller.selections:
            if selection.width == 0 and selection.height == 0 and not drawing:
                continue
            self._paint_selection(painter, selection, selection.id == focused_id)

        painter.end()

    def _screen_rect(self, selection: Selection) -> QRectF:
        box = normalize(selection)
        image_rect = self.image_rect()
        size = self.controller.image_size
        top_left = to_screen_space(Point(box.x, box.y), image_rect, size)
        bottom_right = to_screen_space(Point(box.right, box.bottom), image_rect, size)
        return QRectF(
            top_left.x, top_left.y,
            bottom_right.x - top_left.x, bottom_right.y - top_left.y,
        )

    def _paint_selection(self, painter: QPainter, selection: Selection, focused: bool) -> None:
        rect = self._screen_rect(selection)
        if selection.locked:
            pen = QPen(QColor(BoxColors.LOCKED), 2)
            fill = QColor(*BoxColors.LOCKED_FILL)
        elif focused:
            pen = QPen(QColor(BoxColors.FOCUSED), 2)
            fill = QColor(*BoxColors.FOCUSED_FILL)
        else:
            pen = QPen(QColor(BoxColors.IDLE), 2, Qt.PenStyle.DashLine)
            fill = QColor(*BoxColors.IDLE_FILL)

        painter.setPen(pen)
        painter.setBrush(QBrush(fill))
        painter.drawRect(rect)

        if focused and not selection.locked:
            painter.setPen(QPen(QColor(BoxColors.HANDLE_BORDER), 1))
            painter.setBrush(QBrush(QColor(BoxColors.HANDLE)))
            for edge in ResizeEdge:
                painter.drawEllipse(_handle_anchor(rect, edge), HANDLE_DRAW_RADIUS, HANDLE_DRAW_RADIUS)


def _handle_anchor(rect: QRectF, edge: ResizeEdge) -> QPointF:
    centre = rect.center()
    if edge is ResizeEdge.N:
        return QPointF(centre.x(), rect.top())
    if edge is ResizeEdge.S:
        return QPointF(centre.x(), rect.bottom())
    if edge is ResizeEdge.W:
        return QPointF(rect.left(), centre.y())
    return QPointF(rect.right(), centre.y())

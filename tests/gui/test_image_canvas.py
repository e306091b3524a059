"""Widget tests for the image canvas."""

import pytest
from PySide6.QtCore import QPoint, QPointF, QSize, Qt
from PySide6.QtTest import QTest

from bbox_annotator.core import GestureController, GestureKind, ImageSize, Rect, SelectionStore
from bbox_annotator.core.geometry import normalize
from bbox_annotator.gui.widgets.image_canvas import ImageCanvas


@pytest.fixture
def canvas(qtbot, sample_image):
    store = SelectionStore()
    widget = ImageCanvas(GestureController(store))
    qtbot.addWidget(widget)
    widget.resize(400, 300)
    widget.set_image(sample_image, ImageSize(200, 100))
    with qtbot.waitExposed(widget):
        widget.show()
    return widget


def drag(canvas, start, end):
    QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(*start))
    canvas.track_move(canvas.mapToGlobal(QPointF(*end)))
    canvas.track_release()


class TestImageCanvasLayout:
    def test_image_rect_when_smaller_than_widget_then_centred_unscaled(self, canvas):
        assert canvas.image_rect() == Rect(100, 100, 200, 100)

    def test_image_rect_when_larger_than_widget_then_scaled_down(self, canvas):
        canvas.controller.set_image_size(ImageSize(800, 600))
        rect = canvas.image_rect()
        assert rect.width == 400
        assert rect.height == 300

    def test_to_image_when_inside_then_natural_coordinates(self, canvas):
        p = canvas.to_image(QPointF(150, 120))
        assert (p.x, p.y) == (50, 20)

    def test_set_image_when_none_then_no_image(self, canvas):
        canvas.set_image(None, None)
        assert not canvas.has_image
        assert canvas.controller.image_size.is_empty


class TestImageCanvasGestures:
    def test_drag_when_on_image_then_box_committed(self, canvas, qtbot):
        with qtbot.waitSignal(canvas.selectionsCommitted, timeout=1000):
            drag(canvas, (110, 110), (160, 140))

        boxes = canvas.controller.store.selections
        assert len(boxes) == 1
        assert normalize(boxes[0]) == Rect(10, 10, 50, 30)

    def test_press_when_on_image_then_pointer_tracking_installed(self, canvas):
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(110, 110))
        assert canvas.controller.kind is GestureKind.DRAWING
        assert canvas.tracker.installed

        canvas.track_release()
        assert not canvas.tracker.installed

    def test_drag_when_past_image_edge_then_clamped(self, canvas):
        drag(canvas, (110, 110), (390, 290))
        assert normalize(canvas.controller.store.selections[0]) == Rect(10, 10, 190, 90)

    def test_right_button_when_pressed_then_ignored(self, canvas):
        QTest.mousePress(canvas, Qt.MouseButton.RightButton, pos=QPoint(110, 110))
        assert not canvas.controller.is_active

    def test_hide_when_gesture_active_then_committed(self, canvas):
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(110, 110))
        canvas.track_move(canvas.mapToGlobal(QPointF(160, 140)))

        canvas.hide()

        assert not canvas.controller.is_active
        assert not canvas.tracker.installed
        assert len(canvas.controller.store.selections) == 1

    def test_press_when_no_image_then_ignored(self, canvas):
        canvas.set_image(None, None)
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(110, 110))
        assert not canvas.controller.is_active


class TestImageCanvasLoupe:
    def test_drag_when_near_image_top_then_loupe_window_unclipped(self, canvas):
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(120, 120))
        canvas.track_move(canvas.mapToGlobal(QPointF(160, 160)))

        view = canvas.controller.magnifier
        assert (view.left, view.top) == (85, -10)
        assert canvas.loupe.isVisible()
        assert canvas.loupe.isWindow()
        assert canvas.loupe.size() == QSize(150, 150)
        assert canvas.loupe.geometry().topLeft() == canvas.mapToGlobal(QPoint(85, -10))

        canvas.track_release()
        assert not canvas.loupe.isVisible()

    def test_press_when_moving_box_then_no_loupe(self, canvas):
        drag(canvas, (110, 110), (250, 190))
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(180, 150))

        assert canvas.controller.kind is GestureKind.MOVING
        assert not canvas.loupe.isVisible()

    def test_hide_when_loupe_shown_then_loupe_hidden(self, canvas):
        QTest.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(120, 120))
        canvas.track_move(canvas.mapToGlobal(QPointF(160, 160)))
        assert canvas.loupe.isVisible()

        canvas.hide()
        assert not canvas.loupe.isVisible()


@pytest.fixture
def touch_device():
    return QTest.createTouchDevice()


class TestImageCanvasTouch:
    def test_touch_when_dragged_then_box_committed(self, canvas, touch_device):
        QTest.touchEvent(canvas, touch_device, False).press(0, QPoint(110, 110), canvas).commit()
        assert canvas.controller.kind is GestureKind.DRAWING

        QTest.touchEvent(canvas, touch_device, False).move(0, QPoint(160, 140), canvas).commit()
        assert canvas.controller.selections[0].end.x == 60
        assert canvas.controller.selections[0].end.y == 40

        QTest.touchEvent(canvas, touch_device, False).release(0, QPoint(160, 140), canvas).commit()
        assert not canvas.controller.is_active
        assert normalize(canvas.controller.store.selections[0]) == Rect(10, 10, 50, 30)

    def test_touch_when_near_top_then_loupe_flipped_below(self, canvas, touch_device):
        QTest.touchEvent(canvas, touch_device, False).press(0, QPoint(110, 110), canvas).commit()

        view = canvas.controller.magnifier
        assert view is not None
        assert view.below
        assert view.top > 110
        assert canvas.loupe.isVisible()

        QTest.touchEvent(canvas, touch_device, False).release(0, QPoint(110, 110), canvas).commit()
        assert not canvas.loupe.isVisible()

    def test_touch_when_second_contact_then_moves_ignored(self, canvas, touch_device):
        QTest.touchEvent(canvas, touch_device, False).press(0, QPoint(110, 110), canvas).commit()
        QTest.touchEvent(canvas, touch_device, False).move(0, QPoint(160, 140), canvas).commit()

        sequence = QTest.touchEvent(canvas, touch_device, False)
        sequence.move(0, QPoint(180, 150), canvas).press(1, QPoint(200, 150), canvas).commit()
        assert canvas.controller.selections[0].end.x == 60
        assert canvas.controller.selections[0].end.y == 40

        sequence = QTest.touchEvent(canvas, touch_device, False)
        sequence.release(0, QPoint(180, 150), canvas).release(1, QPoint(200, 150), canvas).commit()
        assert not canvas.controller.is_active
        assert normalize(canvas.controller.store.selections[0]) == Rect(10, 10, 50, 30)

    def test_touch_when_second_finger_lands_first_then_nothing_drawn(self, canvas, touch_device):
        sequence = QTest.touchEvent(canvas, touch_device, False)
        sequence.press(0, QPoint(110, 110), canvas).press(1, QPoint(200, 150), canvas).commit()

        assert not canvas.controller.is_active
        assert canvas.controller.selections == ()

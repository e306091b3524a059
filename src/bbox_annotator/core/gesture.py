"""
Module: core.gesture

Purpose:
    The pointer-gesture state machine. Turns press/move/release events
    into draw, move and resize operations on a working copy of the
    selections, then commits the result to the SelectionStore when the
    gesture ends. Intermediate drag frames never reach the history.

Key Classes:
    - GestureKind: IDLE, DRAWING, MOVING, RESIZING
    - InputCapture: Protocol for the host's "track the pointer everywhere"
      hook, held only while a gesture is active
    - GestureController: The state machine

Dependencies:
    - .geometry (all maths)
    - .magnifier.Magnifier (loupe placement while drawing/resizing)
    - .store.SelectionStore (commit target)

Used By:
    - gui.widgets.image_canvas.ImageCanvas

Notes:
    Move and resize maths always start from the selection as it was when
    the gesture began plus the total pointer delta, never from the previous
    frame, so long drags do not accumulate drift.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from .config import DEFAULT_CONFIG, EditorConfig
from .geometry import (
    ResizeEdge,
    clamp_point,
    contains_point,
    find_selection_at,
    is_degenerate,
    normalize,
    normalized_selection,
    resize_edge,
    translate_within,
)
from .magnifier import Magnifier, MagnifierView
from .models import IdFactory, ImageSize, Point, Selection
from .store import SelectionStore

logger = logging.getLogger(__name__)


class GestureKind(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    MOVING = "moving"
    RESIZING = "resizing"


class InputCapture(Protocol):
    """Host hook that routes pointer events to the controller during a drag."""

    def acquire(self) -> None: ...

    def release(self) -> None: ...


class NullCapture:
    """InputCapture that does nothing (headless use and tests)."""

    def acquire(self) -> None:
        pass

    def release(self) -> None:
        pass


class GestureController:
    """
    Drives one gesture at a time against a SelectionStore.

    While idle, ``selections`` is the store's committed list. While a
    gesture is active it is the working copy being dragged, which is what
    a view should render.

    Two ids are tracked:
        - target_id: the selection the active gesture is editing (None when idle)
        - focused_id: the last selection pressed, shown highlighted with
          resize handles; survives the end of the gesture

    Example:
        >>> store = SelectionStore()
        >>> controller = GestureController(store)
        >>> controller.set_image_size(ImageSize(100, 100))
        >>> controller.press(Point(10, 10))
        True
        >>> controller.move(Point(50, 40))
        True
        >>> controller.release()
        True
        >>> len(store.selections)
        1
    """

    def __init__(
        self,
        store: SelectionStore,
        config: Optional[EditorConfig] = None,
        capture: Optional[InputCapture] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._store = store
        self._config = config or DEFAULT_CONFIG
        self._capture: InputCapture = capture or NullCapture()
        self._id_factory = id_factory
        self._magnifier = Magnifier(self._config)

        self._image_size = ImageSize.empty()
        self._focused_id: Optional[str] = None
        self._reset_gesture_state()

    def _reset_gesture_state(self) -> None:
        self._kind = GestureKind.IDLE
        self._edge: Optional[ResizeEdge] = None
        self._target_id: Optional[str] = None
        self._working: Optional[List[Selection]] = None
        self._initial: Optional[Selection] = None
        self._drag_start: Optional[Point] = None
        self._magnifier_view: Optional[MagnifierView] = None
        self._captured = False

    # ─────────────────────────────────────────────────────────────────────────
    # Setup
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def store(self) -> SelectionStore:
        return self._store

    def set_capture(self, capture: Optional[InputCapture]) -> None:
        """Replace the capture hook. Ends any active gesture first."""
        self.cancel()
        self._capture = capture or NullCapture()

    @property
    def image_size(self) -> ImageSize:
        return self._image_size

    def set_image_size(self, size: ImageSize) -> None:
        """Set the natural size of the displayed image; ends any gesture."""
        self.cancel()
        self._image_size = size
        self._focused_id = None

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def kind(self) -> GestureKind:
        return self._kind

    @property
    def edge(self) -> Optional[ResizeEdge]:
        return self._edge

    @property
    def is_active(self) -> bool:
        return self._kind is not GestureKind.IDLE

    @property
    def target_id(self) -> Optional[str]:
        return self._target_id

    @property
    def focused_id(self) -> Optional[str]:
        return self._focused_id

    @property
    def selections(self) -> Tuple[Selection, ...]:
        if self._working is not None:
            return tuple(self._working)
        return self._store.selections

    @property
    def focused_selection(self) -> Optional[Selection]:
        return self._find(self._focused_id)

    @property
    def magnifier(self) -> Optional[MagnifierView]:
        return self._magnifier_view

    def hit_test(self, point: Point) -> Optional[Selection]:
        """Topmost selection under ``point``, or None."""
        return find_selection_at(self.selections, point)

    def handle_at(self, point: Point, tolerance: float) -> Optional[ResizeEdge]:
        """
        Resize handle of the focused selection under ``point``.

        Handles sit at the midpoints of the four edges and only exist on an
        unlocked focused selection. ``tolerance`` is the grab half-size in
        natural pixels; the nearest handle within it wins.

        A handle covered by a selection drawn later than the focused one
        does not count, so the box on top receives the press.

        Returns:
            The edge owned by the handle, or None
        """
        focused = self.focused_selection
        if focused is None or focused.locked:
            return None

        rect = normalize(focused)
        cx = rect.x + rect.width / 2
        cy = rect.y + rect.height / 2
        anchors = (
            (ResizeEdge.N, Point(cx, rect.y)),
            (ResizeEdge.E, Point(rect.right, cy)),
            (ResizeEdge.S, Point(cx, rect.bottom)),
            (ResizeEdge.W, Point(rect.x, cy)),
        )

        best: Optional[ResizeEdge] = None
        best_distance = float("inf")
        for edge, anchor in anchors:
            dx = abs(point.x - anchor.x)
            dy = abs(point.y - anchor.y)
            if dx <= tolerance and dy <= tolerance and dx + dy < best_distance:
                best = edge
                best_distance = dx + dy
        if best is not None and self._is_covered(focused, point):
            return None
        return best

    def _is_covered(self, selection: Selection, point: Point) -> bool:
        """Whether a selection drawn above ``selection`` contains ``point``."""
        for other in reversed(self.selections):
            if other.id == selection.id:
                return False
            if contains_point(other, point):
                return True
        return False

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def press(
        self,
        point: Point,
        *,
        contacts: int = 1,
        screen_point: Optional[Point] = None,
        touch: bool = False,
        handle_tolerance: float = 0.0,
    ) -> bool:
        """
        Handle a pointer press in natural image coordinates.

        Ignored while a gesture is active, for multi-touch presses, and
        when no image size is known. Pressing a locked box only focuses it.

        Args:
            point: Press position in natural pixel space
            contacts: Number of simultaneous touch points (1 for a mouse)
            screen_point: Press position in viewport coordinates, for the loupe
            touch: Whether the press is a touch contact
            handle_tolerance: Handle grab half-size in natural pixels

        Returns:
            True if a gesture started
        """
        if self.is_active or contacts != 1 or self._image_size.is_empty:
            return False

        point = clamp_point(point, self._image_size)

        edge = self.handle_at(point, handle_tolerance)
        if edge is not None:
            focused = self.focused_selection
            self._begin(GestureKind.RESIZING, normalized_selection(focused), point, edge=edge)
            self._update_magnifier(point, screen_point, touch)
            return True

        hit = self.hit_test(point)
        if hit is not None:
            self._focused_id = hit.id
            if hit.locked:
                logger.debug("Press on locked selection %s ignored", hit.id)
                return False
            self._begin(GestureKind.MOVING, hit, point)
            return True

        created = Selection.create(point, self._id_factory)
        self._focused_id = created.id
        self._begin(GestureKind.DRAWING, created, point, append=True)
        self._update_magnifier(point, screen_point, touch)
        return True

    def move(
        self,
        point: Point,
        *,
        contacts: int = 1,
        screen_point: Optional[Point] = None,
        touch: bool = False,
    ) -> bool:
        """
        Handle a pointer move during a gesture.

        Returns:
            True if the working copy changed
        """
        if not self.is_active or contacts != 1:
            return False

        self._update_magnifier(point, screen_point, touch)

        index = self._index_of(self._target_id)
        if index is None:
            return False
        current = self._working[index]

        if self._kind is GestureKind.DRAWING:
            updated = current.with_end(clamp_point(point, self._image_size))
        else:
            if current.locked:
                return False
            dx = point.x - self._drag_start.x
            dy = point.y - self._drag_start.y
            if self._kind is GestureKind.MOVING:
                updated = translate_within(self._initial, dx, dy, self._image_size)
            else:
                updated = resize_edge(
                    self._initial, self._edge, dx, dy,
                    self._image_size, self._config.min_extent,
                )

        if updated == current:
            return False
        self._working[index] = updated
        return True

    def release(self) -> bool:
        """
        End the active gesture and commit its result.

        Degenerate boxes (width or height <= min_size) are dropped first,
        which covers clicks without a drag as well as collapsed resizes.

        Returns:
            True if the committed list changed
        """
        if not self.is_active:
            return False

        kind = self._kind
        final = [s for s in self._working if not is_degenerate(s, self._config.min_size)]
        dropped = len(self._working) - len(final)
        self._finish()

        if self._focused_id is not None and all(s.id != self._focused_id for s in final):
            self._focused_id = None

        changed = self._store.commit(final)
        logger.debug(
            "Gesture %s ended: %d kept, %d dropped, changed=%s",
            kind.value, len(final), dropped, changed,
        )
        return changed

    def cancel(self) -> bool:
        """
        End the active gesture because input was lost (capture lost, widget
        hidden, image replaced). Same outcome as ``release``.
        """
        return self.release()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _begin(
        self,
        kind: GestureKind,
        target: Selection,
        point: Point,
        edge: Optional[ResizeEdge] = None,
        append: bool = False,
    ) -> None:
        self._working = list(self._store.selections)
        if append:
            self._working.append(target)
        self._kind = kind
        self._edge = edge
        self._target_id = target.id
        self._initial = target
        self._drag_start = point
        self._capture.acquire()
        self._captured = True
        logger.debug(
            "Gesture %s started on %s%s",
            kind.value, target.id, f" (edge {edge.value})" if edge else "",
        )

    def _finish(self) -> None:
        captured = self._captured
        self._reset_gesture_state()
        if captured:
            self._capture.release()

    def _update_magnifier(self, point: Point, screen_point: Optional[Point], touch: bool) -> None:
        if self._kind not in (GestureKind.DRAWING, GestureKind.RESIZING) or screen_point is None:
            return
        self._magnifier_view = self._magnifier.compute(
            screen_point, clamp_point(point, self._image_size), self._image_size, touch
        )

    def _index_of(self, selection_id: Optional[str]) -> Optional[int]:
        if selection_id is None or self._working is None:
            return None
        for index, selection in enumerate(self._working):
            if selection.id == selection_id:
                return index
        return None

    def _find(self, selection_id: Optional[str]) -> Optional[Selection]:
        if selection_id is None:
            return None
        for selection in self.selections:
            if selection.id == selection_id:
                return selection
        return None

"""
Module: core.geometry

Purpose:
    Pure, stateless geometry used by the gesture controller: mapping
    pointer positions into natural image space, normalizing selections,
    clamping, hit-testing, and the clamped move/resize transforms.

Key Functions:
    - to_image_space(): Viewport point -> natural pixel point
    - normalize(): Selection -> canonical Rect
    - contains_point(): Inclusive containment
    - find_selection_at(): Topmost selection under a point
    - translate_within(): Move a box without leaving the image
    - resize_edge(): Move one edge without leaving the image or inverting

Dependencies:
    - enum (std)
    - .models

Used By:
    - core.gesture.GestureController
    - core.export
    - gui.widgets.image_canvas.ImageCanvas
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .models import ImageSize, Point, Rect, Selection


class ResizeEdge(str, Enum):
    """Edge owned by a resize handle."""

    N = "n"
    E = "e"
    S = "s"
    W = "w"

    @property
    def is_horizontal(self) -> bool:
        """True for the edges that move along x (E and W)."""
        return self in (ResizeEdge.E, ResizeEdge.W)


def clamp_axis(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(value, high))


def clamp_point(point: Point, size: ImageSize) -> Point:
    """Clamp each axis of ``point`` independently into the image."""
    return Point(
        clamp_axis(point.x, 0, size.width),
        clamp_axis(point.y, 0, size.height),
    )


def to_image_space(screen_point: Point, image_rect: Rect, natural_size: ImageSize) -> Point:
    """
    Map a viewport position onto the image's natural pixel grid.

    The point is first pulled back onto the displayed image rectangle, so a
    drag that overshoots the image edge keeps tracking the nearest edge.
    Each axis is then scaled independently by natural / displayed size.

    Args:
        screen_point: Pointer position in viewport coordinates
        image_rect: Where the image is drawn, in the same coordinates
        natural_size: Intrinsic pixel size of the image

    Returns:
        Point in natural pixel space; (0, 0) if the image is not displayed

    Example:
        >>> to_image_space(Point(60, 35), Rect(10, 10, 100, 50), ImageSize(1000, 500))
        Point(x=500.0, y=250.0)
    """
    if image_rect.width <= 0 or image_rect.height <= 0:
        return Point(0, 0)

    scale_x = natural_size.width / image_rect.width
    scale_y = natural_size.height / image_rect.height

    x = clamp_axis(screen_point.x, image_rect.x, image_rect.right)
    y = clamp_axis(screen_point.y, image_rect.y, image_rect.bottom)

    return Point((x - image_rect.x) * scale_x, (y - image_rect.y) * scale_y)


def to_screen_space(point: Point, image_rect: Rect, natural_size: ImageSize) -> Point:
    """Inverse of ``to_image_space`` for points inside the image."""
    if natural_size.is_empty:
        return Point(image_rect.x, image_rect.y)
    return Point(
        image_rect.x + point.x * image_rect.width / natural_size.width,
        image_rect.y + point.y * image_rect.height / natural_size.height,
    )


def normalize(selection: Selection) -> Rect:
    """Canonical rectangle of a selection, whatever its corner order."""
    min_x = min(selection.start.x, selection.end.x)
    min_y = min(selection.start.y, selection.end.y)
    return Rect(min_x, min_y, selection.width, selection.height)


def normalized_selection(selection: Selection) -> Selection:
    """Copy of ``selection`` with start = top-left and end = bottom-right."""
    rect = normalize(selection)
    return selection.with_corners(
        Point(rect.x, rect.y),
        Point(max(selection.start.x, selection.end.x), max(selection.start.y, selection.end.y)),
    )


def contains_point(selection: Selection, point: Point) -> bool:
    """Inclusive containment test on the normalized rectangle."""
    return normalize(selection).contains(point)


def find_selection_at(selections: Sequence[Selection], point: Point) -> Optional[Selection]:
    """
    Find the topmost selection under ``point``.

    Later entries are drawn on top, so the list is scanned in reverse.

    Returns:
        The matching selection or None
    """
    for selection in reversed(selections):
        if contains_point(selection, point):
            return selection
    return None


def is_degenerate(selection: Selection, min_size: float = 1.0) -> bool:
    """True when width or height is <= ``min_size``."""
    return selection.width <= min_size or selection.height <= min_size


def translate_within(selection: Selection, dx: float, dy: float, size: ImageSize) -> Selection:
    """
    Move a selection by (dx, dy) without letting it leave the image.

    The translation is clamped, not the individual corners, so width and
    height are preserved. Corner order is preserved as well.

    Args:
        selection: Box at the start of the drag
        dx: Total horizontal pointer delta since the drag started
        dy: Total vertical pointer delta since the drag started
        size: Natural image size

    Returns:
        Translated copy
    """
    rect = normalize(selection)

    min_x = rect.x + dx
    min_y = rect.y + dy
    if min_x < 0:
        min_x = 0
    if min_y < 0:
        min_y = 0
    if min_x + rect.width > size.width:
        min_x = size.width - rect.width
    if min_y + rect.height > size.height:
        min_y = size.height - rect.height

    shift_x = min_x - rect.x
    shift_y = min_y - rect.y
    return selection.with_corners(
        selection.start.offset(shift_x, shift_y),
        selection.end.offset(shift_x, shift_y),
    )


def resize_edge(
    selection: Selection,
    edge: ResizeEdge,
    dx: float,
    dy: float,
    size: ImageSize,
    min_extent: float = 1.0,
) -> Selection:
    """
    Drag one edge of a normalized selection.

    Only the coordinate owned by ``edge`` changes. It is clamped to the
    image, then held at least ``min_extent`` away from the opposite edge so
    the box can never invert.

    Args:
        selection: Normalized box at the start of the drag
        edge: Edge being dragged
        dx: Total horizontal pointer delta
        dy: Total vertical pointer delta
        size: Natural image size
        min_extent: Smallest allowed extent on the resized axis

    Returns:
        Resized copy (still normalized)
    """
    start, end = selection.start, selection.end

    if edge is ResizeEdge.N:
        y = clamp_axis(start.y + dy, 0, size.height)
        start = Point(start.x, min(y, end.y - min_extent))
    elif edge is ResizeEdge.S:
        y = clamp_axis(end.y + dy, 0, size.height)
        end = Point(end.x, max(y, start.y + min_extent))
    elif edge is ResizeEdge.W:
        x = clamp_axis(start.x + dx, 0, size.width)
        start = Point(min(x, end.x - min_extent), start.y)
    elif edge is ResizeEdge.E:
        x = clamp_axis(end.x + dx, 0, size.width)
        end = Point(max(x, start.x + min_extent), end.y)

    return selection.with_corners(start, end)

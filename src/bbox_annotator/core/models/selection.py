"""
Module: selection

Purpose:
    Provides the Selection dataclass (a user-drawn box) and the PixelBox
    record derived from it for display and export.

Key Functions:
    - Selection.create(point): New zero-size box at a point
    - Selection.width / height: Absolute corner distance
    - Selection.with_corners(start, end): Copy with new corners
    - Selection.with_locked(locked): Copy with new lock state
    - Selection.to_dict() / from_dict(): JSON-friendly snapshot form

Dependencies:
    - dataclasses (std)
    - uuid (std)
    - .geometry.Point

Used By:
    - core.history, core.store, core.gesture, core.export
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .geometry import Point

IdFactory = Callable[[], str]


def new_selection_id() -> str:
    """Default id factory: random, stable for the life of the box."""
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Selection:
    """
    A rectangular region of interest on the image.

    ``start`` and ``end`` are two opposite corners in whatever order the
    user dragged them. Use ``core.geometry.normalize`` to get the canonical
    rectangle; never read position directly from the raw corners.

    Frozen so that history snapshots compare by value: two lists of
    selections with the same ids, corners and lock states are equal.

    Attributes:
        id: Stable handle, assigned once at creation
        start: First corner (natural pixel space)
        end: Opposite corner
        locked: Immune to move/resize gestures when True

    Invariants (after commit only):
        - width > 1 and height > 1
        - rectangle lies inside [0, image width] x [0, image height]

    Example:
        >>> s = Selection("a", Point(30, 40), Point(10, 10))
        >>> (s.width, s.height)
        (20, 30)
    """

    id: str
    start: Point
    end: Point
    locked: bool = False

    @classmethod
    def create(cls, point: Point, id_factory: Optional[IdFactory] = None) -> Selection:
        """Create an unlocked zero-size selection anchored at ``point``."""
        make_id = id_factory or new_selection_id
        return cls(id=make_id(), start=point, end=point, locked=False)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def width(self) -> float:
        return abs(self.start.x - self.end.x)

    @property
    def height(self) -> float:
        return abs(self.start.y - self.end.y)

    # ─────────────────────────────────────────────────────────────────────────
    # Copies
    # ─────────────────────────────────────────────────────────────────────────

    def with_corners(self, start: Point, end: Point) -> Selection:
        return replace(self, start=start, end=end)

    def with_end(self, end: Point) -> Selection:
        return replace(self, end=end)

    def with_locked(self, locked: bool) -> Selection:
        return replace(self, locked=locked)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict with id, start, end and locked
        """
        return {
            "id": self.id,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Selection:
        """
        Deserialize from dictionary.

        ``locked`` is optional and defaults to False.
        """
        return cls(
            id=str(data["id"]),
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            locked=bool(data.get("locked", False)),
        )


@dataclass(frozen=True, slots=True)
class PixelBox:
    """
    Integer pixel record of a selection, for display and export.

    Built only from normalized geometry, so (x, y) is always the top-left
    corner regardless of drag direction.

    Attributes:
        id: Id of the source selection
        locked: Lock state of the source selection
        x: Left edge, rounded
        y: Top edge, rounded
        width: Width, rounded
        height: Height, rounded
    """

    id: str
    locked: bool
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

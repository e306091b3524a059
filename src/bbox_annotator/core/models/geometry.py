"""
Module: geometry

Purpose:
    Provides the value types shared by every layer of the editor: Point,
    ImageSize and Rect. All coordinates are in the image's natural pixel
    space (never display pixels) unless a docstring says otherwise.

Key Functions:
    - Point.offset(dx, dy): Translated copy
    - ImageSize.is_empty: True when either dimension is not positive
    - Rect.contains(point): Inclusive containment test

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.selection.Selection
    - core.geometry (the pure geometry functions)
    - core.gesture.GestureController
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """
    A real-valued position.

    Example:
        >>> Point(10, 20).offset(5, -5)
        Point(x=15, y=15)
    """

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        """Return a copy translated by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class ImageSize:
    """
    Natural pixel dimensions of the loaded image.

    A size of 0x0 stands for "no image yet"; the gesture controller refuses
    to start gestures against an empty size.
    """

    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def empty(cls) -> ImageSize:
        return cls(0, 0)


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Canonical axis-aligned rectangle.

    (x, y) is the top-left corner; width and height are never negative.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: Point) -> bool:
        """
        Check if a point lies inside the rectangle, edges included.

        Args:
            point: Point to test

        Returns:
            True if x <= point.x <= right and y <= point.y <= bottom
        """
        return (
            self.x <= point.x <= self.right
            and self.y <= point.y <= self.bottom
        )

"""
Core Models Package

Immutable value types that every layer shares.

All models in this package are frozen dataclasses. History snapshots are
tuples of Selection, so "did anything change?" is a plain equality check
and no snapshot can be mutated after it has been pushed.
"""

from .geometry import ImageSize, Point, Rect
from .selection import IdFactory, PixelBox, Selection, new_selection_id

__all__ = [
    "ImageSize",
    "Point",
    "Rect",
    "IdFactory",
    "PixelBox",
    "Selection",
    "new_selection_id",
]

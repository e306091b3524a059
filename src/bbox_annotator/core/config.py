"""
Module: core.config

Purpose:
    Configuration dataclass for the selection editor. Immutable
    configuration with validation on construction.

Key Classes:
    - EditorConfig: Geometry, loupe and export tunables

Dependencies:
    - dataclasses (std)

Used By:
    - core.gesture.GestureController
    - core.magnifier.Magnifier
    - core.export
    - gui.widgets.image_canvas.ImageCanvas
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for the selection editor (immutable).

    Attributes:
        min_size: Boxes with width or height <= this are dropped at commit
        min_extent: Smallest extent a resize may shrink a box to
        loupe_size: Loupe diameter in screen pixels
        loupe_zoom: Loupe magnification factor
        loupe_border: Loupe border width in screen pixels
        loupe_gap: Distance between pointer and loupe edge in screen pixels
        handle_radius_px: Grab radius of resize handles in screen pixels
        class_id: Class index written at the start of each YOLO line
        precision: Decimal places of normalized YOLO values

    Example:
        >>> config = EditorConfig(loupe_zoom=3.0)
        >>> config.loupe_radius
        75.0
    """

    # Geometry
    min_size: float = 1.0
    min_extent: float = 1.0

    # Loupe
    loupe_size: int = 150
    loupe_zoom: float = 2.5
    loupe_border: int = 2
    loupe_gap: int = 20

    # Handles
    handle_radius_px: float = 16.0

    # Export
    class_id: int = 0
    precision: int = 6

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.min_size < 0:
            raise ValueError(f"min_size must be non-negative: {self.min_size}")
        if self.min_extent <= 0:
            raise ValueError(f"min_extent must be positive: {self.min_extent}")
        if self.loupe_size <= 0:
            raise ValueError(f"loupe_size must be positive: {self.loupe_size}")
        if self.loupe_zoom <= 0:
            raise ValueError(f"loupe_zoom must be positive: {self.loupe_zoom}")
        if self.loupe_border < 0 or self.loupe_border * 2 >= self.loupe_size:
            raise ValueError(f"loupe_border out of range: {self.loupe_border}")
        if self.handle_radius_px < 0:
            raise ValueError(f"handle_radius_px must be non-negative: {self.handle_radius_px}")
        if self.class_id < 0:
            raise ValueError(f"class_id must be non-negative: {self.class_id}")
        if not 0 <= self.precision <= 12:
            raise ValueError(f"precision must be in [0, 12]: {self.precision}")

    @property
    def loupe_radius(self) -> float:
        return self.loupe_size / 2


DEFAULT_CONFIG = EditorConfig()

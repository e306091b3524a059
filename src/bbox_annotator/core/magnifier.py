"""
Module: core.magnifier

Purpose:
    Placement maths for the loupe shown while drawing or resizing. The
    loupe is a circle of ``loupe_size`` screen pixels showing the image at
    ``loupe_zoom`` with the point under the pointer at its optical centre.

Key Classes:
    - MagnifierView: Everything a renderer needs to draw one loupe frame
    - Magnifier: Computes a MagnifierView from pointer and image metrics

Dependencies:
    - .config.EditorConfig

Used By:
    - core.gesture.GestureController
    - gui.widgets.image_canvas.ImageCanvas (painting only)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_CONFIG, EditorConfig
from .models import ImageSize, Point


@dataclass(frozen=True, slots=True)
class MagnifierView:
    """
    One frame of loupe placement, in screen pixels.

    Attributes:
        left: Loupe bounding box left edge
        top: Loupe bounding box top edge
        size: Loupe diameter
        background_x: Offset of the zoomed image inside the loupe
        background_y: Offset of the zoomed image inside the loupe
        background_width: Zoomed image width (natural width * zoom)
        background_height: Zoomed image height (natural height * zoom)
        below: True when the loupe was flipped under the pointer
    """

    left: float
    top: float
    size: float
    background_x: float
    background_y: float
    background_width: float
    background_height: float
    below: bool = False


class Magnifier:
    """Stateless loupe placement for a given configuration."""

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def compute(
        self,
        screen_point: Point,
        image_point: Point,
        natural_size: ImageSize,
        touch: bool = False,
    ) -> MagnifierView:
        """
        Place the loupe for one pointer position.

        The loupe sits above the pointer so the finger or cursor does not
        hide it. On touch input, if that would push it past the top of the
        viewport, it is flipped below the pointer instead.

        Args:
            screen_point: Pointer in viewport coordinates
            image_point: Same pointer in natural pixel space
            natural_size: Intrinsic image size
            touch: Whether the pointer is a touch contact

        Returns:
            MagnifierView for this frame
        """
        cfg = self.config
        radius = cfg.loupe_radius
        y_offset = cfg.loupe_size + cfg.loupe_gap
        below = False
        if touch and screen_point.y - y_offset < 0:
            y_offset = -y_offset
            below = True

        centre = radius - cfg.loupe_border
        return MagnifierView(
            left=screen_point.x - radius,
            top=screen_point.y - y_offset,
            size=cfg.loupe_size,
            background_x=centre - image_point.x * cfg.loupe_zoom,
            background_y=centre - image_point.y * cfg.loupe_zoom,
            background_width=natural_size.width * cfg.loupe_zoom,
            background_height=natural_size.height * cfg.loupe_zoom,
            below=below,
        )

"""
Module: core.export

Purpose:
    Derived, read-only views of the committed selections: integer pixel
    records for the details panel and normalized YOLO lines for export.

Key Functions:
    - pixel_box(): One selection -> PixelBox
    - pixel_boxes(): Selection list -> PixelBox list
    - yolo_line(): One PixelBox -> "class xc yc w h"
    - to_yolo(): Selection list -> newline-joined text, or None

Dependencies:
    - math (std)
    - .geometry.normalize

Used By:
    - gui.widgets.selection_panel.SelectionPanel
    - gui.widgets.export_panel.ExportPanel
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .geometry import normalize
from .models import ImageSize, PixelBox, Selection


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def pixel_box(selection: Selection) -> PixelBox:
    """Integer pixel record built from the normalized rectangle."""
    rect = normalize(selection)
    return PixelBox(
        id=selection.id,
        locked=selection.locked,
        x=round_half_up(rect.x),
        y=round_half_up(rect.y),
        width=round_half_up(rect.width),
        height=round_half_up(rect.height),
    )


def pixel_boxes(selections: Sequence[Selection]) -> List[PixelBox]:
    return [pixel_box(s) for s in selections]


def yolo_line(box: PixelBox, image_size: ImageSize, class_id: int = 0, precision: int = 6) -> str:
    """
    Format one box as a YOLO label line.

    Example:
        >>> yolo_line(PixelBox("a", False, 100, 50, 200, 100), ImageSize(1000, 500))
        '0 0.200000 0.200000 0.200000 0.200000'
    """
    x_center = (box.x + box.width / 2) / image_size.width
    y_center = (box.y + box.height / 2) / image_size.height
    width = box.width / image_size.width
    height = box.height / image_size.height
    values = " ".join(f"{v:.{precision}f}" for v in (x_center, y_center, width, height))
    return f"{class_id} {values}"


def to_yolo(
    selections: Sequence[Selection],
    image_size: Optional[ImageSize],
    class_id: int = 0,
    precision: int = 6,
) -> Optional[str]:
    """
    Export selections as YOLO text, one line per box in list order.

    Boxes whose rounded width or height is zero are skipped.

    Returns:
        The label text, or None if the image size is unknown or no box
        qualifies
    """
    if image_size is None or image_size.is_empty:
        return None

    lines = [
        yolo_line(box, image_size, class_id, precision)
        for box in pixel_boxes(selections)
        if not box.is_empty
    ]
    if not lines:
        return None
    return "\n".join(lines)

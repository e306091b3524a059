"""
Unit Tests for pixel records and YOLO export.
"""

import pytest

from bbox_annotator.core.export import pixel_box, pixel_boxes, round_half_up, to_yolo, yolo_line
from bbox_annotator.core.models import ImageSize, PixelBox, Point, Selection


def box(id, x1, y1, x2, y2, locked=False):
    return Selection(id, Point(x1, y1), Point(x2, y2), locked)


class TestRounding:
    @pytest.mark.parametrize("value, expected", [
        (2.5, 3), (2.4999, 2), (-2.5, -2), (0.5, 1), (10, 10),
    ])
    def test_round_half_up_when_value_then_half_goes_up(self, value, expected):
        assert round_half_up(value) == expected


class TestPixelBox:
    """Tests for pixel_box()."""

    def test_pixel_box_when_reverse_dragged_then_top_left_origin(self):
        pb = pixel_box(box("a", 300.4, 150.5, 100.2, 50.1, locked=True))
        assert pb == PixelBox("a", True, 100, 50, 200, 100)

    def test_pixel_boxes_when_list_then_order_kept(self):
        boxes = pixel_boxes([box("a", 0, 0, 10, 10), box("b", 5, 5, 6, 6)])
        assert [b.id for b in boxes] == ["a", "b"]
        assert not boxes[1].is_empty

    def test_pixel_box_when_sub_pixel_then_empty(self):
        assert pixel_box(box("a", 10, 10, 10.2, 50)).is_empty


class TestYolo:
    """Tests for YOLO formatting."""

    def test_to_yolo_when_known_box_then_matches_reference_line(self):
        text = to_yolo([box("a", 100, 50, 300, 150)], ImageSize(1000, 500))
        assert text == "0 0.200000 0.200000 0.200000 0.200000"

    def test_to_yolo_when_several_boxes_then_one_line_each_in_order(self):
        text = to_yolo(
            [box("a", 0, 0, 1000, 500), box("b", 100, 50, 300, 150)],
            ImageSize(1000, 500),
        )
        assert text.split("\n") == [
            "0 0.500000 0.500000 1.000000 1.000000",
            "0 0.200000 0.200000 0.200000 0.200000",
        ]

    def test_to_yolo_when_no_boxes_then_none(self):
        assert to_yolo([], ImageSize(1000, 500)) is None

    def test_to_yolo_when_image_size_empty_then_none(self):
        assert to_yolo([box("a", 0, 0, 10, 10)], ImageSize.empty()) is None
        assert to_yolo([box("a", 0, 0, 10, 10)], None) is None

    def test_to_yolo_when_only_empty_boxes_then_none(self):
        assert to_yolo([box("a", 10, 10, 10.2, 10.2)], ImageSize(100, 100)) is None

    def test_yolo_line_when_class_and_precision_given_then_used(self):
        line = yolo_line(PixelBox("a", False, 0, 0, 50, 50), ImageSize(100, 100), class_id=3, precision=2)
        assert line == "3 0.25 0.25 0.50 0.50"

"""
Unit Tests for image loading.
"""

import pytest
from PIL import Image

from bbox_annotator.common.images import IMAGE_FILE_FILTER, is_supported_image, load_image
from bbox_annotator.core.errors import AnnotatorError, ImageLoadError


class TestIsSupportedImage:
    @pytest.mark.parametrize("name", ["a.png", "b.JPG", "c.jpeg", "d.webp", "e.bmp"])
    def test_is_supported_image_when_known_suffix_then_true(self, name):
        assert is_supported_image(name)

    def test_is_supported_image_when_other_suffix_then_false(self):
        assert not is_supported_image("notes.txt")
        assert not is_supported_image("no_suffix")

    def test_filter_when_built_then_lists_suffixes(self):
        assert "*.png" in IMAGE_FILE_FILTER


class TestLoadImage:
    def test_load_image_when_png_then_natural_size(self, sample_image):
        loaded = load_image(sample_image)
        assert loaded.size.width == 200
        assert loaded.size.height == 100
        assert loaded.format == "PNG"
        assert loaded.name == "sample.png"
        assert loaded.path.is_absolute()

    def test_load_image_when_jpeg_then_natural_size(self, tmp_path):
        path = tmp_path / "photo.jpg"
        Image.new("RGB", (64, 48), color="red").save(path)
        assert load_image(path).size.width == 64

    def test_load_image_when_missing_then_raises(self, tmp_path):
        with pytest.raises(ImageLoadError, match="file not found"):
            load_image(tmp_path / "missing.png")

    def test_load_image_when_not_an_image_then_raises(self, tmp_path):
        path = tmp_path / "fake.png"
        path.write_text("definitely not pixels", encoding="utf-8")
        with pytest.raises(ImageLoadError) as exc_info:
            load_image(path)
        assert exc_info.value.path == path.resolve()
        assert isinstance(exc_info.value, AnnotatorError)

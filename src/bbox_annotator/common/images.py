"""Image loading for the annotator.

Opens an image with Pillow only to learn its natural pixel size; the GUI
renders the file itself. Every failure is reported as ImageLoadError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from bbox_annotator.core.errors import ImageLoadError
from bbox_annotator.core.models import ImageSize

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif", ".tif", ".tiff")

# Filter string for file dialogs
IMAGE_FILE_FILTER = "Images ({});;All Files (*)".format(
    " ".join(f"*{suffix}" for suffix in SUPPORTED_SUFFIXES)
)


@dataclass(frozen=True)
class LoadedImage:
    """
    An image file accepted for annotation.

    Attributes:
        path: Absolute path of the file
        size: Natural pixel size as stored in the file
        format: Pillow format name, e.g. "PNG" (None if unknown)
    """

    path: Path
    size: ImageSize
    format: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path.name


def is_supported_image(path: Union[str, Path]) -> bool:
    """True if the file suffix is one the annotator accepts."""
    return Path(path).suffix.lower() in SUPPORTED_SUFFIXES


def load_image(path: Union[str, Path]) -> LoadedImage:
    """
    Open an image and read its natural size.

    Args:
        path: Image file path

    Returns:
        LoadedImage describing the file

    Raises:
        ImageLoadError: If the file is missing, unreadable, not an image,
            or has a zero dimension
    """
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise ImageLoadError(path, "file not found")

    try:
        with Image.open(path) as img:
            width, height = img.size
            fmt = img.format
    except UnidentifiedImageError:
        raise ImageLoadError(path, "not a recognised image format")
    except OSError as e:
        raise ImageLoadError(path, str(e))

    size = ImageSize(width, height)
    if size.is_empty:
        raise ImageLoadError(path, f"image has no pixels ({width}x{height})")

    logger.info("Loaded %s (%dx%d)", path.name, width, height)
    return LoadedImage(path=path, size=size, format=fmt)

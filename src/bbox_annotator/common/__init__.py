"""File I/O collaborators used by the GUI: image loading and label output."""

from .images import IMAGE_FILE_FILTER, SUPPORTED_SUFFIXES, LoadedImage, is_supported_image, load_image
from .labels import label_path_for, write_labels

__all__ = [
    "IMAGE_FILE_FILTER",
    "SUPPORTED_SUFFIXES",
    "LoadedImage",
    "is_supported_image",
    "load_image",
    "label_path_for",
    "write_labels",
]

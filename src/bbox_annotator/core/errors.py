"""Exception types raised by the collaborators around the editor core.

The core itself never raises on user input; these cover file I/O only.
"""


class AnnotatorError(Exception):
    """Base class for all bbox_annotator errors."""


class ImageLoadError(AnnotatorError):
    """An image could not be opened or has no usable dimensions."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load image {path}: {reason}")


class LabelWriteError(AnnotatorError):
    """A label file could not be written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write labels to {path}: {reason}")

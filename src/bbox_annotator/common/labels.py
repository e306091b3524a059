"""Label file output.

YOLO labels are saved as plain text named after the image: ``photo.jpg``
gets ``photo.txt``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from bbox_annotator.core.errors import LabelWriteError

logger = logging.getLogger(__name__)


def label_path_for(image_path: Union[str, Path], output_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Default label file path for an image.

    Args:
        image_path: Path (or bare file name) of the annotated image
        output_dir: Directory to place the label in; defaults to the
            image's own directory

    Returns:
        Path ending in ``<image stem>.txt``

    Example:
        >>> label_path_for("/data/cat.01.jpg")
        PosixPath('/data/cat.01.txt')
    """
    image_path = Path(image_path)
    directory = Path(output_dir) if output_dir is not None else image_path.parent
    return directory / f"{image_path.stem}.txt"


def write_labels(text: str, path: Union[str, Path]) -> Path:
    """
    Write label text to ``path`` as UTF-8, creating parent directories.

    Returns:
        The path written

    Raises:
        LabelWriteError: If the file could not be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise LabelWriteError(path, str(e))

    logger.info("Saved %d label line(s) to %s", len(text.splitlines()), path)
    return path

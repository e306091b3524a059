"""
Bounding Box Annotator Core Package

The interactive selection-manipulation engine, free of any GUI toolkit:

1. **Geometry** (`core.geometry`)
   - Pure functions: screen-to-image mapping, normalization, clamping,
     hit-testing, clamped move and resize

2. **Gesture Controller** (`core.gesture`)
   - Press/move/release state machine over a working copy of the boxes
   - Commits only the final result of each gesture

3. **History and Store** (`core.history`, `core.store`)
   - Snapshot stack with undo/redo; the store is the only writer

4. **Magnifier** (`core.magnifier`)
   - Loupe placement while drawing or resizing

5. **Export** (`core.export`)
   - Integer pixel records and YOLO text
"""

from .config import DEFAULT_CONFIG, EditorConfig
from .errors import AnnotatorError, ImageLoadError, LabelWriteError
from .export import pixel_boxes, to_yolo
from .geometry import ResizeEdge
from .gesture import GestureController, GestureKind, InputCapture, NullCapture
from .history import SelectionHistory
from .magnifier import Magnifier, MagnifierView
from .models import ImageSize, PixelBox, Point, Rect, Selection
from .store import SelectionStore

__all__ = [
    "DEFAULT_CONFIG",
    "EditorConfig",
    "AnnotatorError",
    "ImageLoadError",
    "LabelWriteError",
    "pixel_boxes",
    "to_yolo",
    "ResizeEdge",
    "GestureController",
    "GestureKind",
    "InputCapture",
    "NullCapture",
    "SelectionHistory",
    "Magnifier",
    "MagnifierView",
    "ImageSize",
    "PixelBox",
    "Point",
    "Rect",
    "Selection",
    "SelectionStore",
]

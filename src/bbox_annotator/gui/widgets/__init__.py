from .console_widget import ConsoleWidget
from .export_panel import ExportPanel
from .image_canvas import ImageCanvas, PointerTracker
from .selection_panel import SelectionPanel

__all__ = ["ConsoleWidget", "ExportPanel", "ImageCanvas", "PointerTracker", "SelectionPanel"]

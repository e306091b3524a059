"""
Theme definitions for the Bounding Box Annotator GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY = "#0891b2"
    PRIMARY_HOVER = "#06b6d4"

    # Backgrounds
    BACKGROUND = "#111827"
    SURFACE = "#1f2937"
    CANVAS = "#0b1120"
    HOVER = "#374151"
    DISABLED_BG = "#374151"

    # Text
    TEXT_PRIMARY = "#f3f4f6"
    TEXT_SECONDARY = "#9ca3af"
    TEXT_DISABLED = "#6b7280"
    TEXT_CODE = "#67e8f9"

    # Borders & Dividers
    BORDER = "#374151"

    # Status
    ERROR = "#f87171"
    SUCCESS = "#4ade80"
    WARNING = "#facc15"


class BoxColors:
    """Selection box palette used by the image canvas."""

    LOCKED = "#ef4444"
    LOCKED_FILL = (239, 68, 68, 26)
    FOCUSED = "#22d3ee"
    FOCUSED_FILL = (34, 211, 238, 51)
    IDLE = "#facc15"
    IDLE_FILL = (250, 204, 21, 26)
    HANDLE = "#ffffff"
    HANDLE_BORDER = "#1f2937"
    LOUPE_BORDER = "#22d3ee"
    CROSSHAIR = (239, 68, 68, 191)


class Fonts:
    UI_FONT = "Segoe UI, Helvetica Neue, Arial"
    MONO_FONT = "Menlo, Consolas, DejaVu Sans Mono, monospace"
    CONSOLE = "10pt"


GLOBAL_STYLESHEET = f"""
QMainWindow, QWidget {{
    background-color: {Colors.BACKGROUND};
    color: {Colors.TEXT_PRIMARY};
}}
QGroupBox {{
    background-color: {Colors.SURFACE};
    border: 1px solid {Colors.BORDER};
    border-radius: 8px;
    margin-top: 24px;
    padding: 8px;
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    left: 8px;
    padding: 0 4px;
    color: {Colors.TEXT_PRIMARY};
}}
QPushButton {{
    background-color: {Colors.HOVER};
    border: none;
    border-radius: 6px;
    padding: 6px 12px;
}}
QPushButton:hover {{
    background-color: {Colors.PRIMARY};
}}
QPushButton:disabled {{
    color: {Colors.TEXT_DISABLED};
    background-color: {Colors.DISABLED_BG};
}}
QPlainTextEdit {{
    background-color: {Colors.CANVAS};
    border: 1px solid {Colors.BORDER};
    border-radius: 6px;
}}
"""

"""
Path utilities for handling dev vs production (frozen) file locations.

Dev mode: Uses local workspace/ directory
Frozen mode: Uses system-standard paths (AppData, Pictures)
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths

APP_NAME = "Bounding Box Annotator"


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, 'frozen', False) or hasattr(sys, '_MEIPASS')


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Frozen: ~/Library/Application Support/Bounding Box Annotator (macOS)
            or %LOCALAPPDATA%/Bounding Box Annotator (Windows)
    Dev: workspace/
    """
    if is_frozen():
        app_data = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        ))
        app_data.mkdir(parents=True, exist_ok=True)
        return app_data
    return Path.cwd() / "workspace"


def get_default_image_dir() -> Path:
    """Starting directory for the Open Image dialog when none is remembered."""
    pictures = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)
    if pictures:
        return Path(pictures)
    return Path.home()


def get_settings_path() -> Path:
    """Get the path for storing GUI settings."""
    return get_app_data_dir() / "gui_settings.json"

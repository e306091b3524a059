"""
Settings persistence model for the annotator GUI.

This module handles all persistent GUI state with robust error handling.
Any malformed data should result in graceful fallback to defaults, never CTD.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class SettingsStore:
    """Lightweight JSON-backed store for persisting GUI preferences."""

    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        self.path = path
        self.data: Dict[str, object] = {}
        self._load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                self._load_error = f"Settings file is corrupted:\n{e}"
                self.data = {}
            except OSError as e:
                self._load_error = f"Failed to read settings:\n{e}"
                self.data = {}

        if not isinstance(self.data, dict):
            self._load_error = "Settings file does not contain an object"
            self.data = {}

        if self._load_error:
            logger.warning("Using default settings: %s", self._load_error)

        # Ensure version is set for new files
        if "version" not in self.data:
            self.data["version"] = self.CURRENT_VERSION

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    # ─────────────────────────────────────────────────────────────────────────
    # Directories
    # ─────────────────────────────────────────────────────────────────────────

    def get_last_image_dir(self) -> Optional[str]:
        value = self._get_dict().get("last_image_dir")
        return value if isinstance(value, str) else None

    def set_last_image_dir(self, value: str) -> None:
        self._get_dict()["last_image_dir"] = value
        self._save()

    def get_last_label_dir(self) -> Optional[str]:
        value = self._get_dict().get("last_label_dir")
        return value if isinstance(value, str) else None

    def set_last_label_dir(self, value: str) -> None:
        self._get_dict()["last_label_dir"] = value
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # Window state
    # ─────────────────────────────────────────────────────────────────────────

    def get_window_geometry(self) -> Optional[str]:
        """Get saved window geometry with hex validation.

        Returns None if geometry is missing or invalid hex.
        """
        return self._get_hex("window_geometry")

    def set_window_geometry(self, geometry: str) -> None:
        self._get_dict()["window_geometry"] = geometry
        self._save()

    def get_splitter_state(self) -> Optional[str]:
        return self._get_hex("splitter_state")

    def set_splitter_state(self, state: str) -> None:
        self._get_dict()["splitter_state"] = state
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _get_hex(self, key: str) -> Optional[str]:
        value = self._get_dict().get(key)
        if not isinstance(value, str):
            return None
        try:
            bytes.fromhex(value)
        except ValueError:
            return None
        return value

    def _get_dict(self) -> Dict[str, object]:
        if not isinstance(self.data, dict):
            self.data = {}
        return self.data

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

            # Atomic rename (overwrites existing)
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            if temp_path is not None and temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass

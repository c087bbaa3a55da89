"""Settings manager for application preferences."""

import os
from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import QSettings

from src.utils.config import EXPORT_DEFAULT_DIR, GEMINI_DEFAULT_TIMEOUT


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self):
        self._settings = QSettings()

    # ---------------------------------------------------- API Keys

    def get_gemini_api_key(self) -> str:
        """Get the Gemini API key (falls back to GEMINI_API_KEY / API_KEY env vars)."""
        key = self._settings.value("api_keys/gemini", "", str)
        if key:
            return key
        return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", "")

    def set_gemini_api_key(self, key: str) -> None:
        """Set the Gemini API key."""
        self._settings.setValue("api_keys/gemini", key)

    def get_request_timeout(self) -> int:
        """Get the AI request timeout in seconds (default: 60)."""
        return self._settings.value("api/timeout", GEMINI_DEFAULT_TIMEOUT, int)

    def set_request_timeout(self, seconds: int) -> None:
        """Set the AI request timeout in seconds."""
        self._settings.setValue("api/timeout", seconds)

    # ---------------------------------------------------- Export Settings

    def get_export_dir(self) -> Path:
        """Get the directory exported memes are written to (default: ~/Pictures)."""
        path = self._settings.value("export/dir", "", str)
        return Path(path) if path else EXPORT_DEFAULT_DIR

    def set_export_dir(self, path: Optional[Path]) -> None:
        """Set the export directory (None for default)."""
        self._settings.setValue("export/dir", str(path) if path else "")

    def get_caption_font_path(self) -> Optional[str]:
        """Get the custom caption font file (None for auto-detect)."""
        path = self._settings.value("export/font_path", "", str)
        return path if path else None

    def set_caption_font_path(self, path: Optional[str]) -> None:
        """Set the custom caption font file (None for auto-detect)."""
        self._settings.setValue("export/font_path", path or "")

    def get_last_image_dir(self) -> str:
        """Get the directory of the last opened image."""
        return self._settings.value("general/last_image_dir", "", str)

    def set_last_image_dir(self, path: str) -> None:
        self._settings.setValue("general/last_image_dir", path)

    # ---------------------------------------------------- UI Settings

    def get_ui_language(self) -> str:
        """Get the UI language code (default: en)."""
        return self._settings.value("ui/language", "en", str)

    def set_ui_language(self, lang: str) -> None:
        """Set the UI language code ('en', 'ko', etc.)."""
        self._settings.setValue("ui/language", lang)

    # ---------------------------------------------------- General Methods

    def reset_to_defaults(self) -> None:
        """Reset all settings to default values."""
        self._settings.clear()

    def sync(self) -> None:
        """Force synchronization of settings to disk."""
        self._settings.sync()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key."""
        return self._settings.value(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value by key."""
        self._settings.setValue(key, value)

"""UI string translation for MemeGenius.

English strings are the keys; only Korean ships a table. The language is
fixed at startup, so switching it from the menu takes effect on restart.
"""

from __future__ import annotations

import logging

from src.utils.lang.ko import STRINGS as _KO_STRINGS

logger = logging.getLogger(__name__)

# code -> (menu label, translation table)
LANGUAGES: dict[str, tuple[str, dict[str, str]]] = {
    "en": ("English", {}),
    "ko": ("한국어", _KO_STRINGS),
}
DEFAULT_LANGUAGE = "en"

_current_strings: dict[str, str] = {}
_current_lang: str = DEFAULT_LANGUAGE


def normalize_language(lang_code: str | None) -> str | None:
    """Map a stored or locale-style code ('ko_KR', 'KO') to a shipped language.

    Returns None when no shipped language matches.
    """
    code = (lang_code or "").strip().replace("-", "_").split("_")[0].lower()
    return code if code in LANGUAGES else None


def init_language(lang_code: str = DEFAULT_LANGUAGE) -> None:
    """Select the UI language. Call once at startup before any widget is built.

    Unknown codes fall back to English.
    """
    global _current_strings, _current_lang
    code = normalize_language(lang_code)
    if code is None:
        logger.warning(f"UI language {lang_code!r} not available, using {DEFAULT_LANGUAGE!r}")
        code = DEFAULT_LANGUAGE
    _current_lang = code
    _current_strings = LANGUAGES[code][1]


def tr(key: str) -> str:
    """Translate *key*; untranslated keys come back unchanged."""
    return _current_strings.get(key, key)


def current_language() -> str:
    return _current_lang

# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module.

This module provides translation functions and language management.
Supports German (default, the language of the rule traces) and English.
"""

import locale
from typing import List

from worktime.i18n.translations import TRANSLATIONS

# Supported languages
SUPPORTED_LANGUAGES = ["de", "en"]

# Current language (default to German)
_current_language = "de"


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'en' if English is detected, 'de' otherwise.
    """
    system_locale = locale.getlocale()[0]
    if system_locale and system_locale.lower().startswith("en"):
        return "en"
    return "de"


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def set_language(lang: str) -> None:
    """
    Set the current language.

    Args:
        lang: Language code ('de' or 'en'), 'auto' detects from the system
    """
    global _current_language
    if lang == "auto":
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        lang = "de"
    _current_language = lang


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'rules.working_at_930')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS["de"])
    text = translations.get(key, key)

    # Apply format arguments if provided
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text


def get_available_languages() -> List[tuple]:
    """
    Get list of available languages for display.

    Returns:
        List of (code, display_name) tuples.
    """
    return [
        ("de", "Deutsch"),
        ("en", "English"),
    ]

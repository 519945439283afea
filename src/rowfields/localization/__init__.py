"""Localization module exports."""

from rowfields.localization.loader import flatten_texts, load_texts
from rowfields.localization.texts import (
    LocalText,
    LocalTextRegistry,
    get_language,
    language_fallbacks,
    local_texts,
    reset_language,
    set_language,
)

__all__ = [
    "LocalText",
    "LocalTextRegistry",
    "flatten_texts",
    "get_language",
    "language_fallbacks",
    "load_texts",
    "local_texts",
    "reset_language",
    "set_language",
]

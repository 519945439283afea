"""Localizable texts.

A ``LocalTextRegistry`` maps ``(language, key)`` to text. Lookups walk the
language fallback chain (``en-US`` -> ``en`` -> invariant). The current
language lives in a context variable so it can change per request without
touching any cached state.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextvars import ContextVar, Token

from rowfields.config.constants import INVARIANT_LANGUAGE

_current_language: ContextVar[str | None] = ContextVar("current_language", default=None)


def get_language() -> str | None:
    return _current_language.get()


def set_language(language: str | None) -> Token[str | None]:
    """Set the language for the current context. Returns a reset token."""
    return _current_language.set(language)


def reset_language(token: Token[str | None]) -> None:
    _current_language.reset(token)


def language_fallbacks(language: str) -> Iterator[str]:
    """Yield ``language`` and its parents, ending with the invariant language."""
    while language:
        yield language
        cut = language.rfind("-")
        language = language[:cut] if cut > 0 else INVARIANT_LANGUAGE
    yield INVARIANT_LANGUAGE


class LocalTextRegistry:
    """In-memory text table keyed by language then text key."""

    def __init__(self, default_language: str = INVARIANT_LANGUAGE) -> None:
        self.default_language = default_language
        self._texts: dict[str, dict[str, str]] = {}

    def add(self, language: str, key: str, text: str) -> None:
        self._texts.setdefault(language, {})[key] = text

    def add_all(self, language: str, texts: Mapping[str, str]) -> None:
        self._texts.setdefault(language, {}).update(texts)

    def try_get(self, key: str, language: str | None = None) -> str | None:
        """Text for ``key`` in ``language`` (or the current language), else None."""
        if language is None:
            language = get_language()
        if language is None:
            language = self.default_language
        for candidate in language_fallbacks(language):
            texts = self._texts.get(candidate)
            if texts is not None and key in texts:
                return texts[key]
        return None

    def languages(self) -> list[str]:
        return sorted(self._texts)

    def clear(self) -> None:
        self._texts.clear()

    def __len__(self) -> int:
        return sum(len(texts) for texts in self._texts.values())


local_texts = LocalTextRegistry()
"""Process-wide registry used by LocalText and field titles."""


class LocalText:
    """A text key resolved through the local text registry on every str().

    Unresolved keys render as the key itself.
    """

    __slots__ = ("key",)

    def __init__(self, key: str) -> None:
        self.key = key

    @staticmethod
    def try_get(key: str) -> str | None:
        return local_texts.try_get(key)

    def __str__(self) -> str:
        text = local_texts.try_get(self.key)
        return self.key if text is None else text

    def __repr__(self) -> str:
        return f"LocalText({self.key!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalText):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

"""Language utilities for adstxt-validator.

Validation messages are rendered in one of the supported languages. Keeping
the enum in the domain layer lets the CLI, the report builder and the
settings share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing messages."""

    ENGLISH = "en"
    JAPANESE = "ja"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    @classmethod
    def from_code(cls, code: str | None) -> "Language":
        """Resolve a locale code such as ``ja`` or ``en-US``; unknown codes fall back to English."""

        if not code:
            return cls.default()
        prefix = code.strip().lower().split("-", 1)[0].split("_", 1)[0]
        for language in cls:
            if language.value == prefix:
                return language
        return cls.default()

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Japanese" if self is Language.JAPANESE else "English"

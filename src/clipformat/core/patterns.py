"""Named regex registry shared by detectors and formatters.

Patterns are compiled once and looked up by name, so detectors never embed
their own copies of the shared token shapes.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

_MONTH_WORD = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t|tember)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DAY = r"\d{1,2}(?:st|nd|rd|th)?(?!\d)"
_YEAR_SUFFIX = r"(?:,?\s*\d{2,4}(?!\d))?"

DEFAULT_PATTERNS: dict[str, tuple[str, int]] = {
    "arithmetic_candidate": (r"^\s*\$?[\d.,\s()+\-*/%^]+$", 0),
    "date_full": (r"^\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4}$", 0),
    "date_token": (r"(?<!\d)\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4}(?!\d)", 0),
    "date_token_short": (r"(?<!\d)\d{1,2}[/.\-]\d{1,2}(?:[/.\-]\d{2,4})?(?!\d)", 0),
    "date_token_iso": (r"(?<!\d)\d{4}[/.\-]\d{1,2}[/.\-]\d{1,2}(?!\d)", 0),
    "date_token_text": (
        rf"\b(?:{_MONTH_WORD}\s+{_DAY}{_YEAR_SUFFIX}|{_DAY}\s+{_MONTH_WORD}{_YEAR_SUFFIX})",
        re.IGNORECASE,
    ),
    "localized_number": (r"^\s*[+-]?[\d.,]+\s*$", 0),
    "number_token": (r"[+-]?[\d.,]+", 0),
    "percentage_of": (r"^(-?\d+(?:\.\d+)?)%of(-?\d+(?:\.\d+)?)$", re.IGNORECASE),
    "percentage_add": (r"^(-?\d+(?:\.\d+)?)\+(\d+(?:\.\d+)?)%$", 0),
    "percentage_sub": (r"^(-?\d+(?:\.\d+)?)-(\d+(?:\.\d+)?)%$", 0),
    "phone_semicolon": (r"\d+;.+", 0),
    "pd_rating": (r"^(\d+)%*\s*[PD]+$", re.IGNORECASE),
}


class PatternRegistry:
    """Cache of compiled patterns keyed by name."""

    def __init__(self, patterns: Optional[dict[str, tuple[str, int]]] = None) -> None:
        self._sources: dict[str, tuple[str, int]] = {}
        self._compiled: dict[str, re.Pattern] = {}
        for name, (source, flags) in (patterns or DEFAULT_PATTERNS).items():
            self.register(name, source, flags)

    def register(self, name: str, source: str, flags: int = 0) -> re.Pattern:
        """Compile and store a pattern, replacing any previous one."""

        if not name:
            raise ValueError("pattern name must be a non-empty string")
        compiled = re.compile(source, flags)
        self._sources[name] = (source, flags)
        self._compiled[name] = compiled
        return compiled

    def ensure(self, name: str, source: str, flags: int = 0) -> re.Pattern:
        """Register a pattern only if the name is not taken yet."""

        existing = self._compiled.get(name)
        if existing is not None:
            return existing
        return self.register(name, source, flags)

    def get(self, name: str) -> Optional[str]:
        entry = self._sources.get(name)
        return entry[0] if entry else None

    def compiled(self, name: str) -> re.Pattern:
        try:
            return self._compiled[name]
        except KeyError:
            raise KeyError(f"Unknown pattern: {name}") from None

    def match(self, name: str, text: str) -> Optional[re.Match]:
        """Return a full-string match for the named pattern."""

        return self.compiled(name).fullmatch(text)

    def contains(self, name: str, text: str) -> bool:
        return self.compiled(name).search(text) is not None

    def finditer(self, name: str, text: str) -> Iterator[re.Match]:
        return self.compiled(name).finditer(text)

    def names(self) -> list[str]:
        return sorted(self._compiled)


# Shared by callers that do not supply their own registry.
DEFAULT_REGISTRY = PatternRegistry()

"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any clipboard or OS-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union


@dataclass(frozen=True)
class NoMatch:
    """Detector declined the input."""


NO_MATCH = NoMatch()


@dataclass(frozen=True)
class TextResult:
    """Replacement text produced by a detector."""

    text: str


@dataclass(frozen=True)
class SideEffect:
    """External action requested instead of replacing the visible text."""

    kind: str
    payload: str
    message: str


@dataclass(frozen=True)
class EffectResult:
    """Side-effect outcome; the caller leaves the visible text unchanged."""

    display_text: str
    effect: SideEffect


MatchOutcome = Union[NoMatch, TextResult, EffectResult]


@dataclass(frozen=True)
class MatchEntry:
    """One recorded detector match."""

    detector_id: str
    raw: str


@dataclass(frozen=True)
class DetectionResult:
    """Folded outcome of one registry scan."""

    primary: Optional[str]
    matched_id: Optional[str]
    raw: Optional[MatchOutcome]
    matches: tuple[MatchEntry, ...]
    side_effect: Optional[SideEffect]
    handled_by_navigation: bool = False

    @property
    def matched(self) -> bool:
        return self.matched_id is not None


@dataclass(frozen=True)
class DateComponents:
    """Month/day/year parsed from a single date token."""

    month: int
    day: int
    year: Optional[int]
    year_was_inferred: bool = False


@dataclass(frozen=True)
class DateRange:
    """Validated, ordered date range with an inclusive day count."""

    start: date
    end: date
    inclusive_days: int


@dataclass(frozen=True)
class NumberToken:
    value: float


@dataclass(frozen=True)
class OperatorToken:
    symbol: str


@dataclass(frozen=True)
class ParenToken:
    is_open: bool


Token = Union[NumberToken, OperatorToken, ParenToken]

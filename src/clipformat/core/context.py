"""Per-invocation detection context.

The context is immutable. The registry threads a new copy through the scan
each time a detector matches, so nothing leaks between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Mapping, Optional

from clipformat.core.config import FormatterConfig
from clipformat.core.formatters import FormatterOptions, FormatterRegistry
from clipformat.core.models import EffectResult, MatchEntry, MatchOutcome, SideEffect, TextResult
from clipformat.core.patterns import PatternRegistry

NAVIGATION_DETECTOR_ID = "navigation"


def describe_outcome(outcome: MatchOutcome) -> Optional[str]:
    """Return the text a caller would show for an outcome."""

    if isinstance(outcome, TextResult):
        return outcome.text
    if isinstance(outcome, EffectResult):
        return outcome.display_text
    return None


@dataclass(frozen=True)
class DetectionContext:
    """Configuration snapshot plus the match log accumulated so far."""

    config: FormatterConfig
    patterns: PatternRegistry
    formatters: FormatterRegistry
    rating_table: Mapping[int, float] = field(default_factory=dict)
    now: datetime = field(default_factory=datetime.now)
    matches: tuple[MatchEntry, ...] = ()
    side_effect: Optional[SideEffect] = None
    handled_by_navigation: bool = False

    @property
    def matched(self) -> bool:
        return bool(self.matches)

    def options(self) -> FormatterOptions:
        return FormatterOptions(patterns=self.patterns, config=self.config, now=self.now)

    def with_match(self, detector_id: str, outcome: MatchOutcome) -> DetectionContext:
        """Return a copy with the match logged and any side effect recorded."""

        entry = MatchEntry(detector_id=detector_id, raw=describe_outcome(outcome) or "")
        if isinstance(outcome, EffectResult):
            # Last writer wins for side effects.
            return replace(
                self,
                matches=self.matches + (entry,),
                side_effect=outcome.effect,
                handled_by_navigation=detector_id == NAVIGATION_DETECTOR_ID,
            )
        return replace(self, matches=self.matches + (entry,))

"""Core text processing pipeline.

This module is integration-agnostic. It only relies on ports for rating
tables, enabling the CLI, the TUI, or a clipboard daemon to share it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
import time
from typing import Callable, Optional

from clipformat.core.config import FormatterConfig
from clipformat.core.context import DetectionContext
from clipformat.core.detectors import build_registry, default_formatters
from clipformat.core.formatters import FormatterRegistry
from clipformat.core.models import DetectionResult, SideEffect
from clipformat.core.patterns import PatternRegistry
from clipformat.core.ports import RatingTablePort
from clipformat.core.registry import Detector, DetectorRegistry
from clipformat.core.seed import extract_seed
from clipformat.core.strings import split_outer_whitespace, trim

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatOutcome:
    """What the caller should write back, plus any side effect to perform."""

    text: str
    changed: bool
    result: Optional[DetectionResult] = None
    side_effect: Optional[SideEffect] = None


class TextProcessor:
    """Orchestrates throttling, context construction, and detector dispatch."""

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        registry: Optional[DetectorRegistry] = None,
        formatters: Optional[FormatterRegistry] = None,
        patterns: Optional[PatternRegistry] = None,
        rating_source: Optional[RatingTablePort] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config or FormatterConfig()
        self._registry = registry or build_registry()
        self._formatters = formatters or default_formatters()
        self._patterns = patterns or PatternRegistry()
        self._rating_source = rating_source
        self._clock = clock
        self._now = now
        self._last_text: Optional[str] = None
        self._last_at = 0.0
        self._last_result: Optional[DetectionResult] = None

    @property
    def config(self) -> FormatterConfig:
        return self._config

    @property
    def registry(self) -> DetectorRegistry:
        return self._registry

    @property
    def patterns(self) -> PatternRegistry:
        return self._patterns

    def register_detector(self, detector: Detector) -> None:
        self._registry.register(detector)

    def register_formatter(self, name: str, formatter: object) -> None:
        self._formatters.register(name, formatter)

    def build_context(self) -> DetectionContext:
        """Return a fresh context; never reused across calls."""

        rating_table = self._rating_source.load() if self._rating_source else {}
        return DetectionContext(
            config=self._config,
            patterns=self._patterns,
            formatters=self._formatters,
            rating_table=rating_table,
            now=self._now(),
        )

    def _throttled(self, text: str, at: float) -> bool:
        window = self._config.processing.throttle_ms / 1000
        return window > 0 and text == self._last_text and (at - self._last_at) < window

    def process(self, text: Optional[str]) -> Optional[DetectionResult]:
        """Run the detectors on trimmed text; blank input returns None."""

        trimmed = trim(text)
        if not trimmed:
            return None

        # Repeated hotkey presses on the same text reuse the previous result.
        at = self._clock()
        if self._throttled(trimmed, at):
            LOGGER.debug("Throttled repeat of %r", trimmed)
            return self._last_result

        result = self._registry.process(trimmed, self.build_context())
        self._last_text = trimmed
        self._last_at = at
        self._last_result = result
        if result.matched:
            LOGGER.info("Formatted with %s", result.matched_id)
        return result

    def _outcome(self, original: str, target: str, rebuild: Callable[[str], str]) -> FormatOutcome:
        result = self.process(target)
        if result is None or not result.matched:
            return FormatOutcome(text=original, changed=False, result=result)
        if result.side_effect is not None:
            # The visible text stays as it was while the effect runs.
            return FormatOutcome(text=original, changed=False, result=result, side_effect=result.side_effect)
        if result.primary is None or result.primary == target:
            return FormatOutcome(text=original, changed=False, result=result)
        return FormatOutcome(text=rebuild(result.primary), changed=True, result=result)

    def format_text(self, text: str) -> FormatOutcome:
        """Treat the whole text as the expression, keeping outer whitespace."""

        leading, body, trailing = split_outer_whitespace(text or "")
        if not body:
            return FormatOutcome(text=text or "", changed=False)
        return self._outcome(text, body, lambda formatted: leading + formatted + trailing)

    def format_seed(self, text: str) -> FormatOutcome:
        """Format only the evaluable tail of text and splice it back in."""

        leading, body, trailing = split_outer_whitespace(text or "")
        prefix, seed = extract_seed(body, self._patterns)
        if not seed:
            return FormatOutcome(text=text or "", changed=False)
        return self._outcome(text, seed, lambda formatted: leading + prefix + formatted + trailing)

"""Ordered, fault-isolated detector dispatch."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, List, Optional, Union

from clipformat.core.context import DetectionContext, describe_outcome
from clipformat.core.models import (
    NO_MATCH,
    DetectionResult,
    EffectResult,
    MatchOutcome,
    NoMatch,
    TextResult,
)

LOGGER = logging.getLogger(__name__)

DetectorReturn = Union[MatchOutcome, str, None]
MatchFunction = Callable[[str, DetectionContext], DetectorReturn]


@dataclass(frozen=True)
class Detector:
    """A named matcher; lower priority runs first."""

    id: str
    priority: int
    match: MatchFunction


def normalize_outcome(value: DetectorReturn) -> MatchOutcome:
    """Accept plain strings and None from detectors alongside structured outcomes."""

    if value is None or value == "":
        return NO_MATCH
    if isinstance(value, str):
        return TextResult(value)
    if isinstance(value, (NoMatch, TextResult, EffectResult)):
        return value
    raise TypeError(f"unsupported detector result: {type(value).__name__}")


def _validate(detector: object) -> None:
    detector_id = getattr(detector, "id", None)
    if not isinstance(detector_id, str) or not detector_id:
        raise ValueError("detector id must be a non-empty string")
    priority = getattr(detector, "priority", None)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ValueError(f"detector {detector_id!r} priority must be an integer")
    if not callable(getattr(detector, "match", None)):
        raise ValueError(f"detector {detector_id!r} must define match(text, context)")


class DetectorRegistry:
    """Detectors sorted ascending by priority, stable for ties."""

    def __init__(self, detectors: Optional[Iterable[Detector]] = None) -> None:
        self._detectors: List[Detector] = []
        for detector in detectors or ():
            self.register(detector)

    def register(self, detector: Detector) -> None:
        """Add a detector after validating it; ids must be unique."""

        _validate(detector)
        if any(existing.id == detector.id for existing in self._detectors):
            raise ValueError(f"detector {detector.id!r} is already registered")
        self._detectors.append(detector)
        # sorted() is stable, so equal priorities keep registration order.
        self._detectors = sorted(self._detectors, key=lambda item: item.priority)

    def unregister(self, detector_id: str) -> bool:
        before = len(self._detectors)
        self._detectors = [item for item in self._detectors if item.id != detector_id]
        return len(self._detectors) != before

    def get(self, detector_id: str) -> Optional[Detector]:
        for detector in self._detectors:
            if detector.id == detector_id:
                return detector
        return None

    def all(self) -> tuple[Detector, ...]:
        return tuple(self._detectors)

    def __len__(self) -> int:
        return len(self._detectors)

    def process(self, text: str, context: DetectionContext) -> DetectionResult:
        """Run every detector in order and fold the outcomes.

        The first match provides the primary text. Scanning continues so
        later detectors still see the match log, and the last side effect
        recorded is the one reported.
        """

        primary: Optional[str] = None
        matched_id: Optional[str] = None
        raw: Optional[MatchOutcome] = None

        for detector in self._detectors:
            try:
                outcome = normalize_outcome(detector.match(text, context))
            except Exception:
                LOGGER.exception("Detector %s failed", detector.id)
                continue
            if isinstance(outcome, NoMatch):
                continue
            LOGGER.debug("Detector %s matched", detector.id)
            context = context.with_match(detector.id, outcome)
            if matched_id is None:
                primary = describe_outcome(outcome)
                matched_id = detector.id
                raw = outcome

        return DetectionResult(
            primary=primary,
            matched_id=matched_id,
            raw=raw,
            matches=context.matches,
            side_effect=context.side_effect,
            handled_by_navigation=context.handled_by_navigation,
        )

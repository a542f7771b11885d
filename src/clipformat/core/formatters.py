"""Formatter interface and the registry of named formatter implementations.

Detectors never reach for a formatter module directly. They look it up by
name in the registry carried on the detection context, so hooks can swap in
their own implementation after it passes validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Iterable, Optional, Protocol, runtime_checkable

from clipformat.core.config import FormatterConfig
from clipformat.core.patterns import PatternRegistry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatterOptions:
    """Read-only inputs every formatter receives alongside the text."""

    patterns: PatternRegistry
    config: FormatterConfig = field(default_factory=FormatterConfig)
    now: Optional[datetime] = None

    def current_time(self) -> datetime:
        return self.now or datetime.now()


@runtime_checkable
class Formatter(Protocol):
    """Candidate gate plus processor for one expression shape."""

    def is_candidate(self, text: str, options: FormatterOptions) -> bool:
        ...

    def process(self, text: str, options: FormatterOptions) -> Optional[str]:
        ...


class FormatterRegistry:
    """Named formatter implementations, validated on registration."""

    def __init__(self, formatters: Optional[dict[str, Formatter]] = None) -> None:
        self._formatters: dict[str, Formatter] = {}
        for name, formatter in (formatters or {}).items():
            self.register(name, formatter)

    def register(self, name: str, formatter: object) -> None:
        """Register or replace a formatter after checking it implements the interface."""

        if not isinstance(name, str) or not name:
            raise ValueError("formatter name must be a non-empty string")
        if not isinstance(formatter, Formatter):
            raise ValueError(f"formatter {name!r} must define is_candidate(text, options) and process(text, options)")
        if name in self._formatters:
            LOGGER.info("Replacing formatter %s", name)
        self._formatters[name] = formatter

    def get(self, name: str) -> Optional[Formatter]:
        return self._formatters.get(name)

    def names(self) -> Iterable[str]:
        return tuple(self._formatters)

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

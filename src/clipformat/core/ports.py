"""Ports (interfaces) used by the processing pipeline.

Ports define the minimal contracts for side-effect runners and rating-table
sources so that the core never touches the operating system directly.
"""

from __future__ import annotations

from typing import Mapping, Protocol

from clipformat.core.models import SideEffect


class EffectRunnerPort(Protocol):
    """Performs a side effect requested by a detector."""

    def run(self, effect: SideEffect) -> bool:
        ...


class RatingTablePort(Protocol):
    """Supplies the percent -> weeks table for rating conversions."""

    def load(self) -> Mapping[int, float]:
        ...

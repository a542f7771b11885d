"""State container for the scratchpad session."""

from __future__ import annotations

from dataclasses import dataclass, field

from clipformat.core.processor import FormatOutcome

from .constants import HISTORY_LIMIT


@dataclass
class ScratchpadState:
    seed_mode: bool = False
    last_outcome: FormatOutcome | None = None
    history: list[tuple[str, str]] = field(default_factory=list)

    def remember(self, source: str, formatted: str) -> None:
        self.history.insert(0, (source, formatted))
        del self.history[HISTORY_LIMIT:]

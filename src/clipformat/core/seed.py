"""Seed extraction.

A seed is the tail of a larger selection most likely to be an evaluable
expression. Strategies are tried in order and the first one that returns a
split wins, so "Total: 10+5" yields ("Total: ", "10+5").
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from clipformat.core.patterns import DEFAULT_REGISTRY, PatternRegistry

LOGGER = logging.getLogger(__name__)

Split = tuple[str, str]
Strategy = Callable[[str, PatternRegistry], Optional[Split]]

# Digits, operators, parens, whitespace and `c` for combination syntax.
_ARITHMETIC_CLASS = r"[\d.\s()+\-*/%^cC]"
_ARITHMETIC_WHOLE = re.compile(rf"^{_ARITHMETIC_CLASS}+$")
_ARITHMETIC_TAIL = re.compile(rf"\s+({_ARITHMETIC_CLASS}+)$")
_SEPARATORS = ("= ", ": ", "(", "[", "{")
_DATE_TOKEN_PATTERNS = ("date_token_iso", "date_token", "date_token_text")


def _has_operand(candidate: str) -> bool:
    return any(char.isdigit() for char in candidate) or "(" in candidate


def date_strategy(text: str, patterns: PatternRegistry) -> Optional[Split]:
    """Split right before the first date-shaped token."""

    starts = []
    for name in _DATE_TOKEN_PATTERNS:
        match = patterns.compiled(name).search(text)
        if match:
            starts.append(match.start())
    if not starts:
        return None
    first = min(starts)
    if first == 0:
        return "", text
    return text[:first], text[first:]


def arithmetic_strategy(text: str, patterns: PatternRegistry) -> Optional[Split]:
    """Take the whole string when it is pure arithmetic, else an arithmetic tail."""

    # Whole-string first so "5 + 3" is not split at its inner space.
    if _ARITHMETIC_WHOLE.match(text) and _has_operand(text):
        return "", text.strip()
    match = _ARITHMETIC_TAIL.search(text)
    if match and _has_operand(match.group(1)):
        return text[: match.start(1)], match.group(1)
    return None


def separator_strategy(text: str, patterns: PatternRegistry) -> Optional[Split]:
    """Split after the last `= `, `: `, `(`, `[` or `{`."""

    best_index = -1
    best_separator = ""
    for separator in _SEPARATORS:
        index = text.rfind(separator)
        if index > best_index:
            best_index, best_separator = index, separator
    if best_index < 0:
        return None

    cursor = best_index + len(best_separator)
    while cursor < len(text) and text[cursor].isspace():
        cursor += 1
    if cursor >= len(text):
        return None
    return text[:cursor], text[cursor:]


def whitespace_strategy(text: str, patterns: PatternRegistry) -> Optional[Split]:
    for index in range(len(text) - 1, -1, -1):
        if text[index].isspace():
            if index == len(text) - 1:
                return None
            return text[: index + 1], text[index + 1:]
    return None


def identity_strategy(text: str, patterns: PatternRegistry) -> Optional[Split]:
    return "", text.strip()


STRATEGIES: tuple[Strategy, ...] = (
    date_strategy,
    arithmetic_strategy,
    separator_strategy,
    whitespace_strategy,
    identity_strategy,
)


def extract_seed(text: Optional[str], patterns: Optional[PatternRegistry] = None) -> Split:
    """Return (prefix, seed); never raises."""

    working = (text or "").rstrip()
    if not working.strip():
        return "", ""
    registry = patterns or DEFAULT_REGISTRY
    for strategy in STRATEGIES:
        try:
            result = strategy(working, registry)
        except Exception:
            LOGGER.exception("Seed strategy %s failed", strategy.__name__)
            continue
        if result is not None:
            LOGGER.debug("Seed strategy %s split %r", strategy.__name__, working)
            return result
    return "", working.strip()

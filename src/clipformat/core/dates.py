"""Date-range parsing.

Scans text for date-shaped tokens, parses the first two into month/day/year
components, fills in missing years, and reports the inclusive span.
"""

from __future__ import annotations

from datetime import date, datetime
import logging
import re
from typing import List, Optional

from clipformat.core.formatters import FormatterOptions
from clipformat.core.models import DateComponents, DateRange
from clipformat.core.patterns import PatternRegistry

LOGGER = logging.getLogger(__name__)

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_ISO = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})")
_NUMERIC_FULL = re.compile(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})$")
_NUMERIC_SHORT = re.compile(r"^(\d{1,2})[-/.](\d{1,2})$")
_MONTH_FIRST = re.compile(
    r"^([a-z]+)\.?\s+(\d{1,2})(?:st|nd|rd|th)?(?:,?\s*(\d{2,4}))?$", re.IGNORECASE
)
_DAY_FIRST = re.compile(
    r"^(\d{1,2})(?:st|nd|rd|th)?\s+([a-z]+)\.?(?:,?\s*(\d{2,4}))?$", re.IGNORECASE
)
_EDGE_PUNCTUATION = re.compile(r"^[\s,\-:()]+|[\s,\-:()]+$")
_RANGE_CUE = re.compile(r" to | and | through | thru |[-–—]", re.IGNORECASE)
_WORD_CUE = re.compile(r" to | and | through | thru ", re.IGNORECASE)

_TOKEN_PATTERNS = ("date_token_iso", "date_token", "date_token_text")
# Year-less M/D tokens read as fractions unless a word joins them.
_SHORT_TOKEN_PATTERN = "date_token_short"

# Two-digit years more than this far ahead are read as last century.
_CENTURY_WINDOW = 30


def clean_token(token: str) -> str:
    return _EDGE_PUNCTUATION.sub("", token)


def normalize_year(raw: str, now: datetime) -> int:
    """Expand a two-digit year with the sliding-century rule."""

    year = int(raw)
    if year < 100:
        year += (now.year // 100) * 100
        if year > now.year + _CENTURY_WINDOW:
            year -= 100
    return year


def month_number(name: str) -> Optional[int]:
    return MONTHS.get(name.lower().rstrip("."))


def parse_components(token: str, now: datetime) -> Optional[DateComponents]:
    """Parse one date token; the first matching shape wins."""

    token = clean_token(token)
    if not token:
        return None

    month: Optional[int] = None
    day: Optional[int] = None
    year: Optional[int] = None

    match = _ISO.match(token)
    if match:
        year, month, day = int(match.group(1)), int(match.group(2)), int(match.group(3))
    elif _NUMERIC_FULL.match(token):
        match = _NUMERIC_FULL.match(token)
        month, day = int(match.group(1)), int(match.group(2))
        year = normalize_year(match.group(3), now)
    elif _NUMERIC_SHORT.match(token):
        match = _NUMERIC_SHORT.match(token)
        month, day = int(match.group(1)), int(match.group(2))
    elif _MONTH_FIRST.match(token):
        match = _MONTH_FIRST.match(token)
        month = month_number(match.group(1))
        day = int(match.group(2))
        if match.group(3):
            year = normalize_year(match.group(3), now)
    elif _DAY_FIRST.match(token):
        match = _DAY_FIRST.match(token)
        day = int(match.group(1))
        month = month_number(match.group(2))
        if match.group(3):
            year = normalize_year(match.group(3), now)

    if month is None or day is None:
        return None
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return DateComponents(month=month, day=day, year=year, year_was_inferred=year is None)


def collect_tokens(text: str, patterns: PatternRegistry) -> List[str]:
    """Return date-shaped tokens in reading order, without overlaps."""

    names = _TOKEN_PATTERNS
    if _WORD_CUE.search(text):
        names = names + (_SHORT_TOKEN_PATTERN,)

    spans: dict[tuple[int, int], str] = {}
    for name in names:
        for match in patterns.finditer(name, text):
            spans.setdefault(match.span(), match.group(0))

    ordered = sorted(spans.items(), key=lambda item: (item[0][0], -(item[0][1] - item[0][0])))
    tokens: List[str] = []
    last_end = -1
    for (start, end), raw in ordered:
        # ISO tokens also contain a shorter M-D token; keep the outer one.
        if start < last_end:
            continue
        cleaned = clean_token(raw)
        if cleaned:
            tokens.append(cleaned)
            last_end = end
    return tokens


def _parsed_tokens(text: str, options: FormatterOptions) -> List[DateComponents]:
    now = options.current_time()
    parsed = []
    for token in collect_tokens(text, options.patterns):
        components = parse_components(token, now)
        if components is not None:
            parsed.append(components)
    return parsed


def has_range_cue(text: str) -> bool:
    return _RANGE_CUE.search(text) is not None


def is_range_candidate(text: str, options: FormatterOptions) -> bool:
    if not text or not has_range_cue(text):
        return False
    return len(_parsed_tokens(text, options)) >= 2


def _build_date(year: int, components: DateComponents) -> Optional[date]:
    try:
        return date(year, components.month, components.day)
    except ValueError:
        return None


def _shift_year(value: date, delta: int) -> Optional[date]:
    try:
        return value.replace(year=value.year + delta)
    except ValueError:
        return None


def parse_range(text: str, options: FormatterOptions) -> Optional[DateRange]:
    """Return the validated, ordered range described by the first two dates."""

    if not text or not has_range_cue(text):
        return None
    parsed = _parsed_tokens(text, options)
    if len(parsed) < 2:
        return None
    first, second = parsed[0], parsed[1]

    current_year = options.current_time().year
    start_year = first.year if first.year is not None else (second.year if second.year is not None else current_year)
    end_year = second.year if second.year is not None else (first.year if first.year is not None else current_year)

    start = _build_date(start_year, first)
    end = _build_date(end_year, second)
    if start is None or end is None:
        LOGGER.debug("Rejected invalid calendar date in %r", text)
        return None

    if end < start:
        if second.year_was_inferred:
            end = _shift_year(end, 1) or end
        elif first.year_was_inferred:
            start = _shift_year(start, -1) or start
    if end < start:
        start, end = end, start

    return DateRange(start=start, end=end, inclusive_days=(end - start).days + 1)


def format_range(value: DateRange) -> str:
    return f"{value.start:%m/%d/%Y} to {value.end:%m/%d/%Y}, {value.inclusive_days} days"


def describe_range(text: str, options: FormatterOptions) -> Optional[str]:
    value = parse_range(text, options)
    if value is None:
        return None
    return format_range(value)


class DateRangeFormatter:
    """Formatter wrapper registered under the name `date_range`."""

    def is_candidate(self, text: str, options: FormatterOptions) -> bool:
        return is_range_candidate(text, options)

    def process(self, text: str, options: FormatterOptions) -> Optional[str]:
        return describe_range(text, options)

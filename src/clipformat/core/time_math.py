"""Time-of-day and calendar arithmetic.

Handles "9am + 2h", "14:30 - 45m", "now + 90 minutes", and date shifts
like "12/16/25 + 1 day" or "today - 2 weeks".
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
import re
from typing import Optional

from clipformat.core.dates import normalize_year

SECONDS_PER_DAY = 86400

_TIME_12 = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m?\.?$", re.IGNORECASE)
_TIME_24 = re.compile(r"^(\d{1,2}):(\d{2})$")

_TIME_EXPRESSION = re.compile(
    r"^(?P<base>now|\d{1,2}(?::\d{2})?\s*(?:[ap]\.?\s*m?\.?)?)\s*(?P<op>[+-])\s*(?P<duration>.+)$",
    re.IGNORECASE,
)
_DATE_EXPRESSION = re.compile(
    r"^(?P<base>today"
    r"|\d{4}\s*[-/.]\s*\d{1,2}\s*[-/.]\s*\d{1,2}"
    r"|\d{1,2}\s*[-/.]\s*\d{1,2}(?:\s*[-/.]\s*\d{2,4})?)"
    r"\s*(?P<op>[+-])\s*(?P<duration>.+)$",
    re.IGNORECASE,
)
_ISO_DATE = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")
_US_DATE = re.compile(r"^(\d{1,2})[-/.](\d{1,2})(?:[-/.](\d{2,4}))?$")

_DURATION_PART = re.compile(
    r"(\d+)\s*(hours?|hrs?|h|minutes?|mins?|m|seconds?|secs?|s)(?![a-z])", re.IGNORECASE
)
_DATE_DURATION_PART = re.compile(
    r"(\d+)\s*(days?|d|weeks?|wks?|w|months?|mos?|years?|yrs?|y)(?![a-z])", re.IGNORECASE
)
_FILLER = re.compile(r"^[\s,]*(?:and[\s,]*)*$", re.IGNORECASE)

_SECONDS_PER_UNIT = {"h": 3600, "m": 60, "s": 1}


def parse_time(text: str) -> Optional[tuple[int, int, Optional[str]]]:
    """Return (hour, minute, "am"/"pm"/None) for 12h or 24h input."""

    text = text.strip()
    match = _TIME_12.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if not 1 <= hour <= 12 or minute > 59:
            return None
        return hour, minute, match.group(3).lower() + "m"
    match = _TIME_24.match(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return hour, minute, None
    return None


def _consumes_all(pattern: re.Pattern, text: str) -> bool:
    return bool(_FILLER.match(pattern.sub("", text)))


def parse_duration(text: str) -> Optional[int]:
    """Return a duration like "2h30m" or "45 minutes" in seconds."""

    if not text or not _consumes_all(_DURATION_PART, text):
        return None
    total = 0
    for amount, unit in _DURATION_PART.findall(text):
        unit = unit.lower()
        key = "m" if unit.startswith("min") or unit == "m" else unit[0]
        total += int(amount) * _SECONDS_PER_UNIT[key]
    return total or None


def _to_seconds(hour: int, minute: int, meridiem: Optional[str]) -> int:
    if meridiem == "pm" and hour != 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    return hour * 3600 + minute * 60


def format_clock(seconds: int, twelve_hour: bool) -> str:
    seconds %= SECONDS_PER_DAY
    hour, remainder = divmod(seconds, 3600)
    minute = remainder // 60
    if not twelve_hour:
        return f"{hour}:{minute:02d}"
    suffix = "PM" if hour >= 12 else "AM"
    display = hour % 12 or 12
    return f"{display}:{minute:02d} {suffix}"


def shift_time(time_text: str, duration_text: str, sign: int) -> Optional[str]:
    parsed = parse_time(time_text)
    seconds = parse_duration(duration_text)
    if parsed is None or seconds is None:
        return None
    hour, minute, meridiem = parsed
    return format_clock(_to_seconds(hour, minute, meridiem) + sign * seconds, meridiem is not None)


def evaluate_time_expression(text: str, now: datetime) -> Optional[str]:
    """Return the shifted clock time, or None when text is not a time calculation."""

    match = _TIME_EXPRESSION.match(text.strip())
    if not match:
        return None
    base = match.group("base").strip()
    if base.lower() == "now":
        base = f"{now.hour}:{now.minute:02d}"
    sign = 1 if match.group("op") == "+" else -1
    return shift_time(base, match.group("duration"), sign)


def parse_date_duration(text: str) -> Optional[tuple[int, int]]:
    """Return (days, months) for durations like "1 week" or "2y 3mo"."""

    if not text or not _consumes_all(_DATE_DURATION_PART, text):
        return None
    days = months = 0
    for amount, unit in _DATE_DURATION_PART.findall(text):
        value = int(amount)
        unit = unit.lower()
        if unit.startswith("d"):
            days += value
        elif unit.startswith("w"):
            days += value * 7
        elif unit.startswith("mo"):
            months += value
        else:
            months += value * 12
    if not days and not months:
        return None
    return days, months


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""

    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    day = min(value.day, calendar.monthrange(year, month + 1)[1])
    return date(year, month + 1, day)


def parse_date(text: str, now: datetime) -> Optional[date]:
    text = re.sub(r"\s*([-/.])\s*", r"\1", text.strip())
    if text.lower() == "today":
        return now.date()
    try:
        match = _ISO_DATE.match(text)
        if match:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        match = _US_DATE.match(text)
        if match:
            year = normalize_year(match.group(3), now) if match.group(3) else now.year
            return date(year, int(match.group(1)), int(match.group(2)))
    except ValueError:
        return None
    return None


def shift_date(base: date, days: int, months: int, sign: int) -> Optional[date]:
    try:
        shifted = add_months(base, sign * months)
        return shifted + timedelta(days=sign * days)
    except (ValueError, OverflowError):
        return None


def evaluate_date_expression(text: str, now: datetime) -> Optional[str]:
    """Return the shifted date as MM/DD/YYYY, or None when text is not a date calculation."""

    match = _DATE_EXPRESSION.match(text.strip())
    if not match:
        return None
    base = parse_date(match.group("base"), now)
    duration = parse_date_duration(match.group("duration"))
    if base is None or duration is None:
        return None
    sign = 1 if match.group("op") == "+" else -1
    shifted = shift_date(base, duration[0], duration[1], sign)
    if shifted is None:
        return None
    return f"{shifted:%m/%d/%Y}"

"""Number normalization and display helpers."""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_TRAILING_DIGITS = re.compile(r",(\d+)$")


def normalize_number_token(token: str) -> str:
    """Return a localized number token rewritten with a `.` decimal point.

    - both `,` and `.` present: the rightmost one is the decimal separator
    - only `,` present: decimal unless exactly three digits follow the last one
    """

    cleaned = token.replace("$", "").strip()
    cleaned = "".join(cleaned.split())
    sign = ""
    if cleaned[:1] in {"+", "-"}:
        sign, cleaned = cleaned[0], cleaned[1:]

    has_comma = "," in cleaned
    has_dot = "." in cleaned
    if has_comma and has_dot:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "")
            head, _, tail = cleaned.rpartition(",")
            cleaned = head.replace(",", "") + "." + tail
        else:
            cleaned = cleaned.replace(",", "")
    elif has_comma:
        match = _TRAILING_DIGITS.search(cleaned)
        if match and len(match.group(1)) != 3:
            head, _, tail = cleaned.rpartition(",")
            cleaned = head.replace(",", "") + "." + tail
        else:
            cleaned = cleaned.replace(",", "")
    return sign + cleaned


def round_half_up(value: float, places: int = 2) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_currency(value: float) -> str | None:
    """Return value as `$1,234.56` (or `-$1,234.56`), None when not finite."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    rounded = round_half_up(float(value))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def format_number(value: float) -> str:
    """Return an integer-looking value without decimals, else up to 15 significant digits."""

    nearest = round(value)
    if abs(value - nearest) < 1e-9:
        return str(int(nearest))
    return format(value, ".15g")


def format_percent(value: float) -> str:
    """Return a 0..1 fraction as a whole percent, rounding half up."""

    return str(math.floor(round(value * 100, 9) + 0.5))

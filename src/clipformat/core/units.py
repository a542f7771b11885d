"""Unit conversion for "100km to mi" style input."""

from __future__ import annotations

import re
from typing import Callable, Optional

from clipformat.core.numbers import normalize_number_token

# Factors convert one unit into its category's base unit.
LINEAR_UNITS: dict[str, dict[str, float]] = {
    "length": {
        "m": 1.0,
        "km": 1000.0,
        "mi": 1609.344,
        "ft": 0.3048,
        "in": 0.0254,
        "cm": 0.01,
        "mm": 0.001,
    },
    "weight": {
        "kg": 1.0,
        "g": 0.001,
        "lb": 0.453592,
        "oz": 0.0283495,
    },
    "data": {
        "mb": 1e6,
        "gb": 1e9,
        "tb": 1e12,
    },
    "speed": {
        "mph": 0.44704,
        "kph": 0.277778,
        "m/s": 1.0,
    },
}

# Temperatures go through Fahrenheit: (to_f, from_f).
TEMPERATURE_UNITS: dict[str, tuple[Callable[[float], float], Callable[[float], float]]] = {
    "c": (lambda c: c * 9 / 5 + 32, lambda f: (f - 32) * 5 / 9),
    "f": (lambda f: f, lambda f: f),
    "k": (lambda k: k * 9 / 5 - 459.67, lambda f: (f + 459.67) * 5 / 9),
}

_ALIASES = {
    "°c": "c", "°f": "f", "kmh": "kph", "km/h": "kph", "lbs": "lb",
}

_CONVERSION = re.compile(
    r"^([+-]?[\d.,]+)\s*([a-z°/]+)\s+(?:to|in)\s+([a-z°/]+)$", re.IGNORECASE
)


def _canonical(unit: str) -> str:
    lowered = unit.lower()
    return _ALIASES.get(lowered, lowered)


def _category(unit: str) -> Optional[str]:
    if unit in TEMPERATURE_UNITS:
        return "temperature"
    for name, table in LINEAR_UNITS.items():
        if unit in table:
            return name
    return None


def convert(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Return value converted between two units of the same category."""

    source, target = _canonical(from_unit), _canonical(to_unit)
    category = _category(source)
    if category is None or category != _category(target):
        return None
    if category == "temperature":
        to_f = TEMPERATURE_UNITS[source][0]
        from_f = TEMPERATURE_UNITS[target][1]
        return from_f(to_f(value))
    table = LINEAR_UNITS[category]
    return value * table[source] / table[target]


def format_quantity(value: float) -> str:
    if abs(value) < 0.01:
        return format(value, ".6g")
    formatted = f"{value:.2f}"
    if abs(value) < 1000:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def is_conversion_candidate(text: str) -> bool:
    return bool(text) and _CONVERSION.match(text.strip()) is not None


def format_conversion(text: str) -> Optional[str]:
    """Return "<converted> <target unit>" for "100km to mi", else None."""

    match = _CONVERSION.match(text.strip())
    if not match:
        return None
    raw_value, from_unit, to_unit = match.groups()
    try:
        value = float(normalize_number_token(raw_value))
    except ValueError:
        return None
    result = convert(value, from_unit, to_unit)
    if result is None:
        return None
    return f"{format_quantity(result)} {to_unit}"

"""Built-in detectors.

Each detector gates the input with a cheap candidate check, then either
delegates to a named formatter from the context or does its own small
transformation.
"""

from __future__ import annotations

import logging
import re
from typing import List

from clipformat.core.arithmetic import ArithmeticFormatter
from clipformat.core.context import DetectionContext
from clipformat.core.dates import DateRangeFormatter
from clipformat.core.formatters import FormatterRegistry
from clipformat.core.models import NO_MATCH, MatchOutcome, TextResult
from clipformat.core.navigation import match_navigation
from clipformat.core.numbers import format_currency, format_percent
from clipformat.core.phone import PhoneFormatter
from clipformat.core.registry import Detector, DetectorRegistry
from clipformat.core.time_math import evaluate_date_expression, evaluate_time_expression
from clipformat.core.units import format_conversion, is_conversion_candidate

LOGGER = logging.getLogger(__name__)

PRIORITY_PHONE = 50
PRIORITY_COMBINATIONS = 60
PRIORITY_RATING = 70
PRIORITY_DATE_RANGE = 80
PRIORITY_UNITS = 80
PRIORITY_TIME_CALC = 90
PRIORITY_ARITHMETIC = 100
PRIORITY_NAVIGATION = 10000

_COMBINATION_NOISE = re.compile(r"[\d\s_c%]", re.IGNORECASE)
_INTEGER = re.compile(r"\d+")
# Letters other than the `c` separators tolerated in combination input.
_MAX_STRAY_CHARACTERS = 2


def _run_formatter(name: str, text: str, context: DetectionContext) -> MatchOutcome:
    formatter = context.formatters.get(name)
    if formatter is None:
        return NO_MATCH
    options = context.options()
    if not formatter.is_candidate(text, options):
        return NO_MATCH
    result = formatter.process(text, options)
    return TextResult(result) if result else NO_MATCH


def match_arithmetic(text: str, context: DetectionContext) -> MatchOutcome:
    return _run_formatter("arithmetic", text, context)


def match_date_range(text: str, context: DetectionContext) -> MatchOutcome:
    return _run_formatter("date_range", text, context)


def match_phone(text: str, context: DetectionContext) -> MatchOutcome:
    return _run_formatter("phone", text, context)


def match_rating(text: str, context: DetectionContext) -> MatchOutcome:
    """Convert "15% PD" into weeks and dollars using the rating table."""

    match = context.patterns.match("pd_rating", text.strip())
    if not match:
        return NO_MATCH
    percent = int(match.group(1))
    weeks = context.rating_table.get(percent)
    if weeks is None:
        LOGGER.info("No rating table entry for %s%%", percent)
        return NO_MATCH
    amount = format_currency(weeks * context.config.rating.benefit_per_week)
    if amount is None:
        return NO_MATCH
    return TextResult(f"{percent}% PD = {weeks:.2f} weeks = {amount}")


def combine_percentages(values: List[int]) -> str:
    """Chain ratings largest first with running + p * (1 - running)."""

    ordered = sorted(values, reverse=True)
    running = ordered[0] / 100
    parts = [f"{ordered[0]}%"]
    for value in ordered[1:]:
        running = running + (value / 100) * (1 - running)
        parts.append(f"c {value}% = {format_percent(running)}%")
    return " ".join(parts)


def match_combinations(text: str, context: DetectionContext) -> MatchOutcome:
    if "c" not in text.lower():
        return NO_MATCH
    if len(_COMBINATION_NOISE.sub("", text)) > _MAX_STRAY_CHARACTERS:
        return NO_MATCH
    values = [int(value) for value in _INTEGER.findall(text)]
    if len(values) < 2:
        return NO_MATCH
    return TextResult(combine_percentages(values))


def match_units(text: str, context: DetectionContext) -> MatchOutcome:
    if not is_conversion_candidate(text):
        return NO_MATCH
    result = format_conversion(text)
    return TextResult(result) if result else NO_MATCH


def match_time_calc(text: str, context: DetectionContext) -> MatchOutcome:
    """Date shifts first ("12/16/25 + 1 day"), then clock arithmetic ("9am + 2h")."""

    result = evaluate_date_expression(text, context.now)
    if result is None:
        result = evaluate_time_expression(text, context.now)
    return TextResult(result) if result else NO_MATCH


def default_formatters() -> FormatterRegistry:
    return FormatterRegistry(
        {
            "arithmetic": ArithmeticFormatter(),
            "date_range": DateRangeFormatter(),
            "phone": PhoneFormatter(),
        }
    )


def default_detectors() -> List[Detector]:
    return [
        Detector("arithmetic", PRIORITY_ARITHMETIC, match_arithmetic),
        Detector("date_range", PRIORITY_DATE_RANGE, match_date_range),
        Detector("units", PRIORITY_UNITS, match_units),
        Detector("time_calc", PRIORITY_TIME_CALC, match_time_calc),
        Detector("pd_conversion", PRIORITY_RATING, match_rating),
        Detector("combinations", PRIORITY_COMBINATIONS, match_combinations),
        Detector("phone", PRIORITY_PHONE, match_phone),
        Detector("navigation", PRIORITY_NAVIGATION, match_navigation),
    ]


def build_registry() -> DetectorRegistry:
    return DetectorRegistry(default_detectors())

from __future__ import annotations

from datetime import datetime

from clipformat.core.config import FormatterConfig, NavigationConfig, RatingConfig
from clipformat.core.context import DetectionContext
from clipformat.core.detectors import (
    combine_percentages,
    default_formatters,
    match_combinations,
    match_phone,
    match_rating,
    match_time_calc,
    match_units,
)
from clipformat.core.models import NO_MATCH, EffectResult, MatchEntry, TextResult
from clipformat.core.navigation import classify, match_navigation
from clipformat.core.patterns import PatternRegistry

NOW = datetime(2026, 1, 15, 10, 0)


def _make_context(config: FormatterConfig | None = None, rating_table: dict | None = None) -> DetectionContext:
    return DetectionContext(
        config=config or FormatterConfig(),
        patterns=PatternRegistry(),
        formatters=default_formatters(),
        rating_table=rating_table or {},
        now=NOW,
    )


def test_phone_records() -> None:
    context = _make_context()
    assert match_phone("5551234567;home", context) == TextResult("(555) 123-4567,,,home")
    assert match_phone("555-123-4567;home;ext 5", context) == TextResult("(555) 123-4567,,,home,,,ext 5")
    assert match_phone("12345;home", context) is NO_MATCH
    assert match_phone("5551234567", context) is NO_MATCH


def test_combinations_chain_largest_first() -> None:
    context = _make_context()
    assert match_combinations("50 c 30", context) == TextResult("50% c 30% = 65%")
    assert match_combinations("20 c 40 c 10", context) == TextResult("40% c 20% = 52% c 10% = 57%")
    assert combine_percentages([10, 5, 3]) == "10% c 5% = 15% c 3% = 17%"


def test_combinations_reject_prose() -> None:
    context = _make_context()
    assert match_combinations("cats 5 and dogs 6", context) is NO_MATCH
    assert match_combinations("50 c", context) is NO_MATCH
    assert match_combinations("50 30", context) is NO_MATCH


def test_rating_conversion_uses_table_and_rate() -> None:
    config = FormatterConfig(rating=RatingConfig(benefit_per_week=300))
    context = _make_context(config=config, rating_table={15: 10.0})

    assert match_rating("15% PD", context) == TextResult("15% PD = 10.00 weeks = $3,000.00")
    assert match_rating("15pd", context) == TextResult("15% PD = 10.00 weeks = $3,000.00")
    assert match_rating("16% PD", context) is NO_MATCH
    assert match_rating("PD 15", context) is NO_MATCH


def test_unit_conversions() -> None:
    context = _make_context()
    assert match_units("100km to mi", context) == TextResult("62.14 mi")
    assert match_units("0 C to F", context) == TextResult("32 F")
    assert match_units("100 F in C", context) == TextResult("37.78 C")
    assert match_units("1 mi to ft", context) == TextResult("5280.00 ft")
    assert match_units("5 kg to mi", context) is NO_MATCH
    assert match_units("100km mi", context) is NO_MATCH


def test_time_arithmetic() -> None:
    context = _make_context()
    assert match_time_calc("9am + 2h", context) == TextResult("11:00 AM")
    assert match_time_calc("14:30 - 45m", context) == TextResult("13:45")
    assert match_time_calc("11pm + 2h", context) == TextResult("1:00 AM")
    assert match_time_calc("00:30 - 1h", context) == TextResult("23:30")
    assert match_time_calc("9:15 am + 2h30m", context) == TextResult("11:45 AM")
    assert match_time_calc("now + 90 minutes", context) == TextResult("11:30")
    assert match_time_calc("9 + 2", context) is NO_MATCH


def test_date_arithmetic() -> None:
    context = _make_context()
    assert match_time_calc("12/16/25 + 1 day", context) == TextResult("12/17/2025")
    assert match_time_calc("2025-12-16 + 1 week", context) == TextResult("12/23/2025")
    assert match_time_calc("1/31/2024 + 1 month", context) == TextResult("02/29/2024")
    assert match_time_calc("today - 2 weeks", context) == TextResult("01/01/2026")
    assert match_time_calc("3/1 + 1y", context) == TextResult("03/01/2027")
    assert match_time_calc("12/16/25 + 1 fortnight", context) is NO_MATCH


def test_navigation_classification() -> None:
    search = "https://kagi.com/search?q="
    assert classify("~/Documents", search).kind == "open_path"
    assert classify("../notes.txt", search).kind == "open_path"
    assert classify("/usr/local", search).kind == "open_path"
    assert classify("https://example.com/a", search).kind == "open_url"
    assert classify("obsidian://open?vault=x", search).kind == "open_app_url"

    effect = classify("hello world", search)
    assert effect.kind == "web_search"
    assert effect.payload == "https://kagi.com/search?q=hello%20world"
    assert effect.message == "Searching Kagi"


def test_navigation_guards() -> None:
    outcome = match_navigation("  https://example.com  ", _make_context())
    assert isinstance(outcome, EffectResult)
    assert outcome.display_text == "https://example.com"

    disabled = _make_context(config=FormatterConfig(navigation=NavigationConfig(enabled=False)))
    assert match_navigation("https://example.com", disabled) is NO_MATCH

    matched = _make_context().with_match("arithmetic", TextResult("4"))
    assert matched.matches == (MatchEntry(detector_id="arithmetic", raw="4"),)
    assert match_navigation("https://example.com", matched) is NO_MATCH

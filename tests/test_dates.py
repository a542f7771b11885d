from __future__ import annotations

from datetime import date, datetime

from clipformat.core.dates import (
    collect_tokens,
    describe_range,
    is_range_candidate,
    normalize_year,
    parse_components,
    parse_range,
)
from clipformat.core.formatters import FormatterOptions
from clipformat.core.patterns import PatternRegistry

NOW = datetime(2026, 1, 15, 9, 30)


def _options() -> FormatterOptions:
    return FormatterOptions(patterns=PatternRegistry(), now=NOW)


def test_same_day_range_counts_one_day() -> None:
    assert describe_range("01/01/2024 to 01/01/2024", _options()) == "01/01/2024 to 01/01/2024, 1 days"


def test_explicit_year_rollover() -> None:
    assert describe_range("12/30/2024 - 1/2/2025", _options()) == "12/30/2024 to 01/02/2025, 4 days"


def test_two_digit_years() -> None:
    result = describe_range("5/6/23 to 5/7/23", _options())
    assert result == "05/06/2023 to 05/07/2023, 2 days"


def test_textual_months() -> None:
    result = describe_range("May 6, 2023 to June 7, 2023", _options())
    assert result == "05/06/2023 to 06/07/2023, 33 days"


def test_iso_timestamps() -> None:
    result = describe_range("2023-05-06T10:00:00Z through 2023-05-07", _options())
    assert result == "05/06/2023 to 05/07/2023, 2 days"


def test_inferred_end_year_moves_forward() -> None:
    result = describe_range("Dec 30, 2023 to Jan 2", _options())
    assert result == "12/30/2023 to 01/02/2024, 4 days"


def test_inferred_start_year_moves_back() -> None:
    result = describe_range("Dec 30 to Jan 2, 2025", _options())
    assert result == "12/30/2024 to 01/02/2025, 4 days"


def test_missing_years_use_current_year() -> None:
    assert describe_range("3/1 to 3/5", _options()) == "03/01/2026 to 03/05/2026, 5 days"


def test_reversed_explicit_dates_are_swapped() -> None:
    value = parse_range("01/05/2024 to 01/01/2024", _options())
    assert value is not None
    assert value.start == date(2024, 1, 1)
    assert value.end == date(2024, 1, 5)
    assert value.inclusive_days == 5


def test_invalid_calendar_dates_are_rejected() -> None:
    assert describe_range("02/30/2024 to 03/01/2024", _options()) is None
    assert describe_range("02/29/2024 to 03/01/2024", _options()) == "02/29/2024 to 03/01/2024, 2 days"


def test_range_requires_cue_and_two_dates() -> None:
    options = _options()
    assert not is_range_candidate("5/6/23 5/7/23", options)
    assert not is_range_candidate("5/6/23 to tomorrow", options)
    assert is_range_candidate("5/6/23 and 5/7/23", options)


def test_collect_tokens_drops_nested_matches() -> None:
    tokens = collect_tokens("2023-05-06 to 2023-05-07", PatternRegistry())
    assert tokens == ["2023-05-06", "2023-05-07"]


def test_parse_components_shapes() -> None:
    iso = parse_components("2024-03-09", NOW)
    assert iso is not None and (iso.month, iso.day, iso.year) == (3, 9, 2024)

    short = parse_components("3/9", NOW)
    assert short is not None and short.year is None and short.year_was_inferred

    day_first = parse_components("15 March 2024", NOW)
    assert day_first is not None and (day_first.month, day_first.day, day_first.year) == (3, 15, 2024)

    assert parse_components("13/40", NOW) is None
    assert parse_components("Smarch 5", NOW) is None


def test_sliding_century() -> None:
    assert normalize_year("30", NOW) == 2030
    assert normalize_year("56", NOW) == 2056
    assert normalize_year("57", NOW) == 1957
    assert normalize_year("1999", NOW) == 1999


def test_dash_between_fractions_is_not_a_range() -> None:
    options = _options()
    assert not is_range_candidate("1/2 - 1/4", options)
    assert not is_range_candidate("1-2-3-4", options)
    assert collect_tokens("1/2 - 1/4", PatternRegistry()) == []
    assert collect_tokens("1/2 to 1/4", PatternRegistry()) == ["1/2", "1/4"]

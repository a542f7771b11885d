from __future__ import annotations

from clipformat.core.numbers import format_currency, format_number, format_percent, normalize_number_token


def test_normalize_number_token() -> None:
    assert normalize_number_token("1.234,5") == "1234.5"
    assert normalize_number_token("1,234.5") == "1234.5"
    assert normalize_number_token("1,234") == "1234"
    assert normalize_number_token("3,14") == "3.14"
    assert normalize_number_token("-$1,000") == "-1000"


def test_format_currency() -> None:
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-5) == "-$5.00"
    assert format_currency(2.675) == "$2.68"
    assert format_currency(-0.001) == "$0.00"
    assert format_currency(float("inf")) is None


def test_format_number_and_percent() -> None:
    assert format_number(14.0) == "14"
    assert format_number(2.5) == "2.5"
    assert format_number(3.0000000001) == "3"
    assert format_percent(0.145) == "15"
    assert format_percent(0.568) == "57"

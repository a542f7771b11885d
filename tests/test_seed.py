from __future__ import annotations

from clipformat.core.patterns import DEFAULT_REGISTRY, PatternRegistry
from clipformat.core.seed import extract_seed


def test_label_prefix_is_split_off() -> None:
    assert extract_seed("Total: 10+5") == ("Total: ", "10+5")


def test_pure_expression_is_not_split_at_inner_space() -> None:
    assert extract_seed("5 + 3") == ("", "5 + 3")


def test_whitespace_fallback() -> None:
    assert extract_seed("hello world") == ("hello ", "world")


def test_blank_input() -> None:
    assert extract_seed("") == ("", "")
    assert extract_seed("   \n") == ("", "")
    assert extract_seed(None) == ("", "")


def test_date_tokens_win() -> None:
    assert extract_seed("Trip 5/6/23 to 5/7/23") == ("Trip ", "5/6/23 to 5/7/23")
    assert extract_seed("May 6, 2023 to June 7, 2023") == ("", "May 6, 2023 to June 7, 2023")


def test_trailing_whitespace_is_ignored() -> None:
    assert extract_seed("Sum: 2(3+4)\n") == ("Sum: ", "2(3+4)")


def test_combination_syntax_counts_as_arithmetic() -> None:
    assert extract_seed("Rating 50 c 30") == ("Rating ", "50 c 30")


def test_separator_strategy() -> None:
    assert extract_seed("call(foo") == ("call(", "foo")


def test_identity_fallback() -> None:
    assert extract_seed("word") == ("", "word")


def test_default_registry_is_shared() -> None:
    text = "Trip 5/6/23 to 5/7/23"

    assert extract_seed(text) == extract_seed(text, DEFAULT_REGISTRY)
    assert extract_seed(text) == extract_seed(text, PatternRegistry())
    assert extract_seed("hello 1/2 - 1/4") == ("hello ", "1/2 - 1/4")

from __future__ import annotations

import json

import pytest

from clipformat.core.config import DEFAULT_SEARCH_URL, FormatterConfig
from clipformat.settings import ConfigError, build_formatter_config, build_settings, load_config, load_settings


def test_empty_config_uses_defaults() -> None:
    config = build_formatter_config({})

    assert config == FormatterConfig()
    assert config.rating.benefit_per_week == 290
    assert config.processing.throttle_ms == 500
    assert config.navigation.search_url == DEFAULT_SEARCH_URL


def test_sections_are_read() -> None:
    config = build_formatter_config(
        {
            "templates": {"arithmetic": "${input} = ${result}"},
            "rating": {"benefit_per_week": 310.5, "table_paths": "data/pd.txt"},
            "processing": {"throttle_ms": 250},
            "navigation": {"enabled": False, "search_url": "https://duckduckgo.com/?q="},
        }
    )

    assert config.templates.arithmetic == "${input} = ${result}"
    assert config.rating.benefit_per_week == 310.5
    assert config.rating.table_paths == ("data/pd.txt",)
    assert config.processing.throttle_ms == 250
    assert not config.navigation.enabled
    assert config.navigation.search_url == "https://duckduckgo.com/?q="


@pytest.mark.parametrize(
    "raw",
    [
        {"templates": "nope"},
        {"rating": {"benefit_per_week": "lots"}},
        {"processing": {"throttle_ms": -1}},
        {"navigation": {"enabled": "yes"}},
        {"rating": {"table_paths": [1, 2]}},
    ],
)
def test_bad_values_raise_config_error(raw: dict) -> None:
    with pytest.raises(ConfigError):
        build_formatter_config(raw)


def test_hooks_must_be_strings() -> None:
    with pytest.raises(ConfigError):
        build_settings({"hooks": [1]})


def test_missing_file_means_defaults(tmp_path) -> None:
    assert load_config(str(tmp_path / "missing.json")) == {}


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_load_settings_reads_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"hooks": ["my_hooks:register"], "logging": {"enabled": False}}),
        encoding="utf-8",
    )

    loaded = load_settings(str(path))

    assert loaded.hooks == ("my_hooks:register",)
    assert loaded.logging == {"enabled": False}
    assert loaded.path == str(path)

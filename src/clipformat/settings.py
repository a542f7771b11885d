"""Static configuration for clipformat.

All user-editable settings (templates, rating table, throttling, navigation,
hooks, logging) live in a single JSON file for quick edits without touching
Python.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from typing import Any, Optional

from dotenv import load_dotenv

from clipformat.core.config import (
    DEFAULT_SEARCH_URL,
    FormatterConfig,
    NavigationConfig,
    ProcessingConfig,
    RatingConfig,
    TemplateConfig,
)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

# config.json sits at the project root unless CLIPFORMAT_CONFIG points elsewhere.
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")
CONFIG_ENV_VAR = "CLIPFORMAT_CONFIG"
LOG_LEVEL_ENV_VAR = "CLIPFORMAT_LOG_LEVEL"


class ConfigError(ValueError):
    """Raised when config.json has the wrong shape."""


@dataclass(frozen=True)
class Settings:
    """Everything the app layer needs from config.json."""

    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    hooks: tuple[str, ...] = ()
    logging: dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None


def config_path() -> str:
    load_dotenv()
    return os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_config(path: Optional[str] = None) -> dict:
    """Load config.json; a missing file means defaults."""

    target = path or config_path()
    if not os.path.exists(target):
        return {}
    try:
        with open(target, "r", encoding="utf-8") as handle:
            loaded = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{target}: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{target}: config root must be an object")
    return loaded


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be an object")
    return value


def _number(section: dict, key: str, default: float, label: str) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{label}.{key}' must be a number")
    if value < 0:
        raise ConfigError(f"'{label}.{key}' must not be negative")
    return value


def _optional_string(section: dict, key: str, label: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{label}.{key}' must be a string")
    return value or None


def build_formatter_config(raw: dict) -> FormatterConfig:
    """Validate the raw JSON and return the frozen snapshot the core expects."""

    templates = _section(raw, "templates")
    rating = _section(raw, "rating")
    processing = _section(raw, "processing")
    navigation = _section(raw, "navigation")

    table_paths = rating.get("table_paths", [])
    if isinstance(table_paths, str):
        table_paths = [table_paths]
    if not isinstance(table_paths, list) or not all(isinstance(item, str) for item in table_paths):
        raise ConfigError("'rating.table_paths' must be a list of strings")

    enabled = navigation.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError("'navigation.enabled' must be true or false")

    return FormatterConfig(
        templates=TemplateConfig(arithmetic=_optional_string(templates, "arithmetic", "templates")),
        rating=RatingConfig(
            benefit_per_week=float(_number(rating, "benefit_per_week", 290, "rating")),
            table_paths=tuple(table_paths),
        ),
        processing=ProcessingConfig(throttle_ms=int(_number(processing, "throttle_ms", 500, "processing"))),
        navigation=NavigationConfig(
            enabled=enabled,
            search_url=_optional_string(navigation, "search_url", "navigation") or DEFAULT_SEARCH_URL,
            file_manager=_optional_string(navigation, "file_manager", "navigation"),
        ),
    )


def build_settings(raw: dict, path: Optional[str] = None) -> Settings:
    hooks = raw.get("hooks", [])
    if not isinstance(hooks, list) or not all(isinstance(item, str) for item in hooks):
        raise ConfigError("'hooks' must be a list of 'module:function' strings")
    return Settings(
        formatter=build_formatter_config(raw),
        hooks=tuple(hooks),
        logging=_section(raw, "logging"),
        path=path,
    )


def load_settings(path: Optional[str] = None) -> Settings:
    target = path or config_path()
    return build_settings(load_config(target), target)

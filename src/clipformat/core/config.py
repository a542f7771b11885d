"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_SEARCH_URL = "https://kagi.com/search?q="


@dataclass(frozen=True)
class TemplateConfig:
    """Output templates applied after a successful evaluation."""

    arithmetic: Optional[str] = None


@dataclass(frozen=True)
class RatingConfig:
    """Permanent-disability rating settings used by the rating detector."""

    benefit_per_week: float = 290.0
    table_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProcessingConfig:
    """Pipeline-level settings."""

    throttle_ms: int = 500


@dataclass(frozen=True)
class NavigationConfig:
    """Navigation detector settings consumed by the effect runner."""

    enabled: bool = True
    search_url: str = DEFAULT_SEARCH_URL
    file_manager: Optional[str] = None


@dataclass(frozen=True)
class FormatterConfig:
    """Read-only configuration snapshot handed to detectors and formatters."""

    templates: TemplateConfig = field(default_factory=TemplateConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)

"""User hook loading.

Hooks are "module:function" strings from config.json. Each function is
called with the processor and may register extra detectors or formatters.
"""

from __future__ import annotations

import importlib
import logging
from typing import Callable, Iterable

from clipformat.core.processor import TextProcessor

LOGGER = logging.getLogger(__name__)


def resolve_hook(target: str) -> Callable[[TextProcessor], None]:
    """Import "package.module:function" and return the callable."""

    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"hook must look like 'module:function', got {target!r}")
    module = importlib.import_module(module_name)
    hook = getattr(module, attribute)
    if not callable(hook):
        raise ValueError(f"hook {target!r} is not callable")
    return hook


def apply_hooks(processor: TextProcessor, targets: Iterable[str]) -> list[str]:
    """Run each hook; failures are logged and skipped. Returns the applied targets."""

    applied: list[str] = []
    for target in targets:
        try:
            hook = resolve_hook(target)
            hook(processor)
        except Exception:
            LOGGER.exception("Failed to apply hook %s", target)
            continue
        applied.append(target)
        LOGGER.info("Applied hook %s", target)
    return applied

"""Navigation detector.

Runs last and only when nothing else matched. It never opens anything
itself; it returns a side-effect descriptor for an effect runner.
"""

from __future__ import annotations

import re

from clipformat.core.context import DetectionContext
from clipformat.core.models import NO_MATCH, EffectResult, MatchOutcome, SideEffect
from clipformat.core.strings import url_encode

EFFECT_OPEN_PATH = "open_path"
EFFECT_OPEN_URL = "open_url"
EFFECT_OPEN_APP_URL = "open_app_url"
EFFECT_WEB_SEARCH = "web_search"

_HTTP_URL = re.compile(r"^https?://\S+$", re.IGNORECASE)
_APP_URL = re.compile(r"^[a-z][\w+\-.]*:\S", re.IGNORECASE)
_LOCAL_PATH = re.compile(r"^(?:~|\.{1,2})?/\S")


def classify(text: str, search_url: str) -> SideEffect:
    """Return the side effect that navigates to text."""

    if _LOCAL_PATH.match(text):
        return SideEffect(kind=EFFECT_OPEN_PATH, payload=text, message="Opened in file manager")
    if _HTTP_URL.match(text):
        return SideEffect(kind=EFFECT_OPEN_URL, payload=text, message="Opened in browser")
    if _APP_URL.match(text):
        return SideEffect(kind=EFFECT_OPEN_APP_URL, payload=text, message="Opened app link")
    return SideEffect(
        kind=EFFECT_WEB_SEARCH,
        payload=search_url + url_encode(text),
        message="Searching Kagi" if "kagi.com" in search_url else "Searching the web",
    )


def match_navigation(text: str, context: DetectionContext) -> MatchOutcome:
    settings = context.config.navigation
    if not settings.enabled:
        return NO_MATCH
    # Only navigate when every other detector declined.
    if context.matches:
        return NO_MATCH
    trimmed = text.strip()
    if not trimmed:
        return NO_MATCH
    return EffectResult(display_text=trimmed, effect=classify(trimmed, settings.search_url))

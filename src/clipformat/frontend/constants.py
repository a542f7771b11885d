"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT = "#E5A50A"
HISTORY_LIMIT = 50
CLIP_WIDTH = 48

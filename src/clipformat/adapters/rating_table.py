"""Rating table file adapter.

Loads "percent: weeks" lines from disk and caches them per path so the
core only ever receives an in-memory mapping.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Iterable, Optional

LOGGER = logging.getLogger(__name__)

_ENTRY = re.compile(r"(\d+)\s*:\s*([\d.]+)")


def parse_rating_lines(lines: Iterable[str]) -> dict[int, float]:
    """Parse "15: 10.0" entries; anything else is ignored."""

    table: dict[int, float] = {}
    for line in lines:
        match = _ENTRY.search(line)
        if not match:
            continue
        try:
            table[int(match.group(1))] = float(match.group(2))
        except ValueError:
            LOGGER.warning("Skipping malformed rating entry: %s", line.strip())
    return table


def read_rating_file(path: str) -> dict[int, float]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return parse_rating_lines(handle)
    except OSError as exc:
        LOGGER.warning("Unable to read rating table %s: %s", path, exc.strerror or exc)
        return {}


class RatingTableCache:
    """Satisfies RatingTablePort by trying candidate paths in order."""

    def __init__(self, candidate_paths: Iterable[str], base_dir: Optional[str] = None) -> None:
        self._candidates = [self._resolve(path, base_dir) for path in candidate_paths if path]
        self._cache: dict[str, dict[int, float]] = {}
        self.loaded_path: Optional[str] = None

    @staticmethod
    def _resolve(path: str, base_dir: Optional[str]) -> str:
        expanded = os.path.expanduser(path)
        if base_dir and not os.path.isabs(expanded):
            return os.path.join(base_dir, expanded)
        return expanded

    def _read(self, path: str) -> dict[int, float]:
        if path not in self._cache:
            self._cache[path] = read_rating_file(path)
        return self._cache[path]

    def load(self) -> dict[int, float]:
        """Return the first non-empty table among the candidates."""

        if self.loaded_path is not None:
            return self._cache[self.loaded_path]
        for path in self._candidates:
            table = self._read(path)
            if table:
                self.loaded_path = path
                LOGGER.info("Loaded rating table from %s", path)
                return table
        if self._candidates:
            LOGGER.warning("Unable to load a rating table; rating conversions disabled")
        return {}

    def reload(self, path: Optional[str] = None) -> dict[int, float]:
        """Re-read one path (or the last loaded one) from disk."""

        target = path or self.loaded_path
        if target is None:
            self.clear()
            return self.load()
        self._cache[target] = read_rating_file(target)
        if self._cache[target]:
            self.loaded_path = target
        return self._cache[target]

    def clear(self) -> None:
        self._cache.clear()
        self.loaded_path = None

"""Side-effect runner adapter.

Implements the core EffectRunnerPort with the standard browser and the
platform's "open" command.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import webbrowser
from typing import Callable, Optional, Sequence

from clipformat.core.config import NavigationConfig
from clipformat.core.models import SideEffect
from clipformat.core.navigation import (
    EFFECT_OPEN_APP_URL,
    EFFECT_OPEN_PATH,
    EFFECT_OPEN_URL,
    EFFECT_WEB_SEARCH,
)

LOGGER = logging.getLogger(__name__)

Launcher = Callable[[Sequence[str]], None]


def _spawn(command: Sequence[str]) -> None:
    subprocess.Popen(list(command), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def _open_command() -> Optional[str]:
    if sys.platform == "darwin":
        return "open"
    if os.name == "nt":
        return None
    return shutil.which("xdg-open")


class SystemEffectRunner:
    """Open URLs in the browser and paths in the file manager."""

    def __init__(
        self,
        navigation: Optional[NavigationConfig] = None,
        launcher: Launcher = _spawn,
        open_url: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self._navigation = navigation or NavigationConfig()
        self._launcher = launcher
        self._open_url = open_url

    def _open_path(self, payload: str) -> bool:
        path = os.path.abspath(os.path.expanduser(payload))
        if self._navigation.file_manager and sys.platform == "darwin":
            command = ["open", "-a", self._navigation.file_manager, path]
        elif self._navigation.file_manager:
            command = [self._navigation.file_manager, path]
        else:
            opener = _open_command()
            if opener is None:
                os.startfile(path)  # type: ignore[attr-defined]
                return True
            command = [opener, path]
        self._launcher(command)
        return True

    def _open_app_url(self, payload: str) -> bool:
        opener = _open_command()
        if opener is None:
            return bool(self._open_url(payload))
        command = ["open", "-u", payload] if opener == "open" else [opener, payload]
        self._launcher(command)
        return True

    def run(self, effect: SideEffect) -> bool:
        """Perform the effect; failures are logged and reported as False."""

        try:
            if effect.kind == EFFECT_OPEN_PATH:
                performed = self._open_path(effect.payload)
            elif effect.kind in {EFFECT_OPEN_URL, EFFECT_WEB_SEARCH}:
                performed = bool(self._open_url(effect.payload))
            elif effect.kind == EFFECT_OPEN_APP_URL:
                performed = self._open_app_url(effect.payload)
            else:
                LOGGER.warning("Unknown side effect kind %s", effect.kind)
                return False
        except (OSError, webbrowser.Error):
            LOGGER.exception("Failed to perform %s for %s", effect.kind, effect.payload)
            return False
        if performed:
            LOGGER.info("%s: %s", effect.message, effect.payload)
        return performed

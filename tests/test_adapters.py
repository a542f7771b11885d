from __future__ import annotations

import sys
import webbrowser

from clipformat.adapters.effects import SystemEffectRunner
from clipformat.adapters.hooks import apply_hooks
from clipformat.adapters.rating_table import RatingTableCache, parse_rating_lines
from clipformat.core.config import NavigationConfig
from clipformat.core.models import SideEffect
from clipformat.core.processor import TextProcessor


class FakeLauncher:
    def __init__(self) -> None:
        self.commands: list[list[str]] = []

    def __call__(self, command) -> None:
        self.commands.append(list(command))


class FakeBrowser:
    def __init__(self, fail: bool = False) -> None:
        self.opened: list[str] = []
        self._fail = fail

    def __call__(self, url: str) -> bool:
        if self._fail:
            raise webbrowser.Error("no browser")
        self.opened.append(url)
        return True


def test_parse_rating_lines() -> None:
    table = parse_rating_lines(["15: 10.0\n", "# comment\n", "20 : 12.5\n", "garbage"])

    assert table == {15: 10.0, 20: 12.5}


def test_rating_cache_uses_first_non_empty_candidate(tmp_path) -> None:
    empty = tmp_path / "empty.txt"
    empty.write_text("nothing here\n", encoding="utf-8")
    table_file = tmp_path / "table.txt"
    table_file.write_text("15: 10\n", encoding="utf-8")
    cache = RatingTableCache([str(tmp_path / "missing.txt"), str(empty), str(table_file)])

    assert cache.load() == {15: 10.0}
    assert cache.loaded_path == str(table_file)

    table_file.write_text("15: 11\n", encoding="utf-8")
    assert cache.load() == {15: 10.0}
    assert cache.reload() == {15: 11.0}


def test_rating_cache_resolves_relative_paths(tmp_path) -> None:
    (tmp_path / "pd.txt").write_text("30: 25\n", encoding="utf-8")
    cache = RatingTableCache(["pd.txt"], base_dir=str(tmp_path))

    assert cache.load() == {30: 25.0}


def test_effect_runner_opens_urls_and_searches() -> None:
    browser = FakeBrowser()
    runner = SystemEffectRunner(launcher=FakeLauncher(), open_url=browser)

    assert runner.run(SideEffect(kind="open_url", payload="https://example.com", message="Opened in browser"))
    assert runner.run(SideEffect(kind="web_search", payload="https://kagi.com/search?q=x", message="Searching Kagi"))
    assert browser.opened == ["https://example.com", "https://kagi.com/search?q=x"]


def test_effect_runner_uses_configured_file_manager(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    launcher = FakeLauncher()
    runner = SystemEffectRunner(NavigationConfig(file_manager="nautilus"), launcher=launcher, open_url=FakeBrowser())

    assert runner.run(SideEffect(kind="open_path", payload=str(tmp_path), message="Opened in file manager"))
    assert launcher.commands == [["nautilus", str(tmp_path)]]


def test_effect_runner_reports_failures() -> None:
    runner = SystemEffectRunner(launcher=FakeLauncher(), open_url=FakeBrowser(fail=True))

    assert not runner.run(SideEffect(kind="open_url", payload="https://example.com", message="x"))
    assert not runner.run(SideEffect(kind="teleport", payload="mars", message="x"))


def test_hooks_register_detectors_and_skip_failures(tmp_path, monkeypatch) -> None:
    (tmp_path / "sample_hooks.py").write_text(
        "from clipformat.core.registry import Detector\n"
        "\n"
        "def register(processor):\n"
        "    processor.register_detector(Detector('echo', 1, lambda text, context: 'echo:' + text))\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    processor = TextProcessor()

    applied = apply_hooks(processor, ["sample_hooks:register", "missing_module:register", "no-colon"])

    assert applied == ["sample_hooks:register"]
    assert processor.format_text("abc").text == "echo:abc"

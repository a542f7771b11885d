"""Application entry point for clipformat."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

from clipformat import settings
from clipformat.adapters.effects import SystemEffectRunner
from clipformat.adapters.hooks import apply_hooks
from clipformat.adapters.rating_table import RatingTableCache
from clipformat.core.processor import FormatOutcome, TextProcessor
from clipformat.core.seed import extract_seed

NAME = "CLIPFORMAT"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(config: dict) -> None:
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(os.getenv(settings.LOG_LEVEL_ENV_VAR) or config.get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stdout carries results, so log lines go to stderr.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/clipformat.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def build_processor(loaded: settings.Settings) -> TextProcessor:
    """Wire the processor with the rating table and any user hooks."""

    rating_source = RatingTableCache(
        loaded.formatter.rating.table_paths,
        base_dir=settings.PROJECT_ROOT,
    )
    processor = TextProcessor(config=loaded.formatter, rating_source=rating_source)
    apply_hooks(processor, loaded.hooks)
    return processor


def _read_input(parts: list[str]) -> str:
    if parts:
        return " ".join(parts)
    return sys.stdin.read()


def _report(outcome: FormatOutcome, runner: Optional[SystemEffectRunner]) -> int:
    if outcome.side_effect is not None:
        effect = outcome.side_effect
        if runner is None:
            print(f"{effect.message}: {effect.payload}")
            return 0
        return 0 if runner.run(effect) else 1
    print(outcome.text, end="" if outcome.text.endswith("\n") else "\n")
    return 0 if outcome.changed else 1


def _format(loaded: settings.Settings, text: str, seed_mode: bool, dry_run: bool) -> int:
    processor = build_processor(loaded)
    outcome = processor.format_seed(text) if seed_mode else processor.format_text(text)
    runner = None if dry_run else SystemEffectRunner(loaded.formatter.navigation)
    return _report(outcome, runner)


def _extract(text: str) -> int:
    prefix, seed = extract_seed(text)
    print(f"prefix: {prefix!r}")
    print(f"seed:   {seed!r}")
    return 0 if seed else 1


def _tui(loaded: settings.Settings) -> int:
    _print_banner()
    from clipformat.frontend.app import ScratchpadApp

    ScratchpadApp(build_processor(loaded), SystemEffectRunner(loaded.formatter.navigation)).run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="clipformat")
    parser.add_argument("--config", help="Path to config.json (defaults to $CLIPFORMAT_CONFIG)")
    subparsers = parser.add_subparsers(dest="command")

    eval_parser = subparsers.add_parser("eval", help="Format the whole text (argument or stdin)")
    eval_parser.add_argument("text", nargs="*")
    eval_parser.add_argument("--dry-run", action="store_true", help="Describe side effects instead of running them")

    seed_parser = subparsers.add_parser("seed", help="Format only the evaluable tail of the text")
    seed_parser.add_argument("text", nargs="*")
    seed_parser.add_argument("--dry-run", action="store_true", help="Describe side effects instead of running them")

    extract_parser = subparsers.add_parser("extract", help="Show how the text splits into prefix and seed")
    extract_parser.add_argument("text", nargs="*")

    subparsers.add_parser("tui", help="Launch the interactive scratchpad")

    args = parser.parse_args(argv)
    try:
        loaded = settings.load_settings(args.config)
    except settings.ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    _configure_logging(loaded.logging)

    if args.command == "extract":
        return _extract(_read_input(args.text))
    if args.command in {"eval", "seed"}:
        return _format(loaded, _read_input(args.text), args.command == "seed", args.dry_run)
    return _tui(loaded)


if __name__ == "__main__":
    sys.exit(main())

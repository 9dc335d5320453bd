"""Application entry point for pastescore."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console
from rich.table import Table

import settings
from adapters.config_catalog import ConfigGameCatalog
from adapters.memory_sink import InMemoryScoreSink
from adapters.result_formatting import format_game_label, suggestion_rows
from core.engine import detect_and_extract
from core.extractors import extract_fields
from core.models import Suggestion
from core.ports import CatalogPort
from core.submission import ScoreForm, SubmissionError, apply_suggestion, build_score_record

NAME = "PASTESCORE"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(console: bool = True) -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if console and config.get("console", True):
        # stdout carries command output, so log records go to stderr.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/pastescore.log")
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


def _load_catalog() -> CatalogPort:
    return ConfigGameCatalog(settings.GAMES_CONFIG)


def _read_paste(path: Optional[str]) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        return handle.read()


def _forced_suggestion(game_id: str, text: str) -> Suggestion:
    fields = extract_fields(game_id, text)
    return Suggestion(
        game_id=game_id,
        solved=fields.solved,
        attempts=fields.attempts,
        score=fields.score,
        time_seconds=fields.time_seconds,
    )


def _submit(text: str, suggestion: Suggestion, user_id: Optional[str]) -> int:
    form = apply_suggestion(ScoreForm(), text, suggestion)
    try:
        record = build_score_record(form, user_id=user_id, config=settings.SUBMISSION_CONFIG)
    except SubmissionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(record.to_dict(), ensure_ascii=False))
    return 0


def _detect(
    path: Optional[str],
    as_json: bool,
    game: Optional[str],
    submit: bool = False,
    user_id: Optional[str] = None,
) -> int:
    _configure_logging()
    logger = logging.getLogger(__name__)
    catalog = _load_catalog()
    games = catalog.list_games()

    forced = catalog.get(game) if game else None
    if game and forced is None:
        print(f"error: {game!r} is not in the game catalog", file=sys.stderr)
        return 2

    text = _read_paste(path)
    if forced is not None:
        suggestion = _forced_suggestion(forced.id, text)
    else:
        suggestion = detect_and_extract(text, games, settings.ENGINE_CONFIG)
    logger.info("Paste of %s chars resolved to %s", len(text), suggestion.game_id)

    if submit:
        return _submit(text, suggestion, user_id)

    if as_json:
        print(json.dumps(suggestion.to_dict(), ensure_ascii=False))
    else:
        console = Console()
        table = Table(title=format_game_label(suggestion.game_id, games))
        table.add_column("field")
        table.add_column("value")
        for label, value in suggestion_rows(suggestion):
            table.add_row(label, value)
        console.print(table)
    # Exit code 1 tells scripts that nothing was recognised.
    return 0 if suggestion.game_id else 1


def _list_games() -> int:
    _configure_logging()
    games = _load_catalog().list_games()
    table = Table(title="Game catalog")
    table.add_column("id")
    table.add_column("name")
    table.add_column("url")
    for game in games:
        table.add_row(game.id, game.display_name, game.url or "")
    Console().print(table)
    return 0


def _inspect(user_id: Optional[str]) -> int:
    _print_banner()
    from frontend.app import PasteInspectorApp

    # Console records would corrupt the TUI; only the file handler applies.
    _configure_logging(console=False)
    games = _load_catalog().list_games()
    PasteInspectorApp(
        games=games,
        sink=InMemoryScoreSink(),
        engine_config=settings.ENGINE_CONFIG,
        submission_config=settings.SUBMISSION_CONFIG,
        user_id=user_id,
    ).run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="pastescore")
    subparsers = parser.add_subparsers(dest="command")

    detect_parser = subparsers.add_parser("detect", help="Detect the game behind a pasted result")
    detect_parser.add_argument("file", nargs="?", help="File holding the paste (default: stdin)")
    detect_parser.add_argument("--json", action="store_true", help="Print the suggestion as JSON")
    detect_parser.add_argument("--game", help="Skip detection and extract fields for this game id")
    detect_parser.add_argument(
        "--submit",
        action="store_true",
        help="Validate the paste as a score submission and print the record as JSON",
    )
    detect_parser.add_argument("--user", help="User id stamped on the submitted record")

    subparsers.add_parser("games", help="List the game catalog")

    inspect_parser = subparsers.add_parser("inspect", help="Launch the paste inspector TUI")
    inspect_parser.add_argument("--user", help="User id stamped on submitted scores")

    args = parser.parse_args(argv)
    if args.command == "detect":
        return _detect(args.file, args.json, args.game, args.submit, args.user)
    if args.command == "games":
        return _list_games()
    if args.command == "inspect":
        return _inspect(args.user)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

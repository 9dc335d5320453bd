"""Shared suggestion formatting helpers.

Keeping formatting here prevents drift between the CLI and the TUI and keeps
output consistent regardless of where it is shown.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Optional, Tuple

from core.catalog import DEFAULT_GAMES, display_name
from core.models import GameDefinition, Suggestion


def format_game_label(game_id: Optional[str], games: Iterable[GameDefinition] = DEFAULT_GAMES) -> str:
    """Return "Display Name (ID)", or a manual-selection hint when undetected."""

    if game_id is None:
        return "Not detected - select your game manually"
    name = display_name(game_id, games)
    if name == game_id:
        return game_id
    return f"{name} ({game_id})"


def _format_value(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _format_seconds(value: Optional[int]) -> str:
    if value is None:
        return "-"
    minutes, seconds = divmod(value, 60)
    return f"{minutes}:{seconds:02d}"


def suggestion_rows(suggestion: Suggestion) -> List[Tuple[str, str]]:
    """Return (label, value) pairs for the extracted fields."""

    return [
        ("Solved", _format_value(suggestion.solved)),
        ("Attempts", _format_value(suggestion.attempts)),
        ("Score", _format_value(suggestion.score)),
        ("Time", _format_seconds(suggestion.time_seconds)),
    ]


def _format_plain(suggestion: Suggestion, games: Iterable[GameDefinition]) -> str:
    lines = [f"Game: {format_game_label(suggestion.game_id, games)}"]
    lines.extend(f"{label}: {value}" for label, value in suggestion_rows(suggestion))
    return "\n".join(lines)


def _format_markdown(suggestion: Suggestion, games: Iterable[GameDefinition]) -> str:
    def escape_md(value: str) -> str:
        for ch in r"*[`_":
            value = value.replace(ch, f"\\{ch}")
        return value

    divider = "──────────────"
    lines = [f"**Game:** {escape_md(format_game_label(suggestion.game_id, games))}", divider]
    lines.extend(f"**{label}:** {escape_md(value)}" for label, value in suggestion_rows(suggestion))
    lines.append(divider)
    return "\n".join(lines)


def _format_html(suggestion: Suggestion, games: Iterable[GameDefinition]) -> str:
    parts = [
        f"<b>Game:</b> {html.escape(format_game_label(suggestion.game_id, games))}",
        "──────────────",
    ]
    parts.extend(
        f"<b>{html.escape(label)}:</b> {html.escape(value)}" for label, value in suggestion_rows(suggestion)
    )
    parts.append("──────────────")
    return "\n".join(parts)


def format_suggestion(
    suggestion: Suggestion,
    mode: str = "plain",
    games: Iterable[GameDefinition] = DEFAULT_GAMES,
) -> str:
    """Return the suggestion formatted for the requested mode."""

    games = list(games)
    if mode == "plain":
        return _format_plain(suggestion, games)
    if mode == "markdown":
        return _format_markdown(suggestion, games)
    if mode == "html":
        return _format_html(suggestion, games)
    raise ValueError(f"Unsupported output format: {mode}")

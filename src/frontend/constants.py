"""Shared constants for the Textual UI."""

from __future__ import annotations

GRID_GREEN = "#6AAA64"
GRID_YELLOW = "#C9B458"

# Input ids mapped to the ScoreForm field they edit.
FIELD_INPUTS = {
    "solved-input": "solved",
    "attempts-input": "attempts",
    "score-input": "score",
    "time-input": "time_seconds",
}

"""Score submission workflow.

The engine only suggests. The form below is what the user edits before
submitting, and build_score_record is the last check before the downstream
store, which enforces one score per user, game and day on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.config import SubmissionConfig
from core.dates import game_day
from core.models import ScoreRecord, Suggestion


class SubmissionError(ValueError):
    """Raised when a form cannot become a score record."""


@dataclass
class ScoreForm:
    """Editable form state; every field may be overridden by the user."""

    game_id: Optional[str] = None
    raw_result: str = ""
    solved: Optional[bool] = None
    attempts: Optional[int] = None
    score: Optional[int] = None
    time_seconds: Optional[int] = None


def apply_suggestion(form: ScoreForm, raw_text: str, suggestion: Suggestion) -> ScoreForm:
    """Return a new form with the paste and any suggested fields applied.

    The paste always replaces raw_result. Suggested fields overwrite the form
    only when they are set, so earlier manual edits survive an unreadable
    paste. A detected game replaces the selection; no detection keeps it.
    """

    return replace(
        form,
        raw_result=raw_text,
        game_id=suggestion.game_id if suggestion.game_id is not None else form.game_id,
        solved=suggestion.solved if suggestion.solved is not None else form.solved,
        attempts=suggestion.attempts if suggestion.attempts is not None else form.attempts,
        score=suggestion.score if suggestion.score is not None else form.score,
        time_seconds=suggestion.time_seconds if suggestion.time_seconds is not None else form.time_seconds,
    )


def _check_non_negative(name: str, value: Optional[int]) -> None:
    if value is not None and value < 0:
        raise SubmissionError(f"{name} must not be negative")


def build_score_record(
    form: ScoreForm,
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
    config: SubmissionConfig = SubmissionConfig(),
) -> ScoreRecord:
    """Validate a form and stamp it with the reference-timezone game day."""

    if not form.game_id:
        raise SubmissionError("Game type is required; select your game manually")
    if not form.raw_result or not form.raw_result.strip():
        raise SubmissionError("Result text is required")
    _check_non_negative("attempts", form.attempts)
    _check_non_negative("score", form.score)
    _check_non_negative("time_seconds", form.time_seconds)

    return ScoreRecord(
        game_id=form.game_id,
        raw_result=form.raw_result,
        game_date=game_day(now, config.reference_timezone),
        solved=form.solved,
        attempts=form.attempts,
        score=form.score,
        time_seconds=form.time_seconds,
        user_id=user_id,
    )

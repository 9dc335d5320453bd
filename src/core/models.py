"""Core domain models.

These dataclasses are shared across the core and adapters so that catalogs,
formatters and the TUI never depend on each other's types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class GameDefinition:
    """One entry of the game catalog."""

    id: str
    display_name: str
    url: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of the signature matcher.

    signal is "name" when a name or hashtag token matched and "glyphs" when
    the game's glyph-set predicate did.
    """

    game_id: Optional[str]
    signal: Optional[str] = None
    in_catalog: bool = False


NO_DETECTION = DetectionResult(game_id=None)


@dataclass(frozen=True)
class ExtractedFields:
    """Partial score fields derived by one extraction rule."""

    solved: Optional[bool] = None
    attempts: Optional[int] = None
    score: Optional[int] = None
    time_seconds: Optional[int] = None
    rule: Optional[str] = None

    def is_empty(self) -> bool:
        return (
            self.solved is None
            and self.attempts is None
            and self.score is None
            and self.time_seconds is None
        )


@dataclass(frozen=True)
class Suggestion:
    """Result of detect_and_extract, handed to the submission form."""

    game_id: Optional[str] = None
    solved: Optional[bool] = None
    attempts: Optional[int] = None
    score: Optional[int] = None
    time_seconds: Optional[int] = None

    def to_dict(self) -> dict:
        """Return the wire shape consumed by the score-submission workflow."""

        return {
            "gameId": self.game_id,
            "solved": self.solved,
            "attempts": self.attempts,
            "score": self.score,
            "timeSeconds": self.time_seconds,
        }


@dataclass(frozen=True)
class ScoreRecord:
    """Score ready for the downstream store, keyed by (user, game, day)."""

    game_id: str
    raw_result: str
    game_date: date
    solved: Optional[bool]
    attempts: Optional[int]
    score: Optional[int]
    time_seconds: Optional[int]
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "gameType": self.game_id,
            "rawResult": self.raw_result,
            "gameDate": self.game_date.isoformat(),
            "solved": self.solved,
            "attempts": self.attempts,
            "score": self.score,
            "timeSeconds": self.time_seconds,
            "userId": self.user_id,
        }

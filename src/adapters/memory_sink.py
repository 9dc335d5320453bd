"""In-memory score sink.

Satisfies the ScoreSinkPort for the paste inspector, including the
one-score-per-user-game-day rule the real store enforces.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

from core.models import ScoreRecord


class DuplicateScoreError(ValueError):
    """Raised when a score already exists for the same user, game and day."""


class InMemoryScoreSink:
    """Keeps submitted records for the lifetime of the process."""

    def __init__(self) -> None:
        self._records: Dict[Tuple[Optional[str], str, date], ScoreRecord] = {}

    def submit(self, record: ScoreRecord) -> None:
        key = (record.user_id, record.game_id, record.game_date)
        if key in self._records:
            raise DuplicateScoreError("You have already submitted a score for this game today")
        self._records[key] = record

    def records(self) -> List[ScoreRecord]:
        return list(self._records.values())

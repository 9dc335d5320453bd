"""Ports (interfaces) around the detection engine.

Ports define the minimal contracts for the game catalog and the downstream
score store so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from core.models import GameDefinition, ScoreRecord


class CatalogPort(Protocol):
    """Source of the live game catalog."""

    def list_games(self) -> List[GameDefinition]:
        ...

    def get(self, game_id: str) -> Optional[GameDefinition]:
        ...


class ScoreSinkPort(Protocol):
    """Downstream store; owns the one-score-per-user-game-day constraint."""

    def submit(self, record: ScoreRecord) -> None:
        ...

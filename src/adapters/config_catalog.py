"""Config-backed game catalog adapter.

Implements the core CatalogPort from the "games" section of config.json.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from core.catalog import DEFAULT_GAMES, build_catalog, normalize_game_id
from core.models import GameDefinition


class ConfigGameCatalog:
    """Catalog built once from config entries, defaulting to the built-in games."""

    def __init__(self, games_config: Optional[Iterable[dict]] = None) -> None:
        entries = list(games_config or [])
        # An empty or missing section means "use the built-in catalog".
        self._games = build_catalog(entries) if entries else list(DEFAULT_GAMES)

    def list_games(self) -> List[GameDefinition]:
        return list(self._games)

    def get(self, game_id: str) -> Optional[GameDefinition]:
        wanted = normalize_game_id(game_id)
        for game in self._games:
            if game.id == wanted:
                return game
        return None

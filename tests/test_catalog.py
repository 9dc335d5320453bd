from __future__ import annotations

from datetime import date

import pytest

from adapters.config_catalog import ConfigGameCatalog
from adapters.memory_sink import DuplicateScoreError, InMemoryScoreSink
from core import catalog
from core.catalog import build_catalog, catalog_ids, display_name
from core.models import GameDefinition, ScoreRecord


def _record(user_id: str = "u1", game_id: str = "WORDLE", game_date: date = date(2024, 1, 1)) -> ScoreRecord:
    return ScoreRecord(
        game_id=game_id,
        raw_result="Wordle 1 4/6",
        game_date=game_date,
        solved=True,
        attempts=4,
        score=None,
        time_seconds=None,
        user_id=user_id,
    )


def test_build_catalog_skips_disabled_and_blank_entries() -> None:
    games = build_catalog(
        [
            {"id": "wordle", "display_name": "Wordle"},
            {"id": "horse", "enabled": False},
            {"display_name": "No id"},
            {"id": "  "},
            {"id": "chess"},
        ]
    )
    assert [game.id for game in games] == ["WORDLE", "CHESS"]
    assert games[1].display_name == "Chess"


def test_catalog_ids_accepts_mixed_entries() -> None:
    ids = catalog_ids([GameDefinition("WORDLE", "Wordle"), "HORSE", {"id": "TRAVLE"}, {"name": "x"}, 5])
    assert ids == frozenset({"WORDLE", "HORSE", "TRAVLE"})
    assert catalog_ids(None) is None


def test_catalog_ids_normalize_like_build_catalog() -> None:
    ids = catalog_ids([{"id": "wordle"}, " travle ", {"id": "  "}])
    assert ids == frozenset({"WORDLE", "TRAVLE"})
    assert ids == frozenset(game.id for game in build_catalog([{"id": "wordle"}, {"id": " travle "}]))


def test_display_name_falls_back_to_id() -> None:
    assert display_name(catalog.SPOTLE) == "Spotle"
    assert display_name("CHESS") == "CHESS"


def test_config_catalog_lists_configured_games() -> None:
    source = ConfigGameCatalog([{"id": "WORDLE", "display_name": "Wordle"}])
    assert [game.id for game in source.list_games()] == ["WORDLE"]
    assert source.get("WORDLE") is not None
    assert source.get("HORSE") is None
    assert source.get(" wordle ") is source.get("WORDLE")


def test_config_catalog_defaults_to_builtin_games() -> None:
    assert ConfigGameCatalog([]).list_games() == catalog.DEFAULT_GAMES
    assert len(ConfigGameCatalog(None).list_games()) == 11


def test_sink_rejects_second_score_for_same_day() -> None:
    sink = InMemoryScoreSink()
    sink.submit(_record())
    with pytest.raises(DuplicateScoreError):
        sink.submit(_record())
    assert len(sink.records()) == 1


def test_sink_allows_other_user_game_or_day() -> None:
    sink = InMemoryScoreSink()
    sink.submit(_record())
    sink.submit(_record(user_id="u2"))
    sink.submit(_record(game_id="HORSE"))
    sink.submit(_record(game_date=date(2024, 1, 2)))
    assert len(sink.records()) == 4

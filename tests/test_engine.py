from __future__ import annotations

import logging

import pytest

from core import catalog
from core.config import EngineConfig
from core.engine import detect_and_extract, detect_game
from core.models import GameDefinition, Suggestion

BLACK = "\u2b1b"
WHITE = "\u2b1c"
GREEN = "\U0001f7e9"
YELLOW = "\U0001f7e8"
BLUE = "\U0001f7e6"
PURPLE = "\U0001f7ea"
RED = "\U0001f7e5"
ORANGE = "\U0001f7e7"
CHECK = "\u2705"
BLACK_MOJIBAKE = "\u62d8"
GREEN_MOJIBAKE = "\u6e38\ub9b4"


def _games(*ids: str) -> list[GameDefinition]:
    return [GameDefinition(game_id, game_id.title()) for game_id in ids]


def _garble(text: str) -> str:
    return text.encode("utf-8").decode("johab", "replace")


def test_wordle_paste_is_detected_and_scored() -> None:
    suggestion = detect_and_extract("Wordle 1,234 4/6\n\n" + YELLOW + GREEN * 4 + "\n" + GREEN * 5)
    assert suggestion == Suggestion(game_id=catalog.WORDLE, solved=True, attempts=4)


def test_lossy_fixture_paste_matches_correct_rendering() -> None:
    clean = "Wordle 1,234 3/6\n" + BLACK * 4 + GREEN + "\n" + GREEN * 5
    garbled = "Wordle 1,234 3/6\n" + BLACK_MOJIBAKE * 4 + GREEN_MOJIBAKE + "\n" + GREEN_MOJIBAKE * 5
    assert detect_and_extract(garbled) == detect_and_extract(clean)


@pytest.mark.parametrize(
    ("clean", "game_id"),
    [
        (WHITE * 2 + YELLOW + WHITE + GREEN + "\n" + GREEN * 5, catalog.WORDLE),
        (BLACK * 2 + YELLOW + BLACK + GREEN + "\n" + BLACK + GREEN * 4 + "\n" + GREEN * 5, catalog.WORDLE),
        (
            "Connections\nPuzzle #512\n" + "\n".join([YELLOW * 4, GREEN * 2 + BLUE + GREEN, GREEN * 4, BLUE * 4, PURPLE * 4]),
            catalog.CONNECTIONS,
        ),
        (GREEN * 3 + YELLOW + BLACK + "\u2b05\ufe0f", catalog.WORLDLE),
        ("#Worldle #900 1/6 (100%)\n" + GREEN * 5 + "\U0001f389", catalog.WORLDLE),
        ("Spotle #800\n" + WHITE * 3 + GREEN, catalog.SPOTLE),
        ("\U0001f3a7 " + WHITE * 2 + GREEN, catalog.SPOTLE),
        ("#travle #512 +2\n" + CHECK + ORANGE + CHECK + CHECK, catalog.TRAVLE),
        ("#812\n" + GREEN + " 3\n" + YELLOW + " 12\n" + RED + " 20", catalog.CONTEXTO),
        (RED + BLACK + RED + GREEN + WHITE * 2, catalog.BANDLE),
        ("Bandle #597 4/6\n" + RED + BLACK + RED + GREEN + WHITE * 2 + "\n#Bandle #Heardle #Wordle", catalog.BANDLE),
        ("\U0001f434 87%", catalog.HORSE),
        ("Minute Cryptic #45\n\U0001f4a1\U0001f4a1", catalog.MINUTE_CRYPTIC),
    ],
)
def test_johab_decoded_paste_matches_correct_rendering(clean: str, game_id: str) -> None:
    expected = detect_and_extract(clean)
    assert expected.game_id == game_id
    assert detect_and_extract(_garble(clean)) == expected


def test_cjk_text_is_not_read_as_travle_route() -> None:
    assert detect_and_extract("\u4e5d\u4e5d\u4e5d") == Suggestion()


@pytest.mark.parametrize(
    "raw_text",
    ["", "   ", "hello there", "4/6", None, 42, b"\xff\xfe\x00", object()],
)
def test_unrecognized_input_yields_empty_suggestion(raw_text: object) -> None:
    assert detect_and_extract(raw_text) == Suggestion()


def test_bytes_are_decoded() -> None:
    suggestion = detect_and_extract("Wordle 1,234 2/6".encode("utf-8"))
    assert suggestion.game_id == catalog.WORDLE
    assert suggestion.attempts == 2


def test_detection_is_idempotent() -> None:
    text = "Connections\nPuzzle #512\n" + "\n".join([YELLOW * 4, GREEN * 4])
    assert detect_and_extract(text) == detect_and_extract(text)


def test_game_without_readable_score_keeps_only_game_id() -> None:
    suggestion = detect_and_extract("Wordle is fun")
    assert suggestion == Suggestion(game_id=catalog.WORDLE)


def test_long_paste_is_cut_to_window() -> None:
    config = EngineConfig(max_text_chars=50)
    text = "x" * 60 + " Wordle 1,234 4/6"
    assert detect_and_extract(text, config=config) == Suggestion()
    assert detect_and_extract(text).game_id == catalog.WORDLE


def test_very_long_paste_still_returns() -> None:
    text = "Wordle 1,234 5/6 " + "a" * 1_000_000
    assert detect_and_extract(text).attempts == 5


def test_known_game_is_marked_in_catalog() -> None:
    detection = detect_game("Wordle 1,234 4/6", _games(catalog.WORDLE))
    assert detection.game_id == catalog.WORDLE
    assert detection.in_catalog is True


def test_unknown_game_is_surfaced_by_default(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="core.engine")
    detection = detect_game("Wordle 1,234 4/6", _games(catalog.CONNECTIONS))
    assert detection.game_id == catalog.WORDLE
    assert detection.in_catalog is False
    assert "absent from the catalog" in caplog.text


def test_unknown_game_is_suppressed_when_configured() -> None:
    config = EngineConfig(unknown_game_policy="suppress")
    suggestion = detect_and_extract("Wordle 1,234 4/6", ["CONNECTIONS"], config)
    assert suggestion == Suggestion()


def test_catalog_accepts_dict_entries() -> None:
    config = EngineConfig(unknown_game_policy="suppress")
    suggestion = detect_and_extract("Wordle 1,234 4/6", [{"id": "WORDLE"}], config)
    assert suggestion.game_id == catalog.WORDLE


def test_catalog_ids_match_in_any_case() -> None:
    config = EngineConfig(unknown_game_policy="suppress")
    assert detect_and_extract("Wordle 1,234 4/6", [{"id": "wordle"}], config).game_id == catalog.WORDLE
    assert detect_and_extract("Wordle 1,234 4/6", [" Wordle "], config).game_id == catalog.WORDLE


def test_rule_failure_is_contained(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    def explode(game_id: str, text: str) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr("core.engine.extract_normalized", explode)
    suggestion = detect_and_extract("Wordle 1,234 4/6")
    assert suggestion == Suggestion(game_id=catalog.WORDLE)
    assert "Extraction rule for WORDLE failed" in caplog.text


def test_invalid_engine_config_is_rejected() -> None:
    with pytest.raises(ValueError):
        EngineConfig(unknown_game_policy="ignore")
    with pytest.raises(ValueError):
        EngineConfig(max_text_chars=0)


def test_suggestion_wire_shape() -> None:
    suggestion = detect_and_extract("enclose.horse Day 40 100%")
    assert suggestion.to_dict() == {
        "gameId": catalog.HORSE,
        "solved": True,
        "attempts": None,
        "score": 100,
        "timeSeconds": None,
    }

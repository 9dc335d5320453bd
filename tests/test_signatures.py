from __future__ import annotations

import pytest

from core import catalog
from core.glyphs import normalize_glyphs
from core.signatures import DEFAULT_TABLE, match_signature, match_signatures

BLACK = "\u2b1b"
WHITE = "\u2b1c"
YELLOW = "\U0001f7e8"
GREEN = "\U0001f7e9"
BLUE = "\U0001f7e6"
PURPLE = "\U0001f7ea"
RED = "\U0001f7e5"
ORANGE = "\U0001f7e7"
CHECK = "\u2705"

BLACK_MOJIBAKE = "\u62d8"
YELLOW_MOJIBAKE = "\u6e38\ub9b3"
GREEN_MOJIBAKE = "\u6e38\ub9b4"
BLUE_MOJIBAKE = "\u6e38\ub9b1"
PURPLE_MOJIBAKE = "\u6e38\ub9b5"


def _detect(text: str) -> str | None:
    return match_signature(normalize_glyphs(text)).game_id


def _garble(text: str) -> str:
    return text.encode("utf-8").decode("johab", "replace")


def test_priority_order_is_fixed() -> None:
    assert DEFAULT_TABLE.priority() == [
        catalog.BANDLE,
        catalog.WORLDLE,
        catalog.COUNTRYLE,
        catalog.SPOTLE,
        catalog.TRAVLE,
        catalog.CONTEXTO,
        catalog.SEMANTLE,
        catalog.MINUTE_CRYPTIC,
        catalog.HORSE,
        catalog.CONNECTIONS,
        catalog.WORDLE,
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Wordle 1,234 4/6\n\n" + BLACK * 3 + YELLOW + GREEN + "\n" + GREEN * 5, catalog.WORDLE),
        ("Connections\nPuzzle #512\n" + YELLOW * 4 + "\n" + GREEN * 4, catalog.CONNECTIONS),
        ("I played contexto.me #812 and got it in 41 guesses.", catalog.CONTEXTO),
        ("I solved Semantle #1020 in 57 guesses!", catalog.SEMANTLE),
        ("enclose.horse Day 40\n100%", catalog.HORSE),
        ("#travle #512 +2\n" + CHECK + ORANGE + CHECK + CHECK, catalog.TRAVLE),
        ("#Worldle #900 (19.10.2026) 3/6 (100%)\n" + GREEN * 4 + YELLOW + "\u2197\ufe0f", catalog.WORLDLE),
        ("I solved today's Minute Cryptic in 0:58 with 1 hint", catalog.MINUTE_CRYPTIC),
        ("#Countryle 700\nGuessed in 4 tries.", catalog.COUNTRYLE),
        ("Spotle #800\n" + WHITE * 2 + GREEN, catalog.SPOTLE),
        ("Bandle #612 3/6\n" + RED + BLACK + GREEN + WHITE * 3, catalog.BANDLE),
    ],
)
def test_detects_each_game_by_name(text: str, expected: str) -> None:
    assert _detect(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (BLACK * 2 + YELLOW + BLACK + GREEN + "\n" + GREEN * 5, catalog.WORDLE),
        (YELLOW * 4 + "\n" + BLUE * 4 + "\n" + PURPLE * 4, catalog.CONNECTIONS),
        (GREEN * 3 + YELLOW + BLACK + "\u2b05\ufe0f", catalog.WORLDLE),
        ("#512\n" + CHECK + ORANGE + CHECK, catalog.TRAVLE),
        ("\U0001f3a7 " + WHITE + GREEN, catalog.SPOTLE),
        ("\U0001f434 87%", catalog.HORSE),
        ("#812\n" + GREEN + " 3\n" + YELLOW + " 12\n" + RED + " 20", catalog.CONTEXTO),
        (RED + BLACK + RED + GREEN + WHITE + WHITE, catalog.BANDLE),
    ],
)
def test_detects_glyph_only_shares(text: str, expected: str) -> None:
    assert _detect(text) == expected


def test_bandle_share_with_wordle_hashtag_prefers_bandle() -> None:
    text = "Bandle #612 2/6\n" + RED + GREEN + WHITE * 4 + "\n#Bandle #Heardle #Wordle"
    assert _detect(text) == catalog.BANDLE


def test_worldle_is_not_mistaken_for_wordle() -> None:
    text = "#Worldle #900 2/6 (100%)\n" + GREEN * 4 + YELLOW + "\u2196\ufe0f\n" + GREEN * 5 + "\U0001f389"
    assert _detect(text) == catalog.WORLDLE


def test_connections_with_only_yellow_and_green_rows_needs_name() -> None:
    # Four-wide yellow/green rows alone are too ambiguous to claim.
    assert _detect(YELLOW * 4 + "\n" + GREEN * 4) is None


def test_wordle_grid_in_mojibake_is_detected() -> None:
    grid = BLACK_MOJIBAKE * 2 + YELLOW_MOJIBAKE + BLACK_MOJIBAKE + GREEN_MOJIBAKE
    assert _detect(grid + "\n" + GREEN_MOJIBAKE * 5) == catalog.WORDLE


def test_connections_grid_in_mojibake_is_detected() -> None:
    rows = [YELLOW_MOJIBAKE * 4, BLUE_MOJIBAKE * 4, PURPLE_MOJIBAKE * 4, GREEN_MOJIBAKE * 4]
    assert _detect("\n".join(rows)) == catalog.CONNECTIONS


@pytest.mark.parametrize(
    ("clean", "game_id"),
    [
        ("\U0001f3a7 " + WHITE * 2 + GREEN, catalog.SPOTLE),
        ("\U0001f434 87%", catalog.HORSE),
        (GREEN * 3 + YELLOW + BLACK + "\u2b05\ufe0f", catalog.WORLDLE),
        (GREEN * 5 + "\U0001f389", catalog.WORLDLE),
        (RED + BLACK + RED + GREEN + WHITE * 2, catalog.BANDLE),
        ("#512\n" + CHECK + ORANGE + CHECK, catalog.TRAVLE),
        (WHITE * 2 + YELLOW + WHITE + GREEN, catalog.WORDLE),
    ],
)
def test_glyph_only_signatures_survive_johab_decoding(clean: str, game_id: str) -> None:
    assert _detect(clean) == game_id
    assert _detect(_garble(clean)) == game_id


def test_keywords_are_case_insensitive() -> None:
    assert _detect("SEMANTLE #1 solved") == catalog.SEMANTLE
    assert _detect("minutecryptic today") == catalog.MINUTE_CRYPTIC


def test_unrelated_text_has_no_match() -> None:
    assert _detect("Had a great day at the beach, 4/6 would go again") is None
    assert _detect("") is None
    assert _detect("   \n\t ") is None


def test_match_reports_signal() -> None:
    by_name = match_signature(normalize_glyphs("Wordle 1 3/6"))
    by_glyphs = match_signature(normalize_glyphs(GREEN * 5))
    assert by_name.signal == "name"
    assert by_glyphs.signal == "glyphs"


def test_in_catalog_reflects_known_ids() -> None:
    text = normalize_glyphs("Wordle 1 3/6")
    assert match_signature(text).in_catalog is True
    assert match_signature(text, {catalog.WORDLE}).in_catalog is True
    assert match_signature(text, {catalog.CONNECTIONS}).in_catalog is False


def test_match_signatures_lists_overlaps_in_priority_order() -> None:
    text = normalize_glyphs("Bandle #1 1/6\n" + GREEN + WHITE * 5 + "\n#Wordle")
    matches = match_signatures(text)
    assert [match.game_id for match in matches] == [catalog.BANDLE, catalog.WORDLE]
    assert "bandle" in matches[0].reason

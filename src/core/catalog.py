"""Game identifiers and the default catalog (core domain)."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from core.models import GameDefinition

WORDLE = "WORDLE"
CONNECTIONS = "CONNECTIONS"
CONTEXTO = "CONTEXTO"
SEMANTLE = "SEMANTLE"
HORSE = "HORSE"
TRAVLE = "TRAVLE"
WORLDLE = "WORLDLE"
MINUTE_CRYPTIC = "MINUTE_CRYPTIC"
COUNTRYLE = "COUNTRYLE"
SPOTLE = "SPOTLE"
BANDLE = "BANDLE"

DEFAULT_GAMES: List[GameDefinition] = [
    GameDefinition(WORDLE, "Wordle", "https://www.nytimes.com/games/wordle", "Guess the 5-letter word in 6 tries"),
    GameDefinition(
        CONNECTIONS,
        "Connections",
        "https://www.nytimes.com/games/connections",
        "Group 16 words into 4 categories",
    ),
    GameDefinition(CONTEXTO, "Contexto", "https://contexto.me/", "Guess the word using semantic similarity"),
    GameDefinition(SEMANTLE, "Semantle", "https://semantle.com/", "Guess the word using word2vec similarity"),
    GameDefinition(
        HORSE,
        "Horse",
        "https://enclose.horse/",
        "Claim the maximum territory with the number of walls given",
    ),
    GameDefinition(TRAVLE, "Travle", "https://travle.earth/", "Find the path between two countries"),
    GameDefinition(WORLDLE, "Worldle", "https://worldle.teuteuf.fr/", "Guess the country from its shape"),
    GameDefinition(
        MINUTE_CRYPTIC,
        "Minute Cryptic",
        "https://www.minutecryptic.com/",
        "Solve a cryptic crossword clue in under a minute",
    ),
    GameDefinition(COUNTRYLE, "Countryle", "https://countryle.com/", "Guess the country from clues"),
    GameDefinition(SPOTLE, "Spotle", "https://spotle.io/", "Guess the artist from their top Spotify songs"),
    GameDefinition(BANDLE, "Bandle", "https://bandle.app/", "Guess the song from increasing audio clips"),
]


def normalize_game_id(raw_id: Any) -> str:
    """Return the catalog form of an id: stripped and upper-cased."""

    return str(raw_id or "").strip().upper()


def build_catalog(games_config: Iterable[dict]) -> List[GameDefinition]:
    """Normalize catalog entries from config.

    Entries without an id, or with enabled=false, are skipped. Ids are
    upper-cased so config files may use any casing.
    """

    catalog: List[GameDefinition] = []
    for entry in games_config:
        game_id = normalize_game_id(entry.get("id"))
        if not game_id:
            continue
        if not entry.get("enabled", True):
            continue
        catalog.append(
            GameDefinition(
                id=game_id,
                display_name=entry.get("display_name") or entry.get("name") or game_id.title(),
                url=entry.get("url"),
                description=entry.get("description"),
            )
        )
    return catalog


def catalog_ids(known_games: Optional[Iterable[Any]]) -> Optional[frozenset[str]]:
    """Return the set of ids in a loosely-typed catalog, or None for "no catalog".

    Accepts GameDefinition objects, dicts carrying an "id" key and plain id
    strings. Anything else is ignored.
    """

    if known_games is None:
        return None
    ids: set[str] = set()
    for game in known_games:
        if isinstance(game, GameDefinition):
            raw_id = game.id
        elif isinstance(game, str):
            raw_id = game
        elif isinstance(game, dict):
            raw_id = game.get("id")
        else:
            continue
        game_id = normalize_game_id(raw_id)
        if game_id:
            ids.add(game_id)
    return frozenset(ids)


def display_name(game_id: Optional[str], games: Iterable[GameDefinition] = DEFAULT_GAMES) -> str:
    """Return the display name for a game id, falling back to the id itself."""

    if game_id is None:
        return "Unknown game"
    for game in games:
        if game.id == game_id:
            return game.display_name
    return game_id

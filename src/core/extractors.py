"""Per-game field extraction rules (core domain).

One rule per game, kept in a single table indexed by game id. Every rule reads
glyph-normalized text and returns ExtractedFields tagged with its RuleKind, so
adding a game never touches the other rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Callable, Dict, Optional

from core import catalog
from core.glyphs import Glyph, glyph_sequence, normalize_glyphs, tile_rows
from core.models import ExtractedFields

# Each hint in the semantic-distance games costs this many guesses.
HINT_PENALTY = 5


class RuleKind(str, Enum):
    GUESS_LIMIT = "guess_limit"
    CATEGORY_GRID = "category_grid"
    REVEAL = "reveal"
    EXTRA_MOVES = "extra_moves"
    NARRATIVE_TRIES = "narrative_tries"
    HINT_PENALTY = "hint_penalty"
    HINT_COUNT = "hint_count"
    PERCENTAGE = "percentage"


Derive = Callable[[str], ExtractedFields]


@dataclass(frozen=True)
class ExtractionRule:
    """Compiled extraction rule for one game."""

    game_id: str
    kind: RuleKind
    derive: Derive

    def apply(self, text: str) -> ExtractedFields:
        return self.derive(text)


_GAVE_UP = re.compile(r"\b(?:gave|give|giving)\s+up\b|\bfailed\b", re.IGNORECASE)
_GUESSES = re.compile(r"(?<![\d#])(\d{1,6})\s+guess(?:es)?\b", re.IGNORECASE)
_HINTS = re.compile(r"(?<![\d#])(\d{1,4})\s+hints?\b", re.IGNORECASE)
_NO_HINTS = re.compile(r"\b(?:no|zero|without)\s+hints?\b|\bperfect\b", re.IGNORECASE)
_PERFECT = re.compile(r"\bperfect\b", re.IGNORECASE)
_EXTRA_MOVES = re.compile(r"(?<![\w+])\+\s?(\d{1,3})\b")
_TRIES = re.compile(
    r"\bguessed\s+in\s+(\d{1,3})\s+(?:tries|try|guesses|attempts)\b",
    re.IGNORECASE,
)
_ANY_RATIO = re.compile(r"(?<![\d/])([1-9]\d?|X)\s*/\s*([1-9]\d?)(?![\d/])", re.IGNORECASE)
_PERCENT = re.compile(r"(?<![\d.])(\d{1,3})(?:[.,]\d+)?\s*%")
_CLOCK = re.compile(r"(?<![\d:])(\d{1,2}):([0-5]\d)(?![\d:])")
_SECONDS = re.compile(r"(?<![\d.])(\d{1,4})\s*(?:s|sec|secs|seconds)\b", re.IGNORECASE)

_LETTER_TILES = frozenset({Glyph.BLACK, Glyph.WHITE, Glyph.YELLOW, Glyph.GREEN})
_CATEGORY_TILES = frozenset({Glyph.YELLOW, Glyph.GREEN, Glyph.BLUE, Glyph.PURPLE})
_REVEAL_TILES = frozenset(
    {Glyph.BLACK, Glyph.WHITE, Glyph.YELLOW, Glyph.ORANGE, Glyph.GREEN, Glyph.RED, Glyph.CROSS}
)
_MISS_MARKS = frozenset({Glyph.RED, Glyph.CROSS})


def _ratio_pattern(cap: int) -> re.Pattern:
    return re.compile(rf"(?<![\d/])([1-9]\d?|X)\s*/\s*{cap}(?![\d/])", re.IGNORECASE)


def _first_ratio(pattern: re.Pattern, text: str, cap: int) -> Optional[tuple[bool, int]]:
    """Return (solved, attempts) from the first plausible N/cap token."""

    for match in pattern.finditer(text):
        numerator = match.group(1)
        if numerator.upper() == "X":
            return False, cap
        attempts = int(numerator)
        if attempts <= cap:
            return True, attempts
    return None


def _letter_grid(text: str, cap: int) -> Optional[tuple[bool, int]]:
    rows = [row for row in tile_rows(text, _LETTER_TILES) if len(row) == 5]
    if not rows:
        return None
    if all(glyph == Glyph.GREEN for glyph in rows[-1]):
        return True, len(rows)
    if len(rows) >= cap:
        return False, cap
    return None


def guess_limit_rule(game_id: str, cap: int, grid_fallback: bool = False) -> ExtractionRule:
    """N/cap games: X in place of N means failed, with attempts forced to cap."""

    pattern = _ratio_pattern(cap)

    def derive(text: str) -> ExtractedFields:
        ratio = _first_ratio(pattern, text, cap)
        if ratio is None and grid_fallback:
            ratio = _letter_grid(text, cap)
        if ratio is None:
            return ExtractedFields()
        solved, attempts = ratio
        return ExtractedFields(solved=solved, attempts=attempts, rule=RuleKind.GUESS_LIMIT.value)

    return ExtractionRule(game_id, RuleKind.GUESS_LIMIT, derive)


def category_grid_rule(game_id: str) -> ExtractionRule:
    """One four-tile row per guess; only a clean four-row sweep counts as solved."""

    def derive(text: str) -> ExtractedFields:
        rows = [row for row in tile_rows(text, _CATEGORY_TILES) if len(row) == 4]
        if not rows:
            return ExtractedFields()
        solid_rows = [row for row in rows if len(set(row)) == 1]
        solved = len(rows) == 4 and len(solid_rows) == 4
        return ExtractedFields(solved=solved, attempts=len(rows), rule=RuleKind.CATEGORY_GRID.value)

    return ExtractionRule(game_id, RuleKind.CATEGORY_GRID, derive)


def reveal_rule(game_id: str, cap: int) -> ExtractionRule:
    """Tiles count misses until the green hit; a trailing red/cross is a loss."""

    def derive(text: str) -> ExtractedFields:
        tiles = glyph_sequence(text, _REVEAL_TILES)
        if Glyph.GREEN in tiles:
            attempts = tiles.index(Glyph.GREEN) + 1
            return ExtractedFields(solved=True, attempts=attempts, rule=RuleKind.REVEAL.value)
        if tiles and tiles[-1] in _MISS_MARKS:
            return ExtractedFields(solved=False, attempts=cap, rule=RuleKind.REVEAL.value)
        return ExtractedFields()

    return ExtractionRule(game_id, RuleKind.REVEAL, derive)


def extra_moves_rule(game_id: str) -> ExtractionRule:
    """Score is the number of moves beyond the optimal route.

    A "+N" token is the canonical reading, "+0" included. The "perfect"
    marker only applies when no "+N" token is present.
    """

    def derive(text: str) -> ExtractedFields:
        if _GAVE_UP.search(text) or Glyph.CROSS.value in text:
            return ExtractedFields(solved=False, rule=RuleKind.EXTRA_MOVES.value)
        match = _EXTRA_MOVES.search(text)
        if match:
            return ExtractedFields(solved=True, attempts=int(match.group(1)), rule=RuleKind.EXTRA_MOVES.value)
        if _PERFECT.search(text):
            return ExtractedFields(solved=True, attempts=0, rule=RuleKind.EXTRA_MOVES.value)
        return ExtractedFields()

    return ExtractionRule(game_id, RuleKind.EXTRA_MOVES, derive)


def narrative_tries_rule(game_id: str) -> ExtractionRule:
    """Narrative "guessed in N tries" phrase, falling back to an N/M ratio."""

    def derive(text: str) -> ExtractedFields:
        match = _TRIES.search(text)
        if match:
            return ExtractedFields(solved=True, attempts=int(match.group(1)), rule=RuleKind.NARRATIVE_TRIES.value)
        for ratio in _ANY_RATIO.finditer(text):
            limit = int(ratio.group(2))
            if ratio.group(1).upper() == "X":
                return ExtractedFields(solved=False, attempts=limit, rule=RuleKind.NARRATIVE_TRIES.value)
            attempts = int(ratio.group(1))
            if attempts <= limit:
                return ExtractedFields(solved=True, attempts=attempts, rule=RuleKind.NARRATIVE_TRIES.value)
        return ExtractedFields()

    return ExtractionRule(game_id, RuleKind.NARRATIVE_TRIES, derive)


def hint_penalty_rule(game_id: str, penalty: int = HINT_PENALTY) -> ExtractionRule:
    """Guesses plus hints, each hint worth `penalty` guesses."""

    def derive(text: str) -> ExtractedFields:
        if _GAVE_UP.search(text):
            return ExtractedFields(solved=False, rule=RuleKind.HINT_PENALTY.value)
        guesses = _GUESSES.search(text)
        if not guesses:
            return ExtractedFields()
        hints = _HINTS.search(text)
        hint_count = int(hints.group(1)) if hints else 0
        attempts = int(guesses.group(1)) + hint_count * penalty
        return ExtractedFields(solved=True, attempts=attempts, rule=RuleKind.HINT_PENALTY.value)

    return ExtractionRule(game_id, RuleKind.HINT_PENALTY, derive)


def _elapsed_seconds(text: str) -> Optional[int]:
    clock = _CLOCK.search(text)
    if clock:
        return int(clock.group(1)) * 60 + int(clock.group(2))
    seconds = _SECONDS.search(text)
    if seconds:
        return int(seconds.group(1))
    return None


def hint_count_rule(game_id: str) -> ExtractionRule:
    """No failure state exists: any recognized count means solved."""

    def derive(text: str) -> ExtractedFields:
        hints: Optional[int] = None
        match = _HINTS.search(text)
        if match:
            hints = int(match.group(1))
        elif _NO_HINTS.search(text):
            hints = 0
        elif Glyph.BULB.value in text:
            hints = text.count(Glyph.BULB.value)
        time_seconds = _elapsed_seconds(text)
        if hints is None and time_seconds is None:
            return ExtractedFields()
        return ExtractedFields(
            solved=True,
            attempts=hints,
            time_seconds=time_seconds,
            rule=RuleKind.HINT_COUNT.value,
        )

    return ExtractionRule(game_id, RuleKind.HINT_COUNT, derive)


def percentage_rule(game_id: str) -> ExtractionRule:
    """Territory share as an integer percentage; attempts never apply."""

    def derive(text: str) -> ExtractedFields:
        match = _PERCENT.search(text)
        if not match:
            return ExtractedFields()
        return ExtractedFields(solved=True, score=int(match.group(1)), rule=RuleKind.PERCENTAGE.value)

    return ExtractionRule(game_id, RuleKind.PERCENTAGE, derive)


RULES: Dict[str, ExtractionRule] = {
    rule.game_id: rule
    for rule in (
        guess_limit_rule(catalog.WORDLE, cap=6, grid_fallback=True),
        guess_limit_rule(catalog.WORLDLE, cap=6),
        guess_limit_rule(catalog.BANDLE, cap=6),
        category_grid_rule(catalog.CONNECTIONS),
        reveal_rule(catalog.SPOTLE, cap=10),
        extra_moves_rule(catalog.TRAVLE),
        narrative_tries_rule(catalog.COUNTRYLE),
        hint_penalty_rule(catalog.CONTEXTO),
        hint_penalty_rule(catalog.SEMANTLE),
        hint_count_rule(catalog.MINUTE_CRYPTIC),
        percentage_rule(catalog.HORSE),
    )
}


def extract_normalized(game_id: Optional[str], text: str) -> ExtractedFields:
    """Apply the game's rule to already-normalized text."""

    rule = RULES.get(game_id) if game_id else None
    if rule is None or not text:
        return ExtractedFields()
    return rule.apply(text)


def extract_fields(game_id: Optional[str], text: str) -> ExtractedFields:
    """Derive score fields for a confirmed game from raw pasted text."""

    return extract_normalized(game_id, normalize_glyphs(text))

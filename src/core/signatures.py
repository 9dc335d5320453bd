"""Game signature matching (core domain).

Each game owns a signature: name/hashtag keywords plus an optional glyph-set
predicate. Signatures are evaluated in a fixed priority order and the first
satisfied one wins, so at most one game is ever reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Callable, Iterable, List, Optional, Tuple

from core import catalog
from core.glyphs import ARROWS, Glyph, tile_rows
from core.models import DetectionResult, NO_DETECTION


@dataclass(frozen=True)
class PasteScan:
    """Normalized text plus the views every predicate needs, computed once."""

    text: str
    lowered: str
    rows: Tuple[Tuple[Glyph, ...], ...]

    @classmethod
    def from_text(cls, text: str) -> "PasteScan":
        return cls(text=text, lowered=text.lower(), rows=tuple(tile_rows(text)))


GlyphPredicate = Callable[[PasteScan], bool]


@dataclass(frozen=True)
class GameSignature:
    """Keywords and glyph predicate identifying one game."""

    game_id: str
    keywords: List[str]
    glyph_predicate: Optional[GlyphPredicate] = None
    glyph_description: str = ""


@dataclass(frozen=True)
class SignatureMatch:
    """A satisfied signature with a human-readable reason."""

    game_id: str
    signal: str
    reason: str


@dataclass(frozen=True)
class SignatureTable:
    signatures: List[GameSignature] = field(default_factory=list)

    def priority(self) -> List[str]:
        return [signature.game_id for signature in self.signatures]


_WORDLE_PALETTE = frozenset({Glyph.BLACK, Glyph.WHITE, Glyph.YELLOW, Glyph.GREEN})
_CONNECTIONS_PALETTE = frozenset({Glyph.YELLOW, Glyph.GREEN, Glyph.BLUE, Glyph.PURPLE})
_TRAVLE_CHARS = frozenset(
    glyph.value for glyph in (Glyph.CHECK, Glyph.ORANGE, Glyph.RED, Glyph.BLACK, Glyph.CROSS)
)

_WORLDLE_ROW = re.compile(
    "[{squares}]{{5}}[ \t]*[{marks}]".format(
        squares="".join(glyph.value for glyph in (Glyph.BLACK, Glyph.WHITE, Glyph.YELLOW, Glyph.GREEN)),
        marks="".join(glyph.value for glyph in sorted(ARROWS | {Glyph.PARTY})),
    )
)
_CONTEXTO_TALLY = re.compile(r"^[ \t]*([\U0001f7e9\U0001f7e8\U0001f7e5])[ \t]*\d+[ \t]*$", re.MULTILINE)


def _bandle_grid(scan: PasteScan) -> bool:
    # Six clips per day; red marks a wrong guess and black a skipped clip.
    return any(len(row) == 6 and (Glyph.RED in row or Glyph.BLACK in row) for row in scan.rows)


def _worldle_grid(scan: PasteScan) -> bool:
    return bool(_WORLDLE_ROW.search(scan.text))


def _spotle_mark(scan: PasteScan) -> bool:
    return Glyph.HEADPHONES.value in scan.text


def _travle_track(scan: PasteScan) -> bool:
    for line in scan.text.splitlines():
        track = "".join(line.split())
        if len(track) < 3:
            continue
        if all(char in _TRAVLE_CHARS for char in track) and Glyph.CHECK.value in track:
            return True
    return False


def _contexto_tally(scan: PasteScan) -> bool:
    colors = {match.group(1) for match in _CONTEXTO_TALLY.finditer(scan.text)}
    return len(colors) >= 2


def _horse_mark(scan: PasteScan) -> bool:
    return Glyph.HORSE.value in scan.text


def _connections_grid(scan: PasteScan) -> bool:
    rows = [row for row in scan.rows if len(row) == 4 and set(row) <= _CONNECTIONS_PALETTE]
    if not rows:
        return False
    used = {glyph for row in rows for glyph in row}
    return Glyph.BLUE in used or Glyph.PURPLE in used


def _wordle_grid(scan: PasteScan) -> bool:
    return any(len(row) == 5 and set(row) <= _WORDLE_PALETTE for row in scan.rows)


# Order is part of the contract: rarer or more specific signatures come
# before the general ones whose keywords or grids they overlap.
SIGNATURES: List[GameSignature] = [
    # Bandle shares end with "#Bandle #Heardle #Wordle".
    GameSignature(catalog.BANDLE, ["bandle"], _bandle_grid, "six-wide clip row"),
    # Worldle rows are five squares plus a direction arrow.
    GameSignature(catalog.WORLDLE, ["worldle"], _worldle_grid, "square row with arrow"),
    GameSignature(catalog.COUNTRYLE, ["countryle"]),
    GameSignature(catalog.SPOTLE, ["spotle"], _spotle_mark, "headphones mark"),
    GameSignature(catalog.TRAVLE, ["travle"], _travle_track, "check-mark route track"),
    GameSignature(catalog.CONTEXTO, ["contexto"], _contexto_tally, "colored guess tally"),
    GameSignature(catalog.SEMANTLE, ["semantle"]),
    GameSignature(catalog.MINUTE_CRYPTIC, ["minute cryptic", "minutecryptic"]),
    GameSignature(catalog.HORSE, ["enclose.horse", "enclose horse", "enclosehorse"], _horse_mark, "horse mark"),
    GameSignature(catalog.CONNECTIONS, ["connections"], _connections_grid, "four-color category rows"),
    GameSignature(catalog.WORDLE, ["wordle"], _wordle_grid, "five-wide letter rows"),
]

DEFAULT_TABLE = SignatureTable(SIGNATURES)


def _evaluate(signature: GameSignature, scan: PasteScan) -> Optional[SignatureMatch]:
    keyword_hits = [k for k in signature.keywords if k in scan.lowered]
    if keyword_hits:
        reason = f"keyword(s): {', '.join(sorted(set(keyword_hits)))}"
        return SignatureMatch(signature.game_id, "name", reason)
    if signature.glyph_predicate is not None and signature.glyph_predicate(scan):
        return SignatureMatch(signature.game_id, "glyphs", f"glyphs: {signature.glyph_description}")
    return None


def match_signatures(text: str, table: SignatureTable = DEFAULT_TABLE) -> List[SignatureMatch]:
    """Return every satisfied signature in priority order.

    Used for diagnostics; detection only ever reports the first entry.
    Expects glyph-normalized text.
    """

    if not text or not text.strip():
        return []
    scan = PasteScan.from_text(text)
    matches: List[SignatureMatch] = []
    for signature in table.signatures:
        match = _evaluate(signature, scan)
        if match is not None:
            matches.append(match)
    return matches


def match_signature(
    text: str,
    known_ids: Optional[Iterable[str]] = None,
    table: SignatureTable = DEFAULT_TABLE,
) -> DetectionResult:
    """Return the first game whose signature is satisfied, or no detection.

    Expects glyph-normalized text. known_ids only feeds in_catalog; catalog
    policy is applied by the engine.
    """

    if not text or not text.strip():
        return NO_DETECTION
    scan = PasteScan.from_text(text)
    for signature in table.signatures:
        match = _evaluate(signature, scan)
        if match is None:
            continue
        in_catalog = known_ids is None or match.game_id in set(known_ids)
        return DetectionResult(game_id=match.game_id, signal=match.signal, in_catalog=in_catalog)
    return NO_DETECTION

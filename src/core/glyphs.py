"""Canonical glyph alphabet (core domain).

Result grids are pasted either with their emoji intact or after the UTF-8
bytes went through the Johab code page. That decode pairs bytes across
character boundaries, so one emoji turns into CJK or Hangul characters whose
shape depends on its neighbours, and a byte that cannot start a pair is lost
as U+FFFD. normalize_glyphs re-encodes such characters to their Johab bytes
and reassembles the UTF-8 sequences of the known glyphs, so signature and
extraction rules only ever see canonical symbols.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

MISDECODE_CODEC = "johab"


class Glyph(str, Enum):
    """Canonical symbols. The value is the correctly rendered emoji."""

    BLACK = "\u2b1b"
    WHITE = "\u2b1c"
    YELLOW = "\U0001f7e8"
    GREEN = "\U0001f7e9"
    BLUE = "\U0001f7e6"
    PURPLE = "\U0001f7ea"
    RED = "\U0001f7e5"
    ORANGE = "\U0001f7e7"
    CHECK = "\u2705"
    CROSS = "\u274c"
    HEADPHONES = "\U0001f3a7"
    HORSE = "\U0001f434"
    BULB = "\U0001f4a1"
    PARTY = "\U0001f389"
    ARROW_LEFT = "\u2b05"
    ARROW_RIGHT = "\u27a1"
    ARROW_UP = "\u2b06"
    ARROW_DOWN = "\u2b07"
    ARROW_UP_LEFT = "\u2196"
    ARROW_UP_RIGHT = "\u2197"
    ARROW_DOWN_RIGHT = "\u2198"
    ARROW_DOWN_LEFT = "\u2199"


SQUARES = frozenset(
    {
        Glyph.BLACK,
        Glyph.WHITE,
        Glyph.YELLOW,
        Glyph.GREEN,
        Glyph.BLUE,
        Glyph.PURPLE,
        Glyph.RED,
        Glyph.ORANGE,
    }
)
ARROWS = frozenset(
    {
        Glyph.ARROW_LEFT,
        Glyph.ARROW_RIGHT,
        Glyph.ARROW_UP,
        Glyph.ARROW_DOWN,
        Glyph.ARROW_UP_LEFT,
        Glyph.ARROW_UP_RIGHT,
        Glyph.ARROW_DOWN_RIGHT,
        Glyph.ARROW_DOWN_LEFT,
    }
)

VARIATION_SELECTOR = "\ufe0f"
REPLACEMENT_CHAR = "\ufffd"
NOISE_CHARS = frozenset({VARIATION_SELECTOR, REPLACEMENT_CHAR})

_GLYPH_BY_CHAR = {glyph.value: glyph for glyph in Glyph}
_CLEAN_CHARS = frozenset(_GLYPH_BY_CHAR) | {VARIATION_SELECTOR}
_NEUTRAL_VALUES = frozenset({Glyph.BLACK.value, Glyph.WHITE.value})
_ARROW_VALUES = frozenset(glyph.value for glyph in ARROWS)

# A lost byte can leave several candidates. Green wins among the colored
# squares: the solving tile is the one a score depends on.
_PREFERENCE: List[str] = [Glyph.GREEN.value] + [
    glyph.value for glyph in Glyph if glyph is not Glyph.GREEN
] + [""]


def _build_sequences() -> Dict[bytes, str]:
    sequences = {glyph.value.encode("utf-8"): glyph.value for glyph in Glyph}
    sequences[VARIATION_SELECTOR.encode("utf-8")] = ""
    return sequences


_SEQUENCES = _build_sequences()
_SELECTOR_BYTES = VARIATION_SELECTOR.encode("utf-8")


def _index_sequences(position: int) -> Dict[int, List[Tuple[bytes, str]]]:
    index: Dict[int, List[Tuple[bytes, str]]] = {}
    for sequence, value in _SEQUENCES.items():
        index.setdefault(sequence[position], []).append((sequence, value))
    return index


_BY_LEAD = _index_sequences(0)
_BY_SECOND = _index_sequences(1)

_EXACT = "exact"
_HOLE = "hole"
_WEAK = "weak"


@dataclass(frozen=True)
class _Unit:
    """One byte of a re-encoded character, a lost byte, or an opaque character."""

    byte: Optional[int]
    char: str
    index: int
    first: bool = True
    last: bool = True

    @property
    def is_hole(self) -> bool:
        return self.byte is None and self.char == REPLACEMENT_CHAR


@dataclass(frozen=True)
class _Match:
    start: int
    end: int
    value: str
    strength: str


def _units(text: str) -> List[_Unit]:
    units: List[_Unit] = []
    for index, char in enumerate(text):
        if char < "\x80":
            units.append(_Unit(ord(char), char, index))
            continue
        if char in _CLEAN_CHARS or char == REPLACEMENT_CHAR:
            units.append(_Unit(None, char, index))
            continue
        try:
            encoded = char.encode(MISDECODE_CODEC)
        except UnicodeEncodeError:
            encoded = b""
        if len(encoded) != 2:
            units.append(_Unit(None, char, index))
            continue
        units.append(_Unit(encoded[0], char, index, first=True, last=False))
        units.append(_Unit(encoded[1], char, index, first=False, last=True))
    return units


def _fits(units: Sequence[_Unit], start: int, sequence: bytes, allow_hole: bool) -> bool:
    if start + len(sequence) > len(units):
        return False
    holes = 0
    for offset, expected in enumerate(sequence):
        unit = units[start + offset]
        if unit.byte == expected:
            continue
        if allow_hole and unit.is_hole and holes == 0:
            holes = 1
            continue
        return False
    return True


def _fits_truncated(units: Sequence[_Unit], start: int, sequence: bytes) -> bool:
    # The last byte went missing without a trace, leaving one whole character.
    if len(sequence) != 3 or start + 2 > len(units):
        return False
    lead, trail = units[start], units[start + 1]
    return (
        lead.byte == sequence[0]
        and trail.byte == sequence[1]
        and lead.first
        and trail.last
        and lead.index == trail.index
    )


def _selector_follows(units: Sequence[_Unit], start: int) -> bool:
    if start < len(units) and units[start].char == VARIATION_SELECTOR:
        return True
    return _fits(units, start, _SELECTOR_BYTES, True) or _fits_truncated(units, start, _SELECTOR_BYTES)


def _resolve(
    candidates: Sequence[Tuple[bytes, str]],
    units: Sequence[_Unit],
    end: Optional[int],
    last_neutral: Optional[str],
) -> Tuple[bytes, str]:
    if len(candidates) == 1:
        return candidates[0]
    ranked = sorted(candidates, key=lambda item: _PREFERENCE.index(item[1]))
    arrows = [item for item in ranked if item[1] in _ARROW_VALUES]
    # Square tiles carry no selector; a selector after the glyph marks an arrow.
    if arrows and end is not None and _selector_follows(units, end):
        return arrows[0]
    neutral = [item for item in ranked if item[1] in _NEUTRAL_VALUES]
    if neutral:
        for item in neutral:
            if item[1] == last_neutral:
                return item
        return neutral[0]
    return ranked[0]


def _match_at(units: Sequence[_Unit], start: int, last_neutral: Optional[str]) -> Optional[_Match]:
    unit = units[start]
    if unit.byte is not None:
        candidates = _BY_LEAD.get(unit.byte, [])
        for sequence, value in candidates:
            if _fits(units, start, sequence, False):
                return _Match(start, start + len(sequence), value, _EXACT)
        holed = [item for item in candidates if _fits(units, start, item[0], True)]
        if holed:
            length = len(holed[0][0])
            _, value = _resolve(holed, units, start + length, last_neutral)
            return _Match(start, start + length, value, _HOLE)
        truncated = [item for item in candidates if _fits_truncated(units, start, item[0])]
        if truncated:
            _, value = _resolve(truncated, units, None, last_neutral)
            return _Match(start, start + 2, value, _WEAK)
        return None
    if unit.is_hole and start + 1 < len(units) and units[start + 1].byte is not None:
        holed = [
            item
            for item in _BY_SECOND.get(units[start + 1].byte, [])
            if _fits(units, start, item[0], True)
        ]
        if holed:
            sequence, value = _resolve(holed, units, start + len(holed[0][0]), last_neutral)
            return _Match(start, start + len(sequence), value, _HOLE)
    return None


def _scan(units: Sequence[_Unit]) -> List[_Match]:
    matches: List[_Match] = []
    last_neutral: Optional[str] = None
    position = 0
    while position < len(units):
        if units[position].byte == 0x0A:
            last_neutral = None
        found = _match_at(units, position, last_neutral)
        if found is None:
            position += 1
            continue
        matches.append(found)
        if found.value in _NEUTRAL_VALUES:
            last_neutral = found.value
        position = found.end
    return matches


def _accept(units: Sequence[_Unit], matches: Sequence[_Match]) -> List[_Match]:
    """Keep every certain match, and weak ones only beside a certain glyph.

    A lone character such as U+4E5D is ordinary CJK text unless it sits in a
    run of glyphs that holds at least one intact or byte-exact glyph.
    """

    by_start = {match.start: match for match in matches}
    touched = {
        units[offset].index
        for match in matches
        if match.strength != _WEAK
        for offset in range(match.start, match.end)
    }
    accepted = [match for match in matches if match.strength != _WEAK]
    run: List[_Match] = []
    anchored = False
    position = 0
    while position <= len(units):
        match = by_start.get(position)
        if match is not None:
            if match.strength == _WEAK:
                run.append(match)
            else:
                anchored = True
            position = match.end
            continue
        if position < len(units):
            unit = units[position]
            if unit.byte is None and unit.char in _GLYPH_BY_CHAR:
                anchored = True
                position += 1
                continue
            if unit.byte is None and unit.char in NOISE_CHARS:
                position += 1
                continue
            if unit.byte is not None and unit.byte >= 0x80 and unit.index in touched:
                position += 1
                continue
        if anchored:
            accepted.extend(run)
        run = []
        anchored = False
        position += 1
    return sorted(accepted, key=lambda match: match.start)


def _repair(text: str) -> str:
    units = _units(text)
    matches = _accept(units, _scan(units))
    by_start = {match.start: match for match in matches}
    touched = {units[offset].index for match in matches for offset in range(match.start, match.end)}
    out: List[str] = []
    position = 0
    while position < len(units):
        match = by_start.get(position)
        if match is not None:
            out.append(match.value)
            position = match.end
            continue
        unit = units[position]
        if unit.byte is None:
            if unit.char not in NOISE_CHARS:
                out.append(unit.char)
        elif unit.index in touched:
            # Leftover of a character split between glyphs.
            if unit.byte < 0x80:
                out.append(chr(unit.byte))
        elif unit.first:
            out.append(text[unit.index])
        position += 1
    return "".join(out)


def normalize_glyphs(text: str) -> str:
    """Return text with every known glyph rendition replaced by its canonical form."""

    if not text:
        return ""
    if all(char < "\x80" or char in _CLEAN_CHARS for char in text):
        return "".join(char for char in text if char not in NOISE_CHARS)
    return _repair(text)


def glyph_sequence(text: str, allowed: Iterable[Glyph] | None = None) -> List[Glyph]:
    """Return canonical glyphs in order of appearance, optionally filtered."""

    allowed_set = frozenset(allowed) if allowed is not None else None
    sequence: List[Glyph] = []
    for char in text:
        glyph = _GLYPH_BY_CHAR.get(char)
        if glyph is None:
            continue
        if allowed_set is not None and glyph not in allowed_set:
            continue
        sequence.append(glyph)
    return sequence


def tile_rows(text: str, palette: Iterable[Glyph] = SQUARES) -> List[Tuple[Glyph, ...]]:
    """Return grid rows: lines made only of palette squares (whitespace ignored).

    Expects normalized text. Lines carrying anything besides palette glyphs
    and whitespace are not rows.
    """

    palette_set = frozenset(palette)
    rows: List[Tuple[Glyph, ...]] = []
    for line in text.splitlines():
        stripped = "".join(line.split())
        if not stripped:
            continue
        row: List[Glyph] = []
        for char in stripped:
            glyph = _GLYPH_BY_CHAR.get(char)
            if glyph is None or glyph not in palette_set:
                row = []
                break
            row.append(glyph)
        if row:
            rows.append(tuple(row))
    return rows

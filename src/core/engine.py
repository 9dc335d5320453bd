"""Detection and extraction entry point.

This module is integration-agnostic: it takes pasted text and an optional
catalog, and returns a Suggestion. It never raises on text input, so the TUI
can call it on every keystroke.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from core.catalog import catalog_ids
from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from core.extractors import extract_normalized
from core.glyphs import normalize_glyphs
from core.models import DetectionResult, ExtractedFields, NO_DETECTION, Suggestion
from core.signatures import match_signature

LOGGER = logging.getLogger(__name__)


def _coerce_text(raw_text: Any, max_chars: int) -> str:
    if raw_text is None:
        return ""
    if isinstance(raw_text, (bytes, bytearray)):
        raw_text = bytes(raw_text).decode("utf-8", errors="replace")
    elif not isinstance(raw_text, str):
        return ""
    # Scanning stays linear in the window, whatever the paste size.
    return raw_text[:max_chars]


def detect_game(
    raw_text: Any,
    known_games: Optional[Iterable[Any]] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DetectionResult:
    """Return the matched game for a paste, applying the catalog policy."""

    text = normalize_glyphs(_coerce_text(raw_text, config.max_text_chars))
    return _detect_normalized(text, catalog_ids(known_games), config)


def _detect_normalized(
    text: str,
    known_ids: Optional[frozenset[str]],
    config: EngineConfig,
) -> DetectionResult:
    detection = match_signature(text, known_ids)
    if detection.game_id is None:
        return NO_DETECTION
    if not detection.in_catalog:
        if config.unknown_game_policy == "suppress":
            LOGGER.info("Suppressed %s match absent from the catalog", detection.game_id)
            return NO_DETECTION
        LOGGER.info("Surfacing %s match absent from the catalog", detection.game_id)
    return detection


def detect_and_extract(
    raw_text: Any,
    known_games: Optional[Iterable[Any]] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Suggestion:
    """Identify the game behind a paste and suggest its score fields.

    - No signature match: every field is None.
    - Match without a readable score: game_id set, other fields None.
    - Match outside known_games: returned or dropped per unknown_game_policy.
    """

    text = normalize_glyphs(_coerce_text(raw_text, config.max_text_chars))
    detection = _detect_normalized(text, catalog_ids(known_games), config)
    if detection.game_id is None:
        return Suggestion()

    fields = _extract_safely(detection.game_id, text)
    LOGGER.debug(
        "Detected %s via %s (rule=%s)",
        detection.game_id,
        detection.signal,
        fields.rule,
    )
    return Suggestion(
        game_id=detection.game_id,
        solved=fields.solved,
        attempts=fields.attempts,
        score=fields.score,
        time_seconds=fields.time_seconds,
    )


def _extract_safely(game_id: str, text: str) -> ExtractedFields:
    try:
        return extract_normalized(game_id, text)
    except Exception:
        LOGGER.exception("Extraction rule for %s failed", game_id)
        return ExtractedFields()

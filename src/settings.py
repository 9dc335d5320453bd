"""Static configuration for pastescore.

All user-editable settings (engine policy, catalog, game-day timezone,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from core.config import EngineConfig, SubmissionConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

# PASTESCORE_CONFIG points at an alternative config file (absolute or
# relative to the project root).
CONFIG_PATH = os.getenv("PASTESCORE_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")
if not os.path.isabs(CONFIG_PATH):
    CONFIG_PATH = os.path.join(PROJECT_ROOT, CONFIG_PATH)


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        loaded = json.load(handle)
    if not isinstance(loaded, dict):
        raise ValueError("config root must be an object")
    return loaded


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Engine controls:
# - UNKNOWN_GAME_POLICY: "surface" or "suppress" for matches missing from the catalog
# - MAX_TEXT_CHARS: pastes are cut to this window before scanning
_engine = _CONFIG.get("engine", {})
UNKNOWN_GAME_POLICY = _engine.get("unknown_game_policy", "surface")
MAX_TEXT_CHARS = int(_engine.get("max_text_chars", 20000))
ENGINE_CONFIG = EngineConfig(
    unknown_game_policy=UNKNOWN_GAME_POLICY,
    max_text_chars=MAX_TEXT_CHARS,
)

# Game day boundaries follow one reference timezone for every player.
_submission = _CONFIG.get("submission", {})
REFERENCE_TIMEZONE = _submission.get("reference_timezone", "Europe/Amsterdam")
SUBMISSION_CONFIG = SubmissionConfig(reference_timezone=REFERENCE_TIMEZONE)

# Catalog entries; an empty list falls back to the built-in games.
GAMES_CONFIG = _CONFIG.get("games", [])

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})

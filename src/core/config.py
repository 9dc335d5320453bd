"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_GAME_POLICIES = ("surface", "suppress")


@dataclass(frozen=True)
class EngineConfig:
    """Detection settings.

    unknown_game_policy decides what happens when a signature matches a game
    that the supplied catalog does not list: "surface" returns the raw match
    for the caller to validate, "suppress" reports no game.
    """

    unknown_game_policy: str = "surface"
    max_text_chars: int = 20000

    def __post_init__(self) -> None:
        if self.unknown_game_policy not in UNKNOWN_GAME_POLICIES:
            raise ValueError(f"Unsupported unknown_game_policy: {self.unknown_game_policy}")
        if self.max_text_chars <= 0:
            raise ValueError("max_text_chars must be positive")


@dataclass(frozen=True)
class SubmissionConfig:
    """Settings for turning an edited form into a score record."""

    reference_timezone: str = "Europe/Amsterdam"


DEFAULT_ENGINE_CONFIG = EngineConfig()

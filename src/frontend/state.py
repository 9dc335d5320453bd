"""State container for the paste inspector."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models import Suggestion
from core.submission import ScoreForm


@dataclass
class InspectorState:
    form: ScoreForm = field(default_factory=ScoreForm)
    suggestion: Suggestion = field(default_factory=Suggestion)
    error: str | None = None
    submitted: int = 0

"""Main Textual app for the pastescore paste inspector."""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Footer, Input, Select, Static, TextArea

from adapters.result_formatting import format_game_label, format_suggestion
from core.catalog import DEFAULT_GAMES
from core.config import DEFAULT_ENGINE_CONFIG, EngineConfig, SubmissionConfig
from core.dates import format_time_until_reset, time_until_reset
from core.engine import detect_and_extract
from core.models import GameDefinition, Suggestion
from core.ports import ScoreSinkPort
from core.submission import ScoreForm, apply_suggestion, build_score_record

from .constants import FIELD_INPUTS, GRID_GREEN, GRID_YELLOW
from .modals import ClearFormScreen
from .state import InspectorState
from .validators import format_optional, format_solved, parse_duration, parse_optional_int, parse_solved


class PasteInspectorApp(App):
    """Paste a shared result, review the suggested fields and submit."""

    BINDINGS = [
        ("ctrl+s", "submit_score", "Submit"),
        ("ctrl+l", "clear_form", "Clear"),
        ("ctrl+q", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #121213;
        color: #e8eef5;
    }

    #header {
        height: 5;
        padding: 1 4;
        border-bottom: solid #3a3a3c;
    }

    #title {
        text-style: bold;
    }

    .subtle {
        color: #b0b4b8;
    }

    #body {
        padding: 1 4;
    }

    #paste-column {
        width: 3fr;
    }

    #form-column {
        width: 2fr;
        padding-left: 2;
    }

    #paste {
        height: 1fr;
        min-height: 10;
    }

    .form-label {
        color: #b0b4b8;
        margin-top: 1;
    }

    #detection {
        margin-top: 1;
        padding: 1;
        border: round #3a3a3c;
    }

    #status {
        margin-top: 1;
    }

    .status-error {
        color: #f87171;
    }

    .status-ok {
        color: #6aaa64;
    }

    #form-actions {
        height: auto;
        margin-top: 1;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round #3a3a3c;
        background: #1c1c1e;
    }

    ClearFormScreen {
        align: center middle;
    }

    .modal-title {
        text-style: bold;
    }

    .modal-actions {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        games: Optional[Iterable[GameDefinition]] = None,
        sink: Optional[ScoreSinkPort] = None,
        engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        submission_config: SubmissionConfig = SubmissionConfig(),
        user_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.games = list(games) if games is not None else list(DEFAULT_GAMES)
        self.sink = sink
        self.engine_config = engine_config
        self.submission_config = submission_config
        self.user_id = user_id
        self.state = InspectorState()
        self._loading_form = False
        self._field_errors: dict[str, str] = {}

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            yield Static(self._title_text(), id="title")
            yield Static("", id="reset-countdown", classes="subtle")
        with Horizontal(id="body"):
            with Vertical(id="paste-column"):
                yield Static("Paste your shared result", classes="form-label")
                yield TextArea(id="paste")
                yield Static(format_game_label(None, self.games), id="detection")
            with Vertical(id="form-column"):
                yield Static("game", classes="form-label")
                yield Select(self._game_options(), prompt="Select game", id="game-select")
                yield Static("solved", classes="form-label")
                yield Input(placeholder="yes / no", id="solved-input")
                yield Static("attempts", classes="form-label")
                yield Input(placeholder="e.g. 4", id="attempts-input")
                yield Static("score", classes="form-label")
                yield Input(placeholder="e.g. 100", id="score-input")
                yield Static("time", classes="form-label")
                yield Input(placeholder="seconds or m:ss", id="time-input")
                with Horizontal(id="form-actions"):
                    yield Button("Submit", id="submit-btn", variant="success")
                    yield Button("Clear", id="clear-btn", variant="warning")
                yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_countdown()
        self.set_interval(60, self._refresh_countdown)

    def _game_options(self) -> list[tuple[str, str]]:
        options = [(game.display_name, game.id) for game in self.games]
        listed = {game.id for game in self.games}
        # Matches outside the configured catalog may still be surfaced.
        for game in DEFAULT_GAMES:
            if game.id not in listed:
                options.append((f"{game.display_name} (not in catalog)", game.id))
        return options

    def inspect_paste(self, text: str) -> Suggestion:
        """Run detection on the paste and merge the suggestion into the form."""

        suggestion = detect_and_extract(text, self.games, self.engine_config)
        self.state.suggestion = suggestion
        self.state.form = apply_suggestion(self.state.form, text, suggestion)
        self.state.error = None
        self._field_errors.clear()
        self._load_form()
        self._refresh_detection()
        self._refresh_status()
        return suggestion

    @on(TextArea.Changed, "#paste")
    def _on_paste_changed(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        self.inspect_paste(event.text_area.text)

    @on(Select.Changed, "#game-select")
    def _on_game_changed(self, event: Select.Changed) -> None:
        if self._loading_form:
            return
        value = event.value
        self.state.form.game_id = None if value == Select.BLANK else str(value)
        self._refresh_status()

    @on(Input.Changed)
    def _on_field_changed(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        field_name = FIELD_INPUTS.get(event.input.id or "")
        if field_name is None:
            return
        if field_name == "solved":
            parsed = parse_solved(event.value)
        elif field_name == "time_seconds":
            parsed = parse_duration(event.value)
        else:
            parsed = parse_optional_int(event.value, field_name)

        if parsed.error:
            self._field_errors[field_name] = parsed.error
        else:
            self._field_errors.pop(field_name, None)
            setattr(self.state.form, field_name, parsed.value)
        self._refresh_status()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-btn":
            self.action_submit_score()
        elif event.button.id == "clear-btn":
            self.action_clear_form()

    def action_submit_score(self) -> None:
        self.submit_score()

    def submit_score(self) -> bool:
        if self._field_errors:
            self.state.error = next(iter(self._field_errors.values()))
            self._refresh_status()
            return False
        try:
            record = build_score_record(
                self.state.form,
                user_id=self.user_id,
                config=self.submission_config,
            )
            if self.sink is not None:
                self.sink.submit(record)
        except ValueError as exc:
            # SubmissionError and duplicate-score errors both land here.
            self.state.error = str(exc)
            self._refresh_status()
            return False

        self.state.error = None
        self.state.submitted += 1
        status = self.query_one("#status", Static)
        status.remove_class("status-error")
        status.add_class("status-ok")
        status.update("submitted: " + json.dumps(record.to_dict(), ensure_ascii=False))
        return True

    def action_clear_form(self) -> None:
        self.push_screen(ClearFormScreen(), self._handle_clear_choice)

    def _handle_clear_choice(self, confirmed: bool | None) -> None:
        if confirmed:
            self.clear_form()

    def clear_form(self) -> None:
        self.state.form = ScoreForm()
        self.state.suggestion = Suggestion()
        self.state.error = None
        self._field_errors.clear()
        self._loading_form = True
        try:
            self.query_one("#paste", TextArea).load_text("")
        finally:
            self._loading_form = False
        self._load_form()
        self._refresh_detection()
        self._refresh_status()

    def _load_form(self) -> None:
        form = self.state.form
        self._loading_form = True
        try:
            select = self.query_one("#game-select", Select)
            if form.game_id is None:
                select.clear()
            else:
                select.value = form.game_id
            self.query_one("#solved-input", Input).value = format_solved(form.solved)
            self.query_one("#attempts-input", Input).value = format_optional(form.attempts)
            self.query_one("#score-input", Input).value = format_optional(form.score)
            self.query_one("#time-input", Input).value = format_optional(form.time_seconds)
        finally:
            self._loading_form = False

    def _refresh_detection(self) -> None:
        detection = self.query_one("#detection", Static)
        detection.update(format_suggestion(self.state.suggestion, "plain", self.games))

    def _refresh_status(self) -> None:
        status = self.query_one("#status", Static)
        status.remove_class("status-ok", "status-error")
        error = self.state.error or next(iter(self._field_errors.values()), None)
        if error:
            status.update(f"error: {error}")
            status.add_class("status-error")
        elif not self.state.form.game_id:
            status.update("select your game manually")
        else:
            status.update("ready to submit")

    def _refresh_countdown(self) -> None:
        remaining = time_until_reset(tz_name=self.submission_config.reference_timezone)
        self.query_one("#reset-countdown", Static).update(
            f"next game day in {format_time_until_reset(remaining)}"
        )

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("PASTE", GRID_GREEN),
            ("SCORE", GRID_YELLOW),
            (" > Result Inspector", "bold"),
        )

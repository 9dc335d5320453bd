from __future__ import annotations

import asyncio

from textual.widgets import Input, Select

from adapters.memory_sink import InMemoryScoreSink
from core.catalog import DEFAULT_GAMES
from frontend.app import PasteInspectorApp


def _app(sink: InMemoryScoreSink | None = None) -> PasteInspectorApp:
    return PasteInspectorApp(games=DEFAULT_GAMES, sink=sink or InMemoryScoreSink(), user_id="u1")


def test_paste_fills_form_fields() -> None:
    async def scenario() -> None:
        app = _app()
        async with app.run_test() as pilot:
            app.inspect_paste("Wordle 1,234 4/6")
            await pilot.pause()
            assert app.state.form.game_id == "WORDLE"
            assert app.state.form.attempts == 4
            assert app.query_one("#attempts-input", Input).value == "4"
            assert app.query_one("#solved-input", Input).value == "yes"
            assert app.query_one("#game-select", Select).value == "WORDLE"

    asyncio.run(scenario())


def test_unreadable_paste_asks_for_manual_selection() -> None:
    async def scenario() -> None:
        app = _app()
        async with app.run_test() as pilot:
            app.inspect_paste("what a day")
            await pilot.pause()
            assert app.state.form.game_id is None
            assert app.state.suggestion.game_id is None
            assert app.submit_score() is False
            assert "select your game manually" in (app.state.error or "")

    asyncio.run(scenario())


def test_submit_stores_record_once() -> None:
    async def scenario() -> None:
        sink = InMemoryScoreSink()
        app = _app(sink)
        async with app.run_test() as pilot:
            app.inspect_paste("enclose.horse Day 40\n100%")
            await pilot.pause()
            assert app.submit_score() is True
            assert app.submit_score() is False
            assert "already submitted" in (app.state.error or "")
        assert len(sink.records()) == 1
        assert sink.records()[0].score == 100

    asyncio.run(scenario())


def test_invalid_manual_edit_blocks_submit() -> None:
    async def scenario() -> None:
        app = _app()
        async with app.run_test() as pilot:
            app.inspect_paste("Wordle 1,234 4/6")
            await pilot.pause()
            app.query_one("#attempts-input", Input).value = "four"
            await pilot.pause()
            assert app.submit_score() is False
            assert app.state.error == "attempts must be a whole number"

    asyncio.run(scenario())


def test_clear_form_resets_state() -> None:
    async def scenario() -> None:
        app = _app()
        async with app.run_test() as pilot:
            app.inspect_paste("Wordle 1,234 4/6")
            await pilot.pause()
            app.clear_form()
            await pilot.pause()
            assert app.state.form.game_id is None
            assert app.state.form.attempts is None
            assert app.query_one("#attempts-input", Input).value == ""

    asyncio.run(scenario())

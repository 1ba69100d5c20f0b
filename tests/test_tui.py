"""Tests for the interactive studio app."""

import asyncio
from unittest.mock import MagicMock

from textual.widgets import Button, TextArea

from uicraft.generators import CompletionClient
from uicraft.models import Failure, Success, Theme, ViewMode
from uicraft.session import FAILURE_PLACEHOLDER, Session
from uicraft.tui import StudioApp
from uicraft.tui.widgets import OutputView


class StubClient(CompletionClient):
    def __init__(self, *results):
        self.results = list(results)
        self.instructions = []
        self.closed = False

    def name(self) -> str:
        return "stub"

    async def complete(self, instruction):
        self.instructions.append(instruction)
        return self.results.pop(0)

    async def aclose(self):
        self.closed = True


def make_app(*results):
    client = StubClient(*results)
    inline = MagicMock()
    inline.show.return_value = "inline-1.html"
    detached = MagicMock()
    app = StudioApp(Session(client), inline_port=inline, detached_port=detached)
    return app, client, inline, detached


async def type_description(app, pilot, text):
    app.query_one("#description", TextArea).text = text
    await pilot.pause()


async def generate(app, pilot):
    await pilot.press("f5")
    await app.workers.wait_for_complete()
    await pilot.pause()


def test_generate_button_disabled_until_description():
    app, client, _, _ = make_app()

    async def run():
        async with app.run_test() as pilot:
            button = app.query_one("#generate", Button)
            assert button.disabled
            await type_description(app, pilot, "A navbar")
            assert not button.disabled
            await type_description(app, pilot, "   ")
            assert button.disabled

    asyncio.run(run())


def test_generate_shows_code_and_actions():
    app, client, _, _ = make_app(Success("```html\n<nav>menu</nav>\n```"))

    async def run():
        async with app.run_test() as pilot:
            assert not app.query_one("#output-actions").has_class("has-code")
            await type_description(app, pilot, "A navbar")
            await generate(app, pilot)

            assert app.session.state.extracted_code == "<nav>menu</nav>"
            assert not app.session.state.is_generating
            assert app.query_one("#output-actions").has_class("has-code")
            assert not app.query_one("#generate", Button).disabled

    asyncio.run(run())
    assert len(client.instructions) == 1


def test_blank_generate_key_notifies_without_request():
    app, client, _, _ = make_app()
    app.notify = MagicMock()

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("f5")
            await app.workers.wait_for_complete()
            await pilot.pause()

    asyncio.run(run())
    assert client.instructions == []
    app.notify.assert_called_once_with("Please enter a prompt", severity="error")


def test_failure_shows_placeholder():
    app, client, _, _ = make_app(Failure("boom"))

    async def run():
        async with app.run_test() as pilot:
            await type_description(app, pilot, "card")
            await generate(app, pilot)
            assert app.session.state.extracted_code == FAILURE_PLACEHOLDER

    asyncio.run(run())


def test_stack_selection_is_used():
    app, client, _, _ = make_app(Success("<p></p>"))

    async def run():
        async with app.run_test() as pilot:
            app.query_one("#stack").value = "html+js+tailwind"
            await pilot.pause()
            assert app.session.state.stack.value == "html+js+tailwind"
            await type_description(app, pilot, "card")
            await generate(app, pilot)

    asyncio.run(run())
    assert "Framework to use: html+js+tailwind" in client.instructions[0]


def test_preview_toggle_and_fullscreen():
    app, client, inline, detached = make_app(Success("<p>hi</p>"))

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("f6")
            assert app.session.state.view_mode is ViewMode.SOURCE
            inline.show.assert_not_called()

            await type_description(app, pilot, "card")
            await generate(app, pilot)

            await pilot.press("f6")
            assert app.session.state.view_mode is ViewMode.PREVIEW
            inline.show.assert_called_once_with("<p>hi</p>")

            await pilot.press("f7")
            detached.show.assert_called_once_with("<p>hi</p>")

            await pilot.press("f6")
            assert app.session.state.view_mode is ViewMode.SOURCE

    asyncio.run(run())


def test_preview_failure_keeps_app_running():
    app, client, inline, detached = make_app(Success("<p>hi</p>"))
    inline.show.side_effect = OSError("disk full")
    detached.show.side_effect = OSError("disk full")
    app.bell = MagicMock()

    async def run():
        async with app.run_test() as pilot:
            await type_description(app, pilot, "card")
            await generate(app, pilot)

            await pilot.press("f6")
            await pilot.pause()
            assert app.session.state.view_mode is ViewMode.PREVIEW
            assert app.session.last_preview_error.reason == "disk full"
            assert app.query_one("#output", OutputView).has_class("preview-failed")

            await pilot.press("f7")
            await pilot.pause()
            app.bell.assert_called_once()

            await pilot.press("f6")
            assert app.session.state.view_mode is ViewMode.SOURCE

    asyncio.run(run())
    assert app.return_value is None



def test_copy_and_theme():
    app, client, _, _ = make_app(Success("<p>copy me</p>"))
    app.copy_to_clipboard = MagicMock()

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("f8")
            app.copy_to_clipboard.assert_not_called()

            await type_description(app, pilot, "card")
            await generate(app, pilot)
            await pilot.press("f8")
            app.copy_to_clipboard.assert_called_once_with("<p>copy me</p>")

            await pilot.press("f9")
            assert app.session.state.theme is Theme.DARK
            assert app.theme == "textual-dark"

    asyncio.run(run())


def test_quit_returns_state():
    app, client, _, _ = make_app()

    async def run():
        async with app.run_test() as pilot:
            await pilot.press("ctrl+q")

    asyncio.run(run())
    assert app.return_value is app.session.state

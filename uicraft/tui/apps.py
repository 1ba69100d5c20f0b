"""TUI application for interactive component generation.

The whole session runs on Textual's event loop. The completion request is
the only await point; the generate action is disabled while it is in flight.

CRITICAL: Do NOT import Rich console or use console.print() in TUI code.
Rich and Textual cannot mix - terminal state will be corrupted.
"""
from pathlib import Path
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Footer, Label, Select, TextArea

from ..errors import PreviewError
from ..models import STACKS, Notification, PreviewTarget, Theme, ViewMode, ViewState
from ..preview import DetachedPreview, InlinePreview, PreviewPort
from ..session import Session
from .widgets import GeneratingIndicator, OutputView


TEXTUAL_THEMES = {
    Theme.LIGHT: "textual-light",
    Theme.DARK: "textual-dark",
}


class StudioApp(App[ViewState]):
    """Interactive generator: pick a stack, describe a component, generate.

    Returns the final ViewState when the user quits.
    """

    TITLE = "UICraft"
    SUB_TITLE = "Generate front-end code"

    CSS = """
    #main {
        layout: horizontal;
        height: 1fr;
    }

    #input-panel {
        width: 1fr;
        padding: 1 2;
        border: round $primary;
    }

    #output-panel {
        width: 2fr;
        padding: 1 2;
        border: round $secondary;
    }

    #description {
        height: 1fr;
        min-height: 8;
    }

    #generate {
        width: 100%;
        margin-top: 1;
    }

    #status {
        height: 1;
    }

    #output-actions {
        height: auto;
        display: none;
    }

    #output-actions.has-code {
        display: block;
    }

    #output-actions Button {
        margin-right: 1;
    }

    #output.empty {
        height: 100%;
        content-align: center middle;
        border: dashed $surface-lighten-2;
    }

    #output.preview-failed {
        border: round $error;
    }
    """

    BINDINGS = [
        Binding("f5", "generate", "Generate"),
        Binding("f6", "toggle_view", "Preview/Code"),
        Binding("f7", "fullscreen", "Full screen"),
        Binding("f8", "copy", "Copy"),
        Binding("f9", "toggle_theme", "Theme"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        session: Session,
        inline_port: Optional[PreviewPort] = None,
        detached_port: Optional[PreviewPort] = None,
    ):
        """Initialize StudioApp.

        Args:
            session: Session holding state and the completion client
            inline_port: Port for the in-panel preview
            detached_port: Port for the full-screen preview
        """
        super().__init__()
        self.session = session
        self.session.notify = self._notify
        self.inline_port = inline_port or InlinePreview()
        self.detached_port = detached_port or DetachedPreview()
        self._preview_path: Optional[Path] = None
        self._preview_error: Optional[PreviewError] = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="main"):
            with Vertical(id="input-panel"):
                yield Label("Select Front-End Type")
                yield Select(
                    [(stack.label, stack.value) for stack in STACKS],
                    value=self.session.state.stack.value,
                    allow_blank=False,
                    id="stack",
                )
                yield Label("Describe what you want to build")
                yield TextArea(id="description")
                yield Button("Generate Code", id="generate", variant="primary", disabled=True)
                yield GeneratingIndicator(id="status")
            with Vertical(id="output-panel"):
                with Horizontal(id="output-actions"):
                    yield Button("Copy", id="copy")
                    yield Button("Preview", id="toggle-view")
                    yield Button("Full screen", id="fullscreen", variant="success")
                with VerticalScroll():
                    yield OutputView(id="output")
        yield Footer()

    def on_mount(self):
        self._apply_theme()
        self.refresh_output()

    # -- Session plumbing -----------------------------------------------------

    def _notify(self, notification: Notification) -> None:
        self.notify(notification.message, severity=notification.severity)

    @property
    def description(self) -> str:
        return self.query_one("#description", TextArea).text

    def _apply_theme(self):
        self.theme = TEXTUAL_THEMES[self.session.state.theme]

    def _update_generate_button(self):
        button = self.query_one("#generate", Button)
        button.disabled = not self.session.can_generate(self.description)
        button.label = "Generating..." if self.session.state.is_generating else "Generate Code"

    def refresh_output(self):
        """Redraw the output panel and action buttons from session state."""
        state = self.session.state
        self.query_one("#output-actions").set_class(state.has_code, "has-code")
        self.query_one("#toggle-view", Button).label = (
            "Code View" if state.view_mode is ViewMode.PREVIEW else "Preview"
        )
        self.query_one("#output", OutputView).show(state, self._preview_path, self._preview_error)
        self._update_generate_button()

    # -- Events ---------------------------------------------------------------

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._update_generate_button()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        self.session.select_stack(event.value)
        self.refresh_output()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "generate": self.action_generate,
            "copy": self.action_copy,
            "toggle-view": self.action_toggle_view,
            "fullscreen": self.action_fullscreen,
        }
        action = actions.get(event.button.id)
        if action:
            action()

    # -- Actions --------------------------------------------------------------

    def action_generate(self) -> None:
        if self.session.state.is_generating:
            return
        button = self.query_one("#generate", Button)
        button.disabled = True
        button.label = "Generating..."
        self.run_generation(self.description)

    @work(group="generation")
    async def run_generation(self, description: str) -> None:
        """Run one generation on the app's event loop."""
        indicator = self.query_one("#status", GeneratingIndicator)
        indicator.start()
        try:
            await self.session.generate(description)
        finally:
            indicator.stop()
        if self.session.state.view_mode is ViewMode.PREVIEW and self.session.state.has_code:
            self._open_inline_preview()
        self.refresh_output()

    def action_copy(self) -> None:
        self.session.copy(self.copy_to_clipboard)

    def action_toggle_view(self) -> None:
        state = self.session.toggle_view_mode()
        if state.view_mode is ViewMode.PREVIEW:
            self._open_inline_preview()
        self.refresh_output()

    def _open_inline_preview(self) -> None:
        self._preview_path = self.session.preview(PreviewTarget.INLINE, self.inline_port)
        self._preview_error = self.session.last_preview_error

    def action_fullscreen(self) -> None:
        self.session.preview(PreviewTarget.DETACHED, self.detached_port)
        if self.session.last_preview_error:
            self.bell()

    def action_toggle_theme(self) -> None:
        self.session.toggle_theme()
        self._apply_theme()
        self.refresh_output()

    async def action_quit(self) -> None:
        self.exit(self.session.state)

    async def on_unmount(self) -> None:
        """Close the completion client on the loop that used it."""
        await self.session.client.aclose()

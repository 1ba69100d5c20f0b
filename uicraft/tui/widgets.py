"""Custom TUI widgets for the UICraft studio.

This module provides the output panel and the generation status line.
"""
from pathlib import Path
from time import perf_counter
from typing import Optional

from rich.text import Text
from textual.widgets import Static

from ..errors import PreviewError
from ..models import ViewState
from ..render import EMPTY_PLACEHOLDER, RenderDecision, render_source, select_view


class OutputView(Static):
    """Shows the current code as highlighted source, a preview notice, or
    the empty-state placeholder."""

    def show(
        self,
        state: ViewState,
        preview_path: Optional[Path] = None,
        preview_error: Optional[PreviewError] = None,
    ) -> RenderDecision:
        """Render a session state. Returns what was shown."""
        decision = select_view(state)
        if decision is RenderDecision.EMPTY:
            self.set_class(True, "empty")
            self.set_class(False, "preview-failed")
            self.update(Text(EMPTY_PLACEHOLDER, style="dim", justify="center"))
        elif decision is RenderDecision.PREVIEW:
            self.set_class(False, "empty")
            self.set_class(preview_path is None, "preview-failed")
            if preview_path is None:
                message = Text("Preview could not be opened", style="bold red")
                if preview_error is not None:
                    message.append(f"\n\n{preview_error.reason}", style="red")
                    if preview_error.path:
                        message.append(f"\n{preview_error.path}", style="dim")
                self.update(message)
            else:
                self.update(Text.assemble(
                    ("Live preview running in a sandboxed browser frame\n\n", "bold"),
                    (str(preview_path), "dim"),
                ))
        else:
            self.set_class(False, "empty", "preview-failed")
            self.update(render_source(state.extracted_code, state.stack, state.theme))
        return decision


class GeneratingIndicator(Static):
    """Status line with elapsed time while a generation is in flight.

    Example output:
        ● Generating... (5s)
    """

    def __init__(self, id: Optional[str] = None):
        super().__init__("", id=id)
        self._started: Optional[float] = None
        self._timer = None

    def on_mount(self):
        self._timer = self.set_interval(1, self.refresh, pause=True)

    def start(self):
        self._started = perf_counter()
        if self._timer:
            self._timer.resume()
        self.refresh()

    def stop(self):
        self._started = None
        if self._timer:
            self._timer.pause()
        self.refresh()

    @property
    def running(self) -> bool:
        return self._started is not None

    def render(self) -> str:
        if self._started is None:
            return ""
        secs = int(perf_counter() - self._started)
        return f"[cyan]●[/cyan] Generating... ({secs}s)"

"""
Render selection for generated code.

Decides how the output panel shows the current code: highlighted source,
a sandboxed preview, or the empty-state placeholder.
"""

from enum import Enum
from typing import Union

from rich.syntax import Syntax

from .models import Stack, Theme, ViewMode, ViewState


SCRIPT_GRAMMAR = "javascript"
STYLE_GRAMMAR = "css"
MARKUP_GRAMMAR = "html"

EMPTY_PLACEHOLDER = "Your generated code will appear here"

# Pygments styles and panel backgrounds per theme
SYNTAX_THEMES = {
    Theme.LIGHT: "default",
    Theme.DARK: "monokai",
}
SYNTAX_BACKGROUNDS = {
    Theme.LIGHT: "#f5f5f5",
    Theme.DARK: "#1e1e1e",
}


class RenderDecision(str, Enum):
    EMPTY = "empty"
    SOURCE = "source"
    PREVIEW = "preview"


def highlight_grammar_for(stack: Union[str, Stack]) -> str:
    """Map a stack to the grammar used to highlight its code.

    First match wins: a script marker beats a styling marker, and anything
    else is highlighted as markup.
    """
    value = (stack.value if isinstance(stack, Stack) else stack).lower()
    if "js" in value:
        return SCRIPT_GRAMMAR
    if "css" in value or "tailwind" in value:
        return STYLE_GRAMMAR
    return MARKUP_GRAMMAR


def select_view(state: ViewState) -> RenderDecision:
    """Pick what the output panel shows for a session state."""
    if not state.has_code:
        return RenderDecision.EMPTY
    if state.view_mode is ViewMode.PREVIEW:
        return RenderDecision.PREVIEW
    return RenderDecision.SOURCE


def render_source(code: str, stack: Union[str, Stack], theme: Theme = Theme.LIGHT) -> Syntax:
    """Build a highlighted, line-numbered renderable for the code."""
    return Syntax(
        code,
        highlight_grammar_for(stack),
        theme=SYNTAX_THEMES[theme],
        background_color=SYNTAX_BACKGROUNDS[theme],
        line_numbers=True,
        word_wrap=False,
        padding=1,
    )

"""Tests for render selection."""

import pytest
from rich.syntax import Syntax

from uicraft.models import ViewMode, ViewState, Theme, get_stack
from uicraft.render import (
    MARKUP_GRAMMAR,
    SCRIPT_GRAMMAR,
    STYLE_GRAMMAR,
    RenderDecision,
    highlight_grammar_for,
    render_source,
    select_view,
)


class TestHighlightGrammarFor:
    def test_script_marker_wins_over_styling(self):
        assert highlight_grammar_for("html+js+tailwind") == SCRIPT_GRAMMAR == "javascript"

    @pytest.mark.parametrize("value", ["html+tailwind", "html+css"])
    def test_styling(self, value):
        assert highlight_grammar_for(value) == STYLE_GRAMMAR == "css"

    @pytest.mark.parametrize("value", ["html", "html+bootstrap", "", "something-else"])
    def test_markup_default(self, value):
        assert highlight_grammar_for(value) == MARKUP_GRAMMAR == "html"

    def test_accepts_stack_object(self):
        assert highlight_grammar_for(get_stack("html+js+tailwind")) == "javascript"


class TestSelectView:
    def test_empty_without_code(self):
        assert select_view(ViewState()) is RenderDecision.EMPTY
        assert select_view(ViewState(extracted_code="   ", view_mode=ViewMode.PREVIEW)) is RenderDecision.EMPTY

    def test_source(self):
        assert select_view(ViewState(extracted_code="<p></p>")) is RenderDecision.SOURCE

    def test_preview(self):
        state = ViewState(extracted_code="<p></p>", view_mode=ViewMode.PREVIEW)
        assert select_view(state) is RenderDecision.PREVIEW


class TestRenderSource:
    def test_uses_grammar_for_stack(self):
        syntax = render_source("<p></p>", "html+css")
        assert isinstance(syntax, Syntax)
        assert syntax.lexer.name.lower() == "css"

    def test_line_numbers(self):
        assert render_source("<p></p>", "html").line_numbers

    def test_theme_changes_palette(self):
        light = render_source("<p></p>", "html", Theme.LIGHT)
        dark = render_source("<p></p>", "html", Theme.DARK)
        assert light.background_color != dark.background_color

"""Tests for instruction building."""

import pytest

from uicraft.models import STACKS, get_stack
from uicraft.prompts import build_instruction


class TestBuildInstruction:
    def test_embeds_description_and_stack_verbatim(self):
        instruction = build_instruction("A login form with {braces} and ```ticks```", "html+css")
        assert "generate a UI component for: A login form with {braces} and ```ticks```" in instruction
        assert "Framework to use: html+css" in instruction

    def test_accepts_stack_object(self):
        stack = get_stack("html+tailwind")
        assert build_instruction("navbar", stack) == build_instruction("navbar", "html+tailwind")

    @pytest.mark.parametrize("stack", STACKS, ids=lambda s: s.value)
    def test_deterministic(self, stack):
        first = build_instruction("A pricing table", stack)
        second = build_instruction("A pricing table", stack)
        assert first == second

    def test_frames_model_as_front_end_engineer(self):
        instruction = build_instruction("card", "html")
        assert instruction.startswith("You are an experienced programmer")
        assert "web development and UI/UX design" in instruction

    def test_lists_quality_requirements(self):
        instruction = build_instruction("card", "html")
        assert "responsive" in instruction
        assert "animated" in instruction
        assert "accessible" in instruction
        assert "single HTML file" in instruction
        assert "fenced code block" in instruction

    def test_forbids_other_output(self):
        instruction = build_instruction("card", "html")
        assert "Return ONLY the code" in instruction
        assert "Do NOT include explanations" in instruction

    def test_different_descriptions_differ(self):
        assert build_instruction("a", "html") != build_instruction("b", "html")

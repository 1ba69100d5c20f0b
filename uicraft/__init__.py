"""
UICraft - describe a UI component, get a single runnable HTML document back.

Builds an instruction for a hosted text-generation model, extracts the code
from its reply and renders it as highlighted source or a sandboxed preview.
"""

from pathlib import Path

# Read version from VERSION file (single source of truth)
_version_file = Path(__file__).parent.parent / "VERSION"
if _version_file.exists():
    __version__ = _version_file.read_text().strip()
else:
    __version__ = "0.1.0"  # Fallback for development

from uicraft.models import STACKS, Stack, GenerationRequest, ViewState
from uicraft.prompts import build_instruction
from uicraft.extract import extract_code
from uicraft.render import highlight_grammar_for
from uicraft.config import Config

__all__ = [
    "__version__",
    "STACKS",
    "Stack",
    "GenerationRequest",
    "ViewState",
    "build_instruction",
    "extract_code",
    "highlight_grammar_for",
    "Config",
]

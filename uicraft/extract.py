"""Pull the generated document out of a free-text model reply."""

import re
from typing import Optional

# Opening fence with optional language tag, then everything up to the
# first closing fence.
FENCED_BLOCK = re.compile(r"```(?:\w+)?\n?([\s\S]*?)```")


def extract_code(raw_text: Optional[str]) -> str:
    """Return the code from a model reply.

    Only the first fenced block is used. A reply without a complete fenced
    block is assumed to be the code itself and is returned trimmed. Never
    raises; an empty result means there is no code to show.
    """
    if not raw_text:
        return ""

    match = FENCED_BLOCK.search(raw_text)
    if match:
        return match.group(1).strip()
    return raw_text.strip()


def has_fenced_block(raw_text: Optional[str]) -> bool:
    """Check whether a reply contains a complete fenced block."""
    return bool(raw_text) and FENCED_BLOCK.search(raw_text) is not None

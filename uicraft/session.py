"""
Interactive session state and actions.

Each action is a transition from one ViewState to the next. Session holds
the current state, applies transitions and runs the single in-flight
generation against a CompletionClient.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import PreviewError, ValidationError
from .extract import extract_code, has_fenced_block
from .generators import CompletionClient
from .models import (
    CompletionResult,
    Failure,
    GenerationRequest,
    Notification,
    NotificationKind,
    PreviewTarget,
    Stack,
    Theme,
    ViewState,
    get_stack,
)
from .preview import PreviewPort, render_preview
from .prompts import build_instruction

logger = logging.getLogger(__name__)

# Shown in place of code after a failed generation
FAILURE_PLACEHOLDER = "// Failed to get response from AI."

ON_FAILURE_PLACEHOLDER = "placeholder"
ON_FAILURE_PRESERVE = "preserve"


# -- Transitions ---------------------------------------------------------------

def select_stack(state: ViewState, stack: Union[str, Stack]) -> ViewState:
    return replace(state, stack=get_stack(stack))


def toggle_view_mode(state: ViewState) -> ViewState:
    """Flip between source and preview. Inert while there is no code."""
    if not state.has_code:
        return state
    return replace(state, view_mode=state.view_mode.toggled())


def toggle_theme(state: ViewState) -> ViewState:
    return replace(state, theme=state.theme.toggled())


def begin_generation(state: ViewState) -> ViewState:
    return replace(state, is_generating=True)


def finish_generation(
    state: ViewState,
    result: CompletionResult,
    on_failure: str = ON_FAILURE_PLACEHOLDER,
) -> tuple[ViewState, Notification]:
    """Apply a completion result.

    On success the extracted code replaces the current code. On failure the
    code becomes FAILURE_PLACEHOLDER, or is kept as-is when on_failure is
    "preserve".
    """
    if result.ok:
        code = extract_code(result.raw_text)
        if not has_fenced_block(result.raw_text):
            logger.debug("No fenced block in reply; using the whole reply as code")
        return (
            replace(state, extracted_code=code, is_generating=False),
            Notification.of(NotificationKind.GENERATION_SUCCESS),
        )

    if on_failure == ON_FAILURE_PRESERVE:
        code = state.extracted_code
    else:
        code = FAILURE_PLACEHOLDER
    return (
        replace(state, extracted_code=code, is_generating=False),
        Notification.of(NotificationKind.GENERATION_FAILURE),
    )


# -- Session -------------------------------------------------------------------

class Session:
    """One user's interactive session.

    Usage:
        session = Session(client, notify=print)
        await session.generate("A pricing table with three tiers")
        print(session.state.extracted_code)
    """

    def __init__(
        self,
        client: CompletionClient,
        notify: Optional[Callable[[Notification], None]] = None,
        state: Optional[ViewState] = None,
        on_failure: str = ON_FAILURE_PLACEHOLDER,
    ):
        """
        Args:
            client: Completion client used for generations
            notify: Receives user-facing notifications
            state: Initial state (defaults to an empty session)
            on_failure: "placeholder" or "preserve", see finish_generation
        """
        if on_failure not in (ON_FAILURE_PLACEHOLDER, ON_FAILURE_PRESERVE):
            raise ValueError(f"Unknown on_failure policy: {on_failure}")
        self.client = client
        self.notify = notify or self._log_notification
        self.state = state or ViewState()
        self.on_failure = on_failure
        self.last_failure: Optional[str] = None
        self.last_preview_error: Optional[PreviewError] = None

    @staticmethod
    def _log_notification(notification: Notification) -> None:
        logger.info(notification.message)

    def can_generate(self, description: str) -> bool:
        """Whether the generate action should be enabled."""
        return not self.state.is_generating and bool(description and description.strip())

    async def generate(self, description: str) -> ViewState:
        """Run one generation for the description with the current stack.

        A call while another generation is in flight does nothing. A blank
        description is rejected before any request is made.
        """
        if self.state.is_generating:
            logger.debug("Generation already in flight; ignoring trigger")
            return self.state

        try:
            request = GenerationRequest(description, self.state.stack).validate()
        except ValidationError as e:
            logger.debug("Rejected generation request: %s", e)
            self.notify(Notification.of(NotificationKind.EMPTY_DESCRIPTION))
            return self.state

        self.state = begin_generation(self.state)
        instruction = build_instruction(request.description, request.stack)
        logger.info("Requesting %s component from %s", request.stack.value, self.client.name())

        try:
            result = await self.client.complete(instruction)
        except Exception as e:
            logger.exception("Completion client raised")
            result = Failure(str(e))

        if not result.ok:
            self.last_failure = result.reason
            logger.error("Generation failed: %s", result.reason)
        else:
            self.last_failure = None

        self.state, notification = finish_generation(self.state, result, self.on_failure)
        self.notify(notification)
        return self.state

    def copy(self, write: Callable[[str], None]) -> bool:
        """Write the current code to the clipboard. No-op without code."""
        if not self.state.extracted_code:
            return False
        write(self.state.extracted_code)
        self.notify(Notification.of(NotificationKind.COPY_SUCCESS))
        return True

    def select_stack(self, stack: Union[str, Stack]) -> ViewState:
        self.state = select_stack(self.state, stack)
        return self.state

    def toggle_view_mode(self) -> ViewState:
        self.state = toggle_view_mode(self.state)
        return self.state

    def toggle_theme(self) -> ViewState:
        self.state = toggle_theme(self.state)
        return self.state

    def set_theme(self, theme: Theme) -> ViewState:
        self.state = replace(self.state, theme=Theme(theme))
        return self.state

    def preview(self, target: PreviewTarget, port: Optional[PreviewPort] = None) -> Optional[Path]:
        """Open the current code in a sandboxed preview.

        Returns the page path, or None when there is no code or the preview
        could not be opened. The reason for the latter is kept in
        last_preview_error.
        """
        self.last_preview_error = None
        try:
            return render_preview(self.state.extracted_code, target, port)
        except PreviewError as e:
            self.last_preview_error = e
        except OSError as e:
            self.last_preview_error = PreviewError(str(e))
        logger.warning("Preview could not be opened: %s", self.last_preview_error.reason)
        return None

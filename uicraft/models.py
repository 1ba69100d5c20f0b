"""
Data models for UICraft.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from uicraft.errors import ValidationError


@dataclass(frozen=True)
class Stack:
    """A supported target front-end stack."""

    value: str
    label: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label}


# Supported stacks, in display order. The first entry is the default.
STACKS: tuple[Stack, ...] = (
    Stack("html", "HTML"),
    Stack("html+css", "HTML + CSS"),
    Stack("html+tailwind", "HTML + Tailwind CSS"),
    Stack("html+js+tailwind", "HTML + JS + Tailwind CSS"),
    Stack("html+bootstrap", "HTML + Bootstrap"),
)

DEFAULT_STACK = STACKS[0]


def stack_values() -> list[str]:
    """Return the values of all supported stacks."""
    return [stack.value for stack in STACKS]


def get_stack(value: Union[str, Stack]) -> Stack:
    """Look up a supported stack by value.

    Raises:
        ValueError: If the value is not a supported stack
    """
    if isinstance(value, Stack):
        value = value.value
    for stack in STACKS:
        if stack.value == value:
            return stack
    raise ValueError(
        f"Unknown stack: {value!r}. Expected one of: {', '.join(stack_values())}"
    )


class ViewMode(str, Enum):
    """Whether the output panel shows highlighted source or a live preview."""

    SOURCE = "source"
    PREVIEW = "preview"

    def toggled(self) -> "ViewMode":
        return ViewMode.PREVIEW if self is ViewMode.SOURCE else ViewMode.SOURCE


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class PreviewTarget(str, Enum):
    """Where a preview is rendered."""

    INLINE = "inline"
    DETACHED = "detached"


@dataclass(frozen=True)
class GenerationRequest:
    """A description of the component to build and the stack to build it with."""

    description: str
    stack: Stack = DEFAULT_STACK

    def validate(self) -> "GenerationRequest":
        """Check the request can be sent.

        Raises:
            ValidationError: If the description is blank or the stack unsupported
        """
        if not self.description or not self.description.strip():
            raise ValidationError("Description must not be blank")
        if self.stack not in STACKS:
            raise ValidationError(f"Unsupported stack: {self.stack.value}")
        return self


@dataclass(frozen=True)
class Success:
    """A completion that returned text."""

    raw_text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A completion that failed. `reason` is safe to show to the user."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


CompletionResult = Union[Success, Failure]


@dataclass(frozen=True)
class ViewState:
    """State of one interactive session.

    `extracted_code` is an empty string until a generation produces code.
    """

    stack: Stack = DEFAULT_STACK
    extracted_code: str = ""
    view_mode: ViewMode = ViewMode.SOURCE
    theme: Theme = Theme.LIGHT
    is_generating: bool = False

    @property
    def has_code(self) -> bool:
        return bool(self.extracted_code.strip())


class NotificationKind(str, Enum):
    EMPTY_DESCRIPTION = "empty_description"
    GENERATION_SUCCESS = "generation_success"
    GENERATION_FAILURE = "generation_failure"
    COPY_SUCCESS = "copy_success"


NOTIFICATION_MESSAGES = {
    NotificationKind.EMPTY_DESCRIPTION: "Please enter a prompt",
    NotificationKind.GENERATION_SUCCESS: "Code generated successfully!",
    NotificationKind.GENERATION_FAILURE: "Failed to get response from AI.",
    NotificationKind.COPY_SUCCESS: "Code copied to clipboard",
}


@dataclass(frozen=True)
class Notification:
    """A short transient message for the user."""

    kind: NotificationKind
    message: str

    @property
    def severity(self) -> str:
        """Severity name as used by textual's notify()."""
        if self.kind in (NotificationKind.EMPTY_DESCRIPTION, NotificationKind.GENERATION_FAILURE):
            return "error"
        return "information"

    @classmethod
    def of(cls, kind: NotificationKind) -> "Notification":
        return cls(kind=kind, message=NOTIFICATION_MESSAGES[kind])

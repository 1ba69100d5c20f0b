"""
Exceptions for UICraft.
"""


class UICraftError(Exception):
    """Base exception for UICraft errors."""
    pass


class ValidationError(UICraftError):
    """A generation request was rejected before anything was sent."""
    pass


class TransportError(UICraftError):
    """The completion request failed, timed out or returned a bad response."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PreviewError(UICraftError):
    """A preview page could not be written or opened."""

    def __init__(self, reason: str, path=None):
        super().__init__(reason)
        self.reason = reason
        self.path = path

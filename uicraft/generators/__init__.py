"""
Completion clients for UICraft.
"""

from abc import ABC, abstractmethod

from ..models import CompletionResult


class CompletionClient(ABC):
    """Abstract base class for text-generation clients."""

    @abstractmethod
    async def complete(self, instruction: str) -> CompletionResult:
        """Send an instruction and return the model's reply.

        Args:
            instruction: The full instruction text

        Returns:
            Success with the raw reply text, or Failure with a reason.
            Transport and response errors are returned, not raised.
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Return the client name."""
        pass

    async def aclose(self) -> None:
        """Release any network resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


# Lazy import to keep httpx out of startup for pure helpers
def get_gemini_client():
    from .gemini import GeminiClient
    return GeminiClient

"""
Gemini text completion client for UICraft.

Sends the instruction to the Gemini generateContent endpoint and returns the
reply text. Every way the call can go wrong comes back as a Failure; nothing
is retried.
"""

import logging
import os
from typing import Optional

import httpx

from . import CompletionClient
from ..config import DEFAULT_MODEL
from ..errors import TransportError
from ..models import CompletionResult, Failure, Success

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


def gemini_url(model: str) -> str:
    return f"{GEMINI_API_BASE}/{model}:generateContent"


class GeminiClient(CompletionClient):
    """
    Gemini completion client.

    Uses the plain REST API over httpx, one request per instruction.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Google API key. If not provided, reads from GEMINI_API_KEY
                     or GOOGLE_API_KEY env vars.
            model: Generation model identifier
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Gemini API key not provided. Set GEMINI_API_KEY or GOOGLE_API_KEY "
                "environment variable or pass api_key parameter."
            )
        self.model = model
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def name(self) -> str:
        return "gemini"

    def build_payload(self, instruction: str) -> dict:
        """Request body carrying the instruction as the whole content."""
        return {
            "contents": [{
                "parts": [{"text": instruction}]
            }],
        }

    async def complete(self, instruction: str) -> CompletionResult:
        """
        Generate a reply for an instruction.

        Args:
            instruction: The full instruction text

        Returns:
            Success(raw_text) or Failure(reason)
        """
        try:
            data = await self._request(self.build_payload(instruction))
        except TransportError as e:
            logger.warning("Gemini completion failed: %s", e.reason)
            return Failure(e.reason)

        try:
            return self.parse_response(data)
        except (AttributeError, KeyError, TypeError):
            logger.warning("Unexpected Gemini response shape", exc_info=True)
            return Failure("Malformed response from Gemini")

    async def _request(self, payload: dict):
        """POST to generateContent and return the decoded body.

        Raises:
            TransportError: On network errors, timeouts, non-2xx status or a
                            body that is not JSON
        """
        try:
            response = await self._client.post(
                gemini_url(self.model),
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {self.model} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {self.model} failed: {e}") from e

        if not response.is_success:
            logger.debug("Gemini error body: %s", response.text[:500])
            raise TransportError(f"Gemini API error {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise TransportError("Malformed response from Gemini") from e

    def parse_response(self, data) -> CompletionResult:
        """Pull the reply text out of a generateContent response body.

        Response format: candidates[0].content.parts[].text
        """
        if not isinstance(data, dict):
            return Failure("Malformed response from Gemini")

        if data.get("error"):
            error = data["error"]
            message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            return Failure(f"Gemini API error: {message}")

        candidates = data.get("candidates")
        if not candidates or not isinstance(candidates, list):
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                return Failure(f"Prompt blocked by Gemini ({block_reason})")
            return Failure("No candidates in Gemini response")

        candidate = candidates[0] if isinstance(candidates[0], dict) else {}
        parts = (candidate.get("content") or {}).get("parts") or []
        texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]

        if not texts:
            if candidate.get("finishReason") == "SAFETY":
                return Failure("Generation blocked by safety filters")
            return Failure("No text found in Gemini response")

        return Success("".join(texts))

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

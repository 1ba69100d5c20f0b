"""Tests for the Gemini completion client."""

import asyncio
import json

import httpx
import pytest

from uicraft.generators import get_gemini_client
from uicraft.generators.gemini import GeminiClient, gemini_url
from uicraft.models import Failure, Success


def reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


def make_client(handler, **kwargs) -> GeminiClient:
    return GeminiClient(api_key="test-key", transport=httpx.MockTransport(handler), **kwargs)


def complete(client: GeminiClient, instruction: str = "build a card"):
    async def run():
        try:
            return await client.complete(instruction)
        finally:
            await client.aclose()
    return asyncio.run(run())


class TestGeminiClientInit:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="API key"):
            GeminiClient()

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        client = GeminiClient()
        assert client.api_key == "env-key"
        asyncio.run(client.aclose())

    def test_lazy_getter(self):
        assert get_gemini_client() is GeminiClient


class TestGeminiClientComplete:
    def test_success_sends_instruction_and_model(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=reply("```html\n<p>ok</p>\n```"))

        result = complete(make_client(handler, model="gemini-2.5-flash"), "INSTRUCTION")

        assert result == Success("```html\n<p>ok</p>\n```")
        assert seen["url"] == gemini_url("gemini-2.5-flash")
        assert seen["key"] == "test-key"
        assert seen["body"] == {"contents": [{"parts": [{"text": "INSTRUCTION"}]}]}

    def test_joins_text_parts(self):
        data = {"candidates": [{"content": {"parts": [{"text": "```html\n"}, {"text": "<p></p>\n```"}]}}]}
        result = complete(make_client(lambda request: httpx.Response(200, json=data)))
        assert result == Success("```html\n<p></p>\n```")

    def test_error_status(self):
        result = complete(make_client(lambda request: httpx.Response(500, text="boom")))
        assert isinstance(result, Failure)
        assert "500" in result.reason

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        result = complete(make_client(handler))
        assert isinstance(result, Failure)
        assert "timed out" in result.reason

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = complete(make_client(handler))
        assert isinstance(result, Failure)
        assert "failed" in result.reason

    def test_non_json_body(self):
        result = complete(make_client(lambda request: httpx.Response(200, text="<html>")))
        assert result == Failure("Malformed response from Gemini")

    @pytest.mark.parametrize("data", [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        {"candidates": "nope"},
        {"candidates": [{"content": []}]},
        [],
    ])
    def test_shape_deviation_is_failure(self, data):
        result = complete(make_client(lambda request: httpx.Response(200, json=data)))
        assert isinstance(result, Failure)

    def test_api_error_object(self):
        data = {"error": {"code": 400, "message": "API key not valid"}}
        result = complete(make_client(lambda request: httpx.Response(200, json=data)))
        assert result == Failure("Gemini API error: API key not valid")

    def test_safety_block(self):
        data = {"candidates": [{"finishReason": "SAFETY"}]}
        result = complete(make_client(lambda request: httpx.Response(200, json=data)))
        assert result == Failure("Generation blocked by safety filters")

    def test_prompt_block(self):
        data = {"promptFeedback": {"blockReason": "OTHER"}}
        result = complete(make_client(lambda request: httpx.Response(200, json=data)))
        assert result == Failure("Prompt blocked by Gemini (OTHER)")

    def test_no_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        complete(make_client(handler))
        assert len(calls) == 1

from __future__ import annotations

import json

import httpx
import pytest

from little_learners import gemini_client
from little_learners.gemini_client import GeminiClient, GeminiResponseError


def _client_with(handler, monkeypatch, provider: str = "ai_studio") -> GeminiClient:
    monkeypatch.setattr(gemini_client.settings, "gemini_provider", provider)
    client = GeminiClient(api_key="test-key", model="gemini-test")
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_requires_api_key(monkeypatch) -> None:
    monkeypatch.setattr(gemini_client.settings, "gemini_api_key", None)
    with pytest.raises(ValueError):
        GeminiClient()


@pytest.mark.asyncio
async def test_generate_structured_sends_schema(monkeypatch) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_candidate('{"ok": true}'))

    client = _client_with(handler, monkeypatch)
    schema = {"type": "OBJECT", "properties": {"ok": {"type": "BOOLEAN"}}}
    text = await client.generate_structured("hello", schema)
    await client.aclose()

    assert text == '{"ok": true}'
    assert seen["url"].params["key"] == "test-key"
    assert "gemini-test:generateContent" in seen["url"].path
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "hello"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"
    assert seen["body"]["generationConfig"]["responseSchema"] == schema


@pytest.mark.asyncio
async def test_vertex_sends_key_in_header(monkeypatch) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        seen["url"] = request.url
        return httpx.Response(200, json=_candidate("plain"))

    client = _client_with(handler, monkeypatch, provider="vertex")
    assert await client.generate("hi") == "plain"
    await client.aclose()
    assert seen["headers"]["x-goog-api-key"] == "test-key"
    assert "key" not in seen["url"].params
    assert "aiplatform.googleapis.com" in seen["url"].host


@pytest.mark.asyncio
async def test_non_2xx_raises_status_error(monkeypatch) -> None:
    client = _client_with(lambda request: httpx.Response(500, text="boom"), monkeypatch)
    with pytest.raises(httpx.HTTPStatusError):
        await client.generate("hi")
    await client.aclose()


@pytest.mark.asyncio
async def test_missing_candidates_raises_response_error(monkeypatch) -> None:
    client = _client_with(lambda request: httpx.Response(200, json={"promptFeedback": {}}), monkeypatch)
    with pytest.raises(GeminiResponseError):
        await client.generate("hi")
    await client.aclose()

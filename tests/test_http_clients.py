"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from nutriguard.adapters.gemini_client import HttpxGeminiClient
from nutriguard.domain.errors import TransportError


def _client(handler) -> HttpxGeminiClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxGeminiClient(
        api_key="gemini-key",
        base_url="https://generativelanguage.googleapis.com/v1beta/",
        model="gemini-2.0-flash",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_gemini_client_posts_prompt() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": []})

    client = _client(handler)
    response = asyncio.run(client.generate_content("Analyze this"))

    assert response.status_code == 200
    assert json.loads(response.body) == {"candidates": []}
    assert seen["path"] == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert seen["key"] == "gemini-key"
    assert seen["payload"] == {"contents": [{"parts": [{"text": "Analyze this"}]}]}


def test_gemini_client_returns_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="overloaded")

    response = asyncio.run(_client(handler).generate_content("Analyze this"))

    assert response.status_code == 503
    assert response.body == "overloaded"


def test_gemini_client_maps_connection_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused"):
        asyncio.run(_client(handler).generate_content("Analyze this"))


def test_gemini_client_close() -> None:
    client = HttpxGeminiClient.create(
        api_key="gemini-key",
        base_url="https://example.test",
        model="gemini-2.0-flash",
    )

    asyncio.run(client.close())

    assert client.http_client.is_closed

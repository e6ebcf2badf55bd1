"""
Tests for the HTTP generation backends, using httpx's mock transport.
"""

import asyncio
import dataclasses
import json

import httpx
import pytest

from window_chat.config import settings
from window_chat.errors import GenerationError
from window_chat.protocols import GenerationBackend
from window_chat.repositories import (
    OllamaGenerationBackend,
    OpenAICompatibleBackend,
    create_backend,
)
from window_chat.services import normalize_response


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_ollama_posts_chat_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"model": "llama3.2", "message": {"role": "assistant", "content": "Hi!"}, "done": True},
        )

    backend = OllamaGenerationBackend(
        model_name="llama3.2",
        base_url="http://ollama.test/",
        client=mock_client(handler),
    )
    raw = asyncio.run(backend.generate("Hello"))

    assert seen["url"] == "http://ollama.test/api/chat"
    assert seen["body"] == {
        "model": "llama3.2",
        "messages": [{"role": "user", "content": "Hello"}],
        "stream": False,
    }
    assert normalize_response(raw) == "Hi!"
    assert backend.name == "ollama:llama3.2"


def test_ollama_http_error_becomes_generation_error():
    backend = OllamaGenerationBackend(
        base_url="http://ollama.test",
        client=mock_client(lambda request: httpx.Response(500, text="model crashed")),
    )
    with pytest.raises(GenerationError):
        asyncio.run(backend.generate("Hello"))


def test_ollama_connect_error_becomes_generation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    backend = OllamaGenerationBackend(base_url="http://ollama.test", client=mock_client(handler))
    with pytest.raises(GenerationError, match="ollama serve"):
        asyncio.run(backend.generate("Hello"))


def test_ollama_non_json_body():
    backend = OllamaGenerationBackend(
        base_url="http://ollama.test",
        client=mock_client(lambda request: httpx.Response(200, text="<html>")),
    )
    with pytest.raises(GenerationError):
        asyncio.run(backend.generate("Hello"))


def test_ollama_availability():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/tags"
        return httpx.Response(200, json={"models": []})

    up = OllamaGenerationBackend(base_url="http://ollama.test", client=mock_client(handler))
    assert asyncio.run(up.is_available()) is True

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    down = OllamaGenerationBackend(base_url="http://ollama.test", client=mock_client(refuse))
    assert asyncio.run(down.is_available()) is False


def test_openai_returns_choices():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"choices": [{"index": 0, "message": {"role": "assistant", "content": "Hey"}}]},
        )

    backend = OpenAICompatibleBackend(
        model_name="local-model",
        base_url="http://llm.test/v1",
        api_key="secret",
        client=mock_client(handler),
    )
    raw = asyncio.run(backend.generate("Hello"))

    assert seen["url"] == "http://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["messages"] == [{"role": "user", "content": "Hello"}]
    assert isinstance(raw, list)
    assert normalize_response(raw) == "Hey"


def test_openai_without_key_sends_no_auth_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"models": []})

    backend = OpenAICompatibleBackend(base_url="http://llm.test/v1", api_key="", client=mock_client(handler))
    assert asyncio.run(backend.is_available()) is True


def test_openai_http_error():
    backend = OpenAICompatibleBackend(
        base_url="http://llm.test/v1",
        client=mock_client(lambda request: httpx.Response(401, json={"error": "no"})),
    )
    with pytest.raises(GenerationError):
        asyncio.run(backend.generate("Hello"))


def test_create_backend_from_settings():
    ollama = create_backend(dataclasses.replace(settings, generation_backend="ollama"))
    openai = create_backend(dataclasses.replace(settings, generation_backend="openai"))

    assert isinstance(ollama, OllamaGenerationBackend)
    assert isinstance(openai, OpenAICompatibleBackend)
    assert isinstance(ollama, GenerationBackend)
    assert isinstance(openai, GenerationBackend)


def test_unknown_backend_is_rejected_by_settings():
    with pytest.raises(ValueError):
        dataclasses.replace(settings, generation_backend="carrier-pigeon")


def test_close_releases_client():
    backend = OllamaGenerationBackend(
        base_url="http://ollama.test",
        client=mock_client(lambda request: httpx.Response(200, json={})),
    )
    asyncio.run(backend.close())
    assert backend._client is None

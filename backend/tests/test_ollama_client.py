import json

import httpx
import pytest

from core.errors import UpstreamServiceError
from integrations.ollama_client import OllamaClient
from models.chat import ChatMessage

MESSAGES = [
    ChatMessage(role="system", content="You are an expert SQL assistant."),
    ChatMessage(role="user", content="show orders"),
]


def _client(handler) -> OllamaClient:
    return OllamaClient(host="http://ollama.test/", model="llama3", timeout=5, transport=httpx.MockTransport(handler))


def _completion(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_chat_returns_first_choice_verbatim():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('  {"sql": "SELECT 1", "analysis": "x"}\n'))

    async with _client(handler) as ollama:
        content = await ollama.chat(MESSAGES)

    assert content == '  {"sql": "SELECT 1", "analysis": "x"}\n'
    assert seen["url"] == "http://ollama.test/v1/chat/completions"
    assert seen["body"]["model"] == "llama3"
    assert seen["body"]["stream"] is False
    assert seen["body"]["messages"] == [
        {"role": "system", "content": "You are an expert SQL assistant."},
        {"role": "user", "content": "show orders"},
    ]


@pytest.mark.asyncio
async def test_chat_non_success_status():
    async with _client(lambda request: httpx.Response(500, text="boom")) as ollama:
        with pytest.raises(UpstreamServiceError, match="HTTP 500"):
            await ollama.chat(MESSAGES)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {},
    {"choices": []},
    {"choices": [{"message": {}}]},
    {"choices": [{"message": {"content": None}}]},
])
async def test_chat_malformed_envelope(body):
    async with _client(lambda request: httpx.Response(200, json=body)) as ollama:
        with pytest.raises(UpstreamServiceError, match="Malformed"):
            await ollama.chat(MESSAGES)


@pytest.mark.asyncio
async def test_chat_non_json_body():
    async with _client(lambda request: httpx.Response(200, text="<html>")) as ollama:
        with pytest.raises(UpstreamServiceError, match="Malformed"):
            await ollama.chat(MESSAGES)


@pytest.mark.asyncio
async def test_chat_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as ollama:
        with pytest.raises(UpstreamServiceError, match="unreachable"):
            await ollama.chat(MESSAGES)


@pytest.mark.asyncio
async def test_chat_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with _client(handler) as ollama:
        with pytest.raises(UpstreamServiceError, match="timed out"):
            await ollama.chat(MESSAGES)


@pytest.mark.asyncio
async def test_chat_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    async with _client(handler) as ollama:
        with pytest.raises(UpstreamServiceError):
            await ollama.chat(MESSAGES)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_is_healthy():
    def handler(request):
        assert request.url.path == "/api/version"
        return httpx.Response(200, json={"version": "0.3.0"})

    async with _client(handler) as ollama:
        assert await ollama.is_healthy() == (True, "llama3")

    async with _client(lambda request: httpx.Response(404)) as ollama:
        ok, error = await ollama.is_healthy()
        assert not ok
        assert "404" in error

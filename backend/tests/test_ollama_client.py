"""
Tests for Ollama client
"""
import json

import httpx
import pytest

from topicqa.core.ollama_client import OllamaClient, OllamaError, normalize_base_url


def make_client(handler, **kwargs) -> OllamaClient:
    return OllamaClient(
        base_url="http://ollama.test:11434",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://localhost:11434", "http://localhost:11434"),
        ("http://localhost:11434/", "http://localhost:11434"),
        ("http://localhost:11434/v1", "http://localhost:11434"),
        ("http://localhost:11434/v1/", "http://localhost:11434"),
        ("localhost:11434", "http://localhost:11434"),
    ],
)
def test_normalize_base_url(url, expected):
    assert normalize_base_url(url) == expected


def test_default_timeout_is_disabled():
    client = OllamaClient(base_url="http://ollama.test:11434")
    assert client.timeout is None


@pytest.mark.asyncio
async def test_chat_posts_non_streaming_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["payload"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "model": "deepseek-r1:8b",
                "message": {"role": "assistant", "content": "yes"},
                "done": True,
            },
        )

    client = make_client(handler)
    reply = await client.chat("deepseek-r1:8b", [{"role": "user", "content": "hi"}])
    await client.close()

    assert seen["path"] == "/api/chat"
    assert seen["payload"] == {
        "model": "deepseek-r1:8b",
        "messages": [{"role": "user", "content": "hi"}],
        "stream": False,
    }
    assert reply.message.content == "yes"
    assert reply.done is True


@pytest.mark.asyncio
async def test_chat_missing_content_is_none():
    client = make_client(lambda request: httpx.Response(200, json={"message": {"role": "assistant"}}))
    reply = await client.chat("m", [])
    assert reply.message.content is None


@pytest.mark.asyncio
async def test_chat_http_error_raises():
    client = make_client(lambda request: httpx.Response(404, json={"error": "model not found"}))
    with pytest.raises(OllamaError, match="404"):
        await client.chat("missing-model", [])


@pytest.mark.asyncio
async def test_chat_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(OllamaError):
        await client.chat("m", [])


@pytest.mark.asyncio
async def test_chat_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    client = make_client(handler, timeout=1.0)
    with pytest.raises(OllamaError, match="timed out"):
        await client.chat("m", [])


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"done": true}', b'{"message": "text"}'])
async def test_chat_unusable_reply_raises(body):
    client = make_client(lambda request: httpx.Response(200, content=body))
    with pytest.raises(OllamaError):
        await client.chat("m", [])


@pytest.mark.asyncio
async def test_health_check():
    def handler(request):
        assert request.url.path == "/api/tags"
        return httpx.Response(200, json={"models": []})

    assert await make_client(handler).health_check() is True


@pytest.mark.asyncio
async def test_health_check_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert await make_client(handler).health_check() is False

"""TestForge - 生成 API 客户端测试"""
import json

import httpx
import pytest

from testforge.services.ai_service import GenerationClient, GenerationServiceError


def _client(handler, api_key="test-key"):
    return GenerationClient(
        api_key=api_key,
        url="https://llm.example.com/v1/chat/completions",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_complete_sends_single_user_message():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Test Case 1: A"}}]})

    content = await _client(handler).complete("prompt text", temperature=0.5)

    assert content == "Test Case 1: A"
    body = json.loads(seen[0].content)
    assert body == {
        "model": "test-model",
        "messages": [{"role": "user", "content": "prompt text"}],
        "temperature": 0.5,
    }
    assert seen[0].headers["Authorization"] == "Bearer test-key"


@pytest.mark.asyncio
async def test_error_status_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    with pytest.raises(GenerationServiceError):
        await _client(handler).complete("prompt")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_malformed_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(GenerationServiceError):
        await _client(handler).complete("prompt")


@pytest.mark.asyncio
async def test_missing_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    with pytest.raises(GenerationServiceError):
        await _client(handler, api_key=None).complete("prompt")


@pytest.mark.asyncio
async def test_empty_content_returns_empty_string():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

    assert await _client(handler).complete("prompt") == ""

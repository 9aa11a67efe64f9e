from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from pathfinder.main import app
from pathfinder.ai.chatbot import ChatbotService, get_chatbot_service, SIMULATED_REPLIES
from pathfinder.ai.sse import DeltaStreamParser

GATEWAY_REQUEST = httpx.Request("POST", "https://gateway.test/v1/chat/completions")


def collect(body: bytes) -> str:
    parser = DeltaStreamParser()
    return "".join(parser.feed(body) + parser.close())


def chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


async def completion_stream(*contents):
    for content in contents:
        yield chunk(content)


def gateway_service(create):
    async_client = MagicMock()
    async_client.chat.completions.create = create
    return ChatbotService(async_client=async_client, model="test-model")


@pytest.mark.asyncio
async def test_simulated_chat_streams_keyword_reply(client):
    app.dependency_overrides[get_chatbot_service] = lambda: ChatbotService(async_client=None)

    response = await client.post("/api/ai-chat", json={"messages": [{"role": "user", "content": "How do I fix my resume?"}]})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.text.rstrip().endswith("data: [DONE]")
    resume_reply = SIMULATED_REPLIES[0][1]
    assert collect(response.content).strip() == resume_reply


@pytest.mark.asyncio
async def test_gateway_chunks_are_relayed_as_frames(client):
    create = AsyncMock(return_value=completion_stream("Focus ", None, "on ", "DSA"))
    app.dependency_overrides[get_chatbot_service] = lambda: gateway_service(create)

    history = [
        {"role": "user", "content": "Tips for interview prep"},
        {"role": "assistant", "content": "Sure."},
        {"role": "user", "content": "More?"},
    ]
    response = await client.post("/api/ai-chat", json={"messages": history})

    assert response.status_code == 200
    assert collect(response.content) == "Focus on DSA"

    kwargs = create.await_args.kwargs
    assert kwargs["stream"] is True
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"][0]["role"] == "system"
    assert kwargs["messages"][1:] == history


@pytest.mark.asyncio
async def test_rate_limited_gateway_returns_429_json(client):
    error = openai.RateLimitError("slow down", response=httpx.Response(429, request=GATEWAY_REQUEST), body=None)
    app.dependency_overrides[get_chatbot_service] = lambda: gateway_service(AsyncMock(side_effect=error))

    response = await client.post("/api/ai-chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limits exceeded, please try again later."}


@pytest.mark.asyncio
async def test_payment_required_gateway_returns_402_json(client):
    error = openai.APIStatusError("no credits", response=httpx.Response(402, request=GATEWAY_REQUEST), body=None)
    app.dependency_overrides[get_chatbot_service] = lambda: gateway_service(AsyncMock(side_effect=error))

    response = await client.post("/api/ai-chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 402
    assert "Payment required" in response.json()["error"]


@pytest.mark.asyncio
async def test_empty_history_is_rejected(client):
    response = await client.post("/api/ai-chat", json={"messages": []})
    assert response.status_code == 422
    assert "error" in response.json()

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from cinesage.config import Settings
from cinesage.models import LikedTitle
from cinesage.prompts import PromptOptions
from cinesage.services.openrouter import OpenRouterClient

LIKED = [LikedTitle(id=278, title="The Shawshank Redemption", year=1994, genre="Drama")]


def _make_client(
    handler: Callable[[httpx.Request], httpx.Response], **overrides: Any
) -> OpenRouterClient:
    base = {"OPENROUTER_API_KEY": "test-key"}
    base.update(overrides)
    settings = Settings(_env_file=None, **base)  # type: ignore[arg-type]
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://openrouter.ai/api/v1",
    )
    return OpenRouterClient(settings, http_client)


def _completion(content: object) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "model": "deepseek/deepseek-r1-0528-qwen3-8b:free",
            "choices": [{"message": {"content": content}}],
        },
    )


def test_generate_posts_chat_completion_and_returns_content() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return _completion("<think>planning</think>\n- **Heat (1995)**")

    client = _make_client(handler)
    disliked = [LikedTitle(id=550, title="Fight Club", year=1999)]

    passage = asyncio.run(client.generate(LIKED, disliked=disliked))

    assert passage == "- **Heat (1995)**"
    request = requests[0]
    assert request.url.path == "/api/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["X-Title"] == "CineSage"
    body = json.loads(request.content)
    assert body["model"] == "deepseek/deepseek-r1-0528-qwen3-8b:free"
    assert body["temperature"] == 0.5
    assert body["max_tokens"] == 1500
    assert body["messages"][0]["role"] == "system"
    user_prompt = body["messages"][1]["content"]
    assert "- The Shawshank Redemption (1994) - Drama" in user_prompt
    assert "Do NOT recommend: Fight Club (1999)." in user_prompt


def test_generate_respects_explicit_options() -> None:
    prompts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompts.append(json.loads(request.content)["messages"][1]["content"])
        return _completion("ok")

    client = _make_client(handler)
    asyncio.run(client.generate(LIKED, options=PromptOptions(count=2, region="ID")))

    assert "Recommend 2 items" in prompts[0]
    assert "Where to watch (ID)" in prompts[0]


def test_generate_requires_api_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("Network access should not be triggered during tests")

    client = _make_client(handler, OPENROUTER_API_KEY="")

    with pytest.raises(RuntimeError, match="API key is required"):
        asyncio.run(client.generate(LIKED))


@pytest.mark.parametrize(
    ("response", "message"),
    [
        (httpx.Response(429, text="rate limited"), "rate limited"),
        (httpx.Response(200, json={"choices": []}), "no choices"),
        (_completion(None), "missing content"),
        (_completion("<think>only thoughts</think>"), "empty passage"),
    ],
)
def test_generate_raises_on_unusable_responses(response: httpx.Response, message: str) -> None:
    client = _make_client(lambda request: response)

    with pytest.raises(RuntimeError, match=message):
        asyncio.run(client.generate(LIKED))


def test_generate_uses_configured_model_and_key_only() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return _completion("ok")

    client = _make_client(
        handler,
        OPENROUTER_API_KEY="profile-key",
        OPENROUTER_MODEL="google/gemini-2.5-flash-lite",
    )

    asyncio.run(client.generate(LIKED))

    assert requests[0].headers["Authorization"] == "Bearer profile-key"
    assert json.loads(requests[0].content)["model"] == "google/gemini-2.5-flash-lite"
    with pytest.raises(TypeError):
        asyncio.run(client.generate(LIKED, api_key="other", model="other"))  # type: ignore[call-arg]

"""Tests for the chat-completion client."""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from school_bot.bot.messages import GENERATION_FAILED
from school_bot.config import GenerationConfig
from school_bot.errors import GenerationError
from school_bot.services.explanation import ExplanationClient, build_prompt, max_output_tokens


def fake_completions(status: int = 200, payload: object = None, seen: list | None = None):
    seen = seen if seen is not None else []

    async def handle(request: web.Request) -> web.Response:
        seen.append({"headers": dict(request.headers), "body": await request.json()})
        if status != 200:
            return web.json_response({"error": {"message": "quota exceeded"}}, status=status)
        return web.json_response({} if payload is None else payload)

    app = web.Application()
    app.router.add_post("/v1/chat/completions", handle)
    return app


def client_for(server: TestServer) -> ExplanationClient:
    return ExplanationClient(
        GenerationConfig(api_url=str(server.make_url("/v1/chat/completions")))
    )


def test_build_prompt() -> None:
    assert build_prompt("Photosynthesis", 50) == (
        "Explain Photosynthesis in 50 words in simple, school-level language, "
        "avoid high-level words, Hinglish/English mix allowed."
    )


@pytest.mark.parametrize("word_limit, expected", [(10, 14), (50, 67), (75, 100)])
def test_max_output_tokens_rounds_up(word_limit: int, expected: int) -> None:
    assert max_output_tokens(word_limit) == expected


@pytest.mark.asyncio
async def test_generate_returns_first_choice() -> None:
    seen: list = []
    payload = {
        "choices": [{"message": {"role": "assistant", "content": "Plants make food."}}],
        "usage": {"completion_tokens": 5},
    }
    async with TestServer(fake_completions(payload=payload, seen=seen)) as server:
        client = client_for(server)
        try:
            text = await client.generate("Explain plants", 14)
        finally:
            await client.close()

    assert text == "Plants make food."
    assert seen[0]["body"] == {
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Explain plants"}],
        "max_tokens": 14,
    }
    assert seen[0]["headers"]["Authorization"] == "Bearer test_chat_api_key"


@pytest.mark.asyncio
async def test_generate_without_choices_returns_empty_text() -> None:
    async with TestServer(fake_completions(payload={"choices": []})) as server:
        client = client_for(server)
        try:
            assert await client.generate("Explain plants", 14) == ""
        finally:
            await client.close()


@pytest.mark.asyncio
async def test_generate_http_error_raises_generation_error() -> None:
    async with TestServer(fake_completions(status=429)) as server:
        client = client_for(server)
        try:
            with pytest.raises(GenerationError) as exc_info:
                await client.generate("Explain plants", 14)
        finally:
            await client.close()

    assert exc_info.value.user_message == GENERATION_FAILED


@pytest.mark.parametrize("payload", [["not", "an", "object"], "plain text"])
@pytest.mark.asyncio
async def test_generate_rejects_non_object_body(payload: object) -> None:
    async with TestServer(fake_completions(payload=payload)) as server:
        client = client_for(server)
        try:
            with pytest.raises(GenerationError) as exc_info:
                await client.generate("Explain plants", 14)
        finally:
            await client.close()

    assert exc_info.value.user_message == GENERATION_FAILED

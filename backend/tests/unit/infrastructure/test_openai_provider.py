"""Unit tests for the OpenAI-compatible chat provider.

The SDK client is replaced with an AsyncMock; no request leaves the process.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from domain.ai.ports import (
    LLMAuthError,
    LLMInvalidResponseError,
    LLMMessage,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
)
from infrastructure.ai.openai_provider import OpenAIProvider, extract_json_object

REQUEST = httpx.Request("POST", "https://api.deepseek.com/chat/completions")
MESSAGES = [LLMMessage(role="system", content="Answer in JSON"), LLMMessage(role="user", content="Score")]


def _response(content, prompt_tokens=120, completion_tokens=80):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def _provider(create: AsyncMock) -> OpenAIProvider:
    client = MagicMock()
    client.chat.completions.create = create
    return OpenAIProvider(client=client, model="deepseek-chat", provider_name="deepseek")


class TestExtractJsonObject:

    def test_plain_object(self):
        assert extract_json_object('{"score": 80}') == {"score": 80}

    def test_object_inside_markdown_fence(self):
        content = 'Here you go:\n```json\n{"score": 72, "reasons": ["a"]}\n```'
        assert extract_json_object(content) == {"score": 72, "reasons": ["a"]}

    @pytest.mark.parametrize("content", ["", "no json here", "{broken", "{'single': 'quotes'}", None])
    def test_unparseable_content(self, content):
        assert extract_json_object(content) is None


class TestCompleteJson:

    @pytest.mark.asyncio
    async def test_successful_completion(self):
        create = AsyncMock(return_value=_response('{"score": 90, "reasons": ["fit"]}'))
        completion = await _provider(create).complete_json(MESSAGES, temperature=0.2, max_tokens=1500)

        assert completion.parsed_json == {"score": 90, "reasons": ["fit"]}
        assert completion.provider == "deepseek"
        assert completion.tokens_in == 120
        assert completion.tokens_out == 80
        assert completion.warnings == []

        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "deepseek-chat"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 1500
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "Answer in JSON"}

    @pytest.mark.asyncio
    async def test_content_without_json_adds_warning(self):
        create = AsyncMock(return_value=_response("I cannot help with that"))
        completion = await _provider(create).complete_json(MESSAGES, temperature=0.2, max_tokens=100)

        assert completion.parsed_json is None
        assert completion.warnings

    @pytest.mark.asyncio
    async def test_empty_content_raises(self):
        create = AsyncMock(return_value=_response(""))
        with pytest.raises(LLMInvalidResponseError):
            await _provider(create).complete_json(MESSAGES, temperature=0.2, max_tokens=100)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sdk_error,expected", [
        (openai.APITimeoutError(request=REQUEST), LLMTimeoutError),
        (openai.APIConnectionError(request=REQUEST), LLMServiceError),
        (
            openai.RateLimitError("slow down", response=httpx.Response(429, request=REQUEST), body=None),
            LLMRateLimitError,
        ),
        (
            openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQUEST), body=None),
            LLMAuthError,
        ),
        (
            openai.InternalServerError("oops", response=httpx.Response(500, request=REQUEST), body=None),
            LLMServiceError,
        ),
    ])
    async def test_sdk_errors_are_mapped(self, sdk_error, expected):
        create = AsyncMock(side_effect=sdk_error)
        with pytest.raises(expected):
            await _provider(create).complete_json(MESSAGES, temperature=0.2, max_tokens=100)


def test_missing_api_key_raises():
    with pytest.raises(ValueError):
        OpenAIProvider(api_key=None)


def test_environment_key_is_not_read_directly(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-from-env")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    with pytest.raises(ValueError):
        OpenAIProvider(api_key=None)


def test_explicit_key_builds_client():
    provider = OpenAIProvider(api_key="sk-test", base_url="https://api.deepseek.com")
    assert provider.api_key == "sk-test"
    assert provider.client.api_key == "sk-test"

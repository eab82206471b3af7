"""Tests for completion-service helpers and the OpenAI adapter."""

import asyncio
import math
from types import SimpleNamespace

import httpx
import openai
import pytest

from agents.base import (
    LLMConfig,
    MalformedModelOutput,
    OpenAICompletionService,
    UpstreamServiceFailure,
    load_json_object,
    load_json_object_or_empty,
    number_or_none,
    string_or_none,
)
from config.settings import Settings


class TestCoercion:

    def test_load_json_object(self):
        assert load_json_object('{"a": 1}') == {"a": 1}
        assert load_json_object("") == {}

    @pytest.mark.parametrize("text", ["[]", "1", "nope", '"x"', "null"])
    def test_load_json_object_rejects(self, text):
        with pytest.raises(MalformedModelOutput):
            load_json_object(text)

    def test_or_empty(self):
        assert load_json_object_or_empty("nope", "test") == {}

    @pytest.mark.parametrize("value, expected", [
        (5, 5),
        (2.5, 2.5),
        (-1, -1),
        (0, 0),
        (True, None),
        (False, None),
        ("5", None),
        (None, None),
        (math.nan, None),
        (math.inf, None),
        (10 ** 400, None),
        ([1], None),
    ])
    def test_number_or_none(self, value, expected):
        assert number_or_none(value) == expected

    def test_string_or_none(self):
        assert string_or_none("Net 30") == "Net 30"
        assert string_or_none("") == ""
        assert string_or_none(30) is None


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_service(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAICompletionService(LLMConfig(model="test-model"), client=client)


class TestOpenAICompletionService:

    def test_json_object_directive(self):
        completions = FakeCompletions('{"ok": true}')
        service = make_service(completions)
        messages = [{"role": "user", "content": "hi"}]

        assert asyncio.run(service.complete(messages, json_object=True)) == '{"ok": true}'
        assert completions.kwargs == {
            "model": "test-model",
            "messages": messages,
            "response_format": {"type": "json_object"},
        }

    def test_free_text_has_no_directive(self):
        completions = FakeCompletions("Score 80")
        asyncio.run(make_service(completions).complete([{"role": "user", "content": "hi"}]))
        assert "response_format" not in completions.kwargs

    def test_empty_content(self):
        assert asyncio.run(make_service(FakeCompletions(None)).complete([])) == ""

    def test_sdk_errors_wrapped(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = openai.APIConnectionError(request=request)
        with pytest.raises(UpstreamServiceFailure):
            asyncio.run(make_service(FakeCompletions(error=error)).complete([]))

    def test_client_built_from_config(self):
        service = OpenAICompletionService(LLMConfig(api_key="sk-test", timeout=12.5))
        assert service.client.api_key == "sk-test"
        assert service.client.timeout == 12.5


def test_settings_llm_config():
    settings = Settings(openai_api_key="sk-1", llm_model="gpt-test", llm_timeout=30)
    config = settings.llm_config()
    assert config.api_key == "sk-1"
    assert config.model == "gpt-test"
    assert config.timeout == 30

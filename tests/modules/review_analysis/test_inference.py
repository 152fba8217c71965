"""Tests for the OpenAI inference adapter."""

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from src.config import settings
from src.modules.review_analysis.constants import PromptStage
from src.modules.review_analysis.exceptions import InferenceError, InferenceTimeoutError
from src.modules.review_analysis.inference import OpenAIInferenceClient
from src.modules.review_analysis.schemas import PromptSpec


class FakeCompletions:
    """Records calls and returns a canned completion or raises."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_client(completions):
    adapter = OpenAIInferenceClient(api_key="sk-test", model="test-model")
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return adapter


class TestOpenAIInferenceClient:
    """Test suite for OpenAIInferenceClient."""

    def setup_method(self):
        """Set up test fixtures."""
        self.prompt = PromptSpec(
            stage=PromptStage.SENTIMENT,
            system="system message",
            prompt="1. Great",
            temperature=0.2,
            max_tokens=512,
        )

    def test_complete_sends_role_and_sampling(self):
        completions = FakeCompletions(content='{"sentiments": ["positive"]}')
        adapter = make_client(completions)

        text = asyncio.run(adapter.complete(self.prompt))

        assert text == '{"sentiments": ["positive"]}'
        call = completions.calls[0]
        assert call["model"] == "test-model"
        assert call["temperature"] == 0.2
        assert call["max_tokens"] == 512
        assert call["messages"] == [
            {"role": "system", "content": "system message"},
            {"role": "user", "content": "1. Great"},
        ]

    def test_empty_content(self):
        adapter = make_client(FakeCompletions(content=None))
        assert asyncio.run(adapter.complete(self.prompt)) == ""

    def test_sdk_error_becomes_inference_error(self):
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1"))
        adapter = make_client(FakeCompletions(error=error))

        with pytest.raises(InferenceError):
            asyncio.run(adapter.complete(self.prompt))

    def test_is_configured(self):
        assert OpenAIInferenceClient(api_key="sk-test").is_configured()
        assert not OpenAIInferenceClient(api_key="").is_configured()
        assert not OpenAIInferenceClient(api_key="   ").is_configured()

    def test_sdk_timeout_becomes_timeout_error(self):
        error = openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com/v1"))
        adapter = make_client(FakeCompletions(error=error))

        with pytest.raises(InferenceTimeoutError) as exc_info:
            asyncio.run(adapter.complete(self.prompt))
        assert exc_info.value.status_code == 504
        assert exc_info.value.to_dict()["detail"] == "Timeout"

    def test_sdk_client_uses_inference_timeout(self):
        adapter = OpenAIInferenceClient(api_key="sk-test")
        assert adapter.client.timeout == settings.inference_timeout_seconds
        assert adapter.client.max_retries == 0

"""
Inference client adapter.

The orchestrator only sees InferenceClient.complete(); tests substitute a
stub returning canned model text.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import openai

from src.config import settings
from .exceptions import InferenceError, InferenceTimeoutError
from .schemas import PromptSpec

logger = logging.getLogger(__name__)


class InferenceClient(ABC):
    """Abstract base class for language-model services."""

    @abstractmethod
    async def complete(self, prompt: PromptSpec) -> str:
        """
        Send one prompt and return the raw completion text.

        Args:
            prompt: Rendered prompt with role message and sampling parameters

        Returns:
            Raw model text, possibly empty or without any JSON

        Raises:
            InferenceError: If the service call fails
            InferenceTimeoutError: If the service reports a timeout
        """

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if credentials for the service are present."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""


class OpenAIInferenceClient(InferenceClient):
    """OpenAI chat completions client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self._base_url = base_url or settings.openai_base_url
        self.timeout_seconds = settings.inference_timeout_seconds
        self._client: Optional[openai.AsyncOpenAI] = None

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_key.strip())

    @property
    def client(self) -> openai.AsyncOpenAI:
        """Lazily build the SDK client; it refuses to start without a key."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self.timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: PromptSpec) -> str:
        logger.debug(
            f"Calling {self.name} for stage={prompt.stage.value} "
            f"(temperature={prompt.temperature}, max_tokens={prompt.max_tokens})"
        )
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.prompt},
                ],
                temperature=prompt.temperature,
                max_tokens=prompt.max_tokens,
            )
        except openai.APITimeoutError as e:
            logger.error(f"{self.name} timed out at stage={prompt.stage.value}")
            raise InferenceTimeoutError(
                f"Inference stage '{prompt.stage.value}' timed out in the OpenAI client"
            ) from e
        except openai.OpenAIError as e:
            logger.error(f"{self.name} call failed at stage={prompt.stage.value}: {e}")
            raise InferenceError(str(e) or InferenceError.default_message) from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

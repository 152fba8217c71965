"""
Orchestrator - Main coordinator of the review analysis pipeline

Per request:
1. Validate the request (credentials, review batch)
2. Select the call strategy for the locale
3. Run Prompt Builder -> Inference Client -> Extractor -> Normalizer
   once (single-pass) or twice (two-pass)

Any failure ends the request with a classified AnalysisError. Nothing is
retried and no state is kept between requests.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from src.config import settings
from .constants import Locale, PromptStage
from .exceptions import ConfigMissingError, InferenceTimeoutError
from .extractor import extract_payload
from .inference import InferenceClient, OpenAIInferenceClient
from .normalizer import normalize_result, validate_sentiments
from .prompts import build_prompt
from .schemas import AnalysisResult, PromptSpec, ReviewBatch

logger = logging.getLogger(__name__)


class AnalysisStrategy(ABC):
    """Base class of the call strategies; one is chosen per request."""

    name = "base"

    def __init__(self, locale: Locale):
        self.locale = locale

    @abstractmethod
    async def run(self, orchestrator: "Orchestrator", batch: ReviewBatch) -> AnalysisResult:
        """Produce the final result for a validated batch."""


class SinglePassStrategy(AnalysisStrategy):
    """Sentiment and keywords in one combined call."""

    name = "single_pass"

    async def run(self, orchestrator: "Orchestrator", batch: ReviewBatch) -> AnalysisResult:
        prompt = build_prompt(batch, self.locale, PromptStage.COMBINED)
        payload = await orchestrator.call_stage(prompt)
        return normalize_result(payload, len(batch))


class TwoPassStrategy(AnalysisStrategy):
    """
    Sentiment classification first, then keyword extraction.

    The second prompt embeds the validated first-pass labels; a first-pass
    failure ends the request.
    """

    name = "two_pass"

    async def run(self, orchestrator: "Orchestrator", batch: ReviewBatch) -> AnalysisResult:
        sentiment_prompt = build_prompt(batch, self.locale, PromptStage.SENTIMENT)
        sentiment_payload = await orchestrator.call_stage(sentiment_prompt)
        sentiments = validate_sentiments(sentiment_payload, len(batch))

        keyword_prompt = build_prompt(
            batch, self.locale, PromptStage.KEYWORDS, sentiments=sentiments
        )
        payload = await orchestrator.call_stage(keyword_prompt)
        return normalize_result(payload, len(batch))


LOCALE_STRATEGIES: Dict[Locale, Type[AnalysisStrategy]] = {
    Locale.EN: SinglePassStrategy,
    Locale.KO: TwoPassStrategy,
}


def select_strategy(locale: Locale) -> AnalysisStrategy:
    """Return the strategy for a locale; unknown locales use single-pass."""
    strategy_cls = LOCALE_STRATEGIES.get(locale, SinglePassStrategy)
    return strategy_cls(locale)


class Orchestrator:
    """
    Coordinates one analysis request end to end.

    The instance holds only the inference client and timeout, so it can
    be shared by concurrent requests.
    """

    def __init__(
        self,
        inference_client: Optional[InferenceClient] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            inference_client: Language-model adapter (OpenAI by default)
            timeout_seconds: Per-stage inference timeout
        """
        self._inference_client = inference_client
        self.timeout_seconds = timeout_seconds or settings.inference_timeout_seconds

    @property
    def inference_client(self) -> InferenceClient:
        """Get or create the inference client."""
        if self._inference_client is None:
            self._inference_client = OpenAIInferenceClient()
        return self._inference_client

    async def analyze(self, reviews: Any, locale: Any = Locale.EN) -> AnalysisResult:
        """
        Analyze a batch of reviews.

        Args:
            reviews: Review texts as submitted by the client
            locale: Locale code selecting prompt language and strategy

        Returns:
            Validated AnalysisResult

        Raises:
            AnalysisError: Classified failure of any pipeline step
        """
        if not self.inference_client.is_configured():
            raise ConfigMissingError()
        batch = ReviewBatch.from_raw(reviews)

        strategy = select_strategy(Locale.resolve(locale))
        logger.info(
            f"Analyzing {len(batch)} reviews "
            f"(locale={strategy.locale.value}, strategy={strategy.name})"
        )

        start_time = time.perf_counter()
        result = await strategy.run(self, batch)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Analysis complete: {result.positive_count} positive, "
            f"{result.negative_count} negative, {len(result.keywords)} keywords "
            f"({duration_ms:.0f}ms)"
        )
        return result

    async def call_stage(self, prompt: PromptSpec) -> Dict[str, Any]:
        """
        Run one inference call and extract its JSON payload.

        Raises:
            InferenceTimeoutError: If the call exceeds the stage timeout
            InferenceError: If the call fails
            ExtractionFailure: If the output holds no parseable object
        """
        logger.info(f"Inference stage '{prompt.stage.value}' started")
        try:
            text = await asyncio.wait_for(
                self.inference_client.complete(prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"Inference stage '{prompt.stage.value}' timed out "
                f"after {self.timeout_seconds}s"
            )
            raise InferenceTimeoutError(
                f"Inference stage '{prompt.stage.value}' timed out after "
                f"{self.timeout_seconds:g}s"
            ) from e

        return extract_payload(text)


# Singleton instance
_orchestrator_instance: Optional[Orchestrator] = None


def get_orchestrator() -> Orchestrator:
    """Get or create singleton orchestrator instance."""
    global _orchestrator_instance
    if _orchestrator_instance is None:
        _orchestrator_instance = Orchestrator()
    return _orchestrator_instance

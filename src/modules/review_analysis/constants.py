"""
Constants for the review analysis pipeline.
"""

from enum import Enum
from typing import Dict, Tuple


class Locale(str, Enum):
    """Request languages. Anything unrecognised is treated as English."""
    EN = "en"
    KO = "ko"

    @classmethod
    def resolve(cls, value) -> "Locale":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.EN


class SentimentLabel(str, Enum):
    """Review sentiment. There is no neutral class."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


# Rendering order of keyword groups
SENTIMENT_ORDER: Tuple[SentimentLabel, ...] = (
    SentimentLabel.POSITIVE,
    SentimentLabel.NEGATIVE,
)


class PromptStage(str, Enum):
    """Which instruction block to build."""
    COMBINED = "combined"
    SENTIMENT = "sentiment"
    KEYWORDS = "keywords"


class ErrorKind(str, Enum):
    """Failure classification surfaced to callers."""
    CONFIG_MISSING = "ConfigMissing"
    EMPTY_BATCH = "EmptyBatch"
    INFERENCE_ERROR = "InferenceError"
    EXTRACTION_FAILURE = "ExtractionFailure"
    VALIDATION_FAILURE = "ValidationFailure"
    TIMEOUT = "Timeout"


DEFAULT_MODEL = "gpt-4.1-mini"

# (temperature, max output tokens) per stage
STAGE_SAMPLING: Dict[PromptStage, Tuple[float, int]] = {
    PromptStage.COMBINED: (0.3, 2048),
    PromptStage.SENTIMENT: (0.2, 512),
    PromptStage.KEYWORDS: (0.3, 2048),
}

# Payload keys
SENTIMENTS_KEY = "sentiments"
PERCENTAGE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("positive", "positiveCount"),
    ("negative", "negativeCount"),
)

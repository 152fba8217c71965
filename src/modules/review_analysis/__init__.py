"""
Review Analysis Module

Turns a batch of free-text customer reviews into a sentiment breakdown
and ranked aspect keywords using an external language model.

This module provides:
- Locale-specific prompt construction (single-pass or two-pass)
- Lenient JSON extraction from model output
- Strict result validation with percentage backfill
"""

from .constants import ErrorKind, Locale, PromptStage, SentimentLabel
from .exceptions import (
    AnalysisError,
    ConfigMissingError,
    EmptyBatchError,
    ExtractionFailure,
    InferenceError,
    InferenceTimeoutError,
    ValidationFailure,
)
from .inference import InferenceClient, OpenAIInferenceClient
from .orchestrator import Orchestrator, get_orchestrator
from .schemas import AnalysisRequest, AnalysisResult, Keyword, ReviewBatch

__all__ = [
    "ErrorKind",
    "Locale",
    "PromptStage",
    "SentimentLabel",
    "AnalysisError",
    "ConfigMissingError",
    "EmptyBatchError",
    "ExtractionFailure",
    "InferenceError",
    "InferenceTimeoutError",
    "ValidationFailure",
    "InferenceClient",
    "OpenAIInferenceClient",
    "Orchestrator",
    "get_orchestrator",
    "AnalysisRequest",
    "AnalysisResult",
    "Keyword",
    "ReviewBatch",
]

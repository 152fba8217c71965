"""
Exceptions raised by the review analysis pipeline.

Every failure carries an ErrorKind and the HTTP status the API layer
reports for it. Nothing in the pipeline catches these; they propagate to
the caller as-is.
"""

from typing import Optional

from .constants import ErrorKind


class AnalysisError(Exception):
    """Base class for classified pipeline failures."""

    kind: ErrorKind = ErrorKind.INFERENCE_ERROR
    status_code: int = 500
    default_message: str = "Review analysis failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "detail": self.kind.value,
            "status_code": self.status_code,
        }


class ConfigMissingError(AnalysisError):
    """Inference credentials are not configured."""

    kind = ErrorKind.CONFIG_MISSING
    status_code = 500
    default_message = "OpenAI API key not set."


class EmptyBatchError(AnalysisError):
    """No usable reviews in the request."""

    kind = ErrorKind.EMPTY_BATCH
    status_code = 400
    default_message = "No reviews provided."


class InferenceError(AnalysisError):
    """The inference service call itself failed."""

    kind = ErrorKind.INFERENCE_ERROR
    status_code = 502
    default_message = "Inference service error"


class InferenceTimeoutError(AnalysisError):
    """The inference service did not answer within the stage timeout."""

    kind = ErrorKind.TIMEOUT
    status_code = 504
    default_message = "Inference service timed out"


class ExtractionFailure(AnalysisError):
    """No parseable JSON object in the model output."""

    kind = ErrorKind.EXTRACTION_FAILURE
    status_code = 502
    default_message = "No JSON in model response"


class ValidationFailure(AnalysisError):
    """The JSON object does not have the required shape."""

    kind = ErrorKind.VALIDATION_FAILURE
    status_code = 502
    default_message = "Model response failed validation"

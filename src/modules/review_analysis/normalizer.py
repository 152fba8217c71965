"""
Validation and normalisation of parsed model payloads.

Only the percentage fields are ever filled in locally. Counts are taken
as reported; positive + negative is not forced to 100.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .constants import (
    PERCENTAGE_FIELDS,
    SENTIMENT_ORDER,
    SENTIMENTS_KEY,
    SentimentLabel,
)
from .exceptions import ValidationFailure
from .schemas import AnalysisResult, Keyword, SentimentAssignment

logger = logging.getLogger(__name__)

_LABELS = {label.value: label for label in SentimentLabel}
_COUNT = TypeAdapter(int)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _as_count(value: Any) -> Optional[int]:
    """Coerce a count the way the result model will, or None if it can't."""
    try:
        return _COUNT.validate_python(value)
    except ValidationError:
        return None


def validate_sentiments(payload: Dict[str, Any], batch_size: int) -> SentimentAssignment:
    """
    Validate the first-pass sentiment classification.

    Args:
        payload: Parsed model output
        batch_size: Number of reviews in the request

    Returns:
        SentimentAssignment in review order

    Raises:
        ValidationFailure: If the sentiments array is missing, holds an
            unknown label, or its length differs from the batch
    """
    raw = payload.get(SENTIMENTS_KEY)
    if not isinstance(raw, list):
        raise ValidationFailure("No valid sentiments array in model response")

    labels: List[SentimentLabel] = []
    for position, value in enumerate(raw, start=1):
        label = _LABELS.get(value) if isinstance(value, str) else None
        if label is None:
            raise ValidationFailure(f"Invalid sentiment for review {position}: {value!r}")
        labels.append(label)

    if len(labels) != batch_size:
        raise ValidationFailure(
            f"Sentiment array length mismatch: expected {batch_size}, got {len(labels)}"
        )
    return SentimentAssignment(labels=labels)


def fill_percentages(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recompute missing or non-numeric percentage fields from the counts.

    Counts are read with the same int coercion the result model applies,
    so "3" counts as 3 here too. Returns a shallow copy; the input is left
    untouched.
    """
    data = dict(payload)
    total = _as_count(data.get("totalCount"))
    for field, count_field in PERCENTAGE_FIELDS:
        if _is_number(data.get(field)):
            continue
        count = _as_count(data.get(count_field))
        if total is not None and total > 0 and count is not None:
            data[field] = count / total * 100
        else:
            data[field] = 0.0
        logger.debug(f"Percentage '{field}' recomputed as {data[field]:.2f}")
    return data


def rank_keywords(keywords: List[Keyword]) -> List[Keyword]:
    """Group keywords by sentiment (positive first), each by descending count."""
    ranked: List[Keyword] = []
    for sentiment in SENTIMENT_ORDER:
        group = [k for k in keywords if k.sentiment == sentiment]
        ranked.extend(sorted(group, key=lambda k: k.count, reverse=True))
    return ranked


def _check_indices(result: AnalysisResult, batch_size: int) -> None:
    # Indices must point into both the submitted batch and the reported total.
    bound = min(batch_size, result.total_count)
    for k in result.keywords:
        invalid = [i for i in k.review_indices if i < 0 or i >= bound]
        if invalid:
            raise ValidationFailure(
                f"Keyword '{k.keyword}' references unknown reviews {invalid} "
                f"(batch has {batch_size}, totalCount {result.total_count})"
            )


def normalize_result(payload: Dict[str, Any], batch_size: int) -> AnalysisResult:
    """
    Validate a final payload and turn it into an AnalysisResult.

    Args:
        payload: Parsed model output
        batch_size: Number of reviews in the request

    Returns:
        Validated AnalysisResult with ranked keywords

    Raises:
        ValidationFailure: If the payload does not fit the result shape or
            a keyword points outside the batch or past totalCount
    """
    data = fill_percentages(payload)

    keywords = data.get("keywords", [])
    if isinstance(keywords, list):
        data["keywords"] = [
            {**k, "aspect": k.get("keyword")}
            if isinstance(k, dict) and k.get("aspect") is None
            else k
            for k in keywords
        ]

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise ValidationFailure(f"Invalid analysis result: {_format_errors(e)}") from e

    _check_indices(result, batch_size)
    return result.model_copy(update={"keywords": rank_keywords(result.keywords)})

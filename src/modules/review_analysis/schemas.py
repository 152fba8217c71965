"""
Schemas for the review analysis pipeline.
Defines the review batch, prompt and result data structures.
"""

import math
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import PromptStage, SentimentLabel, SENTIMENT_ORDER
from .exceptions import EmptyBatchError


def render_numbered(items: Sequence[str]) -> str:
    """Render items as a 1-based numbered list, one per line."""
    return "\n".join(f"{i + 1}. {item}" for i, item in enumerate(items))


class ReviewBatch(BaseModel):
    """
    Ordered reviews of a single request.

    The position of a review is its identity: keyword reviewIndices are
    0-based positions into `reviews`.
    """

    reviews: List[str] = Field(..., min_length=1)

    @classmethod
    def from_raw(cls, raw: Any) -> "ReviewBatch":
        """
        Build a batch from untrusted request data.

        Elements are trimmed, never dropped: positions must match the
        request, so a blank element is an error.

        Raises:
            EmptyBatchError: If raw is not a non-empty list of non-blank
                strings
        """
        if not isinstance(raw, (list, tuple)) or not raw:
            raise EmptyBatchError()
        if not all(isinstance(item, str) for item in raw):
            raise EmptyBatchError("Reviews must be a list of strings.")

        reviews = [item.strip() for item in raw]
        if not any(reviews):
            raise EmptyBatchError()
        blank = [i for i, review in enumerate(reviews) if not review]
        if blank:
            raise EmptyBatchError(f"Reviews must not be blank (positions {blank}).")
        return cls(reviews=reviews)

    def __len__(self) -> int:
        return len(self.reviews)

    def numbered(self) -> str:
        return render_numbered(self.reviews)

    def reviews_for(self, indices: Sequence[int]) -> List[str]:
        """Reviews at the given positions; out-of-range positions are skipped."""
        return [self.reviews[i] for i in indices if 0 <= i < len(self.reviews)]


class SentimentAssignment(BaseModel):
    """Per-review sentiment decided by the first pass of the two-pass strategy."""

    labels: List[SentimentLabel]

    def __len__(self) -> int:
        return len(self.labels)

    def numbered(self) -> str:
        return render_numbered([label.value for label in self.labels])


class PromptSpec(BaseModel):
    """A fully rendered request to the inference service."""

    stage: PromptStage
    system: str
    prompt: str
    temperature: float = Field(..., ge=0.0, le=2.0)
    max_tokens: int = Field(..., gt=0)


class Keyword(BaseModel):
    """A topical keyword linked back to the reviews that justify it."""

    model_config = ConfigDict(populate_by_name=True)

    keyword: str = Field(..., min_length=1, description="Short aspect phrase")
    sentiment: SentimentLabel
    count: int = Field(..., ge=0, description="Mention frequency stated by the model")
    review_indices: List[int] = Field(
        default_factory=list,
        alias="reviewIndices",
        description="0-based indices of the most related reviews",
    )
    aspect: str = Field(..., description="Descriptive aspect label")

    @field_validator("review_indices")
    @classmethod
    def dedupe_indices(cls, value: List[int]) -> List[int]:
        return sorted(set(value))


class AnalysisResult(BaseModel):
    """Aggregate sentiment breakdown and ranked keywords of a review batch."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "totalCount": 3,
                "positiveCount": 2,
                "negativeCount": 1,
                "positive": 66.67,
                "negative": 33.33,
                "keywords": [
                    {
                        "keyword": "design",
                        "sentiment": "positive",
                        "count": 2,
                        "reviewIndices": [0, 2],
                        "aspect": "product design",
                    },
                    {
                        "keyword": "delivery",
                        "sentiment": "negative",
                        "count": 1,
                        "reviewIndices": [1],
                        "aspect": "delivery speed",
                    },
                ],
            }
        },
    )

    total_count: int = Field(..., ge=0, alias="totalCount")
    positive_count: int = Field(..., ge=0, alias="positiveCount")
    negative_count: int = Field(..., ge=0, alias="negativeCount")
    positive: float = Field(..., ge=0.0, le=100.0, description="Positive share (%)")
    negative: float = Field(..., ge=0.0, le=100.0, description="Negative share (%)")
    keywords: List[Keyword] = Field(default_factory=list)

    def keywords_for(self, sentiment: SentimentLabel) -> List[Keyword]:
        return [k for k in self.keywords if k.sentiment == sentiment]

    def keyword_shares(self, sentiment: SentimentLabel) -> Dict[str, int]:
        """
        Share of each keyword within its sentiment group.

        Returns:
            Mapping keyword -> rounded percentage of the group's total count
        """
        group = self.keywords_for(sentiment)
        total = sum(k.count for k in group)
        shares = {}
        for k in group:
            share = (k.count / total) * 100 if total > 0 else 0.0
            shares[k.keyword] = int(math.floor(share + 0.5))
        return shares

    def summary(self) -> Dict[str, Dict[str, int]]:
        return {s.value: self.keyword_shares(s) for s in SENTIMENT_ORDER}

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AnalysisRequest(BaseModel):
    """Raw request as submitted by the client application."""

    reviews: Any = Field(None, description="Review texts")
    locale: str = Field("en", description="Prompt language / call strategy")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "reviews": [
                    "Great build quality",
                    "Terrible delivery, very late",
                    "Love the design",
                ],
                "locale": "en",
            }
        }
    )

"""Tests for review analysis schemas."""

import pytest

from src.modules.review_analysis.constants import Locale, SentimentLabel
from src.modules.review_analysis.exceptions import EmptyBatchError
from src.modules.review_analysis.schemas import AnalysisResult, ReviewBatch


class TestReviewBatch:
    """Test suite for ReviewBatch."""

    def test_from_raw_trims(self):
        batch = ReviewBatch.from_raw(["  Great  ", "Bad\n"])
        assert batch.reviews == ["Great", "Bad"]
        assert len(batch) == 2

    def test_from_raw_rejects_blank_between_reviews(self):
        with pytest.raises(EmptyBatchError, match=r"blank \(positions \[1\]\)"):
            ReviewBatch.from_raw(["a", "  ", "b"])

    def test_blank_rejection_status(self):
        with pytest.raises(EmptyBatchError) as exc_info:
            ReviewBatch.from_raw(["a", ""])
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("raw", [None, [], "a review", ["", "  "], {"a": 1}])
    def test_from_raw_empty(self, raw):
        with pytest.raises(EmptyBatchError):
            ReviewBatch.from_raw(raw)

    def test_from_raw_rejects_non_strings(self):
        with pytest.raises(EmptyBatchError, match="strings"):
            ReviewBatch.from_raw(["ok", 3])

    def test_numbered(self):
        batch = ReviewBatch(reviews=["a", "b"])
        assert batch.numbered() == "1. a\n2. b"

    def test_reviews_for_skips_out_of_range(self):
        batch = ReviewBatch(reviews=["a", "b", "c"])
        assert batch.reviews_for([2, 0, 7, -1]) == ["c", "a"]

    def test_empty_batch_status(self):
        with pytest.raises(EmptyBatchError) as exc_info:
            ReviewBatch.from_raw([])
        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict()["error"] == "No reviews provided."


class TestLocale:
    """Test suite for Locale resolution."""

    def test_known(self):
        assert Locale.resolve("ko") == Locale.KO
        assert Locale.resolve(" KO ") == Locale.KO

    def test_unknown_defaults_to_english(self):
        assert Locale.resolve("fr") == Locale.EN
        assert Locale.resolve(None) == Locale.EN


class TestAnalysisResult:
    """Test suite for AnalysisResult helpers."""

    def setup_method(self):
        """Set up test fixtures."""
        self.result = AnalysisResult.model_validate({
            "totalCount": 4,
            "positiveCount": 3,
            "negativeCount": 1,
            "positive": 75,
            "negative": 25,
            "keywords": [
                {"keyword": "design", "sentiment": "positive", "count": 2, "reviewIndices": [0], "aspect": "design"},
                {"keyword": "price", "sentiment": "positive", "count": 1, "reviewIndices": [2], "aspect": "price"},
                {"keyword": "delivery", "sentiment": "negative", "count": 1, "reviewIndices": [1], "aspect": "delivery"},
            ],
        })

    def test_keyword_shares(self):
        assert self.result.keyword_shares(SentimentLabel.POSITIVE) == {"design": 67, "price": 33}
        assert self.result.keyword_shares(SentimentLabel.NEGATIVE) == {"delivery": 100}

    def test_keyword_shares_zero_total(self):
        result = self.result.model_copy(update={"keywords": [
            kw.model_copy(update={"count": 0}) for kw in self.result.keywords
        ]})
        assert result.keyword_shares(SentimentLabel.POSITIVE) == {"design": 0, "price": 0}

    def test_summary(self):
        summary = self.result.summary()
        assert list(summary) == ["positive", "negative"]

    def test_frozen(self):
        with pytest.raises(Exception):
            self.result.total_count = 10

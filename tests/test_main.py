"""Tests for the command-line entry point."""

import asyncio
import json

import pytest

import main
from src.utils import get_correlation_id
from tests.stubs import StubInferenceClient

PAYLOAD = {
    "totalCount": 3,
    "positiveCount": 2,
    "negativeCount": 1,
    "keywords": [
        {"keyword": "design", "sentiment": "positive", "count": 2, "reviewIndices": [0, 2], "aspect": "design"},
        {"keyword": "delivery", "sentiment": "negative", "count": 1, "reviewIndices": [1], "aspect": "delivery"},
    ],
}


class ClosingStubClient(StubInferenceClient):
    """Stub that also supports the close() call made by the CLI."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.closed = False

    async def close(self):
        self.closed = True


class TestAnalyzeFile:
    """Test suite for the analyze command."""

    def setup_method(self):
        """Set up test fixtures."""
        self.stub = ClosingStubClient([json.dumps(PAYLOAD)])

    def write_reviews(self, tmp_path):
        path = tmp_path / "reviews.txt"
        path.write_text("Love the design\n\nShipping took weeks\n  Sleek design  \n", encoding="utf-8")
        return path

    def test_read_reviews_drops_blank_lines(self, tmp_path):
        reviews = main.read_reviews(self.write_reviews(tmp_path))
        assert reviews == ["Love the design", "Shipping took weeks", "Sleek design"]

    def test_output_lists_reviews_per_keyword(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "src.modules.review_analysis.OpenAIInferenceClient", lambda: self.stub
        )

        output = asyncio.run(main.analyze_file(self.write_reviews(tmp_path), "en"))

        assert output["keywordReviews"] == {
            "design": ["Love the design", "Sleek design"],
            "delivery": ["Shipping took weeks"],
        }
        assert output["keywordShares"]["positive"] == {"design": 100}
        assert output["result"]["positive"] == pytest.approx(200 / 3)
        assert self.stub.closed

    def test_correlation_id_set_for_run(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "src.modules.review_analysis.OpenAIInferenceClient", lambda: self.stub
        )

        async def analyze_and_read_id():
            await main.analyze_file(self.write_reviews(tmp_path), "en")
            return get_correlation_id()

        assert asyncio.run(analyze_and_read_id())

"""Tests for the Prompt Builder."""

import pytest

from src.modules.review_analysis.constants import Locale, PromptStage, SentimentLabel
from src.modules.review_analysis.prompts import build_prompt
from src.modules.review_analysis.schemas import ReviewBatch, SentimentAssignment


class TestBuildPrompt:
    """Test suite for build_prompt."""

    def setup_method(self):
        """Set up test fixtures."""
        self.batch = ReviewBatch(reviews=[
            "Great build quality",
            "Terrible delivery, very late",
            "Love the design",
        ])

    def test_combined_prompt_numbers_reviews_from_one(self):
        built = build_prompt(self.batch, Locale.EN, PromptStage.COMBINED)

        assert "1. Great build quality" in built.prompt
        assert "2. Terrible delivery, very late" in built.prompt
        assert "3. Love the design" in built.prompt
        assert "0. " not in built.prompt

    def test_combined_prompt_instructions(self):
        built = build_prompt(self.batch, Locale.EN, PromptStage.COMBINED)

        assert '"reviewIndices"' in built.prompt
        assert "0-based" in built.prompt
        assert "descending" in built.prompt
        assert "nice wood scent" in built.prompt
        assert '"totalCount": number' in built.prompt
        assert "{{" not in built.prompt

    def test_combined_sampling(self):
        built = build_prompt(self.batch, Locale.EN, PromptStage.COMBINED)

        assert built.stage == PromptStage.COMBINED
        assert built.temperature == 0.3
        assert built.max_tokens == 2048
        assert "review sentiment analysis" in built.system

    def test_sentiment_prompt(self):
        built = build_prompt(self.batch, Locale.KO, PromptStage.SENTIMENT)

        assert "1. Great build quality" in built.prompt
        assert '{"sentiments": ["positive", "negative", ...]}' in built.prompt
        assert "3개" in built.prompt
        assert built.temperature == 0.2
        assert built.max_tokens == 512

    def test_keyword_prompt_embeds_sentiments(self):
        sentiments = SentimentAssignment(labels=[
            SentimentLabel.POSITIVE,
            SentimentLabel.NEGATIVE,
            SentimentLabel.POSITIVE,
        ])
        built = build_prompt(self.batch, Locale.KO, PromptStage.KEYWORDS, sentiments=sentiments)

        assert "1. Great build quality" in built.prompt
        assert "2. negative" in built.prompt
        assert "3. positive" in built.prompt
        assert "reviewIndices" in built.prompt
        assert built.max_tokens == 2048

    def test_keyword_prompt_requires_sentiments(self):
        with pytest.raises(ValueError):
            build_prompt(self.batch, Locale.KO, PromptStage.KEYWORDS)

    def test_unsupported_stage_for_locale(self):
        with pytest.raises(ValueError):
            build_prompt(self.batch, Locale.EN, PromptStage.SENTIMENT)

    def test_review_braces_are_not_formatted(self):
        batch = ReviewBatch(reviews=["Price {was} fine"])
        built = build_prompt(batch, Locale.EN, PromptStage.COMBINED)
        assert "1. Price {was} fine" in built.prompt

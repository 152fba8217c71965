"""Tests for the Response Extractor."""

import json

import pytest

from src.modules.review_analysis.exceptions import ExtractionFailure
from src.modules.review_analysis.extractor import extract_payload


class TestExtractPayload:
    """Test suite for extract_payload."""

    def test_prose_wrapped_object(self):
        assert extract_payload('Sure! {"a":1} Thanks.') == {"a": 1}

    def test_plain_object(self):
        assert extract_payload('{"sentiments": ["positive"]}') == {"sentiments": ["positive"]}

    def test_code_fence(self):
        text = 'Here you go:\n```json\n{"totalCount": 2}\n```'
        assert extract_payload(text) == {"totalCount": 2}

    def test_nested_objects_kept_whole(self):
        payload = {
            "totalCount": 2,
            "keywords": [
                {"keyword": "price", "sentiment": "positive"},
                {"keyword": "delivery", "sentiment": "negative"},
            ],
        }
        text = f"Result:\n{json.dumps(payload)}\nHope this helps."
        assert extract_payload(text) == payload

    def test_no_braces(self):
        with pytest.raises(ExtractionFailure):
            extract_payload("I could not analyze these reviews.")

    def test_empty_text(self):
        with pytest.raises(ExtractionFailure):
            extract_payload("")

    def test_none_text(self):
        with pytest.raises(ExtractionFailure):
            extract_payload(None)

    def test_invalid_json_inside_braces(self):
        with pytest.raises(ExtractionFailure):
            extract_payload('Result: {"totalCount": 3, "keywords": [} done')

    def test_trailing_comma_not_repaired(self):
        with pytest.raises(ExtractionFailure):
            extract_payload('{"a": 1,}')

    def test_two_separate_objects_fail(self):
        # The greedy span covers both objects, which is not valid JSON
        with pytest.raises(ExtractionFailure):
            extract_payload('{"a": 1} and also {"b": 2}')

    def test_unbalanced_braces(self):
        with pytest.raises(ExtractionFailure):
            extract_payload('{"a": {"b": 1}')

    def test_failure_kind(self):
        with pytest.raises(ExtractionFailure) as exc_info:
            extract_payload("nothing here")
        assert exc_info.value.kind.value == "ExtractionFailure"
        assert exc_info.value.status_code == 502

"""
Structured payload extraction from raw model text.
"""

import json
import logging
import re
from typing import Any, Dict

from .exceptions import ExtractionFailure

logger = logging.getLogger(__name__)

# Greedy: first "{" to last "}". A non-greedy match would cut nested objects.
PAYLOAD_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_payload(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object embedded in model output.

    Surrounding prose is ignored; the isolated span itself must be valid
    JSON. Nothing is repaired.

    Args:
        text: Raw completion text

    Returns:
        The parsed JSON object

    Raises:
        ExtractionFailure: If there is no brace span, it does not parse,
            or it is not a JSON object
    """
    match = PAYLOAD_PATTERN.search(text or "")
    if match is None:
        raise ExtractionFailure("No JSON in model response")

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Model response JSON could not be parsed: {e}")
        raise ExtractionFailure(f"Invalid JSON in model response: {e.msg}") from e

    if not isinstance(payload, dict):
        raise ExtractionFailure("Model response JSON is not an object")
    return payload

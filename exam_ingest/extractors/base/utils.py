"""
Shared utility functions for extraction.

This module provides helpers for cleaning raw model output and for logging
extraction statistics.
"""

import re
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# MODEL OUTPUT CLEANUP
# =============================================================================

CODE_FENCE = re.compile(r"```json|```", re.IGNORECASE)


def strip_code_fences(raw: str) -> str:
    """ Remove ```json / ``` markers anywhere in the text and trim it. """
    return CODE_FENCE.sub("", raw or "").strip()


def extract_json_payload(raw: str) -> str:
    """
    Clean a model reply down to its JSON object.

    Strips code fences, then keeps the span from the first "{" to the last "}"
    when the model wrapped the object in prose. Text without a brace pair is
    returned as-is so the JSON parser reports the error.
    """
    text = strip_code_fences(raw)

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        text = text[first_brace:last_brace + 1]

    return text


# =============================================================================
# LOGGING HELPERS
# =============================================================================

def log_extraction_stats(
    extractor_name: str,
    num_items: int,
    num_failures: int,
    processing_time: float,
    api_calls: int = 0
):
    """
    Log extraction statistics.

    Args:
        extractor_name: Name of the extractor
        num_items: Number of questions extracted
        num_failures: Number of segments that failed
        processing_time: Time taken in seconds
        api_calls: Number of API calls made
    """
    logger.info(
        f"{extractor_name} extracted {num_items} questions ({num_failures} failed) "
        f"in {processing_time:.2f}s ({api_calls} API calls)"
    )

"""
Base module for extraction.

Exports core interfaces, models, config and utilities used by the extractors.
"""

from .interfaces import QuestionExtractor

from .models import (
    QuestionSegment,
    ExtractionFailure,
)

from .config import (
    ExtractorConfig,
    QuestionExtractorConfig,
)

from .utils import (
    strip_code_fences,
    extract_json_payload,
    log_extraction_stats,
)

__all__ = [
    # Interfaces
    "QuestionExtractor",
    # Models
    "QuestionSegment",
    "ExtractionFailure",
    # Config
    "ExtractorConfig",
    "QuestionExtractorConfig",
    # Utils
    "strip_code_fences",
    "extract_json_payload",
    "log_extraction_stats",
]

"""
Error types raised by the ingestion pipeline.

DocumentError and ConfigurationError abort the whole request.
SegmentExtractionError is isolated to a single question segment and is recorded
as a failure by the orchestrator.
"""

from typing import Optional


class ExamIngestError(Exception):
    """Base class for ingestion errors."""


class DocumentError(ExamIngestError):
    """The document as a whole cannot be processed (unreadable, no questions)."""


class SegmentExtractionError(ExamIngestError):
    """One question segment could not be turned into a valid question."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class ConfigurationError(ExamIngestError):
    """The parser or LLM provider cannot be built from the current settings."""

"""
Base interfaces for extraction strategies.

This module defines the abstract base class question extractors implement, so
the orchestrator can run any of them (or a test double) over segments.
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..question.models import ExtractedQuestion, QuestionMetadata


class QuestionExtractor(ABC):
    """ Base class for per-segment question extraction strategies. """

    @abstractmethod
    def extract(
        self,
        segment_text: str,
        position: int = 1,
        metadata: Optional["QuestionMetadata"] = None
    ) -> "ExtractedQuestion":
        """
        Extract one structured question from a segment.

        Raises SegmentExtractionError when the segment cannot be turned into a
        valid question.
        """
        pass

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        pass

    @property
    def api_calls(self) -> int:
        """Number of model calls made so far (0 for extractors without a model)."""
        return 0

    def prepare(self):
        """
        Called once per batch before any segment is extracted.

        Raises ConfigurationError when the extractor cannot run.
        """
        pass

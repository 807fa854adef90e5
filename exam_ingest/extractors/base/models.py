"""
Shared data models for the extraction pipeline.

Segments and failures are plain dataclasses; the validated question record is
a pydantic model (see extractors/question/models.py) because it crosses the
API and persistence boundaries.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class QuestionSegment:
    """
    One block of document text believed to hold a single exam question.

    Boundaries are heuristic: a missed marker merges two questions and a
    spurious one truncates a question. boundary_uncertain flags segments that
    look merged.
    """
    index: int
    text: str
    boundary_uncertain: bool = False

    @property
    def position(self) -> int:
        """1-based position in the document."""
        return self.index + 1

    def __post_init__(self):
        if self.index < 0:
            raise ValueError("Segment index must be >= 0")


@dataclass(frozen=True)
class ExtractionFailure:
    """A segment that could not be turned into a valid question."""
    position: int
    reason: str
    original_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "reason": self.reason,
            "original_text": self.original_text,
        }

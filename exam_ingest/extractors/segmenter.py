"""
Question segmentation for raw exam text.

Splits the text extracted from an exam booklet into one block per question,
using the numbering conventions of Brazilian exam boards:

- "1)", "12)" at the start of a line
- "QUESTÃO 1", "Questão 12", "QUESTÃO1" at the start of a line

each optionally followed by ".", ":", "-" and spaces. Splitting is a best-effort
heuristic. There is no merge-back step: a marker that is missed merges two
questions into one block, and a marker-looking line inside a quoted excerpt cuts
a question short. Both cases surface downstream as extraction failures or as
blocks flagged with boundary_uncertain.
"""

import logging
import re
from typing import List

from .base.models import QuestionSegment

logger = logging.getLogger(__name__)

MIN_SEGMENT_LENGTH = 20

QUESTION_BOUNDARY = re.compile(
    r"(?:^|\n)(?:\d{1,2}\)|QUESTÃO ?\d{1,2}|Questão ?\d{1,2})[.: \-]*",
    re.IGNORECASE,
)

# A question marker that did not start a line, e.g. "... fim do texto. QUESTÃO 7"
INLINE_QUESTION_MARKER = re.compile(r"[^\n]\s*QUESTÃO ?\d{1,2}\b", re.IGNORECASE)

# A line opening an option list: "A)", "(A)", "a)"
OPTION_LIST_START = re.compile(r"^\s*\(?A\)", re.IGNORECASE | re.MULTILINE)


def segment_questions(text: str, min_length: int = MIN_SEGMENT_LENGTH) -> List[QuestionSegment]:
    """
    Split exam text into question segments.

    Args:
        text: Plain text of the whole document
        min_length: Pieces whose trimmed length is at or below this are dropped

    Returns:
        Segments in document order; empty when nothing survives the filter
    """
    if not text:
        return []

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    pieces = (piece.strip() for piece in QUESTION_BOUNDARY.split(text))
    kept = [piece for piece in pieces if len(piece) > min_length]

    segments = []
    for i, piece in enumerate(kept):
        segment = QuestionSegment(
            index=i,
            text=piece,
            boundary_uncertain=is_boundary_uncertain(piece),
        )
        if segment.boundary_uncertain:
            logger.warning(f"Segment {segment.position} may contain more than one question")
        segments.append(segment)

    logger.debug(f"Segmented text into {len(segments)} questions")
    return segments


def is_boundary_uncertain(segment_text: str) -> bool:
    """
    Check whether a segment looks like two questions merged together.

    Signals: a question marker in the middle of a line, or more than one
    option list starting with "A)".
    """
    if INLINE_QUESTION_MARKER.search(segment_text):
        return True
    return len(OPTION_LIST_START.findall(segment_text)) > 1

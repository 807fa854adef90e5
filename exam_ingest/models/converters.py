"""
Converters between extraction models and database models.

This keeps the extraction layer (pydantic ExtractedQuestion) separate from the
persistence layer (SQLAlchemy Question).
"""

from typing import Iterable, List, Optional

from ..extractors.question.models import ExtractedQuestion
from .db.question import Question


# =============================================================================
# EXTRACTION -> DATABASE CONVERSIONS
# =============================================================================

def extracted_question_to_record(
    question: ExtractedQuestion,
    source_filename: Optional[str] = None
) -> Question:
    """
    Convert ExtractedQuestion to a Question database model.

    Args:
        question: Validated question from the extraction pipeline
        source_filename: Optional name of the document it came from

    Returns:
        Question model (unsaved, needs to be added to session)
    """
    return Question(
        institution=question.institution,
        role=question.role,
        subject=question.subject,
        topic=question.topic,
        modality=question.modality,
        exam_board=question.exam_board,
        statement=question.statement,
        options=dict(question.options),
        correct_letter=question.correct_letter,
        explanation=question.explanation,
        source_filename=source_filename,
    )


def bulk_extracted_to_records(
    questions: Iterable[ExtractedQuestion],
    source_filename: Optional[str] = None
) -> List[Question]:
    """ Convert multiple extracted questions, preserving order. """
    return [extracted_question_to_record(q, source_filename) for q in questions]

"""
Question Pydantic schemas for request validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ...extractors.question.models import ExtractedQuestion


class QuestionBulkCreate(BaseModel):
    """Reviewed questions to store in the question bank."""
    questions: List[ExtractedQuestion] = Field(..., min_length=1)
    source_filename: Optional[str] = Field(None, max_length=500)

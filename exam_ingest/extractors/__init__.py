"""
Extraction for exam question documents.

- segmenter: splits raw exam text into per-question segments
- modality: labels a question as multiple choice or true/false
- question: turns one segment into a validated ExtractedQuestion via an LLM

Usage:
    from exam_ingest.extractors import segment_questions, LLMQuestionExtractor

    extractor = LLMQuestionExtractor()
    for segment in segment_questions(text):
        question = extractor.extract(segment.text, segment.position)
"""

from .base import (
    QuestionExtractor,
    QuestionSegment,
    ExtractionFailure,
    ExtractorConfig,
    QuestionExtractorConfig,
)
from .segmenter import segment_questions
from .modality import classify_modality
from .question import LLMQuestionExtractor, ExtractedQuestion, QuestionMetadata

__all__ = [
    "QuestionExtractor",
    "QuestionSegment",
    "ExtractionFailure",
    "ExtractorConfig",
    "QuestionExtractorConfig",
    "segment_questions",
    "classify_modality",
    "LLMQuestionExtractor",
    "ExtractedQuestion",
    "QuestionMetadata",
]

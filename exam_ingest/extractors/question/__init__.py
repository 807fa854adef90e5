from .llm_extractor import LLMQuestionExtractor
from .models import ExtractedQuestion, QuestionMetadata

__all__ = ["LLMQuestionExtractor", "ExtractedQuestion", "QuestionMetadata"]

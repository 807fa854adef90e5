from .processor import BatchResult, DocumentProcessor, NO_QUESTIONS_DETECTED

__all__ = ["BatchResult", "DocumentProcessor", "NO_QUESTIONS_DETECTED"]

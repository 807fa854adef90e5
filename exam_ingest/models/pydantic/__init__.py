"""
Pydantic validation schemas package.

Exports request schemas for the HTTP endpoints.
"""

from .question import QuestionBulkCreate

__all__ = [
    'QuestionBulkCreate',
]

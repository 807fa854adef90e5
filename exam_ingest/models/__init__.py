"""
Persistence-side models.

- enums: values shared by extraction, API and database
- db: SQLAlchemy models and helpers for the question bank
- converters: ExtractedQuestion -> database rows
"""

from .enums import Modality, ProcessingStatus

__all__ = ["Modality", "ProcessingStatus"]

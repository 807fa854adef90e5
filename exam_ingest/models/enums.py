"""
Enumeration types shared by extraction and persistence.

Values are the strings stored in the question bank and returned by the API.
"""

from enum import Enum


class Modality(str, Enum):
    """Answer modality of an exam question."""
    MULTIPLE_CHOICE = "Multiple Choice"
    TRUE_FALSE = "True/False"


class ProcessingStatus(str, Enum):
    """Outcome of one document batch."""
    COMPLETED = "completed"
    PARTIALLY_COMPLETED = "partially_completed"
    FAILED = "failed"

"""
SQLAlchemy models and helpers for the question bank.
"""

from .base import Base, create_db_engine, get_session_maker
from .question import Question
from .helpers import bulk_insert_questions, distinct_metadata_values


def init_database(database_url: str, echo: bool = False):
    """
    Initialize database: create the question bank tables.

    Args:
        database_url: Database connection string
        echo: Whether to echo SQL statements

    Returns:
        SQLAlchemy engine
    """
    engine = create_db_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    return engine


__all__ = [
    "Base",
    "create_db_engine",
    "get_session_maker",
    "init_database",
    "Question",
    "bulk_insert_questions",
    "distinct_metadata_values",
]

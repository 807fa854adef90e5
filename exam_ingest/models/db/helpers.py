"""
Helper functions for writing to and reading from the question bank.

Inserts run in fixed-size chunks so one large reviewed batch does not become a
single oversized statement.
"""

import logging
from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from .question import Question

logger = logging.getLogger(__name__)

METADATA_COLUMNS = ("institution", "role", "subject", "topic", "modality", "exam_board")


def bulk_insert_questions(
    session: Session,
    questions: Sequence[Question],
    chunk_size: int = 200,
    commit: bool = True
) -> int:
    """
    Insert questions in chunks.

    Args:
        session: SQLAlchemy session
        questions: Unsaved Question models
        chunk_size: Rows per flush
        commit: Whether to commit the transaction (default: True)

    Returns:
        Number of inserted questions
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")

    for start in range(0, len(questions), chunk_size):
        chunk = questions[start:start + chunk_size]
        session.add_all(chunk)
        session.flush()
        logger.debug(f"Flushed questions {start + 1}-{start + len(chunk)}")

    if commit:
        session.commit()

    logger.info(f"Inserted {len(questions)} questions")
    return len(questions)


def distinct_metadata_values(session: Session, limit: int = 2000) -> Dict[str, List[str]]:
    """
    Collect distinct metadata values for the operator's suggestion lists.

    Reads at most `limit` rows and returns, per metadata attribute, the sorted
    set of non-blank trimmed values.
    """
    columns = [getattr(Question, name) for name in METADATA_COLUMNS]
    rows = session.execute(select(*columns).limit(limit)).all()

    values: Dict[str, set] = {name: set() for name in METADATA_COLUMNS}
    for row in rows:
        for name, value in zip(METADATA_COLUMNS, row):
            if value is None:
                continue
            text = getattr(value, "value", value)
            text = str(text).strip()
            if text:
                values[name].add(text)

    return {name: sorted(found) for name, found in values.items()}

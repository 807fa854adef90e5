"""
Question bank database model.

Column names follow the existing "questoes" table; attribute names are English.
"""

from typing import Optional, Dict
from datetime import datetime
import uuid
from sqlalchemy import JSON, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, uuid_pk, created_at
from ..enums import Modality


class Question(Base):
    """
    Question bank entity.

    One exam question with its classification metadata, options, answer key
    and explanation.
    """
    __tablename__ = "questoes"

    # Primary key
    id: Mapped[uuid.UUID] = uuid_pk()

    # Classification metadata
    institution: Mapped[Optional[str]] = mapped_column("instituicao", String(255), nullable=True)
    role: Mapped[Optional[str]] = mapped_column("cargo", String(255), nullable=True)
    subject: Mapped[Optional[str]] = mapped_column("disciplina", String(255), nullable=True, index=True)
    topic: Mapped[Optional[str]] = mapped_column("assunto", String(255), nullable=True)
    modality: Mapped[Modality] = mapped_column(
        "modalidade",
        Enum(Modality, values_callable=lambda enum: [m.value for m in enum], native_enum=False, length=32),
        default=Modality.MULTIPLE_CHOICE,
        nullable=False,
    )
    exam_board: Mapped[Optional[str]] = mapped_column("banca", String(255), nullable=True, index=True)

    # Content
    statement: Mapped[str] = mapped_column("enunciado", Text, nullable=False)
    options: Mapped[Dict[str, str]] = mapped_column("alternativas", JSON, nullable=False)
    correct_letter: Mapped[str] = mapped_column("correta", String(1), nullable=False)
    explanation: Mapped[Optional[str]] = mapped_column("explicacao", Text, nullable=True)

    # Provenance
    source_filename: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = created_at()

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, subject={self.subject}, modality={self.modality.value})>"

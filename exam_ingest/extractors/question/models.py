from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...models.enums import Modality


OPTION_LETTERS = ("A", "B", "C", "D", "E")


# =============================================================================
# PYDANTIC MODELS FOR EXAM QUESTION EXTRACTION
# =============================================================================

class QuestionMetadata(BaseModel):
    """Operator-fixed metadata that wins over whatever the model extracts."""
    institution: Optional[str] = Field(None, alias="instituicao")
    role: Optional[str] = Field(None, alias="cargo")
    subject: Optional[str] = Field(None, alias="disciplina")
    topic: Optional[str] = Field(None, alias="assunto")
    modality: Optional[Modality] = Field(None, alias="modalidade")
    exam_board: Optional[str] = Field(None, alias="banca")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("institution", "role", "subject", "topic", "exam_board", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @field_validator("modality", mode="before")
    @classmethod
    def blank_modality_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def overrides(self) -> Dict[str, object]:
        """Set fields keyed by the model's JSON names (instituicao, cargo, ...)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExtractedQuestion(BaseModel):
    """
    One exam question extracted from a document segment.

    Accepts the Portuguese keys the model answers with (enunciado,
    alternativas, correta, ...) and serializes with the English field names.
    """
    institution: Optional[str] = Field(None, alias="instituicao", description="Institution running the exam")
    role: Optional[str] = Field(None, alias="cargo", description="Position the exam is for")
    subject: Optional[str] = Field(None, alias="disciplina", description="Subject / discipline")
    topic: Optional[str] = Field(None, alias="assunto", description="Topic within the subject")
    modality: Modality = Field(Modality.MULTIPLE_CHOICE, alias="modalidade")
    exam_board: Optional[str] = Field(None, alias="banca", description="Exam board (e.g. CESPE, FGV)")
    statement: str = Field(..., alias="enunciado", min_length=1)
    options: Dict[str, str] = Field(..., alias="alternativas", description="Option letter to text")
    correct_letter: str = Field(..., alias="correta", pattern=r"^[A-E]$")
    explanation: Optional[str] = Field(None, alias="explicacao")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("options")
    @classmethod
    def check_options(cls, value: Dict[str, str]) -> Dict[str, str]:
        unknown = [letter for letter in value if letter not in OPTION_LETTERS]
        if unknown:
            raise ValueError(f"unknown option letters: {', '.join(unknown)}")
        if sum(1 for text in value.values() if text.strip()) < 2:
            raise ValueError("at least 2 populated options are required")
        return value

    @field_validator("institution", "role", "subject", "topic", "exam_board", "explanation", mode="before")
    @classmethod
    def stringify(cls, value):
        if value is None:
            return None
        return str(value).strip() or None

    @model_validator(mode="after")
    def check_correct_letter(self):
        if not self.options.get(self.correct_letter, "").strip():
            raise ValueError(f"correct letter {self.correct_letter} is not a populated option")
        return self

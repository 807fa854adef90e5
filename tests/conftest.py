"""
Shared fixtures for the exam ingestion tests.

FakeLLMClient stands in for the model provider: it answers each prompt through
a responder callable and records every prompt it received.
"""

import json
import threading
from typing import Callable, List, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from exam_ingest.extractors import QuestionExtractorConfig, LLMQuestionExtractor
from exam_ingest.llm import BaseLLMClient
from exam_ingest.models.db import Base
from exam_ingest.parsers import BaseDocumentParser, ParsedDocument


class FakeLLMClient(BaseLLMClient):
    """In-memory LLM client; responder maps a prompt to the raw reply text."""

    def __init__(self, responder: Callable[[str], str]):
        self.responder = responder
        self.prompts: List[str] = []
        self._lock = threading.Lock()

    def generate_text(self, model, prompt, temperature=0.0, max_tokens=None):
        with self._lock:
            self.prompts.append(prompt)
        return self.responder(prompt)


class FakeParser(BaseDocumentParser):
    """Parser returning fixed text, or raising the given error."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls = 0

    def parse(self, file_content):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return ParsedDocument(content=self.text, format="plain_text", page_count=1)


def question_payload(**overrides) -> dict:
    """A well-formed model answer for one multiple-choice question."""
    payload = {
        "instituicao": "Polícia Militar de São Paulo",
        "cargo": "Soldado",
        "disciplina": "Geografia",
        "assunto": "Capitais",
        "modalidade": "Multipla Escolha",
        "banca": "VUNESP",
        "enunciado": "Qual é a capital do Brasil?",
        "alternativas": {"A": "Rio de Janeiro", "B": "Brasília", "C": "Salvador"},
        "correta": "B",
        "explicacao": "Brasília é a capital federal desde 1960.",
    }
    payload.update(overrides)
    return payload


def fenced(payload: dict) -> str:
    return f"```json\n{json.dumps(payload, ensure_ascii=False)}\n```"


@pytest.fixture
def extractor_config() -> QuestionExtractorConfig:
    return QuestionExtractorConfig(
        llm_provider="gemini",
        llm_api_key="test-key",
        llm_model="test-model",
        max_concurrency=1,
    )


@pytest.fixture
def make_extractor(extractor_config):
    """Build an extractor around a FakeLLMClient with the given responder."""
    def _make(responder: Callable[[str], str], config: Optional[QuestionExtractorConfig] = None):
        client = FakeLLMClient(responder)
        return LLMQuestionExtractor(config or extractor_config, client=client), client
    return _make


@pytest.fixture
def session():
    """Session on a fresh in-memory SQLite question bank."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()

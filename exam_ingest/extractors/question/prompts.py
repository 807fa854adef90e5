"""
Prompts for exam question extraction.

The model answers with the Portuguese field names used by the question bank
(instituicao, cargo, disciplina, ...); ExtractedQuestion maps them to English
attribute names.
"""

import json
from typing import Optional

from .models import QuestionMetadata


EXTRACTION_PROMPT = """
Receba a seguinte questão de concurso e extraia os campos:
instituicao, cargo, disciplina, assunto, modalidade, banca, enunciado, alternativas, correta, explicacao
Retorne como objeto JSON, exemplo:
{
  "instituicao": "...",
  "cargo": "...",
  "disciplina": "...",
  "assunto": "...",
  "modalidade": "...",
  "banca": "...",
  "enunciado": "...",
  "alternativas": { "A": "...", "B": "...", "C": "...", "D": "...", "E": "..." },
  "correta": "...",
  "explicacao": "..."
}
Se a questão já possuir explicação ou comentário, REESCREVA esse comentário de forma clara, didática e formal, corrigindo eventuais erros, mas sem inventar novas informações.
Se não houver explicação, GERE uma explicação didática para o gabarito.
Apenas responda com o JSON. NÃO inclua explicação extra, markdown, texto antes ou depois.

Questão:
"""

EXPLANATION_PROMPT = """
Você receberá uma questão estruturada (enunciado, alternativas, correta).
Gere SOMENTE um texto de explicação didática, formal e objetiva, justificando o gabarito.
Não invente informações externas. Use apenas o que está na questão e conhecimento geral do tema.
Responda apenas com o texto da explicação, sem markdown, sem aspas, sem JSON.

Dados:
"""


def build_metadata_hint(metadata: Optional[QuestionMetadata]) -> str:
    """Fixed-metadata block placed before the extraction prompt."""
    if metadata is None:
        return ""

    overrides = metadata.overrides()
    if not overrides:
        return ""

    lines = "\n".join(f"- {key}: {value}" for key, value in overrides.items())
    return (
        "\nMETADADOS FIXOS (obrigatório respeitar):\n"
        f"{lines}\n\n"
        "Se algum desses campos não estiver explícito no texto da questão, "
        "preencha com esses valores fixos.\n"
    )


def build_extraction_prompt(segment_text: str, metadata: Optional[QuestionMetadata] = None) -> str:
    """Full prompt for one question segment."""
    return f"{build_metadata_hint(metadata)}{EXTRACTION_PROMPT}{segment_text}"


def build_explanation_prompt(statement: str, options: dict, correct_letter: str) -> str:
    payload = {"enunciado": statement, "alternativas": options, "correta": correct_letter}
    return f"{EXPLANATION_PROMPT}{json.dumps(payload, ensure_ascii=False)}"

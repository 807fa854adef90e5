"""
Tests for LLMQuestionExtractor.

Groups:
- TestSuccessfulExtraction
- TestMalformedResponses
- TestMetadata
- TestExplanationFallback
- TestClientCreation
"""

import json
from dataclasses import replace

import pytest

from exam_ingest.errors import ConfigurationError, SegmentExtractionError
from exam_ingest.extractors import LLMQuestionExtractor, QuestionExtractorConfig, QuestionMetadata
from exam_ingest.extractors.question.prompts import EXTRACTION_PROMPT
from exam_ingest.models.enums import Modality

from conftest import fenced, question_payload


SEGMENT = "Qual é a capital do Brasil?\nA) Rio de Janeiro\nB) Brasília\nC) Salvador"


# ═══════════════════════════════════════════════════════════════════════
# TestSuccessfulExtraction
# ═══════════════════════════════════════════════════════════════════════

class TestSuccessfulExtraction:
    def test_fenced_json_is_parsed(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()))

        question = extractor.extract(SEGMENT, position=1)

        assert question.statement == "Qual é a capital do Brasil?"
        assert question.options == {"A": "Rio de Janeiro", "B": "Brasília", "C": "Salvador"}
        assert question.correct_letter == "B"
        assert question.exam_board == "VUNESP"
        assert question.modality == Modality.MULTIPLE_CHOICE

    def test_single_call_with_segment_in_prompt(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()))

        extractor.extract(SEGMENT, position=1)

        assert len(client.prompts) == 1
        assert client.prompts[0].endswith(SEGMENT)
        assert EXTRACTION_PROMPT.strip() in client.prompts[0]
        assert extractor.api_calls == 1

    def test_prose_around_json(self, make_extractor):
        reply = "Claro! Segue o JSON:\n" + json.dumps(question_payload()) + "\nEspero ter ajudado."
        extractor, _ = make_extractor(lambda prompt: reply)

        assert extractor.extract(SEGMENT).correct_letter == "B"

    def test_model_modality_is_recomputed(self, make_extractor):
        payload = question_payload(
            modalidade="Multipla Escolha",
            enunciado="Julgue o item: a Lei 8.112 rege os servidores federais.",
            alternativas={"A": "Certo", "B": "Errado"},
            correta="A",
        )
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        assert extractor.extract(SEGMENT).modality == Modality.TRUE_FALSE

    def test_correct_letter_is_normalized(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload(correta=" (b) ")))
        assert extractor.extract(SEGMENT).correct_letter == "B"

    def test_option_list_is_lettered(self, make_extractor):
        payload = question_payload(alternativas=["Rio de Janeiro", "Brasília", "Salvador"])
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        question = extractor.extract(SEGMENT)
        assert question.options == {"A": "Rio de Janeiro", "B": "Brasília", "C": "Salvador"}

    def test_blank_options_are_dropped(self, make_extractor):
        payload = question_payload(alternativas={"A": "Rio", "B": "Brasília", "C": "", "D": None, "E": " "})
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        assert extractor.extract(SEGMENT).options == {"A": "Rio", "B": "Brasília"}

    def test_english_keys_accepted(self, make_extractor):
        payload = {
            "statement": "Qual é a capital do Brasil?",
            "options": {"A": "Rio", "B": "Brasília"},
            "correct_letter": "B",
        }
        extractor, _ = make_extractor(lambda prompt: json.dumps(payload))

        question = extractor.extract(SEGMENT)
        assert question.correct_letter == "B"
        assert question.institution is None

    def test_serializes_with_english_names(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload()))

        data = extractor.extract(SEGMENT).model_dump(mode="json")

        assert data["statement"] == "Qual é a capital do Brasil?"
        assert data["modality"] == "Multiple Choice"
        assert "enunciado" not in data


# ═══════════════════════════════════════════════════════════════════════
# TestMalformedResponses
# ═══════════════════════════════════════════════════════════════════════

class TestMalformedResponses:
    def test_invalid_json(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: '{"enunciado": "Qual é", "correta": ')

        with pytest.raises(SegmentExtractionError, match="invalid JSON") as exc_info:
            extractor.extract(SEGMENT, position=4)
        assert exc_info.value.position == 4

    def test_no_json_at_all(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: "Não consegui identificar a questão.")

        with pytest.raises(SegmentExtractionError, match="invalid JSON"):
            extractor.extract(SEGMENT)

    def test_json_array_rejected(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: "[1, 2, 3]")

        with pytest.raises(SegmentExtractionError, match="not a JSON object"):
            extractor.extract(SEGMENT)

    def test_missing_correct_letter(self, make_extractor):
        payload = question_payload()
        del payload["correta"]
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        with pytest.raises(SegmentExtractionError, match="missing required field: correct_letter"):
            extractor.extract(SEGMENT)

    def test_blank_statement(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload(enunciado="   ")))

        with pytest.raises(SegmentExtractionError, match="missing required field: statement"):
            extractor.extract(SEGMENT)

    def test_empty_options(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload(alternativas={})))

        with pytest.raises(SegmentExtractionError, match="missing required field: options"):
            extractor.extract(SEGMENT)

    def test_single_populated_option(self, make_extractor):
        payload = question_payload(alternativas={"A": "Brasília", "B": ""}, correta="A")
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        with pytest.raises(SegmentExtractionError, match="at least 2 populated options"):
            extractor.extract(SEGMENT)

    def test_options_not_a_mapping(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload(alternativas="A) Rio B) Brasília")))

        with pytest.raises(SegmentExtractionError, match="options must map letters to text"):
            extractor.extract(SEGMENT)

    def test_correct_letter_not_in_options(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload(correta="E")))

        with pytest.raises(SegmentExtractionError, match="correct letter 'E' is not one of the options"):
            extractor.extract(SEGMENT)

    def test_unknown_option_letter(self, make_extractor):
        payload = question_payload(alternativas={"A": "Rio", "B": "Brasília", "F": "Recife"})
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        with pytest.raises(SegmentExtractionError, match="invalid question record"):
            extractor.extract(SEGMENT)

    def test_duplicate_option_letters(self, make_extractor):
        payload = question_payload(alternativas={"a": "Rio", "A": "Brasília", "C": "Salvador"}, correta="A")
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        with pytest.raises(SegmentExtractionError, match="duplicate option letter: A"):
            extractor.extract(SEGMENT)

    def test_duplicate_letter_with_blank_text(self, make_extractor):
        payload = question_payload(alternativas={"A": "Rio", "B": "Brasília", " b ": ""}, correta="B")
        extractor, _ = make_extractor(lambda prompt: fenced(payload))

        with pytest.raises(SegmentExtractionError, match="duplicate option letter: B"):
            extractor.extract(SEGMENT)

    def test_request_failure(self, make_extractor):
        def responder(prompt):
            raise ConnectionError("upstream timeout")

        extractor, _ = make_extractor(responder)

        with pytest.raises(SegmentExtractionError, match="extraction request failed for question 3: upstream timeout"):
            extractor.extract(SEGMENT, position=3)


# ═══════════════════════════════════════════════════════════════════════
# TestMetadata
# ═══════════════════════════════════════════════════════════════════════

class TestMetadata:
    def test_fixed_metadata_overrides_model_values(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload(banca="FGV")))
        metadata = QuestionMetadata(exam_board="CESPE", subject="Direito Constitucional")

        question = extractor.extract(SEGMENT, metadata=metadata)

        assert question.exam_board == "CESPE"
        assert question.subject == "Direito Constitucional"
        assert question.institution == "Polícia Militar de São Paulo"

    def test_metadata_hint_in_prompt(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()))

        extractor.extract(SEGMENT, metadata=QuestionMetadata(banca="CESPE"))

        assert "METADADOS FIXOS" in client.prompts[0]
        assert "- banca: CESPE" in client.prompts[0]

    def test_no_hint_without_metadata(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()))

        extractor.extract(SEGMENT, metadata=QuestionMetadata(banca="  "))

        assert "METADADOS FIXOS" not in client.prompts[0]

    def test_fixed_modality_wins(self, make_extractor):
        extractor, _ = make_extractor(lambda prompt: fenced(question_payload()))

        question = extractor.extract(SEGMENT, metadata=QuestionMetadata(modality="True/False"))

        assert question.modality == Modality.TRUE_FALSE


# ═══════════════════════════════════════════════════════════════════════
# TestExplanationFallback
# ═══════════════════════════════════════════════════════════════════════

class TestExplanationFallback:
    @staticmethod
    def responder(explanation_reply):
        def respond(prompt):
            if "explicação didática, formal e objetiva" in prompt:
                return explanation_reply
            return fenced(question_payload(explicacao=""))
        return respond

    def test_disabled_by_default(self, make_extractor):
        extractor, client = make_extractor(self.responder("Brasília foi inaugurada em 1960."))

        question = extractor.extract(SEGMENT)

        assert question.explanation is None
        assert len(client.prompts) == 1

    def test_missing_explanation_is_generated(self, make_extractor, extractor_config):
        config = replace(extractor_config, generate_missing_explanations=True)
        extractor, client = make_extractor(self.responder("Brasília foi inaugurada em 1960."), config)

        question = extractor.extract(SEGMENT)

        assert question.explanation == "Brasília foi inaugurada em 1960."
        assert len(client.prompts) == 2
        assert extractor.api_calls == 2

    def test_existing_explanation_kept(self, make_extractor, extractor_config):
        config = replace(extractor_config, generate_missing_explanations=True)
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()), config)

        question = extractor.extract(SEGMENT)

        assert question.explanation == "Brasília é a capital federal desde 1960."
        assert len(client.prompts) == 1

    def test_fallback_failure_keeps_question(self, make_extractor, extractor_config):
        def respond(prompt):
            if "explicação didática, formal e objetiva" in prompt:
                raise TimeoutError("slow")
            return fenced(question_payload(explicacao=""))

        config = replace(extractor_config, generate_missing_explanations=True)
        extractor, _ = make_extractor(respond, config)

        question = extractor.extract(SEGMENT)

        assert question.correct_letter == "B"
        assert question.explanation is None


# ═══════════════════════════════════════════════════════════════════════
# TestClientCreation
# ═══════════════════════════════════════════════════════════════════════

class TestClientCreation:
    @pytest.fixture
    def unconfigured(self, monkeypatch):
        monkeypatch.delenv("LLM_PROVIDER", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        return QuestionExtractorConfig(llm_provider="gemini", llm_model="test-model", max_concurrency=1)

    def test_construction_needs_no_credentials(self, unconfigured):
        extractor = LLMQuestionExtractor(unconfigured)
        assert extractor.api_calls == 0

    def test_prepare_reports_missing_key(self, unconfigured):
        extractor = LLMQuestionExtractor(unconfigured)

        with pytest.raises(ConfigurationError, match="LLM provider not configured: Gemini provider requires: llm_api_key"):
            extractor.prepare()

    def test_extract_reports_missing_key(self, unconfigured):
        extractor = LLMQuestionExtractor(unconfigured)

        with pytest.raises(ConfigurationError):
            extractor.extract(SEGMENT)
        assert extractor.api_calls == 0

    def test_unknown_provider(self, unconfigured):
        extractor = LLMQuestionExtractor(replace(unconfigured, llm_provider="cohere"))

        with pytest.raises(ConfigurationError, match="Unknown LLM provider: cohere"):
            extractor.prepare()

    def test_injected_client_is_used(self, make_extractor):
        extractor, client = make_extractor(lambda prompt: fenced(question_payload()))

        extractor.prepare()

        assert extractor.client is client

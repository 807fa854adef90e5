"""
LLM-based extractor for a single exam question segment.

Approach:
1. Build the extraction prompt (optional fixed metadata + instructions + segment)
2. One model call, raw text reply
3. Strip code fences, parse JSON
4. Apply operator metadata, recompute modality locally
5. Validate required fields and option shape, build ExtractedQuestion

Every problem is raised as SegmentExtractionError so the orchestrator can
record it against the segment and move on.
"""

import json
import logging
import threading
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ...errors import ConfigurationError, SegmentExtractionError
from ...llm import BaseLLMClient, create_llm_client
from ..base import QuestionExtractor, QuestionExtractorConfig, extract_json_payload, strip_code_fences
from ..modality import classify_modality
from .models import ExtractedQuestion, QuestionMetadata, OPTION_LETTERS
from .prompts import build_extraction_prompt, build_explanation_prompt

logger = logging.getLogger(__name__)

# (attribute name, JSON key) for every ExtractedQuestion field
FIELD_KEYS = [(name, field.alias or name) for name, field in ExtractedQuestion.model_fields.items()]
JSON_KEYS = dict(FIELD_KEYS)

REQUIRED_FIELDS = ("statement", "correct_letter", "options")


class LLMQuestionExtractor(QuestionExtractor):
    """
    Extracts one structured question per segment with a single LLM call.

    No retries, no caching: a failed call fails only its own segment.
    """

    def __init__(
        self,
        config: Optional[QuestionExtractorConfig] = None,
        client: Optional[BaseLLMClient] = None
    ):
        """Initialize the extractor."""
        self.config = config or QuestionExtractorConfig()
        # Created on first access, see the client property
        self._client = client
        self._api_calls = 0
        self._lock = threading.Lock()

    @property
    def strategy_name(self) -> str:
        """Return the name of this strategy."""
        return "llm_segment"

    @property
    def api_calls(self) -> int:
        return self._api_calls

    @property
    def client(self) -> BaseLLMClient:
        """LLM client, created from the config on first access."""
        with self._lock:
            if self._client is None:
                try:
                    self._client = create_llm_client(self.config)
                except ValueError as e:
                    raise ConfigurationError(f"LLM provider not configured: {e}") from e
            return self._client

    def prepare(self):
        """Build the LLM client now. Raises ConfigurationError when credentials are missing."""
        self.client

    def extract(
        self,
        segment_text: str,
        position: int = 1,
        metadata: Optional[QuestionMetadata] = None
    ) -> ExtractedQuestion:
        """
        Extract one question from a segment.

        Args:
            segment_text: Text of one question block
            position: 1-based position of the segment, used in error messages
            metadata: Optional operator-fixed metadata

        Returns:
            Validated ExtractedQuestion

        Raises:
            SegmentExtractionError: request failure, malformed JSON or invalid fields
        """
        prompt = build_extraction_prompt(segment_text, metadata)
        raw = self._generate(prompt, position)

        payload = self._parse_payload(raw, position)
        record = {key: _lookup(payload, name, key) for name, key in FIELD_KEYS}

        if metadata is not None:
            record.update(metadata.overrides())

        self._validate(record, position)

        # The model's own modality guess is discarded
        if metadata is not None and metadata.modality is not None:
            record["modalidade"] = metadata.modality
        else:
            record["modalidade"] = classify_modality(record["alternativas"], record["enunciado"])

        if self.config.generate_missing_explanations:
            self._fill_missing_explanation(record, position)

        try:
            return ExtractedQuestion.model_validate(record)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "question"
            raise SegmentExtractionError(
                f"invalid question record ({location}): {first['msg']}", position
            ) from e

    # -------------------------------------------------------------------------
    # Model calls
    # -------------------------------------------------------------------------

    def _generate(self, prompt: str, position: int) -> str:
        client = self.client
        with self._lock:
            self._api_calls += 1

        logger.debug(f"Requesting extraction for question {position}")
        try:
            return client.generate_text(
                model=self.config.llm_model,
                prompt=prompt,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            raise SegmentExtractionError(
                f"extraction request failed for question {position}: {e}", position
            ) from e

    def _fill_missing_explanation(self, record: Dict[str, Any], position: int):
        """Ask for an explanation when the model left it empty. Never fails the segment."""
        explanation = record.get("explicacao")
        if explanation and len(str(explanation).strip()) >= self.config.min_explanation_length:
            return

        prompt = build_explanation_prompt(record["enunciado"], record["alternativas"], record["correta"])
        try:
            text = strip_code_fences(self._generate(prompt, position))
        except SegmentExtractionError as e:
            logger.warning(f"Explanation fallback skipped for question {position}: {e}")
            return

        if len(text) >= self.config.min_explanation_length:
            record["explicacao"] = text

    # -------------------------------------------------------------------------
    # Parsing and validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_payload(raw: str, position: int) -> Dict[str, Any]:
        cleaned = extract_json_payload(raw)
        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise SegmentExtractionError(f"invalid JSON in model response: {e}", position) from e

        if not isinstance(payload, dict):
            raise SegmentExtractionError("model response is not a JSON object", position)
        return payload

    @staticmethod
    def _validate(record: Dict[str, Any], position: int):
        """Check required fields and option shape, normalizing in place."""
        for name in REQUIRED_FIELDS:
            value = record.get(JSON_KEYS[name])
            if isinstance(value, str):
                value = value.strip()
            if not value:
                raise SegmentExtractionError(f"missing required field: {name}", position)

        options = record["alternativas"]
        if isinstance(options, list) and len(options) <= len(OPTION_LETTERS):
            options = dict(zip(OPTION_LETTERS, options))
        if not isinstance(options, Mapping):
            raise SegmentExtractionError("options must map letters to text", position)

        populated = {}
        seen = set()
        for key, text in options.items():
            option_letter = str(key).strip().upper()
            if option_letter in seen:
                raise SegmentExtractionError(f"duplicate option letter: {option_letter}", position)
            seen.add(option_letter)
            if text is not None and str(text).strip():
                populated[option_letter] = str(text).strip()

        if len(populated) < 2:
            raise SegmentExtractionError("at least 2 populated options are required", position)

        letter = str(record["correta"]).strip().strip("().").strip().upper()
        if letter not in populated:
            raise SegmentExtractionError(
                f"correct letter {letter!r} is not one of the options", position
            )

        record["enunciado"] = str(record["enunciado"]).strip()
        record["alternativas"] = populated
        record["correta"] = letter


def _lookup(payload: Dict[str, Any], name: str, key: str) -> Any:
    """Read a field by its JSON key, falling back to the English name."""
    if key in payload:
        return payload[key]
    return payload.get(name)

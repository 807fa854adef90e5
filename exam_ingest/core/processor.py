# core/processor.py
"""
Core document processing logic, shared by the Azure Function and local scripts.

Pipeline: parse document -> segment questions -> extract each segment ->
aggregate successes and failures. Per-segment problems never abort the batch;
only document-level problems (unreadable file, no questions) raise.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

from ..errors import ConfigurationError, DocumentError, SegmentExtractionError
from ..extractors import (
    ExtractedQuestion,
    ExtractionFailure,
    LLMQuestionExtractor,
    QuestionExtractor,
    QuestionExtractorConfig,
    QuestionMetadata,
    QuestionSegment,
    segment_questions,
)
from ..extractors.base import log_extraction_stats
from ..models.enums import ProcessingStatus
from ..parsers import BaseDocumentParser, create_parser

logger = logging.getLogger(__name__)

NO_QUESTIONS_DETECTED = "no questions detected"

# Outcome of one segment: exactly one of the two is set
SegmentOutcome = Tuple[Optional[ExtractedQuestion], Optional[ExtractionFailure]]


@dataclass
class BatchResult:
    """Successes and failures for one document, both ordered by segment position."""
    successes: List[ExtractedQuestion] = field(default_factory=list)
    failures: List[ExtractionFailure] = field(default_factory=list)
    segments_total: int = 0

    @property
    def status(self) -> ProcessingStatus:
        if not self.successes:
            return ProcessingStatus.FAILED
        if self.failures:
            return ProcessingStatus.PARTIALLY_COMPLETED
        return ProcessingStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successes": [q.model_dump(mode="json") for q in self.successes],
            "failures": [f.to_dict() for f in self.failures],
        }

    def __str__(self):
        return (
            f"BatchResult(status={self.status.value}, successes={len(self.successes)}, "
            f"failures={len(self.failures)}, segments={self.segments_total})"
        )


class DocumentProcessor:
    """
    Core business logic for turning exam PDFs into question records.
    Orchestrates text extraction, segmentation and per-question extraction.
    """

    def __init__(
        self,
        parser: Optional[BaseDocumentParser] = None,
        extractor: Optional[QuestionExtractor] = None,
        config: Optional[QuestionExtractorConfig] = None
    ):
        """
        Initialize the document processor.

        Args:
            parser: Document parser (created from DOCUMENT_PARSER on first use if None)
            extractor: Per-segment question extractor (LLM extractor if None)
            config: Extraction settings (segment length, concurrency)
        """
        self.config = config or QuestionExtractorConfig()
        self.parser = parser
        self.extractor = extractor or LLMQuestionExtractor(self.config)

    def process_document(
        self,
        file_content: Union[bytes, BinaryIO],
        filename: Optional[str] = None,
        metadata: Optional[QuestionMetadata] = None
    ) -> BatchResult:
        """
        Process an exam document through the full pipeline.

        Args:
            file_content: PDF file as bytes or file-like object
            filename: Name of the uploaded file (for logging)
            metadata: Optional operator-fixed metadata applied to every question

        Returns:
            BatchResult with successes and failures

        Raises:
            DocumentError: unreadable document or no questions detected
            ConfigurationError: parser or LLM provider cannot be built
        """
        logger.info(f"Processing file: {filename or '<upload>'}")

        parser = self._get_parser()

        try:
            parsed = parser.parse(file_content)
        except DocumentError:
            raise
        except Exception as e:
            logger.error(f"Parser failed on {filename or '<upload>'}: {e}", exc_info=True)
            raise DocumentError(f"unreadable document: {e}") from e

        logger.info(f"Extracted {len(parsed.content)} characters from {parsed.page_count} pages")
        return self.process_text(parsed.content, metadata=metadata)

    def process_text(self, text: str, metadata: Optional[QuestionMetadata] = None) -> BatchResult:
        """
        Segment exam text and extract every question.

        Raises:
            DocumentError: when no segment survives the length filter
            ConfigurationError: LLM provider cannot be built
        """
        segments = segment_questions(text or "", min_length=self.config.min_segment_length)
        if not segments:
            logger.warning("No questions detected in document text")
            raise DocumentError(NO_QUESTIONS_DETECTED)

        logger.info(f"Detected {len(segments)} questions, extracting with concurrency {self.config.max_concurrency}")
        self.extractor.prepare()

        start = time.perf_counter()
        calls_before = self.extractor.api_calls
        outcomes = self._run_segments(segments, metadata)

        result = BatchResult(segments_total=len(segments))
        for question, failure in outcomes:
            if question is not None:
                result.successes.append(question)
            else:
                result.failures.append(failure)

        if len(result.successes) + len(result.failures) != len(segments):
            raise RuntimeError("Every segment must produce exactly one outcome")

        log_extraction_stats(
            self.extractor.strategy_name,
            num_items=len(result.successes),
            num_failures=len(result.failures),
            processing_time=time.perf_counter() - start,
            api_calls=self.extractor.api_calls - calls_before,
        )
        return result

    def _run_segments(
        self,
        segments: List[QuestionSegment],
        metadata: Optional[QuestionMetadata]
    ) -> List[SegmentOutcome]:
        """Extract all segments with at most max_concurrency calls in flight, in order."""
        workers = min(self.config.max_concurrency, len(segments))

        if workers <= 1:
            return [self._extract_segment(segment, metadata) for segment in segments]

        # map() yields results in submission order, one slot per segment
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="extract") as executor:
            return list(executor.map(lambda s: self._extract_segment(s, metadata), segments))

    def _extract_segment(
        self,
        segment: QuestionSegment,
        metadata: Optional[QuestionMetadata]
    ) -> SegmentOutcome:
        """Run the extractor on one segment; errors other than ConfigurationError become a failure."""
        logger.debug(f"Extracting question {segment.position}")
        try:
            question = self.extractor.extract(segment.text, segment.position, metadata)
        except ConfigurationError:
            raise
        except SegmentExtractionError as e:
            logger.warning(f"Question {segment.position} failed: {e}")
            return None, ExtractionFailure(segment.position, str(e), segment.text)
        except Exception as e:
            logger.error(f"Unexpected error on question {segment.position}: {e}", exc_info=True)
            return None, ExtractionFailure(segment.position, str(e) or type(e).__name__, segment.text)

        return question, None

    def _get_parser(self) -> BaseDocumentParser:
        if self.parser is None:
            try:
                self.parser = create_parser()
            except ValueError as e:
                raise ConfigurationError(f"document parser not configured: {e}") from e
        return self.parser

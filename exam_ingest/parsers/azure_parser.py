"""Azure Document Intelligence parser for scanned exam booklets."""

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Dict, Optional, Union

from azure.ai.documentintelligence import DocumentIntelligenceClient
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError

from ..errors import DocumentError
from .base import BaseDocumentParser, ParsedDocument

logger = logging.getLogger(__name__)

LAYOUT_MODEL = "prebuilt-layout"


@dataclass
class MarginFilter:
    """Page bands (fractions of page height) whose paragraphs are dropped."""
    top: float = 0.08      # Booklet header: institution, booklet colour, page title
    bottom: float = 0.08   # Footer: page number, "rascunho" notes

    def is_in_margin(self, y_center: float, page_height: float) -> bool:
        relative_y = y_center / page_height
        return relative_y < self.top or relative_y > 1 - self.bottom


class AzureDocumentParser(BaseDocumentParser):
    """
    OCR through the prebuilt-layout model.

    Paragraphs are joined with single newlines so "1)" and "QUESTÃO 1" markers
    keep starting a line, which the segmenter depends on. Running headers and
    footers repeat on every page and are removed with a MarginFilter.
    """

    def __init__(self, margin_filter: Optional[MarginFilter] = None):
        endpoint = os.getenv("DI_ENDPOINT")
        key = os.getenv("DI_KEY")
        if not endpoint or not key:
            raise ValueError(
                "Azure Document Intelligence requires DI_ENDPOINT and DI_KEY environment variables"
            )

        self.client = DocumentIntelligenceClient(endpoint=endpoint, credential=AzureKeyCredential(key))
        self.margin_filter = margin_filter

    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        if hasattr(file_content, "read"):
            file_content = file_content.read()
        if not file_content:
            raise DocumentError("unreadable document: empty file")

        try:
            result = self.client.begin_analyze_document(LAYOUT_MODEL, file_content).result()
        except HttpResponseError as e:
            raise DocumentError(f"unreadable document: {e.message}") from e

        pages = result.pages or []
        page_heights = {page.page_number: page.height for page in pages}
        paragraphs = result.paragraphs or []
        body = [p.content for p in paragraphs if self._is_body(p, page_heights)]

        logger.debug(f"Kept {len(body)} of {len(paragraphs)} paragraphs outside page margins")

        return ParsedDocument(
            content="\n".join(body),
            format="plain_text",
            page_count=len(pages),
            metadata={
                "parser": "azure_document_intelligence",
                "paragraphs_count": len(body),
                "filtered_margins": self.margin_filter is not None,
            },
        )

    def _is_body(self, paragraph, page_heights: Dict[int, float]) -> bool:
        regions = getattr(paragraph, "bounding_regions", None)
        if self.margin_filter is None or not regions:
            return True

        region = regions[0]
        # polygon is [x1, y1, x2, y2, ...]; average the y coordinates
        y_values = region.polygon[1::2]
        if len(y_values) < 4:
            return True

        page_height = page_heights.get(region.page_number) or 11.0  # inches, US letter
        y_center = sum(y_values) / len(y_values)
        return not self.margin_filter.is_in_margin(y_center, page_height)

"""Local PDF text extraction with PyMuPDF (plain text or pymupdf4llm markdown)."""

from typing import Union, BinaryIO
import fitz  # PyMuPDF
import pymupdf4llm

from ..errors import DocumentError
from .base import BaseDocumentParser, ParsedDocument


class PyMuPDFParser(BaseDocumentParser):
    """
    Reads born-digital exam PDFs without any external service.

    Plain text keeps the line structure the question segmenter relies on
    ("1)" or "QUESTÃO 1" at the start of a line). Markdown through pymupdf4llm
    helps with two-column booklets where plain text loses reading order.
    """

    def __init__(self, markdown: bool = False):
        self.markdown = markdown

    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        if hasattr(file_content, "read"):
            file_content = file_content.read()
        if not file_content:
            raise DocumentError("unreadable document: empty file")

        try:
            doc = fitz.open("pdf", file_content)
        except (fitz.FileDataError, RuntimeError) as e:
            raise DocumentError(f"unreadable document: {e}") from e

        with doc:
            if self.markdown:
                content = pymupdf4llm.to_markdown(doc)
            else:
                content = "\n".join(page.get_text("text") for page in doc)
            page_count = doc.page_count
            pdf_info = {k: v for k, v in (doc.metadata or {}).items() if v}

        metadata = {"parser": "pymupdf4llm" if self.markdown else "pymupdf", "page_count": page_count}
        if pdf_info:
            metadata["document_metadata"] = pdf_info

        return ParsedDocument(
            content=content,
            format="markdown" if self.markdown else "plain_text",
            page_count=page_count,
            metadata=metadata,
        )

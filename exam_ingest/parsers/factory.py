"""Selects the document parser named by DOCUMENT_PARSER."""

import os
from typing import Optional
from .base import BaseDocumentParser
from .azure_parser import AzureDocumentParser, MarginFilter
from .pymupdf_parser import PyMuPDFParser

PARSERS = {
    "pymupdf": lambda: PyMuPDFParser(),
    "pymupdf_markdown": lambda: PyMuPDFParser(markdown=True),
    "azure": lambda: AzureDocumentParser(margin_filter=MarginFilter()),
}


def create_parser(parser_type: Optional[str] = None) -> BaseDocumentParser:
    """ Parser for parser_type, falling back to DOCUMENT_PARSER (default pymupdf). """
    name = (parser_type or os.getenv("DOCUMENT_PARSER", "pymupdf")).lower()

    if name not in PARSERS:
        raise ValueError(
            f"Unknown document parser: {name}. Use {', '.join(repr(p) for p in PARSERS)}"
        )
    return PARSERS[name]()

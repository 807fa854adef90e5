"""Document parsers: PyMuPDF for born-digital PDFs, Azure Document Intelligence for scans."""

from .factory import create_parser
from .base import BaseDocumentParser, ParsedDocument
from .pymupdf_parser import PyMuPDFParser
from .azure_parser import AzureDocumentParser, MarginFilter

__all__ = [
    "create_parser",
    "BaseDocumentParser",
    "ParsedDocument",
    "PyMuPDFParser",
    "AzureDocumentParser",
    "MarginFilter",
]

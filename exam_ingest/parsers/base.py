"""Parser interface: exam document bytes in, extracted text out."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Union


@dataclass
class ParsedDocument:
    """
    Text pulled out of one exam document.

    Every parser returns this shape so segmentation does not care which
    backend read the file.
    """
    content: str  # Full document text, pages joined by newlines
    format: str  # "plain_text" or "markdown"
    page_count: int
    metadata: Dict[str, Any] = field(default_factory=dict)  # Backend details (parser name, PDF info)


class BaseDocumentParser(ABC):
    """Turns an uploaded exam document into text."""

    @abstractmethod
    def parse(self, file_content: Union[bytes, BinaryIO]) -> ParsedDocument:
        """
        Extract the text of a document.

        Args:
            file_content: Raw PDF bytes or an open binary stream

        Returns:
            ParsedDocument holding the document text

        Raises:
            DocumentError: the bytes cannot be read as a document
        """
        pass

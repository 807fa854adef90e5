"""
Exam PDF ingestion for the question bank.

Turns unstructured exam documents into structured question records:
text extraction, heuristic question segmentation, per-question LLM
extraction with local validation, and success/failure aggregation.

Usage:
    from exam_ingest.core import DocumentProcessor

    processor = DocumentProcessor()
    result = processor.process_document(pdf_bytes, filename="prova.pdf")
    result.to_dict()  # {"successes": [...], "failures": [...]}
"""

__version__ = "1.0.0"

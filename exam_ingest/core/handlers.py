"""
HTTP request handling for the Azure Function routes.

Kept apart from function_app.py so handlers can be exercised with plain
azure.functions.HttpRequest objects and injected collaborators.
"""

import json
import logging
from typing import Any, Optional

import azure.functions as func
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..errors import ConfigurationError, DocumentError
from ..extractors import QuestionMetadata
from ..models.converters import bulk_extracted_to_records
from ..models.db import bulk_insert_questions, distinct_metadata_values
from ..models.pydantic import QuestionBulkCreate
from .processor import DocumentProcessor, NO_QUESTIONS_DETECTED

logger = logging.getLogger(__name__)

NO_FILE_PROVIDED = "no file provided"

METADATA_FIELDS = ("institution", "role", "subject", "topic", "modality", "exam_board")


def json_response(body: Any, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json",
    )


def error_response(message: str, status_code: int) -> func.HttpResponse:
    return json_response({"error": message}, status_code=status_code)


def handle_extract_request(req: func.HttpRequest, processor: DocumentProcessor) -> func.HttpResponse:
    """
    Extract questions from an uploaded exam.

    Accepts multipart form data with the document under "file", or pasted exam
    text under "text". Optional form fields override question metadata.
    """
    upload = req.files.get("file")
    text = req.form.get("text")

    content = upload.read() if upload is not None else b""
    # Browsers send an empty part when the file input is left blank
    if upload is not None and not upload.filename and not content:
        upload = None

    if upload is None and not (text and text.strip()):
        return error_response(NO_FILE_PROVIDED, 400)

    try:
        metadata = _metadata_from_form(req)
    except ValidationError as e:
        return error_response(f"invalid metadata: {e.errors()[0]['msg']}", 400)

    try:
        if upload is not None:
            result = processor.process_document(content, filename=upload.filename, metadata=metadata)
        else:
            result = processor.process_text(text, metadata=metadata)
    except DocumentError as e:
        status_code = 400 if str(e) == NO_QUESTIONS_DETECTED else 422
        logger.warning(f"[Extract] Document rejected: {e}")
        return error_response(str(e), status_code)
    except ConfigurationError as e:
        logger.error(f"[Extract] Service not configured: {e}")
        return error_response(str(e), 503)

    logger.info(f"[Extract] {result}")
    return json_response(result.to_dict())


def handle_bulk_insert_request(
    req: func.HttpRequest,
    session: Session,
    chunk_size: int = 200
) -> func.HttpResponse:
    """Store reviewed questions in the question bank."""
    try:
        body = QuestionBulkCreate.model_validate(req.get_json())
    except ValueError as e:
        # ValidationError is a ValueError; so is a body that is not JSON
        message = e.errors()[0]["msg"] if isinstance(e, ValidationError) else "request body must be JSON"
        return error_response(f"invalid request: {message}", 400)

    records = bulk_extracted_to_records(body.questions, source_filename=body.source_filename)
    inserted = bulk_insert_questions(session, records, chunk_size=chunk_size)
    return json_response({"inserted": inserted}, status_code=201)


def handle_metadata_request(session: Session) -> func.HttpResponse:
    """Distinct metadata values already present in the question bank."""
    return json_response(distinct_metadata_values(session))


def _metadata_from_form(req: func.HttpRequest) -> Optional[QuestionMetadata]:
    values = {name: req.form.get(name) for name in METADATA_FIELDS if req.form.get(name)}
    if not values:
        return None
    return QuestionMetadata.model_validate(values)

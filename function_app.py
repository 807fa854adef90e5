# function_app.py
"""
Azure Function entry point for exam PDF ingestion.

Routes:
- POST /api/questions/extract   exam PDF (or pasted text) -> successes + failures
- POST /api/questions           store reviewed questions in the question bank
- GET  /api/questions/metadata  distinct metadata values for operator suggestions

Core logic lives in exam_ingest.core so it can run from local scripts too.
"""

import azure.functions as func
import logging
from sqlalchemy.orm import Session

from exam_ingest.config import config
from exam_ingest.core import DocumentProcessor
from exam_ingest.core.handlers import (
    handle_bulk_insert_request,
    handle_extract_request,
    handle_metadata_request,
)
from exam_ingest.extractors import QuestionExtractorConfig
from exam_ingest.models.db import create_db_engine

logging.getLogger().setLevel(config.log_level)

is_valid, missing = config.validate()
if not is_valid:
    logging.warning(f"Missing configuration: {', '.join(missing)}")

if config.local_mode:
    config.print_config()

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

# Database Connection Setup
engine = create_db_engine(config.database_url or None)


def build_processor() -> DocumentProcessor:
    """
    Processor per request; no state is shared between batches.

    The parser and LLM client are built on first use.
    """
    return DocumentProcessor(config=QuestionExtractorConfig(max_concurrency=config.max_concurrency))


@app.function_name(name="ExtractQuestions")
@app.route(route="questions/extract", methods=["POST"])
def extract_questions(req: func.HttpRequest) -> func.HttpResponse:
    """
    Extract exam questions from an uploaded PDF.

    The whole batch runs within this request; the caller reviews failures and
    saves the successes through the bulk insert route.
    """
    logging.info("[Extract] Request received")
    return handle_extract_request(req, build_processor())


@app.function_name(name="SaveQuestions")
@app.route(route="questions", methods=["POST"])
def save_questions(req: func.HttpRequest) -> func.HttpResponse:
    """Persist reviewed questions in the question bank."""
    session = Session(engine)

    try:
        return handle_bulk_insert_request(req, session, chunk_size=config.insert_chunk_size)
    except Exception as e:
        session.rollback()
        logging.error(f"[Save] Error storing questions: {str(e)}", exc_info=True)
        raise
    finally:
        session.close()


@app.function_name(name="QuestionMetadata")
@app.route(route="questions/metadata", methods=["GET"])
def question_metadata(req: func.HttpRequest) -> func.HttpResponse:
    """Distinct institution/role/subject/topic/modality/board values."""
    with Session(engine) as session:
        return handle_metadata_request(session)

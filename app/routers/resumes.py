"""Resume router - stateless contact extraction from uploads or plain text."""

import logging

from fastapi import APIRouter, HTTPException, UploadFile

from app.models.schemas import ExtractedInfo, ExtractTextRequest
from app.services.extractor import extract_info_from_text
from app.services.parser import (
    DocumentError,
    FileTooLargeError,
    UnsupportedFileTypeError,
    parse_and_extract,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


def document_error_status(exc: DocumentError) -> int:
    """Map a document error to its HTTP status code."""
    if isinstance(exc, UnsupportedFileTypeError):
        return 415
    if isinstance(exc, FileTooLargeError):
        return 413
    return 400


@router.post("/extract", response_model=ExtractedInfo)
async def extract_from_upload(file: UploadFile) -> ExtractedInfo:
    """Decode an uploaded PDF or Word resume and extract contact details."""
    filename = file.filename or "unknown"
    content = await file.read()

    try:
        info = await parse_and_extract(content, filename, file.content_type)
    except DocumentError as exc:
        logger.warning("Rejected resume '%s': %s", filename, exc)
        raise HTTPException(status_code=document_error_status(exc), detail=str(exc))

    logger.info("Extracted contact details from '%s'", filename)
    return info


@router.post("/extract-text", response_model=ExtractedInfo)
async def extract_from_text(body: ExtractTextRequest) -> ExtractedInfo:
    """Run contact extraction on already-decoded resume text."""
    return extract_info_from_text(body.text)

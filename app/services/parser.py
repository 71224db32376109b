"""Resume parser service - checks uploads and extracts text from PDF and Word files."""

import io
import logging
import re

import pdfplumber
from docx import Document

from app.config import settings
from app.models.schemas import ExtractedInfo
from app.services.extractor import extract_info_from_text

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"

ALLOWED_MIME_TYPES: dict[str, str] = {
    PDF_MIME: "pdf",
    DOCX_MIME: "docx",
    DOC_MIME: "doc",
}

# Browsers and HTTP clients often send these when they do not know the type.
_GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

_EXTENSION_KINDS = {"pdf": "pdf", "docx": "docx", "doc": "doc"}


class DocumentError(ValueError):
    """A resume upload could not be accepted or decoded."""


class UnsupportedFileTypeError(DocumentError):
    pass


class FileTooLargeError(DocumentError):
    pass


def _extension(filename: str) -> str:
    return filename.rsplit(".", maxsplit=1)[-1].lower() if "." in filename else ""


def check_upload(
    filename: str,
    content_type: str | None,
    size: int,
    max_bytes: int | None = None,
) -> str:
    """Validate an upload's type and size before decoding.

    The declared content type wins; the filename extension is only used
    when the client sent no type or a generic binary one.

    Args:
        filename: Original filename.
        content_type: MIME type declared by the client, if any.
        size: File size in bytes.
        max_bytes: Size limit, defaulting to ``settings.max_upload_bytes``.

    Returns:
        The document kind: "pdf", "docx" or "doc".

    Raises:
        UnsupportedFileTypeError: If the file is not a PDF or Word document.
        FileTooLargeError: If the file exceeds the size limit.
    """
    mime = (content_type or "").split(";", maxsplit=1)[0].strip().lower()
    kind = ALLOWED_MIME_TYPES.get(mime)
    if kind is None and mime in _GENERIC_MIME_TYPES:
        kind = _EXTENSION_KINDS.get(_extension(filename))

    if kind is None:
        raise UnsupportedFileTypeError(
            "Unsupported file type. Please upload a PDF or Word document (.pdf, .docx, .doc)"
        )

    limit = settings.max_upload_bytes if max_bytes is None else max_bytes
    if size > limit:
        raise FileTooLargeError(
            f"File size too large. Please upload a file smaller than {limit // (1024 * 1024)}MB."
        )

    return kind


def parse_pdf(content: bytes) -> str:
    """Extract text from PDF bytes using pdfplumber.

    Args:
        content: Raw PDF file bytes.

    Returns:
        Extracted text with pages separated by newlines.

    Raises:
        DocumentError: If the PDF is malformed, encrypted, or unreadable.
    """
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            pages_text = [
                text.strip()
                for page in pdf.pages
                if (text := page.extract_text())
            ]
    except Exception as exc:
        logger.error("Failed to parse PDF: %s", exc)
        raise DocumentError(f"Failed to parse PDF file: {exc}") from exc

    return _clean_whitespace("\n\n".join(pages_text))


def parse_docx(content: bytes) -> str:
    """Extract text from Word bytes using python-docx.

    Args:
        content: Raw DOCX file bytes.

    Returns:
        Extracted text with paragraphs separated by newlines.

    Raises:
        DocumentError: If the file is malformed or not an Open XML document
            (legacy binary .doc files end up here).
    """
    try:
        doc = Document(io.BytesIO(content))
        paragraphs_text = [
            text for para in doc.paragraphs if (text := para.text.strip())
        ]
    except Exception as exc:
        logger.error("Failed to parse Word document: %s", exc)
        raise DocumentError(f"Failed to parse Word document: {exc}") from exc

    return _clean_whitespace("\n".join(paragraphs_text))


async def parse_resume(
    file_content: bytes,
    filename: str,
    content_type: str | None = None,
) -> str:
    """Validate a resume upload and return its extracted text.

    Args:
        file_content: Raw file bytes.
        filename: Original filename.
        content_type: MIME type declared by the client, if any.

    Returns:
        Extracted text from the resume (possibly empty for scanned files).

    Raises:
        DocumentError: If the file is empty, of an unsupported type, too
            large, or cannot be decoded.
    """
    kind = check_upload(filename, content_type, len(file_content))
    if not file_content:
        raise DocumentError("Empty file")

    if kind == "pdf":
        return parse_pdf(file_content)
    return parse_docx(file_content)


async def parse_and_extract(
    file_content: bytes,
    filename: str,
    content_type: str | None = None,
) -> ExtractedInfo:
    """Decode a resume upload and extract the candidate's contact details."""
    text = await parse_resume(file_content, filename, content_type)
    if not text.strip():
        logger.warning("No text could be extracted from '%s'", filename)
    return extract_info_from_text(text)


def _clean_whitespace(text: str) -> str:
    """Strip excessive whitespace while preserving section structure.

    Collapses runs of 3+ newlines down to 2 (keeping paragraph breaks)
    and trims trailing whitespace from each line.

    Args:
        text: Raw extracted text.

    Returns:
        Cleaned text.
    """
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()

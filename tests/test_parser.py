"""
Tests for resume upload checks and document decoding.
"""

import io

import pytest
from docx import Document

from app.services.parser import (
    DOC_MIME,
    DOCX_MIME,
    PDF_MIME,
    DocumentError,
    FileTooLargeError,
    UnsupportedFileTypeError,
    check_upload,
    parse_and_extract,
    parse_docx,
    parse_pdf,
    parse_resume,
)


def make_docx(*paragraphs: str) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestCheckUpload:
    """Test file type and size checks."""

    @pytest.mark.parametrize(
        "content_type, kind",
        [(PDF_MIME, "pdf"), (DOCX_MIME, "docx"), (DOC_MIME, "doc")],
    )
    def test_accepts_supported_mime_types(self, content_type, kind):
        assert check_upload("resume.bin", content_type, 1024) == kind

    def test_falls_back_to_extension_for_generic_types(self):
        assert check_upload("resume.PDF", "application/octet-stream", 10) == "pdf"
        assert check_upload("resume.docx", None, 10) == "docx"

    def test_rejects_unsupported_types(self):
        with pytest.raises(UnsupportedFileTypeError, match="Unsupported file type"):
            check_upload("resume.txt", "text/plain", 10)

    def test_declared_type_is_not_overridden_by_extension(self):
        with pytest.raises(UnsupportedFileTypeError):
            check_upload("resume.pdf", "image/png", 10)

    def test_rejects_oversize_files(self):
        with pytest.raises(FileTooLargeError, match="smaller than 10MB"):
            check_upload("resume.pdf", PDF_MIME, 10 * 1024 * 1024 + 1)

    def test_limit_is_inclusive(self):
        assert check_upload("resume.pdf", PDF_MIME, 10 * 1024 * 1024) == "pdf"


class TestDecoding:
    """Test text extraction from documents."""

    def test_parse_docx(self):
        content = make_docx("Jane Roe", "", "jane.roe@corp.io", "Skills")
        assert parse_docx(content) == "Jane Roe\njane.roe@corp.io\nSkills"

    def test_parse_docx_rejects_garbage(self):
        with pytest.raises(DocumentError, match="Failed to parse Word document"):
            parse_docx(b"not a zip archive")

    def test_parse_pdf_rejects_garbage(self):
        with pytest.raises(DocumentError, match="Failed to parse PDF file"):
            parse_pdf(b"%PDF-garbage")

    @pytest.mark.asyncio
    async def test_parse_resume_rejects_empty_file(self):
        with pytest.raises(DocumentError, match="Empty file"):
            await parse_resume(b"", "resume.pdf", PDF_MIME)

    @pytest.mark.asyncio
    async def test_parse_and_extract_docx(self):
        content = make_docx("Jane Roe", "Email: Jane.Roe@Corp.io", "Phone: (212) 555-7890")

        info = await parse_and_extract(content, "resume.docx", DOCX_MIME)

        assert info.name == "Jane Roe"
        assert info.email == "jane.roe@corp.io"
        assert info.phone == "(212) 555-7890"
        assert "Jane Roe" in info.text

    @pytest.mark.asyncio
    async def test_parse_and_extract_empty_document(self):
        info = await parse_and_extract(make_docx(), "resume.docx", DOCX_MIME)

        assert info.name is None and info.email is None and info.phone is None
        assert info.text == ""

"""
Document decoding: PDF and DOCX bytes to plain text.
PDF pages are read with PyMuPDF, DOCX paragraphs and tables with python-docx.
"""
import io
import logging

import fitz  # PyMuPDF
from docx import Document

from ..exceptions import DocumentDecodeError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SUPPORTED_MIME_TYPES = (PDF_MIME_TYPE, DOCX_MIME_TYPE)


def ensure_supported(mime_type: str) -> None:
    """Reject anything that is not a PDF or DOCX before decoding."""
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFileTypeError(
            "Unsupported file type. Please upload PDF or DOCX files only."
        )


def pdf_to_text(pdf_bytes: bytes) -> str:
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            pages = [page.get_text("text") for page in doc]
    except Exception as e:
        logger.warning(f"PDF decoding failed: {e}")
        raise DocumentDecodeError(
            "Failed to parse PDF file. Please ensure the file is not corrupted."
        ) from e
    return "\n".join(pages)


def docx_to_text(docx_bytes: bytes) -> str:
    try:
        document = Document(io.BytesIO(docx_bytes))
        parts = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                parts.append("  ".join(cell.text for cell in row.cells))
    except Exception as e:
        logger.warning(f"DOCX decoding failed: {e}")
        raise DocumentDecodeError(
            "Failed to parse DOCX file. Please ensure the file is not corrupted."
        ) from e
    return "\n".join(parts)


def decode_document(data: bytes, mime_type: str) -> str:
    """
    Convert an uploaded document into raw text.

    Raises:
        UnsupportedFileTypeError: mime type is not PDF/DOCX
        DocumentDecodeError: the file is corrupt
    """
    ensure_supported(mime_type)
    if mime_type == PDF_MIME_TYPE:
        return pdf_to_text(data)
    return docx_to_text(data)

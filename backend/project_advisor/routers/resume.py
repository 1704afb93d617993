"""
Resume Router - PDF/DOCX upload and parsing
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..config import get_settings
from ..exceptions import DocumentDecodeError, UnsupportedFileTypeError
from ..schemas.resume import ParsedResume
from ..services.document_reader import SUPPORTED_MIME_TYPES
from ..services.rate_limit import RateLimit
from ..services.resume_parser import parse_resume_document
from ..services.security import check_brute_force, reject, sanitize_input, validate_filename

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Resume"],
    dependencies=[Depends(check_brute_force), Depends(RateLimit("parse"))],
)


@router.post("/parse-resume", response_model=ParsedResume)
async def parse_resume(request: Request, resume: Optional[UploadFile] = File(None)):
    """
    Parse an uploaded resume into structured fields.

    The upload is validated (presence, size, filename, content type) before
    any decoding happens.
    """
    settings = get_settings()

    # ===== VALIDATE UPLOAD =====
    if resume is None:
        raise reject(request, status.HTTP_400_BAD_REQUEST, "No file provided", "Missing file")

    if not validate_filename(resume.filename):
        raise reject(request, status.HTTP_400_BAD_REQUEST, "Invalid filename", "Invalid filename")

    if resume.content_type not in SUPPORTED_MIME_TYPES:
        raise reject(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid file type. Only PDF and DOCX files are allowed",
            "Invalid file type",
        )

    data = await resume.read()
    if len(data) > settings.max_upload_bytes:
        raise reject(
            request,
            status.HTTP_400_BAD_REQUEST,
            f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB",
            "File too large",
        )

    # ===== PARSE =====
    try:
        parsed = await run_in_threadpool(parse_resume_document, data, resume.content_type)
    except (UnsupportedFileTypeError, DocumentDecodeError) as e:
        raise reject(request, status.HTTP_400_BAD_REQUEST, str(e), "Unparseable document")

    logger.info(f"Parsed resume '{resume.filename}' ({len(data)} bytes)")
    return ParsedResume(**sanitize_input(parsed.model_dump()))

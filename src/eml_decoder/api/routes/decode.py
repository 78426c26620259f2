"""
Decoding endpoint - turns an uploaded .eml file into a structured Email.
"""

from time import time
from fastapi import APIRouter, File, HTTPException, UploadFile
import structlog

from ...config import settings
from ...errors import MailDecodeError
from ...models.api_models import DecodeEmlResponse
from ...parsing import parse_eml_bytes

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/eml", response_model=DecodeEmlResponse)
async def decode_eml_file(
    file: UploadFile = File(..., description=".eml file to decode"),
) -> DecodeEmlResponse:
    """
    Decode a .eml file.

    Attachment and embedded-file contents are returned base64-encoded.

    Args:
        file: Uploaded .eml file

    Returns:
        DecodeEmlResponse with the Email or the decoding error
    """
    start_time = time()

    eml_bytes = await file.read()

    # Check size limit
    size_mb = len(eml_bytes) / (1024 * 1024)
    if size_mb > settings.max_email_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum ({settings.max_email_size_mb}MB)"
        )

    logger.info(
        "Starting email decoding",
        filename=file.filename,
        size_bytes=len(eml_bytes),
    )

    try:
        email = parse_eml_bytes(eml_bytes)
    except MailDecodeError as e:
        logger.warning(
            "Email decoding failed",
            filename=file.filename,
            error_type=type(e).__name__,
            error=str(e),
        )
        return DecodeEmlResponse(
            success=False,
            error=str(e),
            error_type=type(e).__name__,
        )

    logger.info(
        "Email decoded",
        filename=file.filename,
        content_type=email.content_type,
        attachments_count=len(email.attachments),
        embedded_files_count=len(email.embedded_files),
        processing_time_ms=round((time() - start_time) * 1000, 2),
    )

    return DecodeEmlResponse(success=True, email=email)

from fastapi import APIRouter, UploadFile, File, HTTPException, Query
from logdigest.core.config import settings
from logdigest.core.logging import get_logger
from logdigest.errors import LogDigestError
from logdigest.models.schemas import (
    AnalyzeResponse, DigestResponse, HealthResponse, ErrorResponse
)
from logdigest.services.log_pipeline import LogFormat
from logdigest.services.orchestrator import analyze_log_file, digest_log_file

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

FORMAT_CHOICES = ", ".join(f.value for f in LogFormat)


def _parse_format(value: str) -> LogFormat:
    try:
        return LogFormat(value.lower())
    except ValueError:
        raise HTTPException(
            status_code=400, detail=f"Unknown format '{value}'. Expected one of: {FORMAT_CHOICES}")


async def _read_upload(file: UploadFile) -> bytes:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    file_bytes = await file.read()
    if len(file_bytes) == 0:
        raise HTTPException(status_code=400, detail="Empty file")

    logger.info(
        f"Received file: {file.filename}, size: {len(file_bytes)} bytes")
    return file_bytes


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file"},
        500: {"model": ErrorResponse, "description": "Processing error"}
    }
)
async def analyze_logs(
    file: UploadFile = File(...),
    format: str = Query("auto", description="Log format override"),
):
    """
    Upload a CSV log export and analyze it.

    Returns the ranked digest with a human meaning and severity score
    per pattern, plus summary stats.
    """
    fmt = _parse_format(format)
    file_bytes = await _read_upload(file)

    try:
        return analyze_log_file(file_bytes, file.filename, fmt=fmt)
    except LogDigestError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Analysis failed: {str(e)}")


@router.post(
    "/digest",
    response_model=DigestResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file"},
        500: {"model": ErrorResponse, "description": "Processing error"}
    }
)
async def digest_logs(
    file: UploadFile = File(...),
    format: str = Query("auto", description="Log format override"),
):
    """Digest and stats only, without calling the model."""
    fmt = _parse_format(format)
    file_bytes = await _read_upload(file)

    try:
        return digest_log_file(file_bytes, file.filename, fmt=fmt)
    except LogDigestError as e:
        raise HTTPException(status_code=e.http_status, detail=e.message)
    except Exception as e:
        logger.error(f"Digest failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Digest failed: {str(e)}")


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return HealthResponse(
        llm_configured=settings.has_llm_key,
        remote_configured=settings.has_remote_venue,
    )

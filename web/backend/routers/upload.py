#!/usr/bin/env python3
"""
Upload endpoint - ingest a candidate file into a new session.
"""

import logging
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from core.cache.session_cache import SessionData, new_session_id
from core.exceptions import InvalidCandidateDataError
from ..dependencies import get_context
from ..models.responses import UploadResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api", tags=["upload"])

SUPPORTED_EXTENSIONS = ('.json',)


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


@router.post("/upload", response_model=UploadResponse)
@limiter.limit("10/minute")
async def upload_candidates(
    request: Request,
    file: UploadFile = File(...),
    ctx: AppContext = Depends(get_context),
):
    """
    Upload a JSON candidate file.

    The file is decoded in memory, its schema detected and every record
    normalized. The normalized pool is cached under a new session id for
    ``session.ttl_minutes``.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if not file.filename.lower().endswith(SUPPORTED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only JSON files are supported")

    content = await file.read()

    max_size = ctx.config.upload.max_file_size_bytes
    if len(content) > max_size:
        raise InvalidCandidateDataError(f"File size exceeds {max_size // (1024 * 1024)}MB limit")

    result = ctx.etl_service.ingest(content)

    session_id = new_session_id()
    session = SessionData(
        session_id=session_id,
        candidates=result.candidates,
        schema=result.schema,
        file_hash=result.file_hash,
    )
    expires_at = ctx.session_store.set(session_id, session)
    logger.info(f"Stored {len(result.candidates)} candidates in {session_id} (hash {result.file_hash[:16]}...)")

    return UploadResponse(
        success=True,
        session_id=session_id,
        file_hash=result.file_hash,
        stats=result.stats.to_dict(),
        detected_fields=result.schema.to_dict(),
        expires_at=expires_at.isoformat(),
    )

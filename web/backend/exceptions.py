#!/usr/bin/env python3
"""
Error handlers for the web application.

Core errors (core/exceptions.py) are the service-layer exceptions; each
class maps to one HTTP status.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    CompletionServiceError,
    EmptySchemaError,
    InvalidCandidateDataError,
    QueryParseError,
    SessionNotFoundError,
    TalentSiftError,
)

logger = logging.getLogger(__name__)


def status_for(exc: TalentSiftError) -> int:
    if isinstance(exc, SessionNotFoundError):
        return 404
    if isinstance(exc, (InvalidCandidateDataError, EmptySchemaError, QueryParseError)):
        return 400
    if isinstance(exc, CompletionServiceError):
        return 502
    return 500


async def service_exception_handler(
    request: Request,
    exc: TalentSiftError
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )

"""
Exception handlers for the FastAPI application.

Converts application exceptions, request validation failures and rate-limit
rejections into JSON error responses with one consistent shape.
"""

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from ..exceptions import CatalystError, ErrorCode

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any] | None = None,
    headers: Dict[str, str] | None = None,
) -> JSONResponse:
    """Create an error response: the message under ``error``, with ``code`` and
    optional ``details`` beside it."""
    content: Dict[str, Any] = {"error": message, "code": code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def catalyst_error_handler(request: Request, exc: CatalystError) -> JSONResponse:
    """Handle all CatalystError exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code.value} on {request.method} {request.url.path}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code.value,
        message=exc.message,
        details=exc.details if exc.details else None,
        headers=headers,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies, paths and queries as 400s."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        errors.append({
            "field": loc,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR.value,
        message="Request validation failed",
        details={"errors": errors},
    )


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi rate limit rejections."""
    return create_error_response(
        status_code=429,
        code=ErrorCode.RATE_LIMITED.value,
        message=f"Rate limit exceeded: {exc.detail}",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    return create_error_response(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR.value,
        message="An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(CatalystError, catalyst_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Catches everything else; FastAPI routes it to ServerErrorMiddleware
    app.add_exception_handler(Exception, generic_exception_handler)

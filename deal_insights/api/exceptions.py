"""
Exception handling for the API.

Maps the engine's error taxonomy onto HTTP responses with one body shape.
"""

import logging
import traceback

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from deal_insights.core.exceptions import (
    ExecutionError,
    InfrastructureFault,
    InsightError,
    NotFoundError,
    SchemaError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    SchemaError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ExecutionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InfrastructureFault: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorResponse(BaseModel):
    """Standard error response model."""
    detail: str
    type: str
    status_code: int
    details: dict = {}


def status_code_for(exc: InsightError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(exc: InsightError) -> JSONResponse:
    """Create a JSON response from an engine error."""
    code = status_code_for(exc)
    return JSONResponse(
        status_code=code,
        content={
            "detail": exc.message,
            "type": exc.error_type,
            "status_code": code,
            "details": exc.details,
        },
    )


async def insight_error_handler(request: Request, exc: InsightError) -> JSONResponse:
    """Handle InsightError exceptions."""
    return create_error_response(exc)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "type": "http_error",
            "status_code": exc.status_code,
            "details": {},
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle anything else as an internal error."""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "type": "internal_error",
            "status_code": 500,
            "details": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(InsightError, insight_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

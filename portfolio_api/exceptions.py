from typing import Dict, List, Optional

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

logger = logging.getLogger(__name__)


class PortfolioAPIException(Exception):
    """Base exception for the application"""
    pass


class FieldValidationError(PortfolioAPIException):
    """
    Input rejected before anything was written.

    Carries a list of {"field", "message"} entries, rendered as a 400.
    """
    def __init__(self, field: Optional[str] = None, message: Optional[str] = None,
                 errors: Optional[List[Dict[str, str]]] = None):
        if errors is None:
            errors = [{"field": field, "message": message}]
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class EventValidationError(FieldValidationError):
    """An interaction event failed ingestion validation"""
    pass


class NotFoundException(PortfolioAPIException):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _field_from_loc(loc) -> str:
    # ("body", "youtubeUrl") -> "youtubeUrl", ("query", "limit") -> "limit"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def field_validation_exception_handler(request: Request, exc: FieldValidationError):
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info("Rejected input", extra={"request_id": request_id, "errors": exc.errors})

    return JSONResponse(
        status_code=400,
        content={"message": "Validation error", "errors": exc.errors},
    )


async def not_found_exception_handler(request: Request, exc: NotFoundException):
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=404,
        content={"message": exc.message, "request_id": request_id},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler. Returns a 500 JSON response and hides internal error details.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again.",
            "request_id": request_id
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle standard FastAPI HTTPExceptions.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})
    else:
        logger.info(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "request_id": request_id},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors on query, path and body parameters.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    errors = [
        {"field": _field_from_loc(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    logger.info("Validation error", extra={"request_id": request_id, "errors": errors})

    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "errors": errors,
            "request_id": request_id
        },
    )

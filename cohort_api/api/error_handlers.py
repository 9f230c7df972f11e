"""
Error Handlers - global exception handlers, registered once on the app.

Every failure leaves the API as {"error": <message>}:
- ApiError               -> status of its ErrorKind
- RequestValidationError -> 400, "field: reason" message
- DuplicateKeyError      -> 409, "<field> already exists"
- HTTPException          -> its own status (unknown route, wrong method)
- anything else          -> 500, logged with traceback, generic message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cohort_api.core.errors import ApiError, ErrorKind
from cohort_api.schemas.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        level = logging.WARNING if exc.kind is ErrorKind.UNAUTHENTICATED else logging.INFO
        logger.log(level, "%s %s -> %s: %s", request.method, request.url.path,
                   exc.http_status, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.info("Validation error on %s: %s", request.url.path, message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        message = duplicate_key_message(exc)
        logger.info("Duplicate key on %s: %s", request.url.path, message)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": _http_detail(exc)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error("Unhandled exception on %s %s", request.method, request.url.path,
                     exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )


def error_responses(*status_codes: int) -> dict:
    """OpenAPI `responses=` entries documenting the {"error": ...} body."""
    return {code: {"model": ErrorResponse} for code in status_codes}


def format_validation_errors(errors) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = error.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Validation failed"


def duplicate_key_message(exc: DuplicateKeyError) -> str:
    details = exc.details or {}
    key = details.get("keyValue") or details.get("keyPattern") or {}
    if key:
        return f"{next(iter(key))} already exists"
    return "Duplicate key"


def _http_detail(exc: StarletteHTTPException) -> str:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return "Not found"
    return str(exc.detail)

"""Mapping of reservation errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.errors import ErrorKind, ReservationError


logger = logging.getLogger(__name__)


ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN_TRANSITION: status.HTTP_403_FORBIDDEN,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(message: str, code: str) -> dict:
    return {"success": False, "error": message, "code": code}


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    """Render a reservation error as {"success": false, "error": ..., "code": ...}."""
    status_code = ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"Internal error on {request.url.path}: {exc.code}")
    return JSONResponse(status_code=status_code, content=error_body(exc.message, exc.code))


def _describe(error: dict) -> str:
    # ("body", "guest_count") -> "guest_count"; headers and query params keep their own name
    location = ".".join(str(part) for part in error.get("loc", ())[1:]) or "request"
    return f"{location}: {error.get('msg', 'invalid value')}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body, query or headers are client errors in the same envelope as domain errors."""
    errors = exc.errors()
    logger.info(f"Validation error on {request.url.path}: {errors}")
    message = "; ".join(_describe(error) for error in errors) or "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, ErrorKind.VALIDATION.value),
    )


EXCEPTION_HANDLERS = {
    ReservationError: reservation_error_handler,
    RequestValidationError: validation_error_handler,
}


def register_error_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

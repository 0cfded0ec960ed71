"""Error Handlers — map exceptions raised by routes to the JSON error envelope.

Invariants:
    - SeatFinderError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per bad field,
      field named as the client sent it ("minRank", not "query.minRank")
    - Any other exception → 500 INTERNAL_ERROR; message and traceback stay in the log
    - 4xx outcomes logged at WARNING, 5xx at ERROR

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so main.py only calls register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from seatfinder.core.errors import ErrorCategory, ErrorSeverity, SeatFinderError

logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes to validation error paths
_LOCATIONS = {"query", "body", "path", "header"}


async def handle_seatfinder_error(
    request: Request, exc: SeatFinderError,
) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "view_id": exc.context.view_id,
            "request_seq": exc.context.request_seq,
            "source_url": exc.context.source_url,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request to {request.url.path}: "
        + ", ".join(f"{d['field']} ({d['type']})" for d in details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _field_detail(error: dict) -> dict:
    loc = [str(part) for part in error.get("loc", ())]
    if len(loc) > 1 and loc[0] in _LOCATIONS:
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register domain, validation and catch-all handlers on app."""
    app.add_exception_handler(SeatFinderError, handle_seatfinder_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

"""Error Handlers — map every failure to a status code and a JSON error envelope.

Invariants:
    - GatewayError → its own http_status (400 input, 404 missing, 502 store, 504 timeout)
    - RequestValidationError (bad page/size/dir, invalid POST body) → 400 with per-field details
    - Starlette HTTPException (unmatched path 404, wrong method 405) → its status,
      headers kept (Allow on 405)
    - Any other Exception → 500 with a fixed message, details only in the log
    - All four produce the same {"error": {...}} envelope shape

Design Decisions:
    - 4xx logged at warning, 5xx at error with the chained store exception:
      client mistakes are not incidents, store failures need their cause
    - Handlers registered from one function so main.py stays wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from retrieval_gateway.core.errors import (
    ErrorCategory, ErrorSeverity, GatewayError,
)

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    404: "ROUTE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_gateway_error(request: Request, exc: GatewayError):
    server_side = exc.http_status >= 500
    logger.log(
        logging.ERROR if server_side else logging.WARNING,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        exc_info=exc.__cause__ if server_side else None,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "content_hash": exc.context.content_hash,
            "index_name": exc.context.index_name,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        f"Rejected request on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request parameters",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
        ),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    logger.warning(
        f"{code} on {request.method} {request.url.path}",
        extra={"error_code": code, "path": request.url.path},
    )
    category = (
        ErrorCategory.RESOURCE_NOT_FOUND if exc.status_code == 404
        else ErrorCategory.INTERNAL if exc.status_code >= 500
        else ErrorCategory.VALIDATION
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(code, str(exc.detail), category, ErrorSeverity.WARNING),
        headers=exc.headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _field_detail(error: dict) -> dict:
    # loc is ("query", "dir") or ("body", "key"); keep the source prefix
    return {
        "field": ".".join(str(part) for part in error["loc"]),
        "message": error["msg"],
        "type": error["type"],
    }


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}

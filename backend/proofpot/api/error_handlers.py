"""Error Handlers — map exceptions raised by registry and ledger calls to JSON responses.

Invariants:
    - Every error body has the same envelope: {"error": {code, message, category, severity, ...}}
    - ProofPotError → its own http_status (400/403/404/409/503)
    - RequestValidationError → 400 with one detail per offending field
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Expected domain outcomes (duplicate, unauthorized, not found) logged at WARNING,
      infrastructure failures at ERROR
    - Log records carry the caller header and path so a refused write can be traced
      back to who attempted it
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from proofpot.api.dependencies import CALLER_HEADER
from proofpot.core.errors import ErrorCategory, ErrorSeverity, ProofPotError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ProofPotError, _handle_proofpot_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _log_extra(request: Request, **fields) -> dict:
    return {
        "path": request.url.path,
        "caller": request.headers.get(CALLER_HEADER),
        **fields,
    }


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **details,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **details,
        },
    }


async def _handle_proofpot_error(request: Request, exc: ProofPotError):
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code}: {exc.message}",
        extra=_log_extra(request, error_code=exc.code),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error: {[d['field'] for d in details]}",
        extra=_log_extra(request, error_code="VALIDATION_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra=_log_extra(request, error_code="INTERNAL_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )

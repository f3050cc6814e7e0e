"""Error Handlers — map eligibility, request-schema and unexpected errors onto one envelope.

Invariants:
    - Every error body is {"error": {code, message, category, severity, ...}}
    - 400 bodies always carry `details`: a list of {field, message, type}, whether the
      document failed pydantic validation or the evaluator's InputShapeError
    - Log level follows ErrorSeverity; log records carry error_code, path and policy_mode
    - The catch-all never leaks exception text to the caller

Design Decisions:
    - InputShapeError reuses the validation `details` shape so clients parse one format
      for every 400, regardless of which layer rejected the document
    - Configuration errors log at CRITICAL: the service cannot serve any cart until fixed
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cc_eligibility.core.errors import (
    EligibilityError,
    ErrorCategory,
    ErrorSeverity,
    InputShapeError,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register the eligibility, validation and catch-all handlers."""
    app.add_exception_handler(EligibilityError, eligibility_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def _detail(field: str, message: str, kind: str) -> dict:
    return {"field": field, "message": message, "type": kind}


def _eligibility_body(exc: EligibilityError) -> dict:
    body = exc.to_response()
    if isinstance(exc, InputShapeError):
        body["error"]["details"] = [_detail(exc.field, exc.message, "input_shape")]
    return body


async def eligibility_error_handler(request: Request, exc: EligibilityError):
    level = _LOG_LEVELS[exc.severity]
    if exc.category is ErrorCategory.VALIDATION:
        level = logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "policy_mode": exc.context.policy_mode,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=_eligibility_body(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        _detail(".".join(str(loc) for loc in e["loc"]), e["msg"], e["type"])
        for e in exc.errors()
    ]
    logger.warning(
        f"Run input rejected on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Run input does not match the cart payment methods schema",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "Eligibility could not be evaluated",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )

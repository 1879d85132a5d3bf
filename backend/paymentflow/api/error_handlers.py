"""Error Handlers — global exception handlers mapping every failure to the SY03 result.

Invariants:
    - RequestValidationError → MalformedRequestError → SY03 envelope naming the first bad field
    - Exception (catch-all) → InternalProcessingError → SY03 envelope, never leaks internals
    - Every response uses the InstructionResult shape (uniform client contract)

Design Decisions:
    - Two-layer handler: validation (Pydantic), catch-all (Exception); both build a
      PaymentFlowError subclass and render it through its to_response()
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from paymentflow.core.errors import (
    ErrorContext, InternalProcessingError, MalformedRequestError, PaymentFlowError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _render(exc: PaymentFlowError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed request bodies are SY03 results, not 4xx errors."""
        error = MalformedRequestError(
            _build_validation_details(exc),
            ErrorContext(path=request.url.path),
        )
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return _render(error)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        error = InternalProcessingError(ErrorContext(path=request.url.path))
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": error.code, "path": request.url.path},
        )
        return _render(error)


def _build_validation_details(exc: RequestValidationError) -> list[dict]:
    """Flatten Pydantic errors to field/message/type triples."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]

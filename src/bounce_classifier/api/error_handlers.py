"""
FastAPI exception handlers for structured error responses.

Maps classifier exceptions to appropriate HTTP status codes and formats.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bounce_classifier.exceptions import (
    BounceClassifierError,
    ConfigurationError,
    InvalidInputError,
    MalformedModelError,
    ModelLoadError,
)

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": jsonable_encoder(details or {}),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """
    Handle invalid messages (non-string, empty, whitespace-only).

    Maps to 400 Bad Request.
    """
    logger.warning("Invalid input", error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_input", exc.message, exc.details),
    )


async def model_unavailable_handler(request: Request, exc: BounceClassifierError) -> JSONResponse:
    """
    Handle model bundle load failures (unreachable or malformed bundle).

    Maps to 503 Service Unavailable: the next request retries the load.
    """
    logger.error(
        "Model unavailable",
        error_type=type(exc).__name__,
        error=exc.message,
        details=exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("model_unavailable", exc.message, exc.details),
    )


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """
    Handle classifier configuration errors.

    Maps to 500 Internal Server Error (service misconfiguration).
    """
    logger.error("Configuration error", error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("configuration_error", exc.message, exc.details),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors (invalid request format).

    Maps to 400 Bad Request.
    """
    logger.warning("Invalid request format", errors=exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", "Request validation failed", {"errors": exc.errors()}),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    InvalidInputError: invalid_input_handler,
    ModelLoadError: model_unavailable_handler,
    MalformedModelError: model_unavailable_handler,
    ConfigurationError: configuration_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}

"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
The core never recovers from errors; this is where each one becomes
a user-visible response.
"""

import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from table_qa.api.models import ErrorResponse
from table_qa.inference.exceptions import (
    DecodeError,
    InferenceTimeoutError,
    MissingCredentialError,
    RemoteServiceError,
    TransportError,
)
from table_qa.loader.exceptions import TableLoadError
from table_qa.service import InvalidQueryError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies.

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", extra={"errors": exc.errors()})

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "invalid_request",
        "Invalid request",
        {"errors": [err.get("msg", "") for err in exc.errors()]},
    )


async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
    """Handle an empty query. Maps to 400 Bad Request."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_query", exc.message)


async def table_load_error_handler(request: Request, exc: TableLoadError) -> JSONResponse:
    """
    Handle CSV source problems (unreadable file, bad syntax, short rows).

    Maps to 500 Internal Server Error: the dataset is owned by the service,
    not by the client.
    """
    logger.error(
        "Table load error",
        extra={"error_type": type(exc).__name__, "details": exc.details},
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "table_load_failed",
        f"Error converting CSV to table: {exc.message}",
        exc.details,
    )


async def missing_credential_handler(
    request: Request, exc: MissingCredentialError
) -> JSONResponse:
    """
    Handle a missing inference credential.

    Maps to 500 Internal Server Error (service misconfiguration).
    """
    logger.error("Inference credential not configured")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "missing_credential",
        "HUGGINGFACE_TOKEN is not set in the environment",
    )


async def remote_service_error_handler(
    request: Request, exc: RemoteServiceError
) -> JSONResponse:
    """
    Handle a non-success status from the inference provider.

    Maps to 502 Bad Gateway; the upstream status is echoed in details.
    """
    logger.error(
        "Inference provider rejected request",
        extra={"status_code": exc.status_code, "status_text": exc.status_text},
    )

    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "remote_service_error",
        f"Failed to get valid response: {exc.status_code} {exc.status_text}".rstrip(),
        {"status_code": exc.status_code, "status_text": exc.status_text},
    )


async def decode_error_handler(request: Request, exc: DecodeError) -> JSONResponse:
    """
    Handle an undecodable success body.

    Maps to 502 Bad Gateway (upstream returned garbage).
    """
    logger.error("Inference response decode error", extra={"details": exc.details})

    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "invalid_model_response",
        "Inference provider returned an unreadable answer",
    )


async def inference_timeout_handler(
    request: Request, exc: InferenceTimeoutError
) -> JSONResponse:
    """
    Handle an exceeded inference deadline.

    Maps to 504 Gateway Timeout (upstream service timeout).
    """
    logger.error("Inference timeout", extra={"details": exc.details})

    return _error_response(
        status.HTTP_504_GATEWAY_TIMEOUT,
        "inference_timeout",
        "Inference provider request timed out",
    )


async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    """
    Handle network failures talking to the provider.

    Maps to 502 Bad Gateway (upstream service unavailable).
    """
    logger.error("Inference transport error", extra={"error": str(exc)}, exc_info=True)

    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "inference_unreachable",
        "Unable to connect to inference provider",
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", extra={"error_type": type(exc).__name__})

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
# Lookup walks the MRO, so InferenceTimeoutError wins over TransportError.
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    InvalidQueryError: invalid_query_handler,
    TableLoadError: table_load_error_handler,
    MissingCredentialError: missing_credential_handler,
    RemoteServiceError: remote_service_error_handler,
    DecodeError: decode_error_handler,
    InferenceTimeoutError: inference_timeout_handler,
    TransportError: transport_error_handler,
    Exception: generic_error_handler,
}

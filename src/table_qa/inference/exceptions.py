"""
Custom exceptions for the inference connector.

Each call ends in one of three terminal outcomes:
- success: an Answer is returned
- rejected: RemoteServiceError (the provider answered with a failure status)
- failed: TransportError or DecodeError

MissingCredentialError is a configuration problem raised before any I/O.
Nothing here is retried by the connector; retry policy belongs to the caller.
"""

from typing import Any


class InferenceError(Exception):
    """
    Base exception for all inference connector errors.

    All connector exceptions inherit from this to allow catching
    any inference-related error with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingCredentialError(InferenceError):
    """Raised when the bearer credential is empty. No request is sent."""
    pass


class TransportError(InferenceError):
    """
    Raised when the network exchange cannot be established or completed.

    Includes DNS failures, refused connections and connections dropped
    mid-response. The underlying exception is kept in ``cause``.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if cause is not None:
            details.setdefault("error_type", type(cause).__name__)
        super().__init__(message, details)
        self.cause = cause


class InferenceTimeoutError(TransportError):
    """
    Raised when the call exceeds its deadline.

    Separate from generic transport errors so callers can map it to a
    gateway timeout.
    """
    pass


class RemoteServiceError(InferenceError):
    """
    Raised when the provider responds with a non-success status.

    The response body is not trusted and is not parsed.
    """

    def __init__(self, status_code: int, status_text: str = ""):
        super().__init__(
            f"Inference endpoint returned {status_code} {status_text}".rstrip(),
            {"status_code": status_code, "status_text": status_text},
        )
        self.status_code = status_code
        self.status_text = status_text


class DecodeError(InferenceError):
    """
    Raised when a success response body does not decode into an Answer.

    Covers non-JSON bodies, JSON that is not an object, and objects that
    miss required fields or carry values of the wrong type.
    """

    def __init__(
        self,
        message: str,
        raw_content: str | None = None,
        decode_errors: list[str] | None = None,
    ):
        details: dict[str, Any] = {}
        if raw_content:
            # Enough of the body to debug, not enough to flood the log
            details["content_snippet"] = raw_content[:500]
        if decode_errors:
            details["decode_errors"] = decode_errors
        super().__init__(message, details)


def outcome_of(error: BaseException | None) -> str:
    """
    Classify a call result into its terminal outcome label.

    Args:
        error: Exception raised by the call, or None on success

    Returns:
        "success", "rejected" or "failed"
    """
    if error is None:
        return "success"
    if isinstance(error, RemoteServiceError):
        return "rejected"
    return "failed"

"""Standardized error handling for the client engine.

This module provides:
1. Custom exception classes for each failure kind the engine surfaces
2. The ErrorInfo record shown to the user (status indicator + message)
3. Helpers turning any ClientError into that record

Usage:
    from eventsync.errors import StatusError, to_info

    try:
        payload = await client.get_event(public_id)
    except ClientError as exc:
        page.error = exc.to_info()
"""

from typing import Any

from pydantic import BaseModel


class ErrorInfo(BaseModel):
    """User-visible error record."""

    status: int | None = None
    message: str
    error: str = "client_error"

    def describe(self) -> str:
        """One-line message suitable for an alert banner."""
        if self.status is None:
            return self.message
        return f"Request failed. status={self.status} {self.message}".rstrip()


class ClientError(Exception):
    """Base class for client engine errors."""

    status: int | None = None
    error: str = "client_error"
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        status: int | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        if status is not None:
            self.status = status
        self.context = context if context else None
        super().__init__(self.detail)

    def to_info(self) -> ErrorInfo:
        """Convert exception to the user-visible error record."""
        return ErrorInfo(status=self.status, message=self.detail, error=self.error)


class InputError(ClientError):
    """A client-side precondition was not met; no request was sent."""

    error = "input_error"
    detail = "Invalid input"


class TransportError(ClientError):
    """Network-level failure, no status code available."""

    error = "transport_error"
    detail = "Network request failed"


class StatusError(ClientError):
    """Server answered with a non-2xx status."""

    error = "status_error"
    detail = "Request failed"

    def __init__(self, status: int, detail: str | None = None, **context: Any) -> None:
        super().__init__(detail, status=status, **context)
        self.error = _status_to_error_type(status)


class InvalidPayloadError(ClientError):
    """Response was well-formed JSON of the wrong shape."""

    error = "invalid_payload"
    detail = "Server returned an unexpected response"


def _status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        409: "conflict",
        422: "validation_error",
        429: "rate_limited",
        500: "internal_error",
        502: "bad_gateway",
        503: "service_unavailable",
        504: "gateway_timeout",
    }
    return mapping.get(status_code, "error")


def to_info(exc: BaseException) -> ErrorInfo:
    """Convert any exception raised at an operation boundary to ErrorInfo."""
    if isinstance(exc, ClientError):
        return exc.to_info()
    return ErrorInfo(message=str(exc) or "Unexpected error occurred.")

"""Client error hierarchy.

All client-specific errors extend DocumentDBError. Callers only ever see one
terminal error per operation; endpoint quarantine is an internal state change
and never surfaces here.

- RequestError: the service answered with an unexpected status. The service's
  ``{code, message}`` payload is decoded from the body when present.
- InvalidRequestError: status 400..413, never retried.
- TransientServiceError: any other unexpected status, after the retry budget.
- TransportError: no usable response (connect failure, timeout, redirect loop,
  undecodable content encoding).
"""

from __future__ import annotations

import json

import httpx

INVALID_REQUEST_MIN_STATUS = 400
INVALID_REQUEST_MAX_STATUS = 413


def is_invalid_request_status(status_code: int) -> bool:
    """Statuses that indicate a malformed request retrying cannot fix."""
    return INVALID_REQUEST_MIN_STATUS <= status_code <= INVALID_REQUEST_MAX_STATUS


class DocumentDBError(Exception):
    """Base error for all client errors."""

    message: str = "Document database client error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class RequestError(DocumentDBError):
    """The service returned a status the operation did not expect."""

    message = "Request failed"

    def __init__(
        self,
        status_code: int,
        code: str | None = None,
        message: str | None = None,
        **kwargs: object,
    ) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(message, status_code=status_code, code=code, **kwargs)

    def __str__(self) -> str:
        if self.code:
            return f"{self.status_code} {self.code}: {self.message}"
        return f"{self.status_code}: {self.message}"

    @classmethod
    def from_response(cls, response: httpx.Response) -> RequestError:
        """Decode the service error payload, picking the subclass by status."""
        error_cls: type[RequestError] = (
            InvalidRequestError
            if is_invalid_request_status(response.status_code)
            else TransientServiceError
        )

        code: str | None = None
        message: str | None = None
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None

        if isinstance(payload, dict):
            raw_code = payload.get("code")
            raw_message = payload.get("message")
            code = str(raw_code) if raw_code is not None else None
            message = str(raw_message) if raw_message is not None else None

        if not message:
            message = response.reason_phrase or error_cls.message

        return error_cls(response.status_code, code=code, message=message)


class InvalidRequestError(RequestError):
    """Status 400..413: the request itself is invalid."""

    message = "Invalid request"


class TransientServiceError(RequestError):
    """Non-success status outside 400..413; retried up to the budget."""

    message = "Service error"


class TransportError(DocumentDBError):
    """The request never produced a response."""

    message = "Transport error, no response received"


class ResponseDecodeError(DocumentDBError):
    """A successful response body could not be decoded into the result type."""

    message = "Failed to decode response body"


class DiscoveryError(DocumentDBError):
    """Region discovery against the default endpoint failed."""

    message = "Region discovery failed"

"""Retry-driven request execution against the selected regional endpoint.

One logical operation is a blocking sequence of attempts on the calling
thread. The endpoint is selected once per operation; retries go to the same
endpoint. When the retry budget runs out against a non-default endpoint the
retry policy quarantines it, so later operations route elsewhere.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from docdb_regional.endpoints.registry import EndpointRegistry
from docdb_regional.endpoints.types import Endpoint, EndpointIntent
from docdb_regional.engine.retry import RetryPolicy
from docdb_regional.engine.transport import Transport
from docdb_regional.engine.types import OutboundRequest, Response
from docdb_regional.engine.validators import StatusValidator
from docdb_regional.errors import (
    DocumentDBError,
    RequestError,
    ResponseDecodeError,
    TransportError,
)

logger = logging.getLogger(__name__)

# Status reported to the retry policy when no response was received
NO_RESPONSE_STATUS = 0


class RequestExecutor:
    """Executes requests with endpoint selection and bounded retry."""

    def __init__(
        self,
        registry: EndpointRegistry,
        transport: Transport,
        retry_policy: RetryPolicy,
    ) -> None:
        self._registry = registry
        self._transport = transport
        self._retry_policy = retry_policy

    @property
    def registry(self) -> EndpointRegistry:
        return self._registry

    def execute(
        self,
        intent: EndpointIntent,
        request: OutboundRequest,
        validator: StatusValidator,
        result_type: Any = None,
        *,
        endpoint: Endpoint | None = None,
    ) -> Response:
        """Send ``request`` and return the decoded response.

        The endpoint is selected by ``intent`` unless one is passed explicitly
        (region discovery pins the default endpoint).

        Raises
        ------
        InvalidRequestError
            Status 400..413, after a single attempt.
        TransientServiceError
            Any other unexpected status once retries are exhausted.
        TransportError
            No usable response on the last attempt (connection, timeout,
            redirect loop or undecodable content encoding).
        ResponseDecodeError
            The success body could not be decoded into ``result_type``.
        """
        target = endpoint or self._registry.select(intent)
        http_request = request.build(target.url)
        attempt = 1

        while True:
            logger.debug(
                "Attempt %d outgoing request to %s",
                attempt,
                http_request.url,
                extra={"endpoint": target.name, "attempt": attempt},
            )

            response: httpx.Response | None = None
            error: DocumentDBError
            try:
                response = self._transport.send(http_request)
            except httpx.RequestError as exc:
                error = TransportError(
                    f"{type(exc).__name__}: {exc}",
                    endpoint=target.name,
                )
                error.__cause__ = exc

            if response is not None:
                if validator(response.status_code):
                    return self._decode(response, result_type)
                error = RequestError.from_response(response)

            status_code = response.status_code if response is not None else NO_RESPONSE_STATUS
            logger.info(
                "Attempt %d to endpoint %s failed: %s",
                attempt,
                target.name,
                error,
                extra={
                    "endpoint": target.name,
                    "attempt": attempt,
                    "status_code": status_code,
                    "error_reason": str(error),
                },
            )

            if not self._retry_policy.should_retry(status_code, attempt, target):
                raise error

            attempt += 1

    @staticmethod
    def _decode(response: httpx.Response, result_type: Any) -> Response:
        if result_type is None:
            return Response(status_code=response.status_code, headers=response.headers)

        try:
            payload = response.json()
            data = TypeAdapter(result_type).validate_python(payload)
        except (ValueError, ValidationError) as exc:
            raise ResponseDecodeError(
                f"Failed to decode response body: {exc}",
                status_code=response.status_code,
            ) from exc

        return Response(status_code=response.status_code, headers=response.headers, data=data)

"""Transport capability consumed by the execution engine."""

from __future__ import annotations

from typing import Protocol

import httpx


class Transport(Protocol):
    """Sends one request. Raises ``httpx.RequestError`` when no usable response arrives."""

    def send(self, request: httpx.Request) -> httpx.Response: ...


class HttpxTransport:
    """Transport backed by a shared synchronous ``httpx.Client``."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))

    def send(self, request: httpx.Request) -> httpx.Response:
        return self._client.send(request)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

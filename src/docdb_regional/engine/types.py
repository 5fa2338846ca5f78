"""Request and response models passed between the CRUD layer and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

CONTINUATION_HEADER = "x-ms-continuation"
REQUEST_CHARGE_HEADER = "x-ms-request-charge"
SESSION_TOKEN_HEADER = "x-ms-session-token"


@dataclass
class OutboundRequest:
    """An endpoint-independent request; ``link`` is joined to the endpoint URL."""

    method: str
    link: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def build(self, base_url: str) -> httpx.Request:
        url = f"{base_url.rstrip('/')}/{self.link.lstrip('/')}"
        return httpx.Request(self.method, url, headers=self.headers, content=self.body)


@dataclass
class Response:
    """A successful service response with its decoded body, if one was requested."""

    status_code: int
    headers: httpx.Headers
    data: Any = None

    @property
    def continuation(self) -> str | None:
        return self.headers.get(CONTINUATION_HEADER)

    @property
    def request_charge(self) -> float:
        raw = self.headers.get(REQUEST_CHARGE_HEADER)
        try:
            return float(raw) if raw is not None else 0.0
        except ValueError:
            return 0.0

    @property
    def session_token(self) -> str | None:
        return self.headers.get(SESSION_TOKEN_HEADER)

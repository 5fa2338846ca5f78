"""Document database client: CRUD/query verbs over the regional execution engine.

Each verb builds an endpoint-independent OutboundRequest (headers, JSON body),
picks a read or write intent and the status it expects, and hands it to the
RequestExecutor. Endpoint selection, retries, and quarantine all happen there.

Region topology comes from, in order of precedence:
1. a static YAML topology file (``static_topology_path``),
2. HTTP discovery against the default endpoint (``enable_endpoint_discovery``),
3. nothing, in which case every request goes to the default endpoint.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from email.utils import formatdate
from typing import Any

from pydantic import BaseModel

from docdb_regional.config.settings import ClientSettings
from docdb_regional.config.topology import load_static_topology
from docdb_regional.endpoints.health import HealthTracker
from docdb_regional.endpoints.registry import EndpointRegistry
from docdb_regional.endpoints.types import EndpointDescription, EndpointIntent
from docdb_regional.engine.executor import RequestExecutor
from docdb_regional.engine.retry import RetryPolicy
from docdb_regional.engine.transport import HttpxTransport, Transport
from docdb_regional.engine.types import OutboundRequest, Response
from docdb_regional.engine.validators import StatusValidator, expect_status, expect_status_class
from docdb_regional.errors import DiscoveryError, DocumentDBError
from docdb_regional.models.query import Query
from docdb_regional.options import CallOption
from docdb_regional.options import upsert as upsert_option

logger = logging.getLogger(__name__)

# (method, resource link, x-ms-date) -> Authorization header value
Signer = Callable[[str, str, str], str]

JSON_CONTENT_TYPE = "application/json"
QUERY_CONTENT_TYPE = "application/query+json"


def stringify(body: Any) -> bytes:
    """Serialize a request body: str and bytes pass through, everything else is JSON."""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True).encode("utf-8")
    return json.dumps(body).encode("utf-8")


class DocumentClient:
    """Multi-region document database client.

    Parameters
    ----------
    settings:
        Immutable client configuration.
    transport:
        Request transport. Defaults to an ``httpx.Client``-backed transport
        owned (and closed) by this client.
    signer:
        Optional callable producing the Authorization header for a request.
    health_tracker:
        Override the endpoint health tracker (e.g. with a fake clock).
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: Transport | None = None,
        signer: Signer | None = None,
        health_tracker: HealthTracker | None = None,
    ) -> None:
        self._settings = settings
        self._signer = signer
        self._owned_transport: HttpxTransport | None = None

        if transport is None:
            self._owned_transport = HttpxTransport(
                timeout_seconds=settings.request_timeout_seconds
            )
            transport = self._owned_transport

        self._registry = EndpointRegistry(
            settings.endpoint_url,
            endpoint_unavailable_seconds=settings.endpoint_unavailable_seconds,
            use_multiple_write_locations=settings.use_multiple_write_locations,
            preferred_location=settings.preferred_location,
            health_tracker=health_tracker,
        )
        self._executor = RequestExecutor(
            registry=self._registry,
            transport=transport,
            retry_policy=RetryPolicy(self._registry, retry_count=settings.retry_count),
        )

        if settings.static_topology_path:
            description = load_static_topology(settings.static_topology_path)
            if description is not None:
                self._registry.rediscover(description)
        elif settings.enable_endpoint_discovery:
            try:
                self.rediscover_regions()
            except DiscoveryError:
                self.close()
                raise

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def registry(self) -> EndpointRegistry:
        return self._registry

    def close(self) -> None:
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Region discovery
    # ------------------------------------------------------------------

    def rediscover_regions(self) -> None:
        """Refresh the read/write endpoint lists from the default endpoint.

        Raises ``DiscoveryError`` if the default endpoint cannot be reached or
        returns an unusable payload; the registry is left unchanged.
        """
        request = self._prepare("GET", "", JSON_CONTENT_TYPE, b"", ())
        try:
            response = self._executor.execute(
                EndpointIntent.READ_ONLY,
                request,
                expect_status(200),
                EndpointDescription,
                endpoint=self._registry.default_endpoint,
            )
        except DocumentDBError as exc:
            logger.error("Region discovery failed: %s", exc, extra={"error_reason": str(exc)})
            raise DiscoveryError(f"Region discovery failed: {exc}") from exc

        self._registry.rediscover(response.data)

    # ------------------------------------------------------------------
    # Resource operations
    # ------------------------------------------------------------------

    def read(self, link: str, *opts: CallOption, result_type: Any = dict) -> Response:
        """Read a resource by its self link."""
        request = self._prepare("GET", link, JSON_CONTENT_TYPE, b"", opts)
        return self._send(EndpointIntent.READ_ONLY, request, expect_status(200), result_type)

    def query(self, link: str, query: Query | str, *opts: CallOption, result_type: Any = dict) -> Response:
        """Run a SQL query against a collection (or other feed) link."""
        if isinstance(query, str):
            query = Query(query=query)
        request = self._prepare("POST", link, QUERY_CONTENT_TYPE, stringify(query), opts)
        request.headers["x-ms-documentdb-isquery"] = "True"
        return self._send(EndpointIntent.READ_ONLY, request, expect_status(200), result_type)

    def create(self, link: str, body: Any, *opts: CallOption, result_type: Any = dict) -> Response:
        request = self._prepare("POST", link, JSON_CONTENT_TYPE, stringify(body), opts)
        return self._send(EndpointIntent.READ_WRITE, request, expect_status(201), result_type)

    def upsert(self, link: str, body: Any, *opts: CallOption, result_type: Any = dict) -> Response:
        """Create or replace; the service answers 200 or 201."""
        request = self._prepare("POST", link, JSON_CONTENT_TYPE, stringify(body), (*opts, upsert_option()))
        return self._send(EndpointIntent.READ_WRITE, request, expect_status_class(200), result_type)

    def replace(self, link: str, body: Any, *opts: CallOption, result_type: Any = dict) -> Response:
        request = self._prepare("PUT", link, JSON_CONTENT_TYPE, stringify(body), opts)
        return self._send(EndpointIntent.READ_WRITE, request, expect_status(200), result_type)

    def execute(self, link: str, body: Any, *opts: CallOption, result_type: Any = dict) -> Response:
        """Execute a stored procedure; ``body`` is its argument list."""
        request = self._prepare("POST", link, JSON_CONTENT_TYPE, stringify(body), opts)
        return self._send(EndpointIntent.READ_WRITE, request, expect_status(200), result_type)

    def delete(self, link: str, *opts: CallOption) -> Response:
        request = self._prepare("DELETE", link, JSON_CONTENT_TYPE, b"", opts)
        return self._send(EndpointIntent.READ_WRITE, request, expect_status(204), None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _prepare(
        self,
        method: str,
        link: str,
        content_type: str,
        body: bytes,
        opts: tuple[CallOption, ...],
    ) -> OutboundRequest:
        date = formatdate(usegmt=True)
        headers = {
            "x-ms-date": date,
            "x-ms-version": self._settings.api_version,
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": content_type,
        }
        if self._signer is not None:
            headers["Authorization"] = self._signer(method, link, date)

        request = OutboundRequest(method=method, link=link, headers=headers, body=body)
        for opt in opts:
            opt(request)
        return request

    def _send(
        self,
        intent: EndpointIntent,
        request: OutboundRequest,
        validator: StatusValidator,
        result_type: Any,
    ) -> Response:
        return self._executor.execute(intent, request, validator, result_type)

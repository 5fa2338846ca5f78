"""Multi-region document database client with endpoint health tracking and bounded retry."""

from docdb_regional.client import DocumentClient, Signer
from docdb_regional.config.settings import ClientSettings
from docdb_regional.endpoints.types import Endpoint, EndpointDescription, EndpointIntent
from docdb_regional.engine.types import OutboundRequest, Response
from docdb_regional.errors import (
    DiscoveryError,
    DocumentDBError,
    InvalidRequestError,
    RequestError,
    ResponseDecodeError,
    TransientServiceError,
    TransportError,
)
from docdb_regional.models.query import Query, QueryParameter

__all__ = [
    "ClientSettings",
    "DiscoveryError",
    "DocumentClient",
    "DocumentDBError",
    "Endpoint",
    "EndpointDescription",
    "EndpointIntent",
    "InvalidRequestError",
    "OutboundRequest",
    "Query",
    "QueryParameter",
    "RequestError",
    "Response",
    "ResponseDecodeError",
    "Signer",
    "TransientServiceError",
    "TransportError",
]

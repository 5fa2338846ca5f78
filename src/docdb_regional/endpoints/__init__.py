"""Endpoint topology package: registry and health tracking."""

from docdb_regional.endpoints.health import HealthTracker
from docdb_regional.endpoints.registry import EndpointRegistry
from docdb_regional.endpoints.types import (
    Endpoint,
    EndpointDescription,
    EndpointIntent,
    EndpointLocation,
)

__all__ = [
    "Endpoint",
    "EndpointDescription",
    "EndpointIntent",
    "EndpointLocation",
    "EndpointRegistry",
    "HealthTracker",
]

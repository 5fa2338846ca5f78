"""Pydantic Settings for the document database client.

All environment variables use the DOCDB_ prefix.
Example: DOCDB_ENDPOINT_URL=https://account.documents.example.net, DOCDB_RETRY_COUNT=5

Settings are frozen: retry and region options are fixed for a client's lifetime.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Service
    endpoint_url: str  # Default (global) account endpoint
    api_version: str = "2018-12-31"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Retry
    retry_count: int = Field(default=3, ge=0)
    endpoint_unavailable_seconds: int = Field(default=60, ge=0)

    # Regions
    enable_endpoint_discovery: bool = False
    use_multiple_write_locations: bool = False
    preferred_location: str | None = None
    static_topology_path: str | None = None  # YAML with readableLocations/writableLocations

    model_config = {"env_prefix": "DOCDB_", "frozen": True}

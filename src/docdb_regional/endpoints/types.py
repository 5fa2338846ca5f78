"""Endpoint data models for the endpoint registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EndpointIntent(str, Enum):
    """Whether an operation needs a read-capable or write-capable endpoint."""

    READ_ONLY = "read_only"
    READ_WRITE = "read_write"


@dataclass
class Endpoint:
    """A named regional URL with availability tracking.

    The default endpoint is never marked unavailable.
    """

    name: str
    url: str
    is_default: bool = False
    is_unavailable: bool = False
    unavailable_since: float | None = None


class EndpointLocation(BaseModel):
    """One entry of the discovery payload's location lists."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    url: str = Field(validation_alias=AliasChoices("databaseAccountEndpoint", "url"))

    def to_endpoint(self) -> Endpoint:
        return Endpoint(name=self.name, url=self.url.rstrip("/"))


class EndpointDescription(BaseModel):
    """Region-discovery response: readable and writable locations in service order."""

    model_config = ConfigDict(populate_by_name=True)

    readable_locations: list[EndpointLocation] = Field(
        default_factory=list,
        validation_alias=AliasChoices("readableLocations", "readable_locations"),
    )
    writable_locations: list[EndpointLocation] = Field(
        default_factory=list,
        validation_alias=AliasChoices("writableLocations", "writable_locations"),
    )

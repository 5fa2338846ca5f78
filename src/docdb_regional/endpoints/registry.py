"""Endpoint registry with intent-based selection and preferred-region ordering.

Holds the ordered read and write endpoint lists plus a default endpoint that
is always selectable. Selection purges stale quarantines on both lists, then
returns the first available endpoint of the list matching the request intent,
falling back to the default endpoint.

All state (lists, availability flags, timestamps) is guarded by one re-entrant
lock so selection, purge, quarantine, and rediscovery are linearizable.
Rediscovery builds the new lists before taking the lock and swaps them in
under it, so a selection never sees a half-replaced list.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict

from docdb_regional.endpoints.health import HealthTracker
from docdb_regional.endpoints.types import Endpoint, EndpointDescription, EndpointIntent

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_NAME = "default"


def move_preferred_first(endpoints: list[Endpoint], preferred: str | None) -> list[Endpoint]:
    """Return a copy with the endpoint named ``preferred`` at index 0.

    The remaining endpoints keep their relative order. Without a match the
    order is unchanged.
    """
    if not preferred:
        return list(endpoints)

    for i, endpoint in enumerate(endpoints):
        if endpoint.name == preferred:
            return [endpoint, *endpoints[:i], *endpoints[i + 1 :]]

    return list(endpoints)


class EndpointRegistry:
    """Owns endpoint topology and answers which endpoint a request should use."""

    def __init__(
        self,
        default_url: str,
        *,
        endpoint_unavailable_seconds: float = 60,
        use_multiple_write_locations: bool = False,
        preferred_location: str | None = None,
        health_tracker: HealthTracker | None = None,
    ) -> None:
        self._default = Endpoint(
            name=DEFAULT_ENDPOINT_NAME,
            url=default_url.rstrip("/"),
            is_default=True,
        )
        self._read_endpoints: list[Endpoint] = []
        self._write_endpoints: list[Endpoint] = []
        self._endpoint_unavailable_seconds = endpoint_unavailable_seconds
        self._use_multiple_write_locations = use_multiple_write_locations
        self._preferred_location = preferred_location
        self._health = health_tracker or HealthTracker()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    @property
    def default_endpoint(self) -> Endpoint:
        return self._default

    @property
    def read_endpoints(self) -> list[Endpoint]:
        with self._lock:
            return list(self._read_endpoints)

    @property
    def write_endpoints(self) -> list[Endpoint]:
        with self._lock:
            return list(self._write_endpoints)

    def rediscover(self, description: EndpointDescription) -> None:
        """Replace both endpoint lists from a discovery description.

        Each list is reordered so the preferred location, when present, comes
        first.
        """
        read = move_preferred_first(
            [loc.to_endpoint() for loc in description.readable_locations],
            self._preferred_location,
        )
        write = move_preferred_first(
            [loc.to_endpoint() for loc in description.writable_locations],
            self._preferred_location,
        )

        with self._lock:
            self._read_endpoints = read
            self._write_endpoints = write

        logger.info(
            "Endpoint topology updated: read=%s write=%s",
            [e.name for e in read],
            [e.name for e in write],
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, intent: EndpointIntent) -> Endpoint:
        """Return the endpoint a request with this intent should be sent to."""
        with self._lock:
            self._purge_stale()

            if intent == EndpointIntent.READ_ONLY:
                candidates = self._read_endpoints
            elif self._use_multiple_write_locations:
                candidates = self._write_endpoints
            else:
                candidates = []

            for endpoint in candidates:
                if not endpoint.is_unavailable:
                    return endpoint

            return self._default

    # ------------------------------------------------------------------
    # Health tracking
    # ------------------------------------------------------------------

    def quarantine(self, endpoint: Endpoint) -> None:
        """Take an endpoint out of rotation until its cooldown elapses."""
        with self._lock:
            self._health.quarantine(endpoint)

    def _purge_stale(self) -> None:
        self._health.purge_stale(self._read_endpoints, self._endpoint_unavailable_seconds)
        self._health.purge_stale(self._write_endpoints, self._endpoint_unavailable_seconds)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def get_stats(self) -> dict:
        """Return topology and quarantine statistics for the health endpoint."""
        with self._lock:
            read = [asdict(e) for e in self._read_endpoints]
            write = [asdict(e) for e in self._write_endpoints]
            default = asdict(self._default)

        unavailable = sum(1 for e in read + write if e["is_unavailable"])
        return {
            "default": default,
            "read": read,
            "write": write,
            "total": len(read) + len(write) + 1,
            "unavailable": unavailable,
        }

"""Endpoint quarantine with lazy self-healing.

There is no background timer. Quarantined endpoints are restored by
``purge_stale``, which the registry runs before every selection, so recovery
latency is bounded by request frequency rather than by wall-clock polling.

State machine per endpoint:
- Available → Unavailable: ``quarantine`` (never for the default endpoint)
- Unavailable → Available: ``purge_stale`` once the cooldown has elapsed
- Re-quarantining an unavailable endpoint refreshes its timestamp

The tracker itself holds no lock; callers serialize access (the registry does).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from docdb_regional.endpoints.types import Endpoint

logger = logging.getLogger(__name__)


class HealthTracker:
    """Marks endpoints unavailable and restores them after a cooldown.

    Args:
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock

    def quarantine(self, endpoint: Endpoint) -> None:
        """Take an endpoint out of rotation. No-op for the default endpoint."""
        if endpoint.is_default:
            return

        endpoint.is_unavailable = True
        endpoint.unavailable_since = self._clock()
        logger.warning(
            "Endpoint marked unavailable: %s (%s)",
            endpoint.name,
            endpoint.url,
            extra={"endpoint": endpoint.name},
        )

    def purge_stale(self, endpoints: Iterable[Endpoint], threshold_seconds: float) -> int:
        """Restore every unavailable endpoint whose cooldown has elapsed.

        Returns the number of endpoints restored.
        """
        now = self._clock()
        restored = 0

        for endpoint in endpoints:
            if not endpoint.is_unavailable:
                continue

            since = endpoint.unavailable_since if endpoint.unavailable_since is not None else now
            if now - since >= threshold_seconds:
                endpoint.is_unavailable = False
                endpoint.unavailable_since = None
                restored += 1
                logger.info(
                    "Endpoint available again: %s",
                    endpoint.name,
                    extra={"endpoint": endpoint.name},
                )

        return restored

"""Status-code-aware retry policy with endpoint quarantine on budget exhaustion.

- 400..413: never retried, the request itself is invalid.
- Anything else (including transport failures, reported as status 0):
  retried while ``attempt < retry_count``.
- ``attempt == retry_count`` against a non-default endpoint: the endpoint is
  quarantined and retrying stops. The quarantine only benefits later
  operations; the one that triggered it has already committed to stopping.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docdb_regional.errors import is_invalid_request_status

if TYPE_CHECKING:
    from docdb_regional.endpoints.registry import EndpointRegistry
    from docdb_regional.endpoints.types import Endpoint

logger = logging.getLogger(__name__)


class RetryPolicy:
    """Decides whether a failed attempt is retried.

    Args:
        registry: Registry used to quarantine endpoints whose budget is spent.
        retry_count: Total attempts allowed per operation.
    """

    def __init__(self, registry: EndpointRegistry, retry_count: int = 3) -> None:
        if retry_count < 0:
            raise ValueError("retry_count must be >= 0")
        self._registry = registry
        self._retry_count = retry_count

    @property
    def retry_count(self) -> int:
        return self._retry_count

    def should_retry(self, status_code: int, attempt: int, endpoint: Endpoint) -> bool:
        if is_invalid_request_status(status_code):
            return False

        if attempt < self._retry_count:
            return True

        if attempt == self._retry_count and not endpoint.is_default:
            logger.warning(
                "Connecting to endpoint %s failed after %d attempts, marking it unavailable",
                endpoint.name,
                attempt,
                extra={"endpoint": endpoint.name, "attempt": attempt, "status_code": status_code},
            )
            self._registry.quarantine(endpoint)

        return False

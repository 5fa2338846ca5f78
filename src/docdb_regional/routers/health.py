"""Endpoint health and readiness routes for services embedding the client.

- GET /health: endpoint topology and quarantine state
- GET /readiness: 200 when regional routing is usable, 503 when every known
  regional endpoint is quarantined (traffic has collapsed onto the default)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fastapi import APIRouter, Response
from pydantic import BaseModel

if TYPE_CHECKING:
    from docdb_regional.endpoints.registry import EndpointRegistry

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope: { success, data, error, meta }."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None


def _regional(stats: dict) -> list[dict]:
    return stats.get("read", []) + stats.get("write", [])


def create_health_router(*, registry: EndpointRegistry | Any = None) -> APIRouter:
    """Factory that creates the health router bound to an endpoint registry."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Endpoint topology with per-endpoint availability."""
        stats = registry.get_stats() if registry else {}

        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "endpoints": stats,
            },
        ).model_dump()

    @health_router.get("/readiness")
    async def readiness(response: Response) -> dict:
        """Readiness probe.

        A registry with no regional endpoints routes everything to the default
        endpoint by configuration and is ready. Once regions are known, at least
        one of them must be out of quarantine.
        """
        if registry is None:
            response.status_code = 503
            return ApiResponse(
                success=False,
                data={"ready": False, "regional_endpoints": 0, "available_regional_endpoints": 0},
                error="No endpoint registry",
            ).model_dump()

        regional = _regional(registry.get_stats())
        available = sum(1 for ep in regional if not ep["is_unavailable"])
        is_ready = not regional or available > 0

        if not is_ready:
            response.status_code = 503

        return ApiResponse(
            success=is_ready,
            data={
                "ready": is_ready,
                "regional_endpoints": len(regional),
                "available_regional_endpoints": available,
            },
            error=None if is_ready else "All regional endpoints are quarantined",
        ).model_dump()

    return health_router

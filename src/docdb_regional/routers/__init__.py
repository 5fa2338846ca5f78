"""HTTP routers exposing client state."""

from docdb_regional.routers.health import create_health_router

__all__ = ["create_health_router"]

"""Unit tests for the endpoint health router."""

from conftest import DEFAULT_URL, FakeClock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docdb_regional.endpoints.registry import EndpointRegistry
from docdb_regional.endpoints.types import EndpointIntent
from docdb_regional.routers.health import create_health_router


def _app(registry: EndpointRegistry | None) -> TestClient:
    app = FastAPI()
    app.include_router(create_health_router(registry=registry))
    return TestClient(app)


class TestHealth:
    def test_reports_topology(self, registry: EndpointRegistry):
        response = _app(registry).get("/health")
        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert [e["name"] for e in body["data"]["endpoints"]["read"]] == [
            "West Europe",
            "North Europe",
            "East US",
        ]

    def test_reports_quarantine(self, registry: EndpointRegistry):
        registry.quarantine(registry.read_endpoints[0])
        body = _app(registry).get("/health").json()
        assert body["data"]["endpoints"]["unavailable"] == 1
        assert body["data"]["endpoints"]["read"][0]["is_unavailable"] is True


class TestReadiness:
    def test_ready_with_regions_available(self, registry: EndpointRegistry):
        response = _app(registry).get("/readiness")
        assert response.status_code == 200
        assert response.json()["data"] == {
            "ready": True,
            "regional_endpoints": 6,
            "available_regional_endpoints": 6,
        }

    def test_ready_while_some_regions_remain(self, registry: EndpointRegistry):
        registry.quarantine(registry.read_endpoints[0])
        registry.quarantine(registry.write_endpoints[0])
        response = _app(registry).get("/readiness")
        assert response.status_code == 200
        assert response.json()["data"]["available_regional_endpoints"] == 4

    def test_not_ready_when_every_region_quarantined(self, registry: EndpointRegistry):
        for ep in registry.read_endpoints + registry.write_endpoints:
            registry.quarantine(ep)
        response = _app(registry).get("/readiness")
        body = response.json()
        assert response.status_code == 503
        assert body["success"] is False
        assert body["error"] == "All regional endpoints are quarantined"
        assert body["data"]["available_regional_endpoints"] == 0

    def test_ready_again_after_cooldown(self, clock: FakeClock, registry: EndpointRegistry):
        for ep in registry.read_endpoints + registry.write_endpoints:
            registry.quarantine(ep)
        clock.advance(60)
        registry.select(EndpointIntent.READ_ONLY)
        assert _app(registry).get("/readiness").status_code == 200

    def test_default_only_routing_is_ready(self):
        response = _app(EndpointRegistry(DEFAULT_URL)).get("/readiness")
        assert response.status_code == 200
        assert response.json()["data"]["regional_endpoints"] == 0

    def test_not_ready_without_registry(self):
        response = _app(None).get("/readiness")
        assert response.status_code == 503
        assert response.json()["success"] is False
        assert response.json()["error"] == "No endpoint registry"

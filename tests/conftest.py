"""Shared test fixtures and hypothesis strategies for the client test suite."""

from __future__ import annotations

import os
from collections.abc import Iterable

import httpx
import pytest
from hypothesis import strategies as st

from docdb_regional.config.settings import ClientSettings
from docdb_regional.endpoints.health import HealthTracker
from docdb_regional.endpoints.registry import EndpointRegistry
from docdb_regional.endpoints.types import EndpointDescription, EndpointLocation

DEFAULT_URL = "https://account.documents.example.net"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedTransport:
    """Transport replaying a fixed script of responses and transport errors.

    The last item repeats once the script is exhausted.
    """

    def __init__(self, script: Iterable[httpx.Response | Exception]) -> None:
        self._script = list(script)
        self.requests: list[httpx.Request] = []

    def send(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._script)) - 1
        item = self._script[index]
        if isinstance(item, Exception):
            raise item
        return item


def error_response(status_code: int, code: str = "ServiceError", message: str = "boom") -> httpx.Response:
    return httpx.Response(status_code, json={"code": code, "message": message})


def make_description(
    read: list[str],
    write: list[str] | None = None,
) -> EndpointDescription:
    """Build a discovery description from region names."""

    def locations(names: list[str]) -> list[EndpointLocation]:
        return [
            EndpointLocation(name=name, url=f"https://account-{name.lower().replace(' ', '')}.example.net")
            for name in names
        ]

    return EndpointDescription(
        readable_locations=locations(read),
        writable_locations=locations(write if write is not None else read),
    )


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_docdb_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment from leaking into ClientSettings."""
    for key in list(os.environ):
        if key.startswith("DOCDB_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with safe defaults."""
    return ClientSettings(
        endpoint_url=DEFAULT_URL,
        retry_count=3,
        endpoint_unavailable_seconds=60,
    )


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def health_tracker(clock: FakeClock) -> HealthTracker:
    return HealthTracker(clock=clock)


@pytest.fixture
def registry(health_tracker: HealthTracker) -> EndpointRegistry:
    reg = EndpointRegistry(
        DEFAULT_URL,
        endpoint_unavailable_seconds=60,
        use_multiple_write_locations=True,
        health_tracker=health_tracker,
    )
    reg.rediscover(make_description(["West Europe", "North Europe", "East US"]))
    return reg


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

region_names = st.from_regex(r"[A-Z][a-z]{2,8} [A-Z][a-z]{2,8}", fullmatch=True)

region_lists = st.lists(region_names, min_size=1, max_size=8, unique=True)

invalid_request_statuses = st.integers(min_value=400, max_value=413)

retryable_statuses = st.one_of(
    st.just(0),
    st.integers(min_value=300, max_value=399),
    st.integers(min_value=414, max_value=599),
)

retry_counts = st.integers(min_value=0, max_value=10)

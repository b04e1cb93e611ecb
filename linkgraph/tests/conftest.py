"""
Pytest configuration and shared fixtures for LinkGraph tests.
"""

import os

import pytest

# Disable rate limiting before linkgraph.rate_limit is first imported
os.environ.setdefault("LINKGRAPH_RATE_LIMIT_ENABLED", "false")


class FakeLinkSource:
    """In-memory link source recording every fetch."""

    def __init__(self, mapping: dict[str, list[str]], failing: dict[str, Exception] | None = None):
        self.mapping = mapping
        self.failing = failing or {}
        self.calls: list[str] = []

    async def fetch_links(self, topic: str) -> list[str]:
        self.calls.append(topic)
        if topic in self.failing:
            raise self.failing[topic]
        return list(self.mapping.get(topic, []))


@pytest.fixture
def link_source():
    """Factory for FakeLinkSource instances."""

    def _make(mapping, failing=None):
        return FakeLinkSource(mapping, failing)

    return _make


@pytest.fixture
def api_client():
    """Factory for a FastAPI test client backed by the given fetch function."""
    from fastapi.testclient import TestClient

    from linkgraph.clients import get_link_fetcher
    from linkgraph.main import app

    def _make(fetch_links):
        app.dependency_overrides[get_link_fetcher] = lambda: fetch_links
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()


@pytest.fixture
def sample_topic():
    """Sample root topic for testing."""
    return "Albert_Einstein"

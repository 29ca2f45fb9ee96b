"""Pytest-bdd configuration and shared fixtures for client feature tests."""

import pytest


@pytest.fixture
def context():
    """Shared test context for scenario state."""
    return {}


@pytest.fixture(autouse=True)
def _teardown(context):
    """Close whatever a scenario left open."""
    yield
    client = context.get("client")
    if client is not None:
        client.close()
    server = context.get("server")
    if server is not None:
        server.stop()

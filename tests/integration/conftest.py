"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_DOCDB_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_DOCDB_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_DOCDB_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def project_id():
    value = os.environ.get("DOCDB_PROJECT_ID")
    if not value:
        pytest.skip("DOCDB_PROJECT_ID is not set")
    return value


@pytest.fixture
def auth_headers():
    token = os.environ.get("DOCDB_ACCESS_TOKEN")
    return {"Authorization": f"Bearer {token}"} if token else None

"""Root pytest configuration for all tests."""

import logging

import pytest

from src.jira_client.auth import Credentials

# httpx logs every request at INFO; keep test output readable
logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture
def credentials():
    """Jira credentials for tenant 'x'."""
    return Credentials(tenant="x", email="ann@example.com", api_key="key-123")

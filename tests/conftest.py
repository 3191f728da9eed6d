"""
Pytest configuration and shared fixtures for runner client tests.

``src`` and the project root are put on ``sys.path`` by the pytest
``pythonpath`` setting in pyproject.toml.
"""

import pytest

from bitbucket_runners.client import RunnerClient
from tests.mocks import BASE_URL, WORKSPACE_UUID, FakeTransport

# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Programmable transport with no queued outcomes."""
    return FakeTransport()


@pytest.fixture
def runner_client(fake_transport: FakeTransport) -> RunnerClient:
    """RunnerClient wired to the fake transport."""
    return RunnerClient(fake_transport, BASE_URL, WORKSPACE_UUID)


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")

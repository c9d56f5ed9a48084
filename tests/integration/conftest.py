"""Integration test fixtures.

Wire the FastAPI app to test settings and a stubbed inference endpoint
through dependency overrides; no real network or environment needed.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from table_qa.api.dependencies import get_connector, get_settings
from table_qa.main import app


@pytest.fixture
def api_client(test_settings):
    """TestClient with settings overridden; connector left to each test."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def stub_endpoint(make_connector):
    """Install a stubbed inference endpoint for the app.

    Usage:
        def test_something(api_client, stub_endpoint):
            transport = stub_endpoint(lambda request: httpx.Response(200, json={...}))
    """
    def _install(handler):
        connector, transport = make_connector(handler)
        app.dependency_overrides[get_connector] = lambda: connector
        return transport

    return _install


@pytest.fixture
def answering_endpoint(stub_endpoint, valid_answer_data):
    """Stubbed endpoint that always returns the fixture answer."""
    return stub_endpoint(lambda request: httpx.Response(200, json=valid_answer_data))

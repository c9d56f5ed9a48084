"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import inspect
import json
from pathlib import Path
from typing import Any, Callable, Dict

import httpx
import pytest

from table_qa.config import Settings
from table_qa.inference.huggingface_connector import HuggingFaceConnector
from table_qa.models.table import Table

TEST_ENDPOINT_URL = "https://inference.test/models/google/tapas-base-finetuned-wtq"


class RecordingTransport(httpx.AsyncBaseTransport):
    """httpx transport that records every request and delegates to a handler.

    The handler receives the httpx.Request and returns an httpx.Response
    (sync or async), or raises an httpx exception to simulate network failures.
    """

    def __init__(self, handler: Callable[[httpx.Request], Any]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await request.aread()
        result = self.handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings with safe defaults for local testing.

    TABLE_CSV_PATH points at a file that does not exist yet; tests that
    need a dataset write it first (see sample_csv_file).
    """
    return Settings(
        APP_NAME="Table QA Service (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        HUGGINGFACE_TOKEN="hf_test_token",
        HF_INFERENCE_URL=TEST_ENDPOINT_URL,
        INFERENCE_TIMEOUT=5.0,
        TABLE_CSV_PATH=str(tmp_path / "data-series.csv"),
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_csv_text() -> str:
    """The two-row people table used throughout the tests."""
    return "Name,Age\nAlice,30\nBob,25\n"


@pytest.fixture
def sample_table() -> Table:
    """Table equivalent of sample_csv_text."""
    return Table.from_columns({"Name": ["Alice", "Bob"], "Age": ["30", "25"]})


@pytest.fixture
def sample_csv_file(test_settings: Settings, sample_csv_text: str) -> Path:
    """Write sample_csv_text to the configured TABLE_CSV_PATH."""
    path = Path(test_settings.TABLE_CSV_PATH)
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture
def valid_answer_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load valid table-QA response fixture as dict."""
    with open(fixtures_dir / "valid_answer.json") as f:
        return json.load(f)


@pytest.fixture
def make_connector():
    """Factory fixture building a HuggingFaceConnector over a RecordingTransport.

    Usage:
        def test_something(make_connector):
            connector, transport = make_connector(
                lambda request: httpx.Response(200, json={...})
            )
    """
    def _create(
        handler: Callable[[httpx.Request], Any],
        timeout: float = 5.0,
    ) -> tuple[HuggingFaceConnector, RecordingTransport]:
        transport = RecordingTransport(handler)
        connector = HuggingFaceConnector(
            endpoint_url=TEST_ENDPOINT_URL,
            timeout=timeout,
            transport=transport,
        )
        return connector, transport

    return _create

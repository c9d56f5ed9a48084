"""Unit test fixtures (stubs).

Provides a logging setup so structlog output during unit tests goes
through the same processors as production.
"""

import pytest

from table_qa.logging_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def configured_logging():
    """Configure structlog once for the unit test session."""
    configure_logging("DEBUG", "development")

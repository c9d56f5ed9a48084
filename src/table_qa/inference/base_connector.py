"""
Abstract base connector for table-question-answering inference.

Defines the interface that all provider implementations must adhere to.
The service layer depends only on this interface, so the provider can be
swapped without touching the loader or the HTTP layer.
"""

from abc import ABC, abstractmethod

import structlog

from table_qa.models.answer import Answer
from table_qa.models.table import Table


logger = structlog.get_logger(__name__)


class BaseInferenceConnector(ABC):
    """
    Abstract base class for table-QA inference connectors.

    Responsibilities:
    - Reject an empty credential before any network call
    - Serialize the table and query into the provider's wire format
    - Send exactly one request, bounded by a deadline
    - Map the transport/status outcome to typed exceptions
    - Decode the success body into an Answer

    Does NOT handle:
    - CSV parsing (that's TableLoader's job)
    - Retries (callers own retry policy)
    - Reading credentials from the environment (callers pass them in)
    """

    def __init__(self, endpoint_url: str, timeout: float = 30.0):
        """
        Initialize base connector.

        Args:
            endpoint_url: Full URL of the inference endpoint
            timeout: Default deadline in seconds for one call
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.endpoint_url = endpoint_url
        self.timeout = timeout

        logger.info(
            "Initialized inference connector",
            connector_class=self.__class__.__name__,
            endpoint_url=self.endpoint_url,
            timeout=timeout,
        )

    @abstractmethod
    async def answer(
        self,
        table: Table,
        query: str,
        credential: str,
        *,
        timeout: float | None = None,
    ) -> Answer:
        """
        Ask the remote model a question about a table.

        Args:
            table: Table to reason over
            query: Natural-language question
            credential: Bearer token for the provider
            timeout: Deadline in seconds for this call (default: connector timeout)

        Returns:
            Decoded Answer

        Raises:
            MissingCredentialError: Empty credential (no request sent)
            RemoteServiceError: Non-success HTTP status
            TransportError: Network failure
            InferenceTimeoutError: Deadline exceeded
            DecodeError: Success body that does not decode into an Answer
        """
        pass

    async def aclose(self) -> None:
        """
        Close connections and release resources.

        Default implementation does nothing. Subclasses holding a
        connection pool should override it.
        """
        logger.debug("Closing inference connector", connector_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"endpoint_url={self.endpoint_url}, "
            f"timeout={self.timeout}s)"
        )

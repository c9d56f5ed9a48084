"""
Table question answering service.

Wires the TableLoader and an inference connector into the single operation
the HTTP layer needs: table source + query + credential -> Answer.

Every call parses its own Table; nothing is cached between calls, so two
concurrent requests never share mutable state.
"""

from pathlib import Path

import structlog

from table_qa.inference.base_connector import BaseInferenceConnector
from table_qa.loader.csv_loader import TableLoader
from table_qa.models.answer import Answer

logger = structlog.get_logger(__name__)


class InvalidQueryError(ValueError):
    """Raised when the query is empty. No table is loaded and no request sent."""

    def __init__(self, message: str = "Query must be a non-empty string"):
        super().__init__(message)
        self.message = message
        self.details: dict = {}


class TableQAService:
    """
    Stateless façade over table loading and remote inference.

    Errors are not caught here: loader errors (TableLoadError subclasses)
    and connector errors (InferenceError subclasses) reach the caller as-is.
    """

    def __init__(self, loader: TableLoader, connector: BaseInferenceConnector):
        self.loader = loader
        self.connector = connector

    async def ask(
        self,
        table_source_text: str,
        query: str,
        credential: str,
        *,
        timeout: float | None = None,
    ) -> Answer:
        """
        Answer a question about a table given as CSV text.

        Args:
            table_source_text: CSV document with a header row
            query: Natural-language question
            credential: Bearer token for the inference provider
            timeout: Deadline in seconds for the remote call

        Returns:
            Decoded Answer

        Raises:
            InvalidQueryError: Empty query
            TableLoadError: The CSV cannot be turned into a Table
            InferenceError: The remote call failed
        """
        if not query or not query.strip():
            raise InvalidQueryError()

        table = self.loader.load(table_source_text)
        return await self.connector.answer(table, query, credential, timeout=timeout)

    async def ask_file(
        self,
        path: str | Path,
        query: str,
        credential: str,
        *,
        timeout: float | None = None,
    ) -> Answer:
        """
        Answer a question about a CSV file, reading it fresh for this call.

        Raises:
            TableSourceError: The file cannot be read
            (plus everything ask() raises)
        """
        if not query or not query.strip():
            raise InvalidQueryError()

        table = self.loader.load_file(path)
        logger.debug("Loaded table source", path=str(path), rows=table.row_count)
        return await self.connector.answer(table, query, credential, timeout=timeout)

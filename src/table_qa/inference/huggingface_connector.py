"""
Hugging Face Inference API connector for table question answering.

Talks to a hosted TAPAS model using an httpx AsyncClient:
- POST {"table": {...}, "query": "..."} with a bearer token
- One attempt per call, bounded by a deadline
- Typed failures for transport, status and decoding problems
"""

import asyncio
import time
from typing import Optional

import httpx
import structlog

from table_qa.inference.base_connector import BaseInferenceConnector
from table_qa.inference.decoding import decode_answer
from table_qa.inference.exceptions import (
    InferenceError,
    InferenceTimeoutError,
    MissingCredentialError,
    RemoteServiceError,
    TransportError,
    outcome_of,
)
from table_qa.models.answer import Answer, TableQuestion
from table_qa.models.table import Table
from table_qa.monitoring.metrics import inference_latency_seconds, inference_requests_total


logger = structlog.get_logger(__name__)

DEFAULT_ENDPOINT_URL = (
    "https://api-inference.huggingface.co/models/google/tapas-base-finetuned-wtq"
)


class HuggingFaceConnector(BaseInferenceConnector):
    """
    Hugging Face hosted-inference connector using httpx for async HTTP.

    Request:
        POST <endpoint_url>
        Authorization: Bearer <credential>
        Content-Type: application/json
        {"table": {"Name": ["Alice", "Bob"], "Age": ["30", "25"]},
         "query": "What is Alice's age?"}

    Response (200):
        {"answer": "30", "coordinates": [[0, 1]], "cells": ["30"], "aggregator": "NONE"}

    The connector keeps a pooled AsyncClient but no per-call state, so
    one instance can serve concurrent requests.
    """

    def __init__(
        self,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connection_limits: Optional[httpx.Limits] = None,
    ):
        """
        Initialize Hugging Face connector.

        Args:
            endpoint_url: Model inference URL
            timeout: Default deadline in seconds for one call
            transport: Custom httpx transport (tests pass httpx.MockTransport)
            connection_limits: httpx connection pool limits (default: 10 max connections)
        """
        super().__init__(endpoint_url, timeout)

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport
        self._connection_limits = connection_limits

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def answer(
        self,
        table: Table,
        query: str,
        credential: str,
        *,
        timeout: float | None = None,
    ) -> Answer:
        """
        Ask the hosted model one question about a table.

        Cancelling the awaiting task cancels the in-flight request;
        asyncio.CancelledError propagates unchanged.
        """
        if not credential or not credential.strip():
            raise MissingCredentialError("Inference credential is empty")

        deadline = self.timeout if timeout is None else timeout
        if deadline <= 0:
            raise ValueError(f"timeout must be positive, got {deadline}")

        question = TableQuestion(table=table, query=query)

        logger.info(
            "Sending table question",
            columns=len(table),
            rows=table.row_count,
            query_length=len(query),
            timeout=deadline,
        )

        start_time = time.perf_counter()
        try:
            answer = await self._exchange(question, credential, deadline)
        except InferenceError as e:
            outcome = outcome_of(e)
            self._observe(outcome, start_time)
            logger.warning(
                "Table question failed",
                outcome=outcome,
                error_type=type(e).__name__,
                details=e.details,
            )
            raise

        latency = self._observe("success", start_time)
        logger.info(
            "Table question answered",
            aggregator=answer.aggregator.value,
            cells_count=len(answer.cells),
            latency_ms=int(latency * 1000),
        )
        return answer

    async def _exchange(self, question: TableQuestion, credential: str, deadline: float) -> Answer:
        client = await self._get_client()
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }

        try:
            # httpx timeouts are per phase, wait_for bounds the whole exchange
            response = await asyncio.wait_for(
                client.post(
                    self.endpoint_url,
                    json=question.to_wire(),
                    headers=headers,
                    timeout=deadline,
                ),
                timeout=deadline,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise InferenceTimeoutError(
                f"Inference request exceeded {deadline}s deadline",
                cause=e,
                details={"timeout": deadline},
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}", cause=e) from e

        if not response.is_success:
            raise RemoteServiceError(response.status_code, response.reason_phrase)

        return decode_answer(response.content)

    @staticmethod
    def _observe(outcome: str, start_time: float) -> float:
        latency = time.perf_counter() - start_time
        inference_requests_total.labels(outcome=outcome).inc()
        inference_latency_seconds.labels(outcome=outcome).observe(latency)
        return latency

    async def aclose(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Hugging Face connector client")

"""
Unit tests for HuggingFaceConnector with a stubbed transport.

No real network: every request goes through RecordingTransport, which
counts calls and returns canned responses.
"""

import asyncio
import json

import httpx
import pytest

from table_qa.inference.exceptions import (
    DecodeError,
    InferenceTimeoutError,
    MissingCredentialError,
    RemoteServiceError,
    TransportError,
    outcome_of,
)
from table_qa.models.answer import Answer
from table_qa.models.enums import Aggregator


QUERY = "What is Alice's age?"


@pytest.mark.asyncio
async def test_successful_round_trip(make_connector, sample_table, valid_answer_data):
    """Table + query in, exactly the provider's answer out."""
    connector, transport = make_connector(
        lambda request: httpx.Response(200, json=valid_answer_data)
    )

    answer = await connector.answer(sample_table, QUERY, "hf_secret")

    assert answer == Answer(
        answer="30",
        coordinates=[(0, 1)],
        cells=["30"],
        aggregator=Aggregator.NONE,
    )
    assert answer.model_dump(mode="json") == valid_answer_data
    assert transport.call_count == 1
    await connector.aclose()


@pytest.mark.asyncio
async def test_request_wire_format(make_connector, sample_table, valid_answer_data):
    """One POST with bearer auth, JSON content type and the table/query body."""
    connector, transport = make_connector(
        lambda request: httpx.Response(200, json=valid_answer_data)
    )

    await connector.answer(sample_table, QUERY, "hf_secret")

    request = transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == connector.endpoint_url
    assert request.headers["Authorization"] == "Bearer hf_secret"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "table": {"Name": ["Alice", "Bob"], "Age": ["30", "25"]},
        "query": QUERY,
    }
    await connector.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("credential", ["", "   "])
async def test_empty_credential_fails_before_network(make_connector, sample_table, credential):
    """MissingCredentialError and zero transport calls."""
    connector, transport = make_connector(
        lambda request: httpx.Response(200, json={})
    )

    with pytest.raises(MissingCredentialError):
        await connector.answer(sample_table, QUERY, credential)

    assert transport.call_count == 0


@pytest.mark.asyncio
async def test_unauthorized_status_raises_remote_service_error(make_connector, sample_table):
    """401 is a rejection carrying the status code and text."""
    connector, _ = make_connector(
        lambda request: httpx.Response(401, json={"error": "Invalid credentials"})
    )

    with pytest.raises(RemoteServiceError) as exc_info:
        await connector.answer(sample_table, QUERY, "hf_bad")

    assert exc_info.value.status_code == 401
    assert exc_info.value.status_text == "Unauthorized"
    assert outcome_of(exc_info.value) == "rejected"


@pytest.mark.asyncio
async def test_server_error_is_not_retried(make_connector, sample_table):
    """A 503 (model loading) is reported once, never retried."""
    connector, transport = make_connector(
        lambda request: httpx.Response(503, text="Model is currently loading")
    )

    with pytest.raises(RemoteServiceError) as exc_info:
        await connector.answer(sample_table, QUERY, "hf_secret")

    assert exc_info.value.status_code == 503
    assert transport.call_count == 1


@pytest.mark.asyncio
async def test_non_json_success_body_raises_decode_error(make_connector, sample_table):
    """200 with a body that is not JSON."""
    connector, _ = make_connector(
        lambda request: httpx.Response(200, text="definitely not json")
    )

    with pytest.raises(DecodeError) as exc_info:
        await connector.answer(sample_table, QUERY, "hf_secret")

    assert outcome_of(exc_info.value) == "failed"


@pytest.mark.asyncio
async def test_incompatible_success_body_raises_decode_error(make_connector, sample_table):
    """200 with JSON of the wrong shape."""
    connector, _ = make_connector(
        lambda request: httpx.Response(200, json={"answer": 30, "aggregator": "NONE"})
    )

    with pytest.raises(DecodeError):
        await connector.answer(sample_table, QUERY, "hf_secret")


@pytest.mark.asyncio
async def test_connection_refused_raises_transport_error(make_connector, sample_table):
    """Connection failures are wrapped, with the cause kept."""
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    connector, _ = make_connector(refuse)

    with pytest.raises(TransportError) as exc_info:
        await connector.answer(sample_table, QUERY, "hf_secret")

    assert isinstance(exc_info.value.cause, httpx.ConnectError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.details["error_type"] == "ConnectError"
    assert not isinstance(exc_info.value, InferenceTimeoutError)


@pytest.mark.asyncio
async def test_dropped_connection_raises_transport_error(make_connector, sample_table):
    """Mid-response termination."""
    def drop(request):
        raise httpx.RemoteProtocolError("Server disconnected", request=request)

    connector, _ = make_connector(drop)

    with pytest.raises(TransportError):
        await connector.answer(sample_table, QUERY, "hf_secret")


@pytest.mark.asyncio
async def test_slow_endpoint_hits_deadline(make_connector, sample_table, valid_answer_data):
    """A per-call deadline bounds an unresponsive endpoint."""
    async def stall(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=valid_answer_data)

    connector, _ = make_connector(stall)

    with pytest.raises(InferenceTimeoutError) as exc_info:
        await connector.answer(sample_table, QUERY, "hf_secret", timeout=0.05)

    assert exc_info.value.details["timeout"] == 0.05
    assert isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_httpx_timeout_maps_to_inference_timeout(make_connector, sample_table):
    def read_timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    connector, _ = make_connector(read_timeout)

    with pytest.raises(InferenceTimeoutError):
        await connector.answer(sample_table, QUERY, "hf_secret")


@pytest.mark.asyncio
async def test_cancellation_propagates(make_connector, sample_table, valid_answer_data):
    """Cancelling the caller's task cancels the request, no wrapping."""
    started = asyncio.Event()

    async def stall(request):
        started.set()
        await asyncio.sleep(5)
        return httpx.Response(200, json=valid_answer_data)

    connector, _ = make_connector(stall)
    task = asyncio.create_task(connector.answer(sample_table, QUERY, "hf_secret"))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_non_positive_timeout_rejected(make_connector, sample_table):
    connector, transport = make_connector(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ValueError):
        await connector.answer(sample_table, QUERY, "hf_secret", timeout=0)

    assert transport.call_count == 0


@pytest.mark.asyncio
async def test_concurrent_calls_are_independent(make_connector, sample_table):
    """Concurrent questions each get their own answer."""
    def echo(request):
        query = json.loads(request.content)["query"]
        return httpx.Response(200, json={"answer": query, "aggregator": "NONE"})

    connector, transport = make_connector(echo)

    answers = await asyncio.gather(*[
        connector.answer(sample_table, f"question {i}", "hf_secret") for i in range(5)
    ])

    assert [a.answer for a in answers] == [f"question {i}" for i in range(5)]
    assert transport.call_count == 5
    await connector.aclose()


@pytest.mark.asyncio
async def test_context_manager_closes_client(make_connector, sample_table, valid_answer_data):
    connector, _ = make_connector(lambda request: httpx.Response(200, json=valid_answer_data))

    async with connector:
        await connector.answer(sample_table, QUERY, "hf_secret")

    assert connector._client.is_closed


def test_outcome_of_success():
    assert outcome_of(None) == "success"


def test_repr_shows_endpoint_and_timeout(make_connector):
    connector, _ = make_connector(lambda request: httpx.Response(200))

    assert "HuggingFaceConnector" in repr(connector)
    assert "5.0s" in repr(connector)

"""Tests for the HTTP scorer adapter."""

import json
from typing import List, Tuple

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, Request, Response

from credibility_client.domain.errors import TransportError
from credibility_client.domain.models.submission import Submission
from credibility_client.infrastructure.scorer.http_scorer import (
    HttpScorerAdapter,
    HttpScorerConfig,
)

RESULT = {
    "score": 72,
    "level": "credible",
    "breakdown": {
        "sourceScore": 24,
        "citationScore": 20,
        "languageScore": 18,
        "contradictionScore": 10,
    },
    "reasoning": ["Source type: news (score: 0.6)"],
    "confidence": 80,
    "timestamp": "2024-05-01T10:00:00.000Z",
}


def create_response(status_code: int, json_data=None, text: str = None, path: str = "/evaluate") -> Response:
    """Create a Response object with a proper request."""
    request = Request("POST", f"http://test-backend{path}")
    content = (
        json.dumps(json_data).encode() if json_data is not None
        else text.encode() if text is not None
        else b""
    )
    headers = (
        {"content-type": "application/json"} if json_data is not None
        else {"content-type": "text/plain"}
    )
    return Response(
        status_code=status_code,
        headers=headers,
        content=content,
        request=request,
    )


@pytest_asyncio.fixture
async def mock_http_client():
    """Provide an HTTP client whose requests are replaced per test."""
    client = AsyncClient(base_url="http://test-backend")
    yield client
    if not client.is_closed:
        await client.aclose()


@pytest_asyncio.fixture
async def scorer(mock_http_client: AsyncClient) -> HttpScorerAdapter:
    """Create an HTTP scorer with the mock client."""
    adapter = HttpScorerAdapter(HttpScorerConfig(base_url="http://test-backend", cache_ttl=60))
    adapter._client = mock_http_client
    await adapter.initialize()
    return adapter


def record_requests(client: AsyncClient, responses) -> List[Tuple[str, str, dict]]:
    """Replace the client's request method, returning the list of calls made."""
    calls = []

    async def mock_request(method: str, url: str, **kwargs):
        calls.append((method, url, kwargs))
        response = responses(method, url) if callable(responses) else responses
        if isinstance(response, Exception):
            raise response
        return response

    client.request = mock_request
    return calls


@pytest.mark.asyncio
async def test_initialize_keeps_injected_client(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    assert scorer._client is mock_http_client
    assert scorer.is_available
    assert scorer.provider_name == "HTTP"


@pytest.mark.asyncio
async def test_evaluate(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    """Test single evaluation through the response envelope."""
    calls = record_requests(
        mock_http_client,
        create_response(200, json_data={"success": True, "data": RESULT}),
    )
    submission = Submission(content="Test", metadata={"hasCitations": True, "citationCount": 1})

    result = await scorer.evaluate(submission)

    assert result.score == 72
    assert result.breakdown.source_score == 24
    method, url, kwargs = calls[0]
    assert (method, url) == ("POST", "/evaluate")
    assert kwargs["json"]["content"] == "Test"
    assert kwargs["json"]["metadata"]["citationCount"] == 1


@pytest.mark.asyncio
async def test_evaluate_envelope_failure(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(
        mock_http_client,
        create_response(200, json_data={"success": False, "error": "Content is required"}),
    )

    with pytest.raises(TransportError, match="Content is required"):
        await scorer.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_evaluate_http_error(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(mock_http_client, create_response(500, text="Internal error"))

    with pytest.raises(TransportError) as exc_info:
        await scorer.evaluate(Submission(content="Test"))

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_evaluate_connection_error(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(mock_http_client, httpx.ConnectError("Connection refused"))

    with pytest.raises(TransportError):
        await scorer.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_evaluate_invalid_url(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    """Test that a misconfigured backend URL surfaces as a transport failure."""
    record_requests(mock_http_client, httpx.InvalidURL("Invalid port: 'port'"))

    with pytest.raises(TransportError, match="InvalidURL"):
        await scorer.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_evaluate_non_json_response(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(mock_http_client, create_response(200, text="<html>"))

    with pytest.raises(TransportError):
        await scorer.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_evaluate_malformed_result(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(
        mock_http_client,
        create_response(200, json_data={"success": True, "data": {"score": 150}}),
    )

    with pytest.raises(TransportError, match="Malformed evaluation result"):
        await scorer.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_evaluate_batch(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    """Test that all items go out in one request and the report is parsed."""
    report_data = {
        "total": 2,
        "successful": 1,
        "failed": 1,
        "results": [
            {"index": 0, "success": True, "data": RESULT},
            {"index": 1, "success": False, "error": "Scoring failed"},
        ],
    }
    calls = record_requests(
        mock_http_client,
        create_response(200, json_data={"success": True, "data": report_data}),
    )

    report = await scorer.evaluate_batch([Submission(content="A"), Submission(content="B")])

    assert len(calls) == 1
    method, url, kwargs = calls[0]
    assert (method, url) == ("POST", "/evaluate/batch")
    assert [item["content"] for item in kwargs["json"]["items"]] == ["A", "B"]
    assert report.successful == 1
    assert report.results[0].data.score == 72
    assert report.results[1].error == "Scoring failed"


@pytest.mark.asyncio
async def test_test_scenarios_are_cached(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    """Test that canned scenarios are fetched once within the TTL."""
    scenarios = {
        "fake_news_case1": {"content": "Shocking claim", "source": {"type": "social", "reputation": 0.1}},
        "official_case2": {"content": "Budget approved", "source": {"type": "official", "reputation": 0.9}},
    }
    calls = record_requests(
        mock_http_client,
        create_response(200, json_data={"success": True, "data": scenarios}, path="/evaluate/test"),
    )

    first = await scorer.get_test_scenarios()
    second = await scorer.get_test_scenarios()

    assert len(calls) == 1
    assert calls[0][:2] == ("GET", "/evaluate/test")
    assert set(first) == {"fake_news_case1", "official_case2"}
    assert first["fake_news_case1"].source.reputation == 0.1
    assert second == first


@pytest.mark.asyncio
async def test_check_health(scorer: HttpScorerAdapter, mock_http_client: AsyncClient):
    record_requests(
        mock_http_client,
        create_response(200, json_data={"success": True, "data": {"status": "ok"}}, path="/health"),
    )
    assert await scorer.check_health()

    record_requests(
        mock_http_client,
        create_response(200, json_data={"success": False}, path="/health"),
    )
    assert not await scorer.check_health()


@pytest.mark.asyncio
async def test_requests_before_initialize_fail():
    adapter = HttpScorerAdapter()

    assert not adapter.is_available
    with pytest.raises(RuntimeError):
        await adapter.evaluate(Submission(content="Test"))


@pytest.mark.asyncio
async def test_shutdown(scorer: HttpScorerAdapter):
    await scorer.shutdown()

    assert not scorer.is_available
    assert scorer._client is None

"""Tests for the HTTP knowledge repository."""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, Request, Response

from credibility_client.domain.errors import TransportError
from credibility_client.domain.models.knowledge_fact import AddFactsRequest, KnowledgeFact
from credibility_client.infrastructure.knowledge.http_repository import (
    HttpKnowledgeConfig,
    HttpKnowledgeRepository,
)


def create_response(status_code: int, json_data=None, method: str = "GET") -> Response:
    """Create a Response object with a proper request."""
    request = Request(method, "http://test-backend/knowledge/facts")
    content = json.dumps(json_data).encode() if json_data is not None else b""
    headers = {"content-type": "application/json"} if json_data is not None else {}
    return Response(status_code=status_code, headers=headers, content=content, request=request)


@pytest_asyncio.fixture
async def repository():
    """Create a repository with an injected client."""
    repo = HttpKnowledgeRepository(HttpKnowledgeConfig(base_url="http://test-backend"))
    repo._client = AsyncClient(base_url="http://test-backend")
    yield repo
    await repo.shutdown()


def mock_request(repository: HttpKnowledgeRepository, response):
    calls = []

    async def request(method: str, url: str, **kwargs):
        calls.append((method, url, kwargs))
        if isinstance(response, Exception):
            raise response
        return response

    repository._client.request = request
    return calls


@pytest.mark.asyncio
async def test_list_facts(repository: HttpKnowledgeRepository):
    """Test listing facts, including numeric arguments."""
    data = [
        {
            "predicate": "evaluation",
            "arguments": ["Claim", "credible", 72, "Source type: news (score: 0.6)"],
            "comment": "Evaluated at 2024-05-01T10:00:00.000Z",
        },
        {"predicate": "source", "arguments": ["citynews.example"]},
    ]
    calls = mock_request(repository, create_response(200, {"success": True, "data": data}))

    facts = await repository.list_facts()

    assert calls[0][:2] == ("GET", "/knowledge/facts")
    assert len(facts) == 2
    assert facts[0].arguments[2] == "72"
    assert facts[1].comment is None


@pytest.mark.asyncio
async def test_list_facts_without_data(repository: HttpKnowledgeRepository):
    mock_request(repository, create_response(200, {"success": True}))

    assert await repository.list_facts() == []


@pytest.mark.asyncio
async def test_list_facts_malformed(repository: HttpKnowledgeRepository):
    mock_request(repository, create_response(200, {"success": True, "data": [{"arguments": []}]}))

    with pytest.raises(TransportError, match="Malformed knowledge facts"):
        await repository.list_facts()


@pytest.mark.asyncio
async def test_add_facts(repository: HttpKnowledgeRepository):
    """Test the body sent when adding facts."""
    calls = mock_request(repository, create_response(200, {"success": True}, method="POST"))
    request = AddFactsRequest(
        facts=[KnowledgeFact(predicate="evaluation", arguments=["Claim", "credible", "72", "ok"])],
        source="manual",
    )

    await repository.add_facts(request)

    method, url, kwargs = calls[0]
    assert (method, url) == ("POST", "/knowledge/facts")
    assert kwargs["json"] == {
        "facts": [{"predicate": "evaluation", "arguments": ["Claim", "credible", "72", "ok"]}],
        "source": "manual",
    }


@pytest.mark.asyncio
async def test_add_facts_empty_response(repository: HttpKnowledgeRepository):
    mock_request(repository, create_response(204, method="POST"))

    await repository.add_facts(AddFactsRequest(facts=[KnowledgeFact(predicate="p", arguments=["a"])]))


@pytest.mark.asyncio
async def test_add_facts_rejected(repository: HttpKnowledgeRepository):
    mock_request(
        repository,
        create_response(200, {"success": False, "error": "Invalid fact"}, method="POST"),
    )

    with pytest.raises(TransportError, match="Invalid fact"):
        await repository.add_facts(AddFactsRequest(facts=[KnowledgeFact(predicate="p", arguments=["a"])]))


@pytest.mark.asyncio
async def test_connection_failure(repository: HttpKnowledgeRepository):
    mock_request(repository, httpx.ConnectError("Connection refused"))

    with pytest.raises(TransportError):
        await repository.list_facts()


@pytest.mark.asyncio
async def test_lifecycle():
    repo = HttpKnowledgeRepository()
    assert not repo.is_available

    await repo.initialize()
    assert repo.is_available

    await repo.shutdown()
    assert not repo.is_available
    with pytest.raises(RuntimeError):
        await repo.list_facts()

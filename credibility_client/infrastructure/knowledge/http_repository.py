"""HTTP implementation of the knowledge repository port."""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ...domain.errors import TransportError
from ...domain.models.knowledge_fact import AddFactsRequest, KnowledgeFact
from ...domain.ports.knowledge_repository import KnowledgeRepository
from ..config import DEFAULT_API_URL
from ..http_envelope import send, unwrap

logger = logging.getLogger(__name__)

_facts_adapter = TypeAdapter(List[KnowledgeFact])


class HttpKnowledgeConfig(BaseModel):
    """Configuration for the HTTP knowledge repository."""

    base_url: str = Field(default=DEFAULT_API_URL, description="Backend base URL")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds")


class HttpKnowledgeRepository(KnowledgeRepository):
    """Knowledge base reached over the backend's REST API."""

    def __init__(self, config: Optional[HttpKnowledgeConfig] = None):
        self._config = config or HttpKnowledgeConfig()
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Content-Type": "application/json"},
            )

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Knowledge repository not initialized")
        return self._client

    async def add_facts(self, request: AddFactsRequest) -> None:
        """Post facts; only success or failure is reported back."""
        client = self._require_client()
        response = await send(
            client,
            "POST",
            "/knowledge/facts",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        if response.content:
            unwrap(response)

    async def list_facts(self) -> List[KnowledgeFact]:
        """Get every stored fact."""
        client = self._require_client()
        response = await send(client, "GET", "/knowledge/facts")
        try:
            return _facts_adapter.validate_python(unwrap(response) or [])
        except ValidationError as e:
            raise TransportError(f"Malformed knowledge facts: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def is_available(self) -> bool:
        return self._client is not None

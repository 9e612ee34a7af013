"""HTTP implementation of the scorer port."""

import logging
from typing import Dict, List, Optional

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ...domain.errors import TransportError
from ...domain.models.batch_report import BatchReport
from ...domain.models.evaluation_result import EvaluationResult
from ...domain.models.submission import Submission
from ...domain.ports.scorer import Scorer
from ..config import DEFAULT_API_URL
from ..http_envelope import read_envelope, send, unwrap

logger = logging.getLogger(__name__)

_scenarios_adapter = TypeAdapter(Dict[str, Submission])


class HttpScorerConfig(BaseModel):
    """Configuration for the HTTP scorer adapter."""

    base_url: str = Field(default=DEFAULT_API_URL, description="Backend base URL")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds")
    cache_ttl: int = Field(default=300, description="Test scenario cache TTL in seconds")


class HttpScorerAdapter(Scorer):
    """Scorer reached over the backend's REST API."""

    SCENARIOS_CACHE_KEY = "scenarios"

    def __init__(
        self,
        config: Optional[HttpScorerConfig] = None,
        provider_name: str = "HTTP",
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            provider_name: Name of the scorer
        """
        self._config = config or HttpScorerConfig()
        self._name = provider_name
        self._client: Optional[httpx.AsyncClient] = None
        self._initialized = False
        self._cache = TTLCache(maxsize=1, ttl=self._config.cache_ttl)

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Content-Type": "application/json"},
            )
        self._initialized = True
        logger.info(f"🔧 HTTP scorer ready at {self._config.base_url}")

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Scorer not initialized")
        return self._client

    async def evaluate(self, submission: Submission) -> EvaluationResult:
        """Score a single submission."""
        client = self._require_client()
        response = await send(client, "POST", "/evaluate", json=submission.to_payload())
        try:
            return EvaluationResult.model_validate(unwrap(response))
        except ValidationError as e:
            raise TransportError(f"Malformed evaluation result: {e}") from e

    async def get_test_scenarios(self) -> Dict[str, Submission]:
        """Get canned scenarios, cached for ``cache_ttl`` seconds."""
        if self.SCENARIOS_CACHE_KEY in self._cache:
            return dict(self._cache[self.SCENARIOS_CACHE_KEY])

        client = self._require_client()
        response = await send(client, "GET", "/evaluate/test")
        try:
            scenarios = _scenarios_adapter.validate_python(unwrap(response))
        except ValidationError as e:
            raise TransportError(f"Malformed test scenarios: {e}") from e

        self._cache[self.SCENARIOS_CACHE_KEY] = scenarios
        logger.info(f"📋 Loaded {len(scenarios)} test scenarios")
        return dict(scenarios)

    async def evaluate_batch(self, items: List[Submission]) -> BatchReport:
        """Score several submissions in one request."""
        client = self._require_client()
        response = await send(
            client,
            "POST",
            "/evaluate/batch",
            json={"items": [item.to_payload() for item in items]},
        )
        try:
            return BatchReport.model_validate(unwrap(response))
        except ValidationError as e:
            raise TransportError(f"Malformed batch report: {e}") from e

    async def check_health(self) -> bool:
        """Return the backend's ``success`` flag from ``/health``."""
        client = self._require_client()
        response = await send(client, "GET", "/health")
        return bool(read_envelope(response).get("success"))

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False
        self._cache.clear()

    @property
    def provider_name(self) -> str:
        """Get the scorer name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the scorer is ready for requests."""
        return self._initialized and self._client is not None

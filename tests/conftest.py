"""Test configuration and common fixtures."""

from typing import Dict, List, Optional

import pytest

from credibility_client.domain.errors import TransportError
from credibility_client.domain.models.batch_report import BatchItemOutcome, BatchReport
from credibility_client.domain.models.evaluation_result import EvaluationResult
from credibility_client.domain.models.knowledge_fact import AddFactsRequest, KnowledgeFact
from credibility_client.domain.models.submission import Submission
from credibility_client.domain.ports.knowledge_repository import KnowledgeRepository
from credibility_client.domain.ports.scorer import Scorer
from credibility_client.domain.services.history_store import HistoryStore
from credibility_client.infrastructure.storage.memory_storage import InMemoryStorage


def make_result(score: float = 72, level: str = "credible", confidence: float = 80) -> EvaluationResult:
    """Build a scorer result with a fixed breakdown."""
    return EvaluationResult(
        score=score,
        level=level,
        breakdown={
            "sourceScore": 24,
            "citationScore": 20,
            "languageScore": 18,
            "contradictionScore": 10,
        },
        reasoning=["Source type: news (score: 0.6)", "Citations: true (3 found, score: 0.8)"],
        confidence=confidence,
        timestamp="2024-05-01T10:00:00.000Z",
    )


class FakeScorer(Scorer):
    """In-memory scorer recording every call."""

    def __init__(self, result: Optional[EvaluationResult] = None):
        self.result = result or make_result()
        self.batch_report: Optional[BatchReport] = None
        self.scenarios: Dict[str, Submission] = {}
        self.fail = False
        self.alive = True
        self.evaluate_calls: List[Submission] = []
        self.batch_calls: List[List[Submission]] = []
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def evaluate(self, submission: Submission) -> EvaluationResult:
        self.evaluate_calls.append(submission)
        if self.fail:
            raise TransportError("Scorer unreachable")
        return self.result

    async def get_test_scenarios(self) -> Dict[str, Submission]:
        if self.fail:
            raise TransportError("Scorer unreachable")
        return dict(self.scenarios)

    async def evaluate_batch(self, items: List[Submission]) -> BatchReport:
        self.batch_calls.append(list(items))
        if self.fail:
            raise TransportError("Scorer unreachable")
        if self.batch_report is not None:
            return self.batch_report
        return BatchReport.from_outcomes(
            [
                BatchItemOutcome(index=i, success=True, data=self.result)
                for i in range(len(items))
            ]
        )

    async def check_health(self) -> bool:
        if self.fail:
            raise TransportError("Scorer unreachable")
        return self.alive

    async def shutdown(self) -> None:
        self._initialized = False

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def is_available(self) -> bool:
        return self._initialized


class FakeKnowledgeRepository(KnowledgeRepository):
    """In-memory knowledge base."""

    def __init__(self, facts: Optional[List[KnowledgeFact]] = None):
        self.facts: List[KnowledgeFact] = list(facts or [])
        self.requests: List[AddFactsRequest] = []
        self.fail = False

    async def initialize(self) -> None:
        pass

    async def add_facts(self, request: AddFactsRequest) -> None:
        if self.fail:
            raise TransportError("Knowledge base unreachable")
        self.requests.append(request)
        self.facts.extend(request.facts)

    async def list_facts(self) -> List[KnowledgeFact]:
        if self.fail:
            raise TransportError("Knowledge base unreachable")
        return list(self.facts)

    async def shutdown(self) -> None:
        pass


@pytest.fixture
def sample_submission() -> Submission:
    """A valid submission from a news source."""
    return Submission(
        content="The city council approved the new budget on Monday.",
        source={"domain": "citynews.example", "type": "news", "reputation": 0.8},
        metadata={"hasCitations": True, "citationCount": 2},
    )


@pytest.fixture
def sample_result() -> EvaluationResult:
    return make_result()


@pytest.fixture
def scorer() -> FakeScorer:
    return FakeScorer()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def history(storage: InMemoryStorage) -> HistoryStore:
    return HistoryStore(storage)


@pytest.fixture
def knowledge_repository() -> FakeKnowledgeRepository:
    return FakeKnowledgeRepository()


@pytest.fixture
def result_factory():
    """Build scorer results with a chosen score, level and confidence."""
    return make_result


@pytest.fixture
def fake_scorer_class():
    return FakeScorer

"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Optional

from ..domain.ports.history_storage import HistoryStorage
from ..domain.ports.knowledge_repository import KnowledgeRepository
from ..domain.ports.scorer import Scorer
from ..domain.services.batch_orchestrator import BatchOrchestrator
from ..domain.services.evaluation_service import EvaluationService
from ..domain.services.history_store import HistoryStore
from ..domain.services.knowledge_service import KnowledgeService
from .config import ClientConfig
from .knowledge.http_repository import HttpKnowledgeConfig, HttpKnowledgeRepository
from .scorer.factory import ScorerFactory
from .storage.json_file_storage import JsonFileStorage
from .storage.memory_storage import InMemoryStorage

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Holds the client's long-lived context objects.

    Created once per process; the history store and the per-action states
    live here and are passed explicitly to whoever needs them.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        scorer: Optional[Scorer] = None,
        knowledge_repository: Optional[KnowledgeRepository] = None,
        storage: Optional[HistoryStorage] = None,
    ):
        """Initialize service container.

        Args:
            config: Client configuration, read from the environment if omitted
            scorer: Scorer to use instead of the configured HTTP scorer
            knowledge_repository: Repository to use instead of the HTTP one
            storage: History storage to use instead of the configured one
        """
        logger.info("🔧 Setting up service container...")
        self.config = config or ClientConfig.from_env()
        self.scorer_factory = ScorerFactory()

        self._scorer = scorer
        self._knowledge_repository = knowledge_repository or HttpKnowledgeRepository(
            HttpKnowledgeConfig(base_url=self.config.api_url, timeout=self.config.timeout)
        )

        if storage is None:
            storage = (
                JsonFileStorage(self.config.history_dir)
                if self.config.persist_history
                else InMemoryStorage()
            )
        self.history = HistoryStore(storage, max_entries=self.config.history_limit)

        self._evaluation_service: Optional[EvaluationService] = None
        self._batch_orchestrator: Optional[BatchOrchestrator] = None
        self.knowledge_service = KnowledgeService(self._knowledge_repository)
        logger.info("✅ Service container setup completed")

    async def startup(self) -> None:
        """Create and initialize network adapters."""
        if self._scorer is None:
            self._scorer = await self.scorer_factory.create_scorer(
                "http",
                base_url=self.config.api_url,
                timeout=self.config.timeout,
                cache_ttl=self.config.scenario_cache_ttl,
            )
        else:
            await self._scorer.initialize()
        await self._knowledge_repository.initialize()

    async def shutdown(self) -> None:
        """Close network adapters."""
        logger.info("🔄 Shutting down service container...")
        if self._scorer is not None and self.scorer_factory.get_scorer("http") is not self._scorer:
            await self._scorer.shutdown()
        await self.scorer_factory.shutdown()
        await self._knowledge_repository.shutdown()

    @property
    def scorer(self) -> Scorer:
        if self._scorer is None:
            raise RuntimeError("Service container not started")
        return self._scorer

    def get_evaluation_service(self) -> EvaluationService:
        """Get evaluation service."""
        if self._evaluation_service is None:
            self._evaluation_service = EvaluationService(self.scorer, self.history)
        return self._evaluation_service

    def get_batch_orchestrator(self) -> BatchOrchestrator:
        """Get batch orchestrator."""
        if self._batch_orchestrator is None:
            self._batch_orchestrator = BatchOrchestrator(self.scorer, self.history)
        return self._batch_orchestrator

    def get_knowledge_service(self) -> KnowledgeService:
        """Get knowledge service."""
        return self.knowledge_service

    def get_history_store(self) -> HistoryStore:
        """Get history store."""
        return self.history


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance."""
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_evaluation_service() -> EvaluationService:
    """FastAPI dependency for evaluation service."""
    return get_service_container().get_evaluation_service()


def get_batch_orchestrator() -> BatchOrchestrator:
    """FastAPI dependency for batch orchestrator."""
    return get_service_container().get_batch_orchestrator()


def get_knowledge_service() -> KnowledgeService:
    """FastAPI dependency for knowledge service."""
    return get_service_container().get_knowledge_service()


def get_history_store() -> HistoryStore:
    """FastAPI dependency for history store."""
    return get_service_container().get_history_store()

"""Port interface for the shared knowledge base."""

from abc import ABC, abstractmethod
from typing import List

from ..models.knowledge_fact import AddFactsRequest, KnowledgeFact


class KnowledgeRepository(ABC):
    """Abstract interface for knowledge base backends."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the repository and its resources."""
        pass

    @abstractmethod
    async def add_facts(self, request: AddFactsRequest) -> None:
        """Store new facts.

        Args:
            request: Facts plus optional source and expiration
        """
        pass

    @abstractmethod
    async def list_facts(self) -> List[KnowledgeFact]:
        """Get every fact currently stored."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Shutdown the repository and clean up resources."""
        pass

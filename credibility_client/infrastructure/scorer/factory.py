"""Factory for creating and managing scorers."""

from typing import Dict, Optional, Type

from ...domain.ports.scorer import Scorer
from .http_scorer import HttpScorerAdapter, HttpScorerConfig


class ScorerFactory:
    """Registry of scorer implementations and their initialized instances."""

    def __init__(self):
        """Initialize the factory."""
        self._scorers: Dict[str, Type[Scorer]] = {}
        self._instances: Dict[str, Scorer] = {}

        # Register default scorers
        self.register_scorer("http", HttpScorerAdapter)

    def register_scorer(self, name: str, scorer_class: Type[Scorer]) -> None:
        """Register a new scorer implementation.

        Args:
            name: Scorer name
            scorer_class: Scorer class

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._scorers:
            raise ValueError(f"Scorer '{name}' already registered")
        self._scorers[name] = scorer_class

    async def create_scorer(self, name: str, **kwargs) -> Scorer:
        """Create and initialize a scorer, or return the existing instance.

        Args:
            name: Scorer name
            **kwargs: Scorer-specific configuration

        Returns:
            Initialized scorer instance

        Raises:
            ValueError: If scorer not found
        """
        if name not in self._scorers:
            raise ValueError(f"Scorer '{name}' not found")

        if name not in self._instances:
            if name == "http":
                scorer = self._scorers[name](config=HttpScorerConfig(**kwargs))
            else:
                scorer = self._scorers[name](**kwargs)

            await scorer.initialize()
            self._instances[name] = scorer

        return self._instances[name]

    def get_scorer(self, name: str) -> Optional[Scorer]:
        """Get an existing scorer instance, if created."""
        return self._instances.get(name)

    async def shutdown(self) -> None:
        """Shutdown all scorer instances."""
        for scorer in self._instances.values():
            await scorer.shutdown()
        self._instances.clear()

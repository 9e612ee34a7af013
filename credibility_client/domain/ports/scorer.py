"""Port interface for the external credibility scorer."""

from abc import ABC, abstractmethod
from typing import Dict, List

from ..models.batch_report import BatchReport
from ..models.evaluation_result import EvaluationResult
from ..models.submission import Submission


class Scorer(ABC):
    """Abstract interface for credibility scorers.

    The scoring rule engine lives outside this client. Implementations
    translate failures of any kind into ``TransportError``.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the scorer and its resources."""
        pass

    @abstractmethod
    async def evaluate(self, submission: Submission) -> EvaluationResult:
        """Score a single submission.

        Args:
            submission: Validated submission

        Returns:
            Scorer result
        """
        pass

    @abstractmethod
    async def get_test_scenarios(self) -> Dict[str, Submission]:
        """Get canned submissions keyed by scenario name."""
        pass

    @abstractmethod
    async def evaluate_batch(self, items: List[Submission]) -> BatchReport:
        """Score several submissions in one request.

        Args:
            items: Validated submissions, in request order

        Returns:
            Report whose entries refer back to ``items`` by index
        """
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        """Return the scorer's liveness flag."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Shutdown the scorer and clean up resources."""
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the scorer name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the scorer is ready for requests."""
        pass

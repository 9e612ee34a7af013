"""Domain model for multi-item evaluation outcomes."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .evaluation_result import EvaluationResult


class BatchItemOutcome(BaseModel):
    """Outcome of one item in a batch, linked to its input by position."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    index: int = Field(..., description="Position of the originating submission")
    success: bool
    data: Optional[EvaluationResult] = None
    error: Optional[str] = None


class BatchReport(BaseModel):
    """Positional collection of per-item outcomes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total: int
    successful: int
    failed: int
    results: List[BatchItemOutcome] = Field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: List[BatchItemOutcome]) -> "BatchReport":
        """Build a report whose counts are derived from the outcomes."""
        successful = sum(1 for outcome in outcomes if outcome.success)
        return cls(
            total=len(outcomes),
            successful=successful,
            failed=len(outcomes) - successful,
            results=list(outcomes),
        )

    @property
    def is_consistent(self) -> bool:
        """Whether total == successful + failed == len(results)."""
        return self.total == self.successful + self.failed == len(self.results)

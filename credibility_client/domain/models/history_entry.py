"""Domain model for persisted evaluation history."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .evaluation_result import EvaluationResult
from .submission import Submission


class HistoryEntry(BaseModel):
    """A past submission paired with its result, if one was received."""

    model_config = ConfigDict(frozen=True)

    id: str
    input: Submission
    result: Optional[EvaluationResult] = None
    timestamp: str

"""Domain models for knowledge base facts and their decoded form."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

EVALUATION_PREDICATE = "evaluation"


class KnowledgeFact(BaseModel):
    """A predicate/arguments/comment record stored in the knowledge base.

    For ``evaluation`` facts the arguments are, by convention,
    ``[content, level, score, reasoning]`` and the comment may end with
    ``" at <timestamp>"``.
    """

    predicate: str = Field(..., description="Fact predicate, e.g. 'evaluation'")
    arguments: List[str] = Field(default_factory=list, description="Positional arguments")
    comment: Optional[str] = Field(None, description="Free-text comment")

    @field_validator("arguments", mode="before")
    @classmethod
    def stringify_arguments(cls, value):
        """The knowledge base may return numeric arguments; keep them as text."""
        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value]
        return value

    @property
    def is_evaluation(self) -> bool:
        return self.predicate == EVALUATION_PREDICATE


class AddFactsRequest(BaseModel):
    """Body of a request adding facts to the knowledge base."""

    facts: List[KnowledgeFact]
    source: Optional[str] = None
    expiration: Optional[str] = None


class ReasoningPoint(BaseModel):
    """One human-readable reasoning segment."""

    text: str
    score: Optional[int] = None


class DisplayFact(BaseModel):
    """Decoded, displayable form of an evaluation fact."""

    content: str
    level: str
    score: int = Field(..., description="Headline score as an integer percentage")
    reasoning: List[ReasoningPoint] = Field(default_factory=list)
    timestamp: Optional[str] = Field(None, description="Raw timestamp taken from the comment")
    evaluated_at: Optional[datetime] = None

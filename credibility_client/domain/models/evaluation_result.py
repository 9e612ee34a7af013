"""Domain model for scorer responses."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CredibilityLevel(str, Enum):
    """Categorical credibility verdict."""

    SUSPECT = "suspect"
    DOUBTFUL = "doubtful"
    CREDIBLE = "credible"


class ScoreBreakdown(BaseModel):
    """Sub-scores contributing to the overall score."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    source_score: float
    citation_score: float
    language_score: float
    contradiction_score: float


class EvaluationResult(BaseModel):
    """Result produced by the external scorer for one submission."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "score": 72,
                "level": "credible",
                "breakdown": {
                    "sourceScore": 24,
                    "citationScore": 20,
                    "languageScore": 18,
                    "contradictionScore": 10,
                },
                "reasoning": ["Source type: news (score: 0.6)"],
                "confidence": 80,
                "timestamp": "2024-05-01T10:00:00.000Z",
            }
        },
    )

    score: float = Field(..., ge=0, le=100, description="Overall score (0-100)")
    level: CredibilityLevel = Field(..., description="Credibility level")
    breakdown: ScoreBreakdown
    reasoning: List[str] = Field(default_factory=list, description="Reasoning lines")
    confidence: float = Field(..., ge=0, le=100, description="Confidence (0-100)")
    timestamp: str = Field(..., description="ISO-8601 time of evaluation")

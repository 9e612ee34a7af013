"""Domain model for information submitted for credibility evaluation."""

import math
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..errors import SubmissionValidationError


class SourceType(str, Enum):
    """Kinds of publication source."""

    OFFICIAL = "official"
    NEWS = "news"
    BLOG = "blog"
    SOCIAL = "social"
    UNKNOWN = "unknown"


class SourceInfo(BaseModel):
    """Where the information was published."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    url: Optional[str] = Field(None, description="Source URL")
    domain: Optional[str] = Field(None, description="Source domain")
    type: SourceType = Field(default=SourceType.UNKNOWN, description="Kind of source")
    reputation: float = Field(default=0.5, description="Source reputation on a 0-1 scale")

    @field_validator("reputation", mode="before")
    @classmethod
    def clamp_reputation(cls, value):
        """Clamp reputation into [0, 1] instead of rejecting it."""
        try:
            reputation = float(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Reputation must be a number, got {value!r}") from e
        if math.isnan(reputation):
            raise ValueError("Reputation must be a number, got NaN")
        return min(max(reputation, 0.0), 1.0)


class AuthorInfo(BaseModel):
    """Who wrote the information."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: Optional[str] = None
    credentials: Optional[str] = None
    is_anonymous: bool = False
    known_expert: bool = False


class ContentMetadata(BaseModel):
    """Descriptive metadata about the content itself."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    publication_date: Optional[str] = None
    last_modified: Optional[str] = None
    language: str = "en"
    has_emotional_language: bool = False
    has_citations: bool = False
    citation_count: int = 0
    has_references: bool = False
    reference_urls: List[str] = Field(default_factory=list)

    @field_validator("citation_count", mode="before")
    @classmethod
    def clamp_citation_count(cls, value):
        """Negative counts are clamped to zero."""
        try:
            count = int(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Citation count must be a finite number, got {value!r}") from e
        return max(count, 0)


class Submission(BaseModel):
    """A unit of information plus metadata submitted for scoring."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "content": "The city council approved the new budget on Monday.",
                "source": {"domain": "citynews.example", "type": "news", "reputation": 0.8},
                "author": {"name": "J. Doe", "isAnonymous": False, "knownExpert": False},
                "metadata": {
                    "language": "en",
                    "hasEmotionalLanguage": False,
                    "hasCitations": True,
                    "citationCount": 2,
                    "hasReferences": False,
                    "referenceUrls": [],
                },
            }
        },
    )

    content: str = Field(default="", description="The information text to evaluate")
    source: SourceInfo = Field(default_factory=SourceInfo)
    author: AuthorInfo = Field(default_factory=AuthorInfo)
    metadata: ContentMetadata = Field(default_factory=ContentMetadata)

    @classmethod
    def blank(cls) -> "Submission":
        """Empty template used for a fresh form or batch item."""
        return cls()

    def to_payload(self) -> dict:
        """Serialize to the camelCase JSON shape the scorer expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SubmissionValidation(BaseModel):
    """Outcome of validating a submission."""

    valid: bool
    field_errors: Dict[str, str] = Field(default_factory=dict)

    def raise_for_errors(self) -> None:
        """Raise SubmissionValidationError if any rule was violated."""
        if not self.valid:
            raise SubmissionValidationError(
                "Submission is invalid: " + ", ".join(sorted(self.field_errors)),
                self.field_errors,
            )


def validate_submission(submission: Submission) -> SubmissionValidation:
    """Check a submission against every rule and report all violations.

    Args:
        submission: Submission to check

    Returns:
        Validation outcome keyed by camelCase field path
    """
    errors: Dict[str, str] = {}

    if not submission.content.strip():
        errors["content"] = "Content is required"

    metadata = submission.metadata
    if metadata.has_citations and metadata.citation_count <= 0:
        errors["metadata.citationCount"] = (
            "Citation count must be greater than 0 if citations are present"
        )

    if metadata.has_references and not metadata.reference_urls:
        errors["metadata.referenceUrls"] = (
            "Reference URLs are required if references are present"
        )

    return SubmissionValidation(valid=not errors, field_errors=errors)

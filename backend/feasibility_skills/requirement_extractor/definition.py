"""
Requirement Extractor - Data Definitions

Pydantic models for requirements extracted from a free-text problem
statement. Models are frozen: a Requirement never changes after extraction.

Author: POC Feasibility Team
"""

from enum import Enum
from typing import Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def keyword_overlap_ratio(a: Sequence[str], b: Sequence[str]) -> float:
    """Shared keywords relative to the smaller keyword set; 0.0 if either is empty."""
    if not a or not b:
        return 0.0
    shared = len(set(a) & set(b))
    return shared / min(len(set(a)), len(set(b)))


class RequirementCategory(str, Enum):
    """
    Requirement taxonomy.

    The order of the members is the order in which the extraction
    patterns are applied, and breaks ties between clauses found at the
    same position.
    """
    FUNCTIONAL = "functional"
    TECHNICAL = "technical"
    INTEGRATION = "integration"
    PERFORMANCE = "performance"
    SECURITY = "security"


class RequirementPriority(str, Enum):
    """
    Requirement priority, detected from keywords.

    - CRITICAL: must/required/blocker language
    - HIGH: important/key/primary language
    - MEDIUM: should/want/prefer language (also the default)
    - LOW: optional/future language
    """
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Requirement(BaseModel):
    """A single extracted need, tagged with category and priority."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        pattern=r"^REQ-\d+$",
        description="Sequential identifier assigned after deduplication (REQ-1, REQ-2, ...)."
    )

    description: str = Field(
        ...,
        min_length=6,
        max_length=199,
        description="The captured clause, trimmed."
    )

    category: RequirementCategory = Field(
        ...,
        description="functional, technical, integration, performance or security."
    )

    priority: RequirementPriority = Field(
        default=RequirementPriority.MEDIUM,
        description="critical, high, medium or low."
    )

    keywords: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Lower-cased description tokens longer than 3 characters, "
                    "in first-occurrence order without repeats."
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Normalise the description."""
        return v.strip()

    def overlap_ratio(self, other: "Requirement") -> float:
        """Shared keywords relative to the smaller keyword set."""
        return keyword_overlap_ratio(self.keywords, other.keywords)


# Custom Exceptions

class RequirementExtractorError(Exception):
    """Base exception for requirement extraction errors."""
    pass


class InvalidProblemStatementError(RequirementExtractorError, TypeError):
    """The problem statement is not a string."""
    def __init__(self, received: object):
        self.received = received
        super().__init__(
            f"problem_statement must be a string, got {type(received).__name__}"
        )

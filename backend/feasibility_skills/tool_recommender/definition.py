"""
Tool Recommender - Data Definitions

Pydantic models for multi-criteria tool scoring.
Five weighted subscores combine into a 0-100 relevance score.

Author: POC Feasibility Team
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TechStackItem(BaseModel):
    """
    A technology discovered in the current system.

    Name and category are matched case-insensitively against capability
    sections.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Technology name, e.g. 'PostgreSQL' or 'BizTalk Server'."
    )

    category: str = Field(
        default="",
        description="Technology category, e.g. 'database', 'integration', 'language'."
    )

    version: Optional[str] = Field(
        default=None,
        description="Version string if known."
    )

    source: Optional[str] = Field(
        default=None,
        description="File or document the item was discovered in."
    )

    @field_validator("name", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class EcosystemMaturityPriors(BaseModel):
    """
    Per-document ecosystem maturity prior.

    Explicit overrides win; otherwise documents following the user-generated
    naming convention get user_score, everything else default_score.
    """

    overrides: Dict[str, int] = Field(
        default_factory=lambda: {"context_engineering_iq": 85},
        description="Document id -> maturity (0-100) for well-established documents."
    )

    user_prefix: str = Field(
        default="context_user_",
        description="Id prefix of user-generated documents."
    )

    user_score: int = Field(default=60, ge=0, le=100)

    default_score: int = Field(default=70, ge=0, le=100)

    @field_validator("overrides")
    @classmethod
    def clamp_overrides(cls, v: Dict[str, int]) -> Dict[str, int]:
        return {doc_id: max(0, min(100, score)) for doc_id, score in v.items()}

    def for_document(self, document_id: str) -> int:
        if document_id in self.overrides:
            return self.overrides[document_id]
        if self.user_prefix and document_id.startswith(self.user_prefix):
            return self.user_score
        return self.default_score


class ToolSubscores(BaseModel):
    """The five scoring criteria, each 0-100."""

    model_config = ConfigDict(frozen=True)

    technical_fit: int = Field(..., ge=0, le=100, description="Match with the tech stack.")
    migration_complexity: int = Field(..., ge=0, le=100, description="Higher is simpler to adopt.")
    ai_capabilities: int = Field(..., ge=0, le=100, description="AI/ML vocabulary in the section.")
    cost_efficiency: int = Field(..., ge=0, le=100, description="Open source / free vs enterprise / paid.")
    ecosystem_maturity: int = Field(..., ge=0, le=100, description="Per-document maturity prior.")


class ToolRecommendation(BaseModel):
    """A capability section re-scored as a candidate implementation tool."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., description="Source document id.")
    document_name: str = Field(..., description="Source document title.")
    tool_name: str = Field(..., description="Section title without numbering.")
    tool_id: str = Field(..., description="Explicit 'ID:' label or a slug of the title.")
    section_title: str = Field(..., description="Raw section title.")
    purpose: str = Field(..., description="Explicit 'Purpose:' label or a templated fallback.")

    score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Weighted total of the subscores."
    )

    subscores: ToolSubscores = Field(..., description="Individual criteria.")
    reasoning: str = Field(..., description="Templated clauses for the criteria above threshold.")
    use_case: str = Field(..., description="Templated use-case hint from the section title.")

    def to_summary(self) -> str:
        """One-line summary for logs and listings."""
        return f"{self.score:>3}/100 | {self.tool_name} ({self.document_name}) | {self.use_case}"


# Custom Exceptions

class ToolRecommenderError(Exception):
    """Base exception for tool recommender errors."""
    pass


class InvalidTechStackError(ToolRecommenderError, TypeError):
    """The tech stack is not a list of tech-stack items."""
    def __init__(self, received: object, reason: str = ""):
        self.received = received
        self.reason = reason
        message = f"tech_stack must be a list of tech-stack items, got {type(received).__name__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidProblemStatementError(ToolRecommenderError, TypeError):
    """The problem statement is not a string."""
    def __init__(self, received: object):
        self.received = received
        super().__init__(
            f"problem_statement must be a string, got {type(received).__name__}"
        )

"""
Capability Search - Data Definitions

Pydantic models for keyword search over knowledge-base sections.

Author: POC Feasibility Team
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


MAX_EXCERPT_LENGTH = 2000


class SearchInput(BaseModel):
    """
    Input schema for a capability search.

    Keywords are normalised here so every search counts the same way.
    """

    keywords: List[str] = Field(
        default_factory=list,
        description="Terms to count in each section body. Case-insensitive; "
                    "blank and repeated terms are ignored."
    )

    max_results: int = Field(
        default=20,
        ge=1,
        description="Number of sections to return."
    )

    document_ids: Optional[List[str]] = Field(
        default=None,
        description="Optional subset of document ids to scan. None or empty scans all."
    )

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: List[str]) -> List[str]:
        """Lower-case, strip, drop blanks and repeats (first occurrence wins)."""
        cleaned = (k.strip().lower() for k in v)
        return list(dict.fromkeys(k for k in cleaned if k))


class Section(BaseModel):
    """A level-2 section of a knowledge-base document."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Heading text, or leading text for untitled sections.")
    body: str = Field(description="Section text below the heading.")


class Capability(BaseModel):
    """
    A knowledge-base section judged relevant to a keyword query.

    Recomputed on every search; never cached.
    """

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., description="Store identifier of the source document.")

    document_name: str = Field(..., description="Document title (first '# ' heading) or id.")

    section_title: str = Field(..., description="Title of the matching section.")

    body_excerpt: str = Field(
        ...,
        max_length=MAX_EXCERPT_LENGTH,
        description="Section body truncated to 2000 characters."
    )

    match_score: int = Field(
        ...,
        ge=0,
        description="Sum of case-insensitive keyword occurrences in the section body."
    )

    @computed_field
    @property
    def confidence(self) -> int:
        """Match score scaled to 0-100 (10 points per hit)."""
        return min(self.match_score * 10, 100)

    def format_citation(self) -> str:
        """Short citation for reports."""
        return f"[{self.document_name} › {self.section_title}]"


"""
Feasibility Evaluator - Data Definitions

Pydantic models for requirement coverage, gaps and the overall verdict.
Mirrors a traffic-light protocol: YES / PARTIAL / NO.

Author: POC Feasibility Team
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from feasibility_skills.capability_search import Capability
from feasibility_skills.requirement_extractor import Requirement


class Verdict(str, Enum):
    """
    Overall feasibility classification.

    - YES: every requirement is coverable with known capabilities
    - PARTIAL: mixed coverage, gaps identified
    - NO: a critical requirement is uncovered, or nothing is coverable
    """
    YES = "YES"
    PARTIAL = "PARTIAL"
    NO = "NO"


class GapType(str, Enum):
    """How a requirement falls short of the acceptance threshold."""
    MISSING = "missing"
    PARTIAL = "partial"
    ALTERNATIVE = "alternative"


class RequirementCoverage(BaseModel):
    """Capabilities matched for one requirement and the resulting coverage."""

    model_config = ConfigDict(frozen=True)

    requirement: Requirement = Field(..., description="The requirement searched for.")

    capabilities: Tuple[Capability, ...] = Field(
        default_factory=tuple,
        description="Knowledge-base sections matching the requirement keywords."
    )

    coverage: float = Field(
        ...,
        ge=0,
        le=100,
        description="Average capability confidence plus a corroboration bonus (max 30)."
    )


class Gap(BaseModel):
    """A requirement whose coverage falls below the acceptance threshold."""

    model_config = ConfigDict(frozen=True)

    requirement: Requirement
    gap_type: GapType
    description: str
    suggestion: str = Field(..., description="Per-category remediation hint.")


class FeasibilityResult(BaseModel):
    """
    Full feasibility analysis.

    Contains the verdict, score, per-requirement coverage, gaps and
    recommendations.
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict = Field(..., description="YES, PARTIAL or NO.")

    score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Priority-weighted mean coverage (0-100)."
    )

    summary: str = Field(..., description="Templated one-sentence summary.")

    requirements: Tuple[Requirement, ...] = Field(default_factory=tuple)

    matched_capabilities: Tuple[RequirementCoverage, ...] = Field(default_factory=tuple)

    gaps: Tuple[Gap, ...] = Field(default_factory=tuple)

    recommendations: Tuple[str, ...] = Field(default_factory=tuple)

    def get_traffic_light(self) -> str:
        """Traffic-light emoji for the verdict."""
        return {
            Verdict.YES: "🟢",
            Verdict.PARTIAL: "🟡",
            Verdict.NO: "🔴",
        }[self.verdict]

    def to_summary(self) -> str:
        """One-line executive summary."""
        return (
            f"{self.get_traffic_light()} Score: {self.score}/100 | "
            f"Verdict: {self.verdict.value} | "
            f"Requirements: {len(self.requirements)} | "
            f"Gaps: {len(self.gaps)}"
        )

    def to_report(self) -> str:
        """Markdown report of the analysis."""
        lines = [
            "## Feasibility Analysis",
            "",
            f"**Score**: {self.score}/100 {self.get_traffic_light()}",
            f"**Verdict**: {self.verdict.value}",
            f"**Summary**: {self.summary}",
            "",
        ]

        if self.matched_capabilities:
            lines.append("### Requirement Coverage")
            lines.append("")
            lines.append("| ID | Requirement | Category | Priority | Coverage | Sources |")
            lines.append("|----|-------------|----------|----------|----------|---------|")
            for match in self.matched_capabilities:
                req = match.requirement
                sources = ", ".join(
                    dict.fromkeys(c.document_name for c in match.capabilities)
                ) or "-"
                lines.append(
                    f"| {req.id} | {req.description} | {req.category.value} | "
                    f"{req.priority.value} | {match.coverage:.0f}% | {sources} |"
                )
            lines.append("")

        if self.gaps:
            lines.append("### Gaps")
            lines.append("")
            for gap in self.gaps:
                lines.append(
                    f"- **{gap.requirement.id}** ({gap.gap_type.value}): "
                    f"{gap.description} → {gap.suggestion}"
                )
            lines.append("")

        if self.recommendations:
            lines.append("### Recommendations")
            lines.append("")
            for recommendation in self.recommendations:
                lines.append(f"- {recommendation}")

        return "\n".join(lines)


class QuickCheckResult(BaseModel):
    """Verdict, score and summary without the detailed breakdown."""

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    score: int = Field(..., ge=0, le=100)
    summary: str


# Custom Exceptions

class FeasibilityEvaluatorError(Exception):
    """Base exception for feasibility evaluation errors."""
    pass


class InvalidEvaluationInputError(FeasibilityEvaluatorError, TypeError):
    """An evaluation argument has the wrong type."""
    def __init__(self, argument: str, expected: str, received: object):
        self.argument = argument
        self.expected = expected
        self.received = received
        super().__init__(
            f"{argument} must be {expected}, got {type(received).__name__}"
        )

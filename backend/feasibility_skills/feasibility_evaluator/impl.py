"""
Feasibility Evaluator - Implementation

Deterministic feasibility verdict with:
- Requirement extraction from the problem statement
- Per-requirement capability search and coverage
- Gap detection with per-category suggestions
- Priority-weighted overall score
- Kill switch for uncovered critical requirements

Author: POC Feasibility Team
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from feasibility_skills.requirement_extractor import (
    Requirement,
    RequirementCategory,
    RequirementExtractor,
    RequirementPriority,
)

from .definition import (
    FeasibilityResult,
    Gap,
    GapType,
    InvalidEvaluationInputError,
    QuickCheckResult,
    RequirementCoverage,
    Verdict,
)

logger = logging.getLogger(__name__)


PRIORITY_WEIGHTS: Dict[RequirementPriority, float] = {
    RequirementPriority.CRITICAL: 3.0,
    RequirementPriority.HIGH: 2.0,
    RequirementPriority.MEDIUM: 1.0,
    RequirementPriority.LOW: 0.5,
}

# Coverage below this is a gap
GAP_THRESHOLD = 50.0
# Coverage at or above this marks a prioritisation hint
HIGH_COVERAGE_THRESHOLD = 80.0

# Verdict thresholds
THRESHOLD_YES = 70
THRESHOLD_PARTIAL = 50

# Corroboration bonus: 10 per capability, capped
CAPABILITY_BONUS = 10
MAX_CAPABILITY_BONUS = 30

DEFAULT_REQUIREMENT_SEARCH_LIMIT = 5

GAP_SUGGESTIONS: Dict[RequirementCategory, str] = {
    RequirementCategory.FUNCTIONAL: "Consider custom development or evaluate third-party solutions",
    RequirementCategory.TECHNICAL: "Review alternative technologies or frameworks that provide this capability",
    RequirementCategory.INTEGRATION: "Look for middleware or iPaaS solutions that support this integration",
    RequirementCategory.PERFORMANCE: "Consider architecture optimizations or specialized performance tools",
    RequirementCategory.SECURITY: "Evaluate security-focused tools or consult with security specialists",
}
DEFAULT_GAP_SUGGESTION = "Research alternative solutions or consider custom implementation"

FALLBACK_RECOMMENDATIONS = (
    "Proceed with POC using available tools",
    "Monitor progress and adjust approach as needed",
)


def calculate_coverage(capabilities: Sequence[Any]) -> float:
    """Average confidence plus a capped corroboration bonus, at most 100."""
    if not capabilities:
        return 0.0
    average = sum(c.confidence for c in capabilities) / len(capabilities)
    bonus = min(len(capabilities) * CAPABILITY_BONUS, MAX_CAPABILITY_BONUS)
    return max(0.0, min(average + bonus, 100.0))


def calculate_overall_score(matches: Sequence[RequirementCoverage]) -> int:
    """Priority-weighted mean coverage, rounded half up. 0 without requirements."""
    if not matches:
        return 0

    weighted_sum = 0.0
    total_weight = 0.0
    for match in matches:
        weight = PRIORITY_WEIGHTS[match.requirement.priority]
        weighted_sum += match.coverage * weight
        total_weight += weight

    return max(0, min(100, int(weighted_sum / total_weight + 0.5)))


def determine_verdict(
    score: float,
    gaps: Sequence[Gap],
    requirement_count: int,
) -> Verdict:
    """
    Verdict from score, gaps and priorities, checked in order:

    1. any missing critical requirement -> NO
    2. score >= 70 and no gaps -> YES
    3. score >= 50 or missing gaps under half the requirements -> PARTIAL
    4. otherwise NO
    """
    if any(
        g.requirement.priority == RequirementPriority.CRITICAL and g.gap_type == GapType.MISSING
        for g in gaps
    ):
        return Verdict.NO

    if score >= THRESHOLD_YES and not gaps:
        return Verdict.YES

    missing = sum(1 for g in gaps if g.gap_type == GapType.MISSING)
    if score >= THRESHOLD_PARTIAL or missing < requirement_count / 2:
        return Verdict.PARTIAL

    return Verdict.NO


def generate_summary(
    verdict: Verdict,
    score: int,
    requirement_count: int,
    gap_count: int,
) -> str:
    if requirement_count == 0:
        return (
            f"Feasibility Score: {score}/100. No requirements could be identified "
            f"in the problem statement, so feasibility could not be assessed. "
            f"Describe what the POC needs to do and try again."
        )

    if verdict == Verdict.YES:
        return (
            f"Feasibility Score: {score}/100. All {requirement_count} identified "
            f"requirements can be addressed with available tools and frameworks."
        )

    if verdict == Verdict.PARTIAL:
        return (
            f"Feasibility Score: {score}/100. {requirement_count - gap_count} of "
            f"{requirement_count} requirements can be fully addressed. {gap_count} "
            f"gap(s) identified that may require additional tools or custom development."
        )

    return (
        f"Feasibility Score: {score}/100. Significant gaps identified. {gap_count} "
        f"of {requirement_count} requirements cannot be met with available tools. "
        f"Consider alternative approaches or custom development."
    )


def generate_recommendations(
    gaps: Sequence[Gap],
    matches: Sequence[RequirementCoverage],
) -> List[str]:
    recommendations: List[str] = []

    if gaps:
        recommendations.append(
            f"Address {len(gaps)} identified gap(s) before proceeding with full implementation"
        )
        missing = sum(1 for g in gaps if g.gap_type == GapType.MISSING)
        if missing:
            recommendations.append(
                f"{missing} requirement(s) need custom solutions or alternative tools"
            )

    high_coverage = [m for m in matches if m.coverage >= HIGH_COVERAGE_THRESHOLD]
    if high_coverage:
        names = dict.fromkeys(
            c.document_name for m in high_coverage for c in m.capabilities
        )
        recommendations.append(f"Prioritize tools from: {', '.join(names)}")

    if not recommendations:
        recommendations.extend(FALLBACK_RECOMMENDATIONS)

    return recommendations


class FeasibilityEvaluator:
    """
    Deterministic feasibility evaluator.

    Extracts requirements, searches the knowledge base for each one and
    turns coverage into a YES / PARTIAL / NO verdict.

    Usage:
        evaluator = FeasibilityEvaluator(search_index=index)
        result = await evaluator.evaluate(
            "We must migrate our legacy mainframe system",
            allowed_documents=["context_engineering_iq"],
        )

        print(result.to_summary())
        for gap in result.gaps:
            print(f"{gap.requirement.id}: {gap.suggestion}")

    Raises:
        InvalidEvaluationInputError: If arguments have the wrong type
    """

    def __init__(
        self,
        extractor: Optional[RequirementExtractor] = None,
        search_index=None,
        search_limit: int = DEFAULT_REQUIREMENT_SEARCH_LIMIT,
    ):
        """
        Initialize the evaluator.

        Args:
            extractor: Requirement extractor (default settings if None).
            search_index: CapabilitySearchIndex. If None, one is built on
                          the container's store.
            search_limit: Capabilities searched per requirement.
        """
        self.extractor = extractor or RequirementExtractor()
        self._search_index = search_index
        self.search_limit = search_limit

    @property
    def search_index(self):
        if self._search_index is None:
            from feasibility_skills.capability_search import CapabilitySearchIndex
            self._search_index = CapabilitySearchIndex()
        return self._search_index

    async def evaluate(
        self,
        problem_statement: str,
        tech_stack: Sequence[str] = (),
        allowed_documents: Sequence[str] = (),
    ) -> FeasibilityResult:
        """
        Evaluate how well the stated requirements are covered.

        Args:
            problem_statement: Free-text problem description.
            tech_stack: Names of technologies in use (validated and logged).
            allowed_documents: Restrict the search to these document ids.
                               Empty means all documents.

        Returns:
            FeasibilityResult with verdict, score, coverage and gaps.

        Raises:
            InvalidEvaluationInputError: If an argument has the wrong type.
        """
        self._validate(problem_statement, tech_stack, allowed_documents)

        logger.info(
            f"Starting feasibility analysis: statement={len(problem_statement)} chars, "
            f"tech_stack={len(tech_stack)}, allowed_documents={len(allowed_documents)}"
        )

        requirements = self.extractor.extract(problem_statement)
        document_ids = list(allowed_documents) or None

        matches: List[RequirementCoverage] = []
        gaps: List[Gap] = []

        for requirement in requirements:
            capabilities = await self.search_index.search(
                requirement.keywords,
                max_results=self.search_limit,
                document_ids=document_ids,
            )
            coverage = calculate_coverage(capabilities)
            matches.append(RequirementCoverage(
                requirement=requirement,
                capabilities=tuple(capabilities),
                coverage=coverage,
            ))

            if coverage < GAP_THRESHOLD:
                gaps.append(self._build_gap(requirement, coverage))

        score = calculate_overall_score(matches)
        verdict = determine_verdict(score, gaps, len(requirements))

        result = FeasibilityResult(
            verdict=verdict,
            score=score,
            summary=generate_summary(verdict, score, len(requirements), len(gaps)),
            requirements=tuple(requirements),
            matched_capabilities=tuple(matches),
            gaps=tuple(gaps),
            recommendations=tuple(generate_recommendations(gaps, matches)),
        )

        logger.info(
            f"Feasibility analysis completed: verdict={verdict.value}, score={score}, "
            f"requirements={len(requirements)}, gaps={len(gaps)}"
        )
        return result

    async def quick_check(self, problem_statement: str) -> QuickCheckResult:
        """Same pipeline without tech stack or document restriction; verdict only."""
        result = await self.evaluate(problem_statement)
        return QuickCheckResult(
            verdict=result.verdict,
            score=result.score,
            summary=result.summary,
        )

    def _build_gap(self, requirement: Requirement, coverage: float) -> Gap:
        return Gap(
            requirement=requirement,
            gap_type=GapType.MISSING if coverage == 0 else GapType.PARTIAL,
            description=f'No tools found to fully address: "{requirement.description}"',
            suggestion=GAP_SUGGESTIONS.get(requirement.category, DEFAULT_GAP_SUGGESTION),
        )

    def _validate(
        self,
        problem_statement: Any,
        tech_stack: Any,
        allowed_documents: Any,
    ) -> None:
        if not isinstance(problem_statement, str):
            raise InvalidEvaluationInputError("problem_statement", "a string", problem_statement)

        for name, value in (("tech_stack", tech_stack), ("allowed_documents", allowed_documents)):
            if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
                raise InvalidEvaluationInputError(name, "a list of strings", value)
            if not all(isinstance(item, str) for item in value):
                raise InvalidEvaluationInputError(name, "a list of strings", value)


# Convenience functions
async def evaluate_feasibility(
    problem_statement: str,
    tech_stack: Sequence[str] = (),
    allowed_documents: Sequence[str] = (),
    document_store=None,
) -> FeasibilityResult:
    """
    Evaluate feasibility with default settings.

    Convenience function for simple use cases.
    """
    from feasibility_skills.capability_search import CapabilitySearchIndex

    evaluator = FeasibilityEvaluator(search_index=CapabilitySearchIndex(document_store))
    return await evaluator.evaluate(problem_statement, tech_stack, allowed_documents)


async def quick_feasibility_check(
    problem_statement: str,
    document_store=None,
) -> QuickCheckResult:
    """Quick verdict with default settings."""
    from feasibility_skills.capability_search import CapabilitySearchIndex

    evaluator = FeasibilityEvaluator(search_index=CapabilitySearchIndex(document_store))
    return await evaluator.quick_check(problem_statement)

"""
Tool Recommender - Implementation

Deterministic multi-criteria tool scoring with:
- Keyword extraction from tech stack and problem statement
- Five weighted subscores (fit, migration, AI, cost, maturity)
- Tool name / id / purpose lookup from section markup
- Templated reasoning and use-case hints

Author: POC Feasibility Team
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .definition import (
    EcosystemMaturityPriors,
    InvalidProblemStatementError,
    InvalidTechStackError,
    TechStackItem,
    ToolRecommendation,
    ToolSubscores,
)

logger = logging.getLogger(__name__)


# Weights in percent, sum to 100
SCORING_WEIGHTS: Dict[str, int] = {
    "technical_fit": 30,
    "migration_complexity": 25,
    "ai_capabilities": 25,
    "cost_efficiency": 10,
    "ecosystem_maturity": 10,
}

AI_KEYWORDS = (
    "ai", "ml", "machine learning", "deep learning", "neural",
    "nlp", "natural language", "cognitive", "intelligent",
    "prediction", "classification", "embedding", "vector",
    "llm", "gpt", "claude", "transformer", "model",
)

COMPLEXITY_KEYWORDS = (
    "legacy", "migration", "refactor", "rewrite", "overhaul",
    "deprecated", "obsolete", "mainframe", "cobol",
    "monolith", "tightly coupled", "spaghetti",
)

STOP_WORDS = frozenset({
    "that", "this", "with", "from", "have", "been",
    "were", "will", "would", "could", "should",
})

BOOTSTRAP_KEYWORDS = ("analysis", "migration", "integration")

MAX_KEYWORDS = 20
DEFAULT_SEARCH_LIMIT = 20
DEFAULT_MAX_RECOMMENDATIONS = 10

# Subscore points
NAME_MATCH_POINTS = 20
CATEGORY_MATCH_POINTS = 10
AI_KEYWORD_POINTS = 15

# Reasoning thresholds and clauses, in output order
REASONING_RULES = (
    ("technical_fit", 60, "Strong match with your tech stack"),
    ("ai_capabilities", 50, "Provides AI/ML capabilities"),
    ("migration_complexity", 70, "Low migration complexity"),
    ("cost_efficiency", 70, "Cost-effective solution"),
    ("ecosystem_maturity", 80, "Mature and well-documented"),
)
FALLBACK_REASONING = "Potentially useful for your POC."

USE_CASE_RULES = (
    (("analyzer", "analysis"), "Use during the analysis phase to understand your current architecture"),
    (("migration", "converter"), "Use for migrating or converting existing code/data"),
    (("test", "qa"), "Use to validate and test your migration"),
    (("generator", "report"), "Use to generate documentation and reports"),
    (("helper", "utility"), "Use as a supporting tool during POC development"),
)
FALLBACK_USE_CASE = "Use as part of your POC implementation"

_PUNCTUATION = re.compile(r"[^\w\s]")
_LEADING_NUMBER = re.compile(r"^\d+\.\s*")
_TOOL_ID = re.compile(
    r"^[\s>*-]*\**(?:agent\s+|tool\s+)?id\**\s*:\s*\**\s*`?([^`\n*]+?)`?\s*\**\s*$",
    re.IGNORECASE | re.MULTILINE,
)
_PURPOSE = re.compile(
    r"^[\s>*-]*\**purpose\**\s*:\s*\**\s*(.+?)\s*$",
    re.IGNORECASE | re.MULTILINE,
)


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def _round_half_up(hundredths: int) -> int:
    """Integer division by 100, rounding .5 up."""
    return (hundredths + 50) // 100


def _normalize_tech_stack(tech_stack: Any) -> List[TechStackItem]:
    if tech_stack is None:
        return []
    if isinstance(tech_stack, (str, bytes)) or not isinstance(tech_stack, (list, tuple)):
        raise InvalidTechStackError(tech_stack)

    items: List[TechStackItem] = []
    for entry in tech_stack:
        if isinstance(entry, TechStackItem):
            items.append(entry)
        elif isinstance(entry, Mapping):
            items.append(TechStackItem(**entry))
        else:
            raise InvalidTechStackError(
                tech_stack, f"unsupported item of type {type(entry).__name__}"
            )
    return items


def extract_search_keywords(
    tech_stack: Sequence[TechStackItem],
    problem_statement: str,
    limit: int = MAX_KEYWORDS,
) -> List[str]:
    """
    Build the search keyword set.

    Tech-stack names and categories first, then significant problem
    statement words, then the bootstrap terms; capped at `limit`.
    """
    keywords: Dict[str, None] = {}

    for item in tech_stack:
        for value in (item.name, item.category):
            if value:
                keywords[value.lower()] = None

    words = _PUNCTUATION.sub(" ", problem_statement.lower()).split()
    for word in words:
        if len(word) > 3 and word not in STOP_WORDS:
            keywords[word] = None

    for term in BOOTSTRAP_KEYWORDS:
        keywords[term] = None

    return list(keywords)[:limit]


class ToolRecommender:
    """
    Multi-criteria tool recommender.

    Searches the knowledge base with keywords derived from the tech stack
    and problem statement, then scores every hit on five criteria.

    Usage:
        recommender = ToolRecommender(search_index)
        tools = await recommender.recommend(
            [TechStackItem(name="PostgreSQL", category="database")],
            "Migrate the legacy reporting database",
        )

        for tool in tools:
            print(tool.to_summary())

    Raises:
        InvalidTechStackError: If tech_stack is not a list of items
        InvalidProblemStatementError: If problem_statement is not a string
    """

    def __init__(
        self,
        search_index=None,
        maturity_priors: Optional[EcosystemMaturityPriors] = None,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ):
        """
        Initialize the recommender.

        Args:
            search_index: CapabilitySearchIndex used to find candidates.
                          If None, one is built on the container's store.
            maturity_priors: Ecosystem maturity lookup.
            search_limit: Number of candidate sections to score.
        """
        self._search_index = search_index
        self.maturity_priors = maturity_priors or EcosystemMaturityPriors()
        self.search_limit = search_limit

    @property
    def search_index(self):
        if self._search_index is None:
            from feasibility_skills.capability_search import CapabilitySearchIndex
            self._search_index = CapabilitySearchIndex()
        return self._search_index

    async def recommend(
        self,
        tech_stack: Sequence[Any],
        problem_statement: str,
        max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    ) -> List[ToolRecommendation]:
        """
        Recommend tools for a tech stack and problem statement.

        Args:
            tech_stack: TechStackItem instances or mappings with name/category.
            problem_statement: Free-text description of the problem.
            max_recommendations: Number of recommendations to return.

        Returns:
            Recommendations sorted by score, highest first. Empty if the
            knowledge base has no matching section.
        """
        if not isinstance(problem_statement, str):
            raise InvalidProblemStatementError(problem_statement)
        if max_recommendations < 1:
            raise ValueError("max_recommendations must be at least 1")

        items = _normalize_tech_stack(tech_stack)
        keywords = extract_search_keywords(items, problem_statement)

        logger.info(
            f"Recommending tools: {len(items)} tech-stack item(s), "
            f"{len(keywords)} keyword(s)"
        )
        logger.debug(f"Search keywords: {keywords}")

        capabilities = await self.search_index.search(keywords, max_results=self.search_limit)
        if not capabilities:
            logger.info("No matching tools found in the knowledge base")
            return []

        recommendations = [
            self._build_recommendation(capability, items, problem_statement)
            for capability in capabilities
        ]

        recommendations.sort(key=lambda r: r.score, reverse=True)
        top = recommendations[:max_recommendations]

        logger.info(
            f"Tool recommendations generated: {len(recommendations)} scored, "
            f"{len(top)} returned, top score {top[0].score}"
        )
        return top

    async def quick_recommendations(
        self,
        problem_statement: str,
        max_results: int = 5,
    ) -> List[ToolRecommendation]:
        """Recommendations from the problem statement alone (empty tech stack)."""
        return await self.recommend([], problem_statement, max_results)

    def score(
        self,
        capability,
        tech_stack: Sequence[TechStackItem],
        problem_statement: str,
    ) -> ToolSubscores:
        """Compute the five subscores for one capability section."""
        content = capability.body_excerpt.lower()
        problem = problem_statement.lower()

        technical_fit = 0
        for item in tech_stack:
            if item.name and item.name.lower() in content:
                technical_fit += NAME_MATCH_POINTS
            if item.category and item.category.lower() in content:
                technical_fit += CATEGORY_MATCH_POINTS

        # Complex problems favour tools that describe themselves as simple
        if any(keyword in problem for keyword in COMPLEXITY_KEYWORDS):
            migration_complexity = 80 if ("simple" in content or "easy" in content) else 50
        else:
            migration_complexity = 70

        ai_hits = sum(1 for keyword in AI_KEYWORDS if keyword in content)

        if "open source" in content or "free" in content:
            cost_efficiency = 90
        elif "enterprise" in content or "paid" in content:
            cost_efficiency = 40
        else:
            cost_efficiency = 50

        return ToolSubscores(
            technical_fit=_clamp(technical_fit),
            migration_complexity=_clamp(migration_complexity),
            ai_capabilities=_clamp(ai_hits * AI_KEYWORD_POINTS),
            cost_efficiency=_clamp(cost_efficiency),
            ecosystem_maturity=_clamp(self.maturity_priors.for_document(capability.document_id)),
        )

    def _build_recommendation(
        self,
        capability,
        tech_stack: Sequence[TechStackItem],
        problem_statement: str,
    ) -> ToolRecommendation:
        subscores = self.score(capability, tech_stack, problem_statement)
        tool_name, tool_id, purpose = extract_tool_info(
            capability.section_title, capability.body_excerpt
        )
        return ToolRecommendation(
            document_id=capability.document_id,
            document_name=capability.document_name,
            tool_name=tool_name,
            tool_id=tool_id,
            section_title=capability.section_title,
            purpose=purpose,
            score=weighted_total(subscores),
            subscores=subscores,
            reasoning=generate_reasoning(subscores),
            use_case=generate_use_case(capability.section_title),
        )


def weighted_total(subscores: ToolSubscores) -> int:
    """Weighted sum of the subscores, rounded half up."""
    hundredths = sum(
        getattr(subscores, name) * weight for name, weight in SCORING_WEIGHTS.items()
    )
    return _clamp(_round_half_up(hundredths))


def extract_tool_info(section_title: str, content: str) -> tuple:
    """Return (tool_name, tool_id, purpose) for a section."""
    name = _LEADING_NUMBER.sub("", section_title).strip() or section_title.strip()

    id_match = _TOOL_ID.search(content)
    tool_id = id_match.group(1).strip() if id_match else re.sub(r"\s+", "_", name.lower())

    purpose_match = _PURPOSE.search(content)
    purpose = purpose_match.group(1).strip() if purpose_match else f"Tool for {name}"

    return name, tool_id, purpose


def generate_reasoning(subscores: ToolSubscores) -> str:
    reasons = [
        clause
        for field, threshold, clause in REASONING_RULES
        if getattr(subscores, field) >= threshold
    ]
    if not reasons:
        return FALLBACK_REASONING
    return ". ".join(reasons) + "."


def generate_use_case(section_title: str) -> str:
    title = section_title.lower()
    for markers, use_case in USE_CASE_RULES:
        if any(marker in title for marker in markers):
            return use_case
    return FALLBACK_USE_CASE


# Convenience function
async def recommend_tools(
    tech_stack: Sequence[Any],
    problem_statement: str,
    max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    document_store=None,
) -> List[ToolRecommendation]:
    """
    Recommend tools with default settings.

    Convenience function for simple use cases.
    """
    from feasibility_skills.capability_search import CapabilitySearchIndex

    recommender = ToolRecommender(CapabilitySearchIndex(document_store))
    return await recommender.recommend(tech_stack, problem_statement, max_recommendations)

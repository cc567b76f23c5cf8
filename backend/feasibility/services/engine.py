from typing import Any, List, Optional, Sequence

from feasibility.core.config import Settings, get_settings
from feasibility.core.logging import EngineLogger, get_logger
from feasibility.services.document_store import DocumentStore, filter_user_documents
from feasibility_skills.capability_search import Capability, CapabilitySearchIndex
from feasibility_skills.feasibility_evaluator import (
    FeasibilityEvaluator,
    FeasibilityResult,
    QuickCheckResult,
)
from feasibility_skills.requirement_extractor import Requirement, RequirementExtractor
from feasibility_skills.tool_recommender import (
    EcosystemMaturityPriors,
    ToolRecommendation,
    ToolRecommender,
)

logger = get_logger(__name__)


class FeasibilityEngine:
    """Facade over the four deterministic skills, wired from Settings.

    Stateless apart from the read-only document store: every call
    re-reads the knowledge base and can run concurrently with others.
    """

    def __init__(self, document_store: DocumentStore, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.document_store = document_store

        self._extractor = RequirementExtractor()
        self._search_index = CapabilitySearchIndex(
            document_store,
            read_timeout=self.settings.document_read_timeout,
        )
        self._recommender = ToolRecommender(
            self._search_index,
            maturity_priors=EcosystemMaturityPriors(
                overrides=self.settings.well_established_documents,
                user_prefix=self.settings.user_document_prefix,
                user_score=self.settings.user_document_maturity,
                default_score=self.settings.default_document_maturity,
            ),
            search_limit=self.settings.tool_search_limit,
        )
        self._evaluator = FeasibilityEvaluator(
            extractor=self._extractor,
            search_index=self._search_index,
            search_limit=self.settings.requirement_search_limit,
        )
        logger.debug(
            f"Engine ready: store={type(document_store).__name__}, "
            f"read_timeout={self.settings.document_read_timeout}s"
        )

    def extract_requirements(self, problem_statement: str) -> List[Requirement]:
        return self._extractor.extract(problem_statement)

    async def search_capabilities(
        self,
        keywords: Sequence[str],
        max_results: Optional[int] = None,
        document_ids: Optional[Sequence[str]] = None,
    ) -> List[Capability]:
        return await self._search_index.search(
            keywords,
            max_results=self.settings.tool_search_limit if max_results is None else max_results,
            document_ids=document_ids,
        )

    async def recommend_tools(
        self,
        tech_stack: Sequence[Any],
        problem_statement: str,
        max_recommendations: Optional[int] = None,
    ) -> List[ToolRecommendation]:
        """Rank knowledge-base sections as tools for the given stack and problem."""
        tracer = EngineLogger("tool_recommendation")
        tracer.pipeline_start(
            problem_statement if isinstance(problem_statement, str) else "",
            "keywords → search → score → rank",
        )

        if max_recommendations is None:
            max_recommendations = self.settings.max_recommendations

        tracer.step_enter("recommend", f"max_recommendations={max_recommendations}")
        try:
            tools = await self._recommender.recommend(
                tech_stack,
                problem_statement,
                max_recommendations,
            )
        except Exception as e:
            tracer.error("recommend", e)
            raise
        tracer.step_exit("recommend", f"{len(tools)} tool(s)")

        tracer.pipeline_end(
            recommendations=len(tools),
            top_score=tools[0].score if tools else 0,
        )
        return tools

    async def evaluate_feasibility(
        self,
        problem_statement: str,
        tech_stack: Sequence[str] = (),
        allowed_documents: Sequence[str] = (),
    ) -> FeasibilityResult:
        """Full feasibility analysis with per-requirement coverage and gaps."""
        tracer = EngineLogger("feasibility")
        tracer.pipeline_start(
            problem_statement if isinstance(problem_statement, str) else "",
            "extract → search → coverage → verdict",
        )

        tracer.step_enter("evaluate", "restricted documents" if allowed_documents else "all documents")
        try:
            result = await self._evaluator.evaluate(
                problem_statement, tech_stack, allowed_documents
            )
        except Exception as e:
            tracer.error("evaluate", e)
            raise
        tracer.step_exit("evaluate", f"{len(result.requirements)} requirement(s)")

        for match in result.matched_capabilities:
            tracer.debug(
                "coverage",
                f"{match.requirement.id} {match.coverage:.0f}% "
                f"from {len(match.capabilities)} capability(ies)",
            )

        tracer.pipeline_end(
            verdict=result.verdict.value,
            score=result.score,
            requirements=len(result.requirements),
            gaps=len(result.gaps),
        )
        return result

    async def quick_check(self, problem_statement: str) -> QuickCheckResult:
        """Verdict, score and summary only; no tech stack, no document restriction."""
        return await self._evaluator.quick_check(problem_statement)

    async def quick_recommendations(
        self,
        problem_statement: str,
        max_results: int = 5,
    ) -> List[ToolRecommendation]:
        return await self._recommender.quick_recommendations(problem_statement, max_results)

    def list_documents(self) -> List[str]:
        return list(self.document_store.list_documents())

    def list_user_documents(self) -> List[str]:
        """Documents following the user-generated naming convention."""
        return filter_user_documents(
            self.document_store.list_documents(),
            self.settings.user_document_prefix,
        )

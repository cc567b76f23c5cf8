"""
Unit tests for the Tool Recommender skill.

Tests cover:
- Search keyword derivation
- The five subscores and the weighted total
- Tool name / id / purpose lookup
- Reasoning and use-case templates
- Ranking and input validation

Author: POC Feasibility Team
"""

import pytest

from feasibility_skills.tool_recommender import (
    EcosystemMaturityPriors,
    InvalidProblemStatementError,
    InvalidTechStackError,
    TechStackItem,
    ToolRecommender,
    ToolSubscores,
    extract_search_keywords,
    extract_tool_info,
    generate_reasoning,
    generate_use_case,
    recommend_tools,
    weighted_total,
)


POSTGRES = TechStackItem(name="PostgreSQL", category="database")


# =============================================================================
# KEYWORD TESTS
# =============================================================================


class TestExtractSearchKeywords:
    """Tests for search keyword derivation."""

    def test_stack_then_statement_then_bootstrap(self):
        keywords = extract_search_keywords(
            [POSTGRES], "We need to migrate this legacy system with care"
        )

        assert keywords == [
            "postgresql", "database",
            "need", "migrate", "legacy", "system", "care",
            "analysis", "migration", "integration",
        ]

    def test_capped_at_twenty(self):
        statement = " ".join(f"word{i:02d}" for i in range(30))

        keywords = extract_search_keywords([], statement)

        assert len(keywords) == 20
        assert "analysis" not in keywords

    def test_no_repeats(self):
        keywords = extract_search_keywords([], "migration migration analysis")

        assert keywords == ["migration", "analysis", "integration"]

    def test_empty_category_skipped(self):
        keywords = extract_search_keywords([TechStackItem(name="Kafka")], "")

        assert keywords == ["kafka", "analysis", "migration", "integration"]


# =============================================================================
# SCORING TESTS
# =============================================================================


class TestScoring:
    """Tests for ToolRecommender.score."""

    def setup_method(self):
        self.recommender = ToolRecommender(search_index=object())

    def test_postgres_open_source(self, make_capability):
        capability = make_capability(body="PostgreSQL is an open source engine")

        subscores = self.recommender.score(capability, [POSTGRES], "Build a dashboard")

        assert subscores.technical_fit >= 20
        assert subscores.cost_efficiency == 90

    def test_technical_fit_name_and_category(self, make_capability):
        capability = make_capability(body="PostgreSQL database tooling")

        subscores = self.recommender.score(capability, [POSTGRES], "")

        assert subscores.technical_fit == 30

    def test_technical_fit_clamped(self, make_capability):
        stack = [TechStackItem(name=f"tool{i}", category="db") for i in range(5)]
        body = " ".join(f"tool{i}" for i in range(5)) + " db"

        subscores = self.recommender.score(make_capability(body=body), stack, "")

        assert subscores.technical_fit == 100

    def test_migration_complexity(self, make_capability):
        simple = make_capability(body="A simple installer")
        plain = make_capability(body="An installer")

        assert self.recommender.score(simple, [], "Replace the legacy ERP").migration_complexity == 80
        assert self.recommender.score(plain, [], "Replace the legacy ERP").migration_complexity == 50
        assert self.recommender.score(plain, [], "Build a dashboard").migration_complexity == 70

    def test_ai_capabilities_distinct_hits(self, make_capability):
        capability = make_capability(body="Uses a machine learning model, model after model")

        assert self.recommender.score(capability, [], "").ai_capabilities == 30

    def test_ai_capabilities_clamped(self, make_capability):
        body = "ai ml nlp llm gpt neural vector embedding"

        assert self.recommender.score(make_capability(body=body), [], "").ai_capabilities == 100

    def test_cost_efficiency(self, make_capability):
        free = make_capability(body="Free tier")
        paid = make_capability(body="Enterprise edition")
        other = make_capability(body="Commercial edition")

        assert self.recommender.score(free, [], "").cost_efficiency == 90
        assert self.recommender.score(paid, [], "").cost_efficiency == 40
        assert self.recommender.score(other, [], "").cost_efficiency == 50

    def test_ecosystem_maturity_priors(self, make_capability):
        iq = make_capability(document_id="context_engineering_iq")
        user = make_capability(document_id="context_user_notes")
        other = make_capability(document_id="vendor_catalog")

        assert self.recommender.score(iq, [], "").ecosystem_maturity == 85
        assert self.recommender.score(user, [], "").ecosystem_maturity == 60
        assert self.recommender.score(other, [], "").ecosystem_maturity == 70

    def test_custom_maturity_priors(self, make_capability):
        recommender = ToolRecommender(
            search_index=object(),
            maturity_priors=EcosystemMaturityPriors(overrides={"vendor_catalog": 150}),
        )

        subscores = recommender.score(make_capability(document_id="vendor_catalog"), [], "")

        assert subscores.ecosystem_maturity == 100


class TestWeightedTotal:
    """Tests for the weighted total."""

    def test_all_max(self):
        subscores = ToolSubscores(
            technical_fit=100, migration_complexity=100, ai_capabilities=100,
            cost_efficiency=100, ecosystem_maturity=100,
        )
        assert weighted_total(subscores) == 100

    def test_half_rounds_up(self):
        # 6 + 17.5 + 0 + 9 + 7 = 39.5
        subscores = ToolSubscores(
            technical_fit=20, migration_complexity=70, ai_capabilities=0,
            cost_efficiency=90, ecosystem_maturity=70,
        )
        assert weighted_total(subscores) == 40

    def test_all_zero(self):
        subscores = ToolSubscores(
            technical_fit=0, migration_complexity=0, ai_capabilities=0,
            cost_efficiency=0, ecosystem_maturity=0,
        )
        assert weighted_total(subscores) == 0


# =============================================================================
# TOOL INFO TESTS
# =============================================================================


class TestExtractToolInfo:
    """Tests for tool name, id and purpose lookup."""

    def test_labels_found(self):
        content = (
            "**ID:** `mainframe_analyzer`\n"
            "**Purpose:** Inventory COBOL programs before a migration\n"
        )

        name, tool_id, purpose = extract_tool_info("1. Mainframe Migration Analyzer", content)

        assert name == "Mainframe Migration Analyzer"
        assert tool_id == "mainframe_analyzer"
        assert purpose == "Inventory COBOL programs before a migration"

    def test_agent_id_label(self):
        _, tool_id, _ = extract_tool_info("Scanner", "- **Agent ID**: `code_scanner`\n")

        assert tool_id == "code_scanner"

    def test_fallbacks(self):
        name, tool_id, purpose = extract_tool_info("2. Report Generator", "No labels here.")

        assert name == "Report Generator"
        assert tool_id == "report_generator"
        assert purpose == "Tool for Report Generator"


class TestTemplates:
    """Tests for reasoning and use-case templates."""

    def test_reasoning_all_clauses_in_order(self):
        subscores = ToolSubscores(
            technical_fit=60, migration_complexity=70, ai_capabilities=50,
            cost_efficiency=70, ecosystem_maturity=80,
        )

        assert generate_reasoning(subscores) == (
            "Strong match with your tech stack. Provides AI/ML capabilities. "
            "Low migration complexity. Cost-effective solution. Mature and well-documented."
        )

    def test_reasoning_fallback(self):
        subscores = ToolSubscores(
            technical_fit=0, migration_complexity=50, ai_capabilities=0,
            cost_efficiency=50, ecosystem_maturity=70,
        )

        assert generate_reasoning(subscores) == "Potentially useful for your POC."

    @pytest.mark.parametrize("title, expected_start", [
        ("Code Analyzer", "Use during the analysis phase"),
        ("Data Converter", "Use for migrating or converting"),
        ("QA Suite", "Use to validate and test"),
        ("Report Generator", "Use to generate documentation"),
        ("CLI Helper", "Use as a supporting tool"),
        ("Dashboard", "Use as part of your POC implementation"),
    ])
    def test_use_case(self, title, expected_start):
        assert generate_use_case(title).startswith(expected_start)


# =============================================================================
# RECOMMENDER TESTS
# =============================================================================


@pytest.mark.asyncio
class TestToolRecommender:
    """Tests for ToolRecommender.recommend."""

    async def test_recommend_sorted(self, memory_store):
        tools = await recommend_tools(
            [{"name": "PostgreSQL", "category": "database"}],
            "Migrate the legacy reporting database",
            document_store=memory_store,
        )

        assert tools
        scores = [t.score for t in tools]
        assert scores == sorted(scores, reverse=True)

        helper = next(t for t in tools if t.tool_name == "Database Helper")
        assert helper.subscores.technical_fit == 30
        assert helper.subscores.cost_efficiency == 90
        assert helper.subscores.ecosystem_maturity == 60
        assert helper.tool_id == "database_helper"

    async def test_search_called_with_cap(self, mock_search_index, make_capability):
        mock_search_index.search.return_value = [make_capability()]
        recommender = ToolRecommender(mock_search_index)

        await recommender.recommend([POSTGRES], "Migrate the database")

        args, kwargs = mock_search_index.search.call_args
        assert kwargs["max_results"] == 20
        assert args[0][:2] == ["postgresql", "database"]

    async def test_max_recommendations(self, mock_search_index, make_capability):
        mock_search_index.search.return_value = [
            make_capability(title=f"Tool {i}") for i in range(6)
        ]
        recommender = ToolRecommender(mock_search_index)

        tools = await recommender.recommend([], "Anything", max_recommendations=4)

        assert len(tools) == 4

    async def test_ties_keep_search_order(self, mock_search_index, make_capability):
        mock_search_index.search.return_value = [
            make_capability(title="First"),
            make_capability(title="Second"),
        ]

        tools = await ToolRecommender(mock_search_index).recommend([], "Anything")

        assert [t.tool_name for t in tools] == ["First", "Second"]

    async def test_no_candidates(self, mock_search_index):
        tools = await ToolRecommender(mock_search_index).recommend([POSTGRES], "Anything")

        assert tools == []

    async def test_quick_recommendations(self, memory_store):
        from feasibility_skills.capability_search import CapabilitySearchIndex

        recommender = ToolRecommender(CapabilitySearchIndex(memory_store))

        tools = await recommender.quick_recommendations("Migration of the mainframe", max_results=2)

        assert 0 < len(tools) <= 2
        assert all(t.subscores.technical_fit == 0 for t in tools)

    async def test_string_tech_stack_rejected(self, mock_search_index):
        with pytest.raises(InvalidTechStackError):
            await ToolRecommender(mock_search_index).recommend("PostgreSQL", "Anything")

    async def test_bad_item_rejected(self, mock_search_index):
        with pytest.raises(TypeError):
            await ToolRecommender(mock_search_index).recommend([42], "Anything")

    async def test_none_tech_stack_is_empty(self, mock_search_index):
        assert await ToolRecommender(mock_search_index).recommend(None, "Anything") == []

    async def test_non_string_statement_rejected(self, mock_search_index):
        with pytest.raises(InvalidProblemStatementError):
            await ToolRecommender(mock_search_index).recommend([], 123)

    async def test_zero_max_recommendations_rejected(self, mock_search_index):
        with pytest.raises(ValueError):
            await ToolRecommender(mock_search_index).recommend([], "Anything", 0)

    async def test_deterministic(self, memory_store):
        first = await recommend_tools([POSTGRES], "Legacy migration", document_store=memory_store)
        second = await recommend_tools([POSTGRES], "Legacy migration", document_store=memory_store)

        assert [t.model_dump_json() for t in first] == [t.model_dump_json() for t in second]

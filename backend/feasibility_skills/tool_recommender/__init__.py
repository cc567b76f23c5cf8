"""
Tool Recommender Skill

Weighted multi-criteria ranking of knowledge-base sections as candidate
implementation tools.
"""

from .definition import (
    EcosystemMaturityPriors,
    InvalidProblemStatementError,
    InvalidTechStackError,
    TechStackItem,
    ToolRecommendation,
    ToolRecommenderError,
    ToolSubscores,
)

from .impl import (
    ToolRecommender,
    extract_search_keywords,
    extract_tool_info,
    generate_reasoning,
    generate_use_case,
    recommend_tools,
    weighted_total,
    AI_KEYWORDS,
    COMPLEXITY_KEYWORDS,
    SCORING_WEIGHTS,
)

__all__ = [
    # Classes
    "ToolRecommender",
    # Models
    "EcosystemMaturityPriors",
    "TechStackItem",
    "ToolRecommendation",
    "ToolSubscores",
    # Exceptions
    "InvalidProblemStatementError",
    "InvalidTechStackError",
    "ToolRecommenderError",
    # Functions
    "extract_search_keywords",
    "extract_tool_info",
    "generate_reasoning",
    "generate_use_case",
    "recommend_tools",
    "weighted_total",
    # Constants
    "AI_KEYWORDS",
    "COMPLEXITY_KEYWORDS",
    "SCORING_WEIGHTS",
]

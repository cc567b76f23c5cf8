"""
Feasibility Evaluator Skill

YES / PARTIAL / NO feasibility verdict from requirement coverage.
Deterministic: the verdict depends only on score, gaps and priorities.
"""

from .definition import (
    FeasibilityEvaluatorError,
    FeasibilityResult,
    Gap,
    GapType,
    InvalidEvaluationInputError,
    QuickCheckResult,
    RequirementCoverage,
    Verdict,
)

from .impl import (
    FeasibilityEvaluator,
    calculate_coverage,
    calculate_overall_score,
    determine_verdict,
    evaluate_feasibility,
    generate_recommendations,
    generate_summary,
    quick_feasibility_check,
    GAP_SUGGESTIONS,
    GAP_THRESHOLD,
    PRIORITY_WEIGHTS,
    THRESHOLD_PARTIAL,
    THRESHOLD_YES,
)

__all__ = [
    # Classes
    "FeasibilityEvaluator",
    # Models
    "FeasibilityResult",
    "Gap",
    "GapType",
    "QuickCheckResult",
    "RequirementCoverage",
    "Verdict",
    # Exceptions
    "FeasibilityEvaluatorError",
    "InvalidEvaluationInputError",
    # Functions
    "calculate_coverage",
    "calculate_overall_score",
    "determine_verdict",
    "evaluate_feasibility",
    "generate_recommendations",
    "generate_summary",
    "quick_feasibility_check",
    # Constants
    "GAP_SUGGESTIONS",
    "GAP_THRESHOLD",
    "PRIORITY_WEIGHTS",
    "THRESHOLD_PARTIAL",
    "THRESHOLD_YES",
]

"""
Requirement Extractor Skill

Pattern-table requirement extraction from free-text problem statements.
Pure function over strings: no I/O, no model calls.
"""

from .definition import (
    InvalidProblemStatementError,
    Requirement,
    RequirementCategory,
    RequirementExtractorError,
    RequirementPriority,
    keyword_overlap_ratio,
)

from .impl import (
    RequirementExtractor,
    determine_priority,
    extract_keywords,
    extract_requirements,
    DUPLICATE_OVERLAP_RATIO,
    PRIORITY_KEYWORDS,
    REQUIREMENT_PATTERNS,
)

__all__ = [
    # Classes
    "RequirementExtractor",
    # Models
    "Requirement",
    "RequirementCategory",
    "RequirementPriority",
    # Exceptions
    "InvalidProblemStatementError",
    "RequirementExtractorError",
    # Functions
    "determine_priority",
    "extract_keywords",
    "extract_requirements",
    "keyword_overlap_ratio",
    # Constants
    "DUPLICATE_OVERLAP_RATIO",
    "PRIORITY_KEYWORDS",
    "REQUIREMENT_PATTERNS",
]

"""
Requirement Extractor - Implementation

Turns a free-text problem statement into a deduplicated, prioritised and
categorised list of requirements.
Features:
- Category -> lead-in pattern table
- Ordered priority keyword families
- Keyword derivation from the captured clause
- Duplicate suppression by description or keyword overlap

Author: POC Feasibility Team
"""

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple

from .definition import (
    InvalidProblemStatementError,
    Requirement,
    RequirementCategory,
    RequirementPriority,
    keyword_overlap_ratio,
)

logger = logging.getLogger(__name__)


# ============================================================================
# PATTERN TABLES
# ============================================================================

# Captured clause runs up to the next period, comma or end of text.
_CLAUSE = r"(.+?)(?:\.|,|$)"

REQUIREMENT_PATTERNS: Dict[RequirementCategory, List[Pattern[str]]] = {
    RequirementCategory.FUNCTIONAL: [
        re.compile(r"needs?\s+to\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"should\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"must\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"requires?\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"wants?\s+to\s+" + _CLAUSE, re.IGNORECASE),
    ],
    RequirementCategory.TECHNICAL: [
        re.compile(r"using\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"integrates?\s+with\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"connects?\s+to\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"supports?\s+" + _CLAUSE, re.IGNORECASE),
    ],
    RequirementCategory.INTEGRATION: [
        re.compile(r"integrat(?:e|ion)\s+(?:with\s+)?" + _CLAUSE, re.IGNORECASE),
        re.compile(r"connect(?:ion)?\s+(?:to|with)\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"api\s+(?:to|for|with)\s+" + _CLAUSE, re.IGNORECASE),
    ],
    RequirementCategory.PERFORMANCE: [
        re.compile(r"fast(?:er)?\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"performance\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"scalab(?:le|ility)\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"handle\s+(\d+\s*\w+)", re.IGNORECASE),
    ],
    RequirementCategory.SECURITY: [
        re.compile(r"secur(?:e|ity)\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"encrypt(?:ion)?\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"authenticat(?:e|ion)\s+" + _CLAUSE, re.IGNORECASE),
        re.compile(r"complian(?:t|ce)\s+" + _CLAUSE, re.IGNORECASE),
    ],
}

# First family with a hit wins.
PRIORITY_KEYWORDS: List[Tuple[RequirementPriority, Tuple[str, ...]]] = [
    (RequirementPriority.CRITICAL, ("critical", "must", "essential", "mandatory", "required", "blocker")),
    (RequirementPriority.HIGH, ("important", "significant", "key", "main", "primary")),
    (RequirementPriority.MEDIUM, ("should", "want", "prefer", "nice to have")),
    (RequirementPriority.LOW, ("optional", "if possible", "consider", "future")),
]

# Clause length bounds (exclusive)
MIN_DESCRIPTION_LENGTH = 5
MAX_DESCRIPTION_LENGTH = 200

# Overlap ratio above which two requirements are duplicates
DUPLICATE_OVERLAP_RATIO = 0.7

MIN_KEYWORD_LENGTH = 4

_PUNCTUATION = re.compile(r"[^\w\s]")


def extract_keywords(text: str) -> Tuple[str, ...]:
    """
    Lower-case, strip punctuation, split on whitespace and keep tokens
    longer than 3 characters, without repeats.
    """
    tokens = _PUNCTUATION.sub(" ", text.lower()).split()
    return tuple(dict.fromkeys(t for t in tokens if len(t) >= MIN_KEYWORD_LENGTH))


def determine_priority(description: str, problem_statement: str) -> RequirementPriority:
    """Scan description plus full statement against the priority families."""
    text = f"{description} {problem_statement}".lower()
    for priority, keywords in PRIORITY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return priority
    return RequirementPriority.MEDIUM


class RequirementExtractor:
    """
    Rule-based requirement extractor.

    Applies the category pattern table to the problem statement, assigns a
    priority per candidate, and drops duplicates in encounter order.

    Usage:
        extractor = RequirementExtractor()
        for req in extractor.extract("We must migrate the billing system."):
            print(req.id, req.category.value, req.priority.value)

    Raises:
        InvalidProblemStatementError: If the input is not a string
    """

    def __init__(
        self,
        patterns: Optional[Dict[RequirementCategory, List[Pattern[str]]]] = None,
        duplicate_ratio: float = DUPLICATE_OVERLAP_RATIO,
    ):
        """
        Initialize the extractor.

        Args:
            patterns: Category -> compiled pattern list. Defaults to
                      REQUIREMENT_PATTERNS; new categories are additive.
            duplicate_ratio: Keyword overlap ratio treated as duplicate.
        """
        self.patterns = patterns if patterns is not None else REQUIREMENT_PATTERNS
        self.duplicate_ratio = duplicate_ratio

    def extract(self, problem_statement: str) -> List[Requirement]:
        """
        Extract requirements from a problem statement.

        Args:
            problem_statement: Free text, no length limit.

        Returns:
            Requirements with ids REQ-1..REQ-n. Empty for blank input.

        Raises:
            InvalidProblemStatementError: If problem_statement is not a str.
        """
        if not isinstance(problem_statement, str):
            raise InvalidProblemStatementError(problem_statement)

        if not problem_statement.strip():
            return []

        candidates = list(self._collect_candidates(problem_statement))
        unique = self._deduplicate(candidates)

        requirements = [
            Requirement(
                id=f"REQ-{index}",
                description=description,
                category=category,
                priority=priority,
                keywords=keywords,
            )
            for index, (description, category, priority, keywords) in enumerate(unique, 1)
        ]

        logger.info(
            f"Extracted {len(requirements)} requirements "
            f"({len(candidates)} candidates before deduplication)"
        )
        return requirements

    def _collect_candidates(self, problem_statement: str) -> list:
        """
        (description, category, priority, keywords) in encounter order.

        Encounter order is the position of the lead-in in the statement;
        pattern table order breaks ties at the same position.
        """
        found = []
        for category, patterns in self.patterns.items():
            for pattern in patterns:
                for match in pattern.finditer(problem_statement):
                    description = (match.group(1) or "").strip()
                    if not MIN_DESCRIPTION_LENGTH < len(description) < MAX_DESCRIPTION_LENGTH:
                        continue

                    keywords = extract_keywords(description)
                    if not keywords:
                        logger.debug(f"Skipping clause without keywords: '{description}'")
                        continue

                    priority = determine_priority(description, problem_statement)
                    found.append((match.start(), (description, category, priority, keywords)))

        # Stable: equal positions keep table order
        found.sort(key=lambda item: item[0])
        return [candidate for _, candidate in found]

    def _deduplicate(self, candidates: list) -> list:
        """Keep the first of each group of duplicate candidates."""
        unique: list = []
        for candidate in candidates:
            if not any(self._is_duplicate(candidate, kept) for kept in unique):
                unique.append(candidate)
        return unique

    def _is_duplicate(self, a: tuple, b: tuple) -> bool:
        description_a, _, _, keywords_a = a
        description_b, _, _, keywords_b = b

        if description_a.lower() == description_b.lower():
            return True

        return keyword_overlap_ratio(keywords_a, keywords_b) >= self.duplicate_ratio


# Convenience function
def extract_requirements(problem_statement: str) -> List[Requirement]:
    """
    Extract requirements with default settings.

    Convenience function for simple use cases.
    """
    extractor = RequirementExtractor()
    return extractor.extract(problem_statement)

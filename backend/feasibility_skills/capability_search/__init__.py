"""
Capability Search Skill

Keyword ranking of knowledge-base sections for the feasibility engine.
Documents are read concurrently with per-document failure isolation.
"""

from .definition import (
    Capability,
    SearchInput,
    Section,
    MAX_EXCERPT_LENGTH,
)

from .impl import (
    CapabilitySearchIndex,
    document_title,
    score_section,
    search_capabilities,
    split_sections,
    DEFAULT_READ_TIMEOUT,
)

__all__ = [
    # Classes
    "CapabilitySearchIndex",
    # Models
    "Capability",
    "SearchInput",
    "Section",
    # Functions
    "document_title",
    "score_section",
    "search_capabilities",
    "split_sections",
    # Constants
    "DEFAULT_READ_TIMEOUT",
    "MAX_EXCERPT_LENGTH",
]

"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the feasibility engine.
All fixtures use in-memory document stores so no test touches the real
knowledge-base directory.

Usage:
    async def test_example(memory_store):
        index = CapabilitySearchIndex(memory_store)
        hits = await index.search(["mainframe"])
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from feasibility.core.exceptions import DocumentReadError
from feasibility.services.document_store import InMemoryDocumentStore


# =============================================================================
# KNOWLEDGE-BASE DOCUMENTS
# =============================================================================


ENGINEERING_IQ_DOC = """# Context Engineering IQ

Toolkit overview for legacy modernization projects.

## 1. Mainframe Migration Analyzer

**ID:** `mainframe_analyzer`
**Purpose:** Inventory COBOL programs before a migration

Provides mainframe migration API integration support with a simple setup.
Open source and maintained by the platform team.

## 2. Report Generator

Purpose: Produce architecture documentation

Builds reports from the analysis output. Enterprise license required.

### Internals

Uses a machine learning model for classification of findings.
"""

USER_POSTGRES_DOC = """# PostgreSQL Toolkit

## Database Helper

Open source helper for PostgreSQL database migration scripts.
Works with any PostgreSQL version from 12 on.
"""

UNTITLED_DOC = """Plain notes without any heading about mainframe batch jobs.

##

Second mainframe note with an empty heading.
"""


@pytest.fixture
def sample_documents():
    """
    Pre-built knowledge base keyed by document id.

    Usage:
        def test_example(sample_documents):
            assert "context_engineering_iq" in sample_documents
    """
    return {
        "context_engineering_iq": ENGINEERING_IQ_DOC,
        "context_user_postgres": USER_POSTGRES_DOC,
    }


@pytest.fixture
def untitled_document():
    """Document without a level-1 title and with an empty level-2 heading."""
    return UNTITLED_DOC


@pytest.fixture
def memory_store(sample_documents):
    """InMemoryDocumentStore over the sample knowledge base."""
    return InMemoryDocumentStore(sample_documents)


@pytest.fixture
def failing_store(sample_documents):
    """
    Store where one document raises on read.

    Usage:
        async def test_example(failing_store):
            hits = await CapabilitySearchIndex(failing_store).search(["mainframe"])
    """
    documents = dict(sample_documents)
    documents["broken_doc"] = DocumentReadError("broken_doc", "disk error")
    return InMemoryDocumentStore(documents)


@pytest.fixture
def make_store():
    """
    Factory fixture for ad-hoc in-memory stores.

    Usage:
        def test_example(make_store):
            store = make_store(doc_a="## Title\\nbody")
    """
    def _create_store(**documents):
        return InMemoryDocumentStore(documents)
    return _create_store


@pytest.fixture
def make_capability():
    """
    Factory fixture for Capability records.

    Usage:
        def test_example(make_capability):
            capability = make_capability(body="PostgreSQL, open source")
    """
    from feasibility_skills.capability_search import Capability

    def _create_capability(
        body: str = "Generic section body",
        title: str = "Generic Tool",
        document_id: str = "doc",
        document_name: str = "Doc",
        match_score: int = 1,
    ):
        return Capability(
            document_id=document_id,
            document_name=document_name,
            section_title=title,
            body_excerpt=body,
            match_score=match_score,
        )
    return _create_capability


# =============================================================================
# SEARCH INDEX MOCK FIXTURES
# =============================================================================


@pytest.fixture
def mock_search_index():
    """
    Search index double whose async search returns a fixed list.

    Usage:
        async def test_example(mock_search_index, make_capability):
            mock_search_index.search.return_value = [make_capability()]
    """
    index = MagicMock()
    index.search = AsyncMock(return_value=[])
    return index


# =============================================================================
# CONTAINER FIXTURES
# =============================================================================


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at an empty temporary knowledge-base directory."""
    from feasibility.core.config import Settings

    return Settings(knowledge_base_dir=tmp_path, _env_file=None)


@pytest.fixture
def test_container(memory_store, test_settings):
    """
    DependencyContainer with the in-memory store swapped in.

    Usage:
        async def test_example(test_container):
            result = await test_container.engine.quick_check("...")
    """
    from feasibility.services.container import DependencyContainer

    container = DependencyContainer(test_settings)
    container.override_document_store(memory_store)
    return container


@pytest.fixture
def test_engine(test_container):
    """FeasibilityEngine over the sample knowledge base."""
    return test_container.engine


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )

"""
Capability Search - Implementation

Keyword search over knowledge-base documents with:
- Level-2 heading section splitting
- Occurrence-count scoring per section
- Concurrent, failure-isolated document reads
- Per-document read timeout

Author: POC Feasibility Team
"""

import asyncio
import inspect
import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from .definition import (
    Capability,
    SearchInput,
    Section,
    MAX_EXCERPT_LENGTH,
)

logger = logging.getLogger(__name__)


DEFAULT_READ_TIMEOUT = 30.0  # seconds
FALLBACK_TITLE_LENGTH = 80

# "## Heading" but not "### Heading"
_SECTION_HEADING = re.compile(r"^##(?!#)[ \t]*(.*)$", re.MULTILINE)
_DOCUMENT_TITLE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def document_title(document_id: str, text: str) -> str:
    """First level-1 heading of the document, falling back to its id."""
    match = _DOCUMENT_TITLE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return document_id


def _leading_text(text: str) -> str:
    """First non-empty line with heading markers removed, used as a title."""
    for line in text.splitlines():
        line = line.strip().lstrip("#").strip()
        if line:
            return line[:FALLBACK_TITLE_LENGTH]
    return "Untitled section"


def split_sections(text: str) -> List[Section]:
    """
    Split a markdown document on level-2 headings.

    Text before the first heading is its own section, titled by its leading
    line. Blank sections are dropped.
    """
    headings = list(_SECTION_HEADING.finditer(text))
    sections: List[Section] = []

    preamble = text[: headings[0].start()] if headings else text
    if preamble.strip():
        sections.append(Section(title=_leading_text(preamble), body=preamble.strip()))

    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
        body = text[heading.end():end].strip()
        title = heading.group(1).strip().rstrip("#").strip()
        if not title and not body:
            continue
        sections.append(Section(title=title or _leading_text(body), body=body))

    return sections


def score_section(body: str, keywords: Iterable[str]) -> int:
    """Sum of non-overlapping occurrences of each (lower-case) keyword."""
    haystack = body.lower()
    return sum(haystack.count(keyword) for keyword in keywords if keyword)


class CapabilitySearchIndex:
    """
    Keyword search engine over a read-only document store.

    Every call re-reads the store; nothing is cached between calls.

    Usage:
        index = CapabilitySearchIndex(document_store)
        hits = await index.search(["mainframe", "migration"], max_results=5)

        for hit in hits:
            print(f"{hit.format_citation()}: {hit.match_score}")

    Raises:
        pydantic.ValidationError: If max_results or keywords are invalid
    """

    def __init__(self, document_store=None, read_timeout: float = DEFAULT_READ_TIMEOUT):
        """
        Initialize the search index.

        Args:
            document_store: Object exposing list_documents() and read(id).
                            If None, the application container's store is used.
            read_timeout: Seconds allowed for each document read. Slower
                          documents are skipped.
        """
        self._document_store = document_store
        self.read_timeout = read_timeout

    @property
    def document_store(self):
        """Lazy resolution of the document store."""
        if self._document_store is None:
            from feasibility.services.container import get_container
            self._document_store = get_container().document_store
        return self._document_store

    async def search(
        self,
        keywords: Sequence[str],
        max_results: int = 20,
        document_ids: Optional[Sequence[str]] = None,
    ) -> List[Capability]:
        """
        Rank knowledge-base sections against a keyword set.

        Args:
            keywords: Terms to count in each section body.
            max_results: Number of capabilities to return.
            document_ids: Optional subset of documents to scan.

        Returns:
            Capabilities sorted by match_score descending. Empty if no
            document is readable or nothing matches.
        """
        input_data = SearchInput(
            keywords=keywords,
            max_results=max_results,
            document_ids=list(document_ids) if document_ids is not None else None,
        )

        if not input_data.keywords:
            logger.info("Capability search called without keywords, nothing to match")
            return []

        target_ids = self._resolve_documents(input_data.document_ids)
        if not target_ids:
            return []

        logger.info(
            f"Searching {len(target_ids)} document(s) for "
            f"{len(input_data.keywords)} keyword(s), max_results={input_data.max_results}"
        )

        documents = await self._read_documents(target_ids)

        candidates: List[Capability] = []
        for document_id, text in documents:
            if text is None:
                continue
            candidates.extend(self._score_document(document_id, text, input_data.keywords))

        # Stable: ties keep document listing order, then section order
        candidates.sort(key=lambda c: c.match_score, reverse=True)
        results = candidates[: input_data.max_results]

        logger.info(
            f"Capability search matched {len(candidates)} section(s), "
            f"returning {len(results)}"
        )
        return results

    def _resolve_documents(self, requested: Optional[List[str]]) -> List[str]:
        """Listing order of the store, optionally restricted to a subset."""
        try:
            available = self.document_store.list_documents()
        except Exception as e:
            logger.warning(f"Knowledge base could not be listed: {type(e).__name__}: {e}")
            return []

        if not requested:
            return list(available)

        wanted = set(requested)
        unknown = wanted.difference(available)
        if unknown:
            logger.warning(f"Ignoring unknown document id(s): {sorted(unknown)}")
        return [doc_id for doc_id in available if doc_id in wanted]

    async def _read_documents(
        self,
        document_ids: List[str],
    ) -> List[Tuple[str, Optional[str]]]:
        """
        Read all documents concurrently.

        A failed or timed-out read yields (id, None) and is logged; it never
        cancels the other reads.
        """
        store = self.document_store

        async def _read(document_id: str) -> str:
            if inspect.iscoroutinefunction(store.read):
                return await store.read(document_id)
            return await asyncio.to_thread(store.read, document_id)

        async def _read_one(document_id: str) -> Tuple[str, Optional[str]]:
            try:
                text = await asyncio.wait_for(_read(document_id), timeout=self.read_timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    f"Skipping document '{document_id}': read exceeded "
                    f"{self.read_timeout}s"
                )
                return document_id, None
            except Exception as e:
                logger.warning(
                    f"Skipping unreadable document '{document_id}': "
                    f"{type(e).__name__}: {e}"
                )
                return document_id, None
            return document_id, text

        return await asyncio.gather(*(_read_one(doc_id) for doc_id in document_ids))

    def _score_document(
        self,
        document_id: str,
        text: str,
        keywords: List[str],
    ) -> List[Capability]:
        """Score every section of one document, keeping non-zero matches."""
        name = document_title(document_id, text)
        matches = []
        for section in split_sections(text):
            score = score_section(section.body, keywords)
            if score == 0:
                continue
            matches.append(Capability(
                document_id=document_id,
                document_name=name,
                section_title=section.title,
                body_excerpt=section.body[:MAX_EXCERPT_LENGTH],
                match_score=score,
            ))
        return matches


# Convenience function for simple usage
async def search_capabilities(
    keywords: Sequence[str],
    max_results: int = 20,
    document_ids: Optional[Sequence[str]] = None,
    document_store=None,
) -> List[Capability]:
    """
    Search capabilities with default settings.

    For more control, instantiate CapabilitySearchIndex directly.
    """
    index = CapabilitySearchIndex(document_store)
    return await index.search(keywords, max_results=max_results, document_ids=document_ids)

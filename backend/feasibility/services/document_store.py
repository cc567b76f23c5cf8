"""Read-only knowledge-base stores consumed by the capability search."""

from pathlib import Path
from typing import Iterable, Mapping, Protocol, Union, runtime_checkable

from feasibility.core.exceptions import DocumentReadError, KnowledgeBaseError
from feasibility.core.logging import get_logger

logger = get_logger(__name__)

USER_DOCUMENT_PREFIX = "context_user_"


@runtime_checkable
class DocumentStore(Protocol):
    """Read-only mapping from document id to raw markdown text."""

    def list_documents(self) -> list[str]:
        ...

    def read(self, document_id: str) -> str:
        ...


def filter_user_documents(
    document_ids: Iterable[str],
    prefix: str = USER_DOCUMENT_PREFIX,
) -> list[str]:
    """Ids following the user-generated naming convention."""
    return [doc_id for doc_id in document_ids if doc_id.startswith(prefix)]


class InMemoryDocumentStore:
    """
    Dictionary-backed store.

    A value that is an exception instance is raised when that document is
    read, which lets callers simulate a single unreadable document.
    """

    def __init__(self, documents: Mapping[str, Union[str, Exception]] | None = None):
        self._documents: dict[str, Union[str, Exception]] = dict(documents or {})

    def list_documents(self) -> list[str]:
        return list(self._documents)

    def read(self, document_id: str) -> str:
        if document_id not in self._documents:
            raise DocumentReadError(document_id, "unknown document")
        value = self._documents[document_id]
        if isinstance(value, Exception):
            raise value
        return value

    def list_user_documents(self, prefix: str = USER_DOCUMENT_PREFIX) -> list[str]:
        return filter_user_documents(self.list_documents(), prefix)


class DirectoryDocumentStore:
    """
    Store backed by a directory of markdown files.

    Document ids are file stems, listed in name order. The directory is
    re-listed on every call, so files added between calls are picked up.
    """

    def __init__(self, root: Path | str, suffix: str = ".md"):
        self.root = Path(root)
        self.suffix = suffix

    def list_documents(self) -> list[str]:
        if not self.root.is_dir():
            raise KnowledgeBaseError(
                "Knowledge base directory not found",
                location=str(self.root),
            )
        return sorted(
            path.stem
            for path in self.root.iterdir()
            if path.is_file() and path.suffix == self.suffix
        )

    def read(self, document_id: str) -> str:
        filename = document_id if document_id.endswith(self.suffix) else f"{document_id}{self.suffix}"
        path = self.root / filename
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(document_id, type(e).__name__, details=str(e)) from e

        logger.debug(f"Loaded knowledge-base document '{document_id}' ({len(text)} chars)")
        return text

    def list_user_documents(self, prefix: str = USER_DOCUMENT_PREFIX) -> list[str]:
        return filter_user_documents(self.list_documents(), prefix)

"""
Dependency Injection Container.

Central place that wires the settings, the knowledge-base document store
and the feasibility engine. Services are built lazily on first access.

The container pattern enables:
- Easy testing with an in-memory document store
- Lazy initialization of the store and the engine
- Consistent settings across all skills

Example:
    from feasibility.services.container import get_container

    container = get_container()
    result = await container.engine.evaluate_feasibility("We must migrate ...")
"""

from functools import lru_cache
from typing import Optional

from feasibility.core.config import Settings, get_settings
from feasibility.core.logging import get_logger
from feasibility.services.document_store import DirectoryDocumentStore, DocumentStore

logger = get_logger(__name__)


class DependencyContainer:
    """
    Centralized container for engine dependencies.

    Attributes:
        _settings: Settings the services are built from.
        _document_store: Cached document store.
        _engine: Cached FeasibilityEngine.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the container with lazy service references."""
        self._settings = settings
        self._document_store: Optional[DocumentStore] = None
        self._engine = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def document_store(self) -> DocumentStore:
        """
        Get the knowledge-base store.

        Defaults to the markdown directory configured in settings.
        """
        if self._document_store is None:
            logger.info(f"Using knowledge base directory '{self.settings.knowledge_base_dir}'")
            self._document_store = DirectoryDocumentStore(
                self.settings.knowledge_base_dir,
                suffix=self.settings.knowledge_base_suffix,
            )
        return self._document_store

    @property
    def engine(self):
        """
        Get the FeasibilityEngine instance.

        Built on the container's store and settings.
        """
        if self._engine is None:
            # Import here to avoid circular imports
            from feasibility.services.engine import FeasibilityEngine
            self._engine = FeasibilityEngine(self.document_store, self.settings)
        return self._engine

    def reset(self) -> None:
        """Drop cached services so the next access rebuilds them."""
        self._document_store = None
        self._engine = None

    def override_document_store(self, store: DocumentStore) -> None:
        """
        Override the document store, e.g. with an InMemoryDocumentStore.

        Args:
            store: Object exposing list_documents() and read(id).
        """
        self._document_store = store
        # Rebuild engine on the new store
        self._engine = None


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """
    Get the singleton DependencyContainer instance.

    Example:
        >>> container = get_container()
        >>> container.engine.list_documents()
    """
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Clears the lru_cache so a fresh container is created on next access.
    """
    get_container.cache_clear()

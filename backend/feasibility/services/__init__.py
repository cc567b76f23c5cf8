from feasibility.services.document_store import (
    DirectoryDocumentStore,
    DocumentStore,
    InMemoryDocumentStore,
    filter_user_documents,
)
from feasibility.services.engine import FeasibilityEngine
from feasibility.services.container import get_container, reset_container

__all__ = [
    "DocumentStore",
    "DirectoryDocumentStore",
    "InMemoryDocumentStore",
    "filter_user_documents",
    "FeasibilityEngine",
    "get_container",
    "reset_container",
]

"""
Custom exceptions for the POC Feasibility Engine.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from FeasibilityBaseException.

Example:
    try:
        text = store.read("context_engineering_iq")
    except DocumentReadError as e:
        logger.warning(f"Skipping document: {e}")
"""

from typing import Optional


class FeasibilityBaseException(Exception):
    """
    Root of the engine exception hierarchy.

    Callers that only need to know "the engine failed" catch this; the
    subclasses carry the document or knowledge-base location involved.

    Attributes:
        message: Human-readable description of the error.
        details: Low-level cause (OS error text, path), kept out of the message.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentReadError(FeasibilityBaseException):
    """
    Exception raised when a knowledge-base document cannot be read.

    Raised by DocumentStore implementations. Search callers log it and skip
    the document; it never fails a whole search.

    Attributes:
        document_id: Identifier of the document that failed.
        reason: Short description of the failure.
    """

    def __init__(
        self,
        document_id: str,
        reason: str = "",
        details: Optional[str] = None,
    ) -> None:
        self.document_id = document_id
        self.reason = reason

        enhanced_message = f"[Document: {document_id}] Could not be read"
        if reason:
            enhanced_message = f"{enhanced_message}: {reason}"

        super().__init__(enhanced_message, details)


class KnowledgeBaseError(FeasibilityBaseException):
    """
    Exception raised when the knowledge base as a whole is unusable.

    For example, a configured knowledge-base directory that does not exist.

    Attributes:
        location: Path or identifier of the knowledge base.
    """

    def __init__(
        self,
        message: str,
        location: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.location = location

        enhanced_message = f"[KnowledgeBase] {message}"
        if location:
            enhanced_message = f"{enhanced_message} (location: {location})"

        super().__init__(enhanced_message, details)


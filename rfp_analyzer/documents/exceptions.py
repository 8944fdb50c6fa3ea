class DocumentError(Exception):
    """Base exception for all document-related errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document does not exist or is not owned by the caller."""


class DocumentReadError(DocumentError):
    """Raised when a document file is missing, unreadable or too large."""

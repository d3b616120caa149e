"""Typed exception hierarchy for editor and Telegraph errors.

This module defines the base exception of the editor core and the errors
raised by the page collaborators (Telegraph API and local page store).
All exceptions inherit from EditorError for easy catching and include
descriptive messages with context to help with debugging.
"""

from typing import Optional


class EditorError(Exception):
    """Base exception for all page editor errors.

    Use this to catch any application-level error from the editor core.
    """
    pass


class ConversionError(EditorError):
    """Raised when a node or format cannot be converted."""

    def __init__(self, message: str):
        super().__init__(message)


class PageNotFoundError(EditorError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class PersistenceError(EditorError):
    """Base exception for failures reading or writing pages."""
    pass


class InvalidCredentialsError(PersistenceError):
    """Raised when the Telegraph access token is missing or rejected."""

    def __init__(self, endpoint: str):
        super().__init__(f"Access token is invalid (endpoint: {endpoint})")
        self.endpoint = endpoint


class APIUnreachableError(PersistenceError):
    """Raised when the Telegraph API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(PersistenceError):
    """Raised when an API call fails after retries or is rejected."""

    def __init__(self, message: str = "Telegraph API failure (after 3 retries)"):
        super().__init__(message)


class StoreError(PersistenceError):
    """Raised when the local page store cannot be read or written."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Page store operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason

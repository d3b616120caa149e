"""Telegraph client library for the page editor.

This package provides the page collaborators of the editor: a thin wrapper
over the telegra.ph API, a local YAML page store and the PageInteractor
combining both.
"""

from .errors import (
    EditorError,
    ConversionError,
    PageNotFoundError,
    PersistenceError,
    InvalidCredentialsError,
    APIUnreachableError,
    APIAccessError,
    StoreError,
)

__all__ = [
    "EditorError",
    "ConversionError",
    "PageNotFoundError",
    "PersistenceError",
    "InvalidCredentialsError",
    "APIUnreachableError",
    "APIAccessError",
    "StoreError",
]

"""Shared error policy of the page editor."""

import logging
from typing import Callable

from src.telegraph_client.errors import (
    APIAccessError,
    APIUnreachableError,
    ConversionError,
    EditorError,
    InvalidCredentialsError,
    PageNotFoundError,
    StoreError,
)

from .errors import UploadPendingError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong, please try again"


class ErrorHandler:
    """Logs errors and turns them into user-facing messages.

    Interactive callers pass view.show_error as on_message; background
    callers (draft autosave, discard) pass a no-op so the error is logged
    but never surfaced.
    """

    def message_for(self, error: BaseException) -> str:
        """Map an error to the message shown to the user."""
        if isinstance(error, UploadPendingError):
            return "Please wait until all images are uploaded"
        if isinstance(error, PageNotFoundError):
            return "Page not found"
        if isinstance(error, APIUnreachableError):
            return "No connection, check your network and try again"
        if isinstance(error, InvalidCredentialsError):
            return "Access token is invalid, please log in again"
        if isinstance(error, APIAccessError):
            return "Telegraph is not responding, please try again later"
        if isinstance(error, StoreError):
            return "Could not access local drafts"
        if isinstance(error, ConversionError):
            return "Page content could not be converted"
        return GENERIC_ERROR_MESSAGE

    def proceed(self, error: BaseException, on_message: Callable[[str], None]) -> None:
        """Log an error and pass its user-facing message to on_message.

        Args:
            error: Error raised by an editor operation
            on_message: Receives the message (e.g. view.show_error)
        """
        if isinstance(error, EditorError):
            logger.warning(f"{type(error).__name__}: {error}")
        else:
            logger.error(f"Unexpected error: {error}", exc_info=error)
        on_message(self.message_for(error))


def ignore_message(message: str) -> None:
    """on_message callback for background operations."""

"""Typed exceptions raised by the page editor."""

from src.telegraph_client.errors import EditorError


class UploadPendingError(EditorError):
    """Raised when publishing while an image upload is unresolved."""

    def __init__(self, pending_count: int = 1):
        super().__init__(
            "Please wait until all images are uploaded "
            f"({pending_count} upload(s) in progress)"
        )
        self.pending_count = pending_count


class EditorStateError(EditorError):
    """Raised when an operation needs an open page but none is held."""

    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: no page is open")
        self.operation = operation

"""Page editor core: staged loading, draft autosave, publishing."""

from .autosave import DraftAutosaveCoordinator
from .delivery import ConflatingDelivery
from .error_handler import ErrorHandler
from .errors import EditorStateError, UploadPendingError
from .models import AutosaveState, DraftFields, LoadPhase
from .page_loader import PageLoadPipeline
from .presenter import PageEditorPresenter
from .scheduling import Cancellable, SessionScope, ThreadScheduler
from .view import PageEditorView

__all__ = [
    "AutosaveState",
    "Cancellable",
    "ConflatingDelivery",
    "DraftAutosaveCoordinator",
    "DraftFields",
    "EditorStateError",
    "ErrorHandler",
    "LoadPhase",
    "PageEditorPresenter",
    "PageEditorView",
    "PageLoadPipeline",
    "SessionScope",
    "ThreadScheduler",
    "UploadPendingError",
]

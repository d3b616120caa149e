"""Data models for the page editor module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.page_format.formats import Format


class AutosaveState(Enum):
    """States of the draft autosave coordinator."""

    IDLE = "idle"
    ARMED = "armed"
    DEBOUNCING = "debouncing"
    PERSISTING = "persisting"


class LoadPhase(Enum):
    """Phases of the page load pipeline."""

    CACHE_PENDING = "cache_pending"
    FRESH_PENDING = "fresh_pending"
    DONE = "done"


@dataclass
class DraftFields:
    """One observed snapshot of the editor fields.

    Attributes:
        title: Page title as typed
        author_name: Author display name
        author_url: Author profile link
        formats: Page body as edited
    """

    title: str
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    formats: List[Format] = field(default_factory=list)

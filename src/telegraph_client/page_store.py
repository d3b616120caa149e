"""Local page and draft store.

Pages are cached locally so the editor can show them immediately, and
drafts live here until they are published. The store is a single YAML
file keyed by local page id:

    next_id: 3
    pages:
      1:
        id: 1
        path: Sample-Page-12-15
        title: Sample Page
        content: [...]
        is_draft: false

A missing file is an empty store. Without a file path the store is kept
in memory only.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional

import yaml

from src.models.page import Page

from .errors import StoreError

logger = logging.getLogger(__name__)


class LocalPageStore:
    """Thread-safe page store backed by a YAML file.

    Example:
        >>> store = LocalPageStore(".telex-editor/pages.yaml")
        >>> draft = store.create_draft()
        >>> store.get(draft.id).is_draft
        True
    """

    def __init__(self, file_path: Optional[str] = None):
        """Initialize the store.

        Args:
            file_path: YAML file to persist to, or None for an in-memory store
        """
        self.file_path = file_path
        self._lock = threading.Lock()
        self._pages: Dict[int, Dict[str, Any]] = {}
        self._next_id = 1
        self._loaded = file_path is None

    def get(self, page_id: int) -> Optional[Page]:
        """Get a stored page, or None if the store does not know it."""
        with self._lock:
            self._ensure_loaded()
            data = self._pages.get(page_id)
        return Page.from_dict(data) if data is not None else None

    def list_pages(self) -> List[Page]:
        """List stored pages ordered by id."""
        with self._lock:
            self._ensure_loaded()
            pages = [self._pages[page_id] for page_id in sorted(self._pages)]
        return [Page.from_dict(data) for data in pages]

    def put(self, page: Page) -> Page:
        """Insert or replace a page.

        Raises:
            StoreError: If the store file cannot be written
        """
        with self._lock:
            self._ensure_loaded()
            self._pages[page.id] = page.to_dict()
            self._next_id = max(self._next_id, page.id + 1)
            self._flush()
        logger.debug(f"Stored page {page.id}")
        return page

    def delete(self, page_id: int) -> bool:
        """Delete a page.

        Returns:
            True if the page existed
        """
        with self._lock:
            self._ensure_loaded()
            existed = self._pages.pop(page_id, None) is not None
            if existed:
                self._flush()
        return existed

    def create_draft(self) -> Page:
        """Create and store an empty draft with a fresh local id."""
        with self._lock:
            self._ensure_loaded()
            page = Page(id=self._next_id, is_draft=True)
            self._pages[page.id] = page.to_dict()
            self._next_id += 1
            self._flush()
        logger.info(f"Created draft {page.id}")
        return page

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._pages, self._next_id = self._read()
        self._loaded = True

    def _read(self):
        path = self.file_path
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}, 1
        except PermissionError:
            raise StoreError(path, 'read', 'Permission denied')
        except OSError as e:
            raise StoreError(path, 'read', str(e))

        try:
            data = yaml.safe_load(content) if content.strip() else None
        except yaml.YAMLError as e:
            raise StoreError(path, 'parse', f"Invalid YAML syntax: {e}")

        if data is None:
            return {}, 1
        if not isinstance(data, dict) or not isinstance(data.get('pages') or {}, dict):
            raise StoreError(path, 'parse', "Store must be a YAML dictionary with a 'pages' mapping")

        try:
            pages = {int(key): value for key, value in (data.get('pages') or {}).items()}
            next_id = max([int(data.get('next_id') or 1)] + [key + 1 for key in pages])
        except (TypeError, ValueError) as e:
            raise StoreError(path, 'parse', f"Invalid page id: {e}")
        return pages, next_id

    def _flush(self) -> None:
        if self.file_path is None:
            return
        path = self.file_path

        yaml_str = yaml.safe_dump(
            {'next_id': self._next_id, 'pages': self._pages},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

        store_dir = os.path.dirname(path)
        if store_dir:
            try:
                os.makedirs(store_dir, exist_ok=True)
            except OSError as e:
                raise StoreError(store_dir, 'create_directory', str(e))

        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise StoreError(path, 'write', 'Permission denied')
        except OSError as e:
            raise StoreError(path, 'write', str(e))

"""Page collaborator of the editor: local store plus Telegraph API.

The interactor is the only component that persists pages. Every method
blocks and is meant to be called from an I/O worker.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from src.models.node import Node, nodes_to_json
from src.models.page import Page, PageNodes

from .api_wrapper import APIWrapper
from .errors import APIAccessError, PageNotFoundError
from .page_store import LocalPageStore

logger = logging.getLogger(__name__)


class PageInteractor:
    """Loads, saves, publishes and discards pages.

    Published pages are refreshed from Telegraph when opened. Drafts
    (local pages with unpublished changes) are served from the store so a
    fresh load never overwrites local edits.

    Example:
        >>> interactor = PageInteractor(LocalPageStore(), APIWrapper(Authenticator()))
        >>> draft = interactor.get_page_or_create_draft(None)
    """

    def __init__(self, store: LocalPageStore, api: Optional[APIWrapper] = None):
        """Initialize the interactor.

        Args:
            store: Local page store
            api: Telegraph API wrapper, or None to work offline
        """
        self._store = store
        self._api = api

    def get_cached_page(self, page_id: int) -> Optional[Page]:
        """Get the locally stored copy of a page, if any."""
        return self._store.get(page_id)

    def get_page_or_create_draft(self, page_id: Optional[int]) -> Page:
        """Load a page, or create a new draft when page_id is None.

        Raises:
            PageNotFoundError: If page_id is unknown
            PersistenceError: If the store or the API fails
        """
        if page_id is None:
            return self._store.create_draft()

        page = self._store.get(page_id)
        if page is None:
            raise PageNotFoundError(page_id=str(page_id))

        if page.is_draft or page.path is None or self._api is None:
            return page

        fresh = Page.from_api(self._api.get_page(page.path), page_id)
        self._store.put(fresh)
        logger.debug(f"Refreshed page {page_id} from {page.path}")
        return fresh

    def save_page_draft(
        self,
        page_id: int,
        title: str,
        author_name: Optional[str],
        author_url: Optional[str],
        nodes: List[Node],
        image_url: Optional[str],
    ) -> Page:
        """Store local changes of a page as a draft.

        Returns:
            The stored draft

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        page = self._store.get(page_id)
        if page is None:
            raise PageNotFoundError(page_id=str(page_id))

        draft = replace(
            page,
            title=title,
            author_name=author_name,
            author_url=author_url,
            nodes=PageNodes(content=list(nodes)),
            image_url=image_url,
            is_draft=True,
        )
        return self._store.put(draft)

    def publish_page(
        self,
        page_id: int,
        path: Optional[str],
        title: str,
        author_name: Optional[str],
        author_url: Optional[str],
        nodes: List[Node],
        image_url: Optional[str],
    ) -> Page:
        """Publish a page: edit it when it has a path, otherwise create it.

        Returns:
            The published page as stored locally

        Raises:
            APIAccessError: If no API is configured
            PersistenceError: If the API call fails
        """
        if self._api is None:
            raise APIAccessError("Cannot publish: no Telegraph API configured")

        content = nodes_to_json(list(nodes))
        if path:
            result = self._api.edit_page(path, title, content, author_name, author_url)
        else:
            result = self._api.create_page(title, content, author_name, author_url)

        published = Page.from_api(result, page_id)
        published.image_url = image_url or published.image_url
        logger.info(f"Published page {page_id} at {published.url or published.path}")
        return self._store.put(published)

    def discard_draft_page(self, page: Page) -> None:
        """Delete a draft that was never published.

        Published pages are kept; only local-only drafts are removed.
        """
        if page.path is not None:
            logger.debug(f"Page {page.id} is published, keeping it")
            return
        self._store.delete(page.id)

"""Telegraph page data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.models.node import Node, nodes_from_json, nodes_to_json


@dataclass
class PageNodes:
    """Content body of a page.

    Attributes:
        content: Top-level nodes of the article body
    """
    content: List[Node] = field(default_factory=list)


@dataclass
class Page:
    """A page as held by the editor.

    The editor only reads a page for comparison; persistence belongs to
    the page interactor.

    Attributes:
        id: Local page identifier
        path: Telegraph path (None until the page is first published)
        title: Page title
        author_name: Author display name
        author_url: Author profile link
        nodes: Page body
        url: Public URL on telegra.ph
        image_url: Preview image (first image of the body)
        views: View counter reported by the API
        is_draft: True when local changes are not yet published
    """
    id: int
    path: Optional[str] = None
    title: str = ""
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    nodes: PageNodes = field(default_factory=PageNodes)
    url: Optional[str] = None
    image_url: Optional[str] = None
    views: int = 0
    is_draft: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any], page_id: int) -> "Page":
        """Build a page from a Telegraph API ``Page`` object.

        Args:
            data: The ``result`` object of getPage/createPage/editPage
            page_id: Local identifier to assign

        Returns:
            Page populated from the API response
        """
        return cls(
            id=page_id,
            path=data.get("path"),
            title=data.get("title", ""),
            author_name=data.get("author_name"),
            author_url=data.get("author_url"),
            nodes=PageNodes(content=nodes_from_json(data.get("content"))),
            url=data.get("url"),
            image_url=data.get("image_url"),
            views=data.get("views", 0),
            is_draft=False,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for the local store."""
        return {
            "id": self.id,
            "path": self.path,
            "title": self.title,
            "author_name": self.author_name,
            "author_url": self.author_url,
            "content": nodes_to_json(self.nodes.content),
            "url": self.url,
            "image_url": self.image_url,
            "views": self.views,
            "is_draft": self.is_draft,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Page":
        """Build a page from a dictionary produced by ``to_dict``."""
        return cls(
            id=int(data["id"]),
            path=data.get("path"),
            title=data.get("title") or "",
            author_name=data.get("author_name"),
            author_url=data.get("author_url"),
            nodes=PageNodes(content=nodes_from_json(data.get("content"))),
            url=data.get("url"),
            image_url=data.get("image_url"),
            views=data.get("views") or 0,
            is_draft=bool(data.get("is_draft", False)),
        )

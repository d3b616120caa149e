"""Editor-facing content blocks (formats).

A page body is edited as an ordered list of formats. Text blocks keep the
serialized markup of their node; media blocks keep their source, caption
and, for embeds, the serialized media element so the markup survives the
simplified model.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup


class FormatType(Enum):
    """Kinds of content blocks, valued by their Telegraph tag."""

    # Block kinds
    PARAGRAPH = "p"
    HEADING = "h3"
    SUBHEADING = "h4"
    BLOCKQUOTE = "blockquote"
    ASIDE = "aside"
    UNORDERED_LIST = "ul"
    ORDERED_LIST = "ol"
    PREFORMATTED = "pre"
    HORIZONTAL_RULE = "hr"

    # Media kinds
    FIGURE = "figure"
    IMAGE = "img"
    IFRAME = "iframe"
    VIDEO = "video"

    # Inline kinds
    LINK = "a"
    BOLD = "b"
    STRONG = "strong"
    ITALIC = "i"
    EMPHASIS = "em"
    UNDERLINE = "u"
    STRIKETHROUGH = "s"
    CODE = "code"
    LINE_BREAK = "br"

    @property
    def tag(self) -> str:
        """Get the Telegraph tag of this kind."""
        return self.value

    @property
    def is_inline(self) -> bool:
        """Check if this kind is inline content."""
        return self in INLINE_FORMAT_TYPES

    @property
    def is_block(self) -> bool:
        """Check if this kind may stand at the top level of a page."""
        return self not in INLINE_FORMAT_TYPES

    @property
    def is_media(self) -> bool:
        """Check if this kind converts to a media format."""
        return self in MEDIA_FORMAT_TYPES

    @classmethod
    def find_by_tag(cls, tag: Optional[str]) -> Optional["FormatType"]:
        """Look up a kind by tag, returning None if unknown."""
        if tag is None:
            return None
        try:
            return cls(tag.lower())
        except ValueError:
            return None


INLINE_FORMAT_TYPES = {
    FormatType.LINK,
    FormatType.BOLD,
    FormatType.STRONG,
    FormatType.ITALIC,
    FormatType.EMPHASIS,
    FormatType.UNDERLINE,
    FormatType.STRIKETHROUGH,
    FormatType.CODE,
    FormatType.LINE_BREAK,
}

MEDIA_FORMAT_TYPES = {
    FormatType.FIGURE,
    FormatType.IMAGE,
    FormatType.IFRAME,
    FormatType.VIDEO,
}


class ImageUploadStatus(Enum):
    """Upload state of a locally added image."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"


def _figure_html(media_html: str, caption: str) -> str:
    """Wrap media markup and a caption into a figure element."""
    soup = BeautifulSoup("", "html.parser")
    figure = soup.new_tag("figure")
    media = BeautifulSoup(media_html, "html.parser")
    for child in list(media.contents):
        figure.append(child.extract())
    figcaption = soup.new_tag("figcaption")
    if caption:
        figcaption.string = caption
    figure.append(figcaption)
    return str(figure)


class Format(ABC):
    """Base class of all content blocks."""

    @property
    @abstractmethod
    def format_type(self) -> FormatType:
        """Kind of this block."""

    @abstractmethod
    def to_html(self) -> str:
        """Serialize this block to markup."""


@dataclass
class TextFormat(Format):
    """A generic block holding the markup of one node.

    Attributes:
        type: Kind of the block
        html: Serialized markup of the block
    """
    type: FormatType
    html: str = ""

    @property
    def format_type(self) -> FormatType:
        return self.type

    def to_html(self) -> str:
        return self.html


@dataclass
class ImageFormat(Format):
    """An image with a caption.

    Attributes:
        src: Image source URL
        caption: Caption text (empty when absent)
        upload_status: Upload state, not part of equality
    """
    src: str
    caption: str = ""
    upload_status: ImageUploadStatus = field(default=ImageUploadStatus.IDLE, compare=False)

    @property
    def format_type(self) -> FormatType:
        return FormatType.IMAGE

    def to_html(self) -> str:
        soup = BeautifulSoup("", "html.parser")
        img = soup.new_tag("img", attrs={"src": self.src})
        return _figure_html(str(img), self.caption)


@dataclass
class VideoFormat(Format):
    """A video element with a caption.

    Attributes:
        html: Serialized video element
        src: Video source URL
        caption: Caption text
    """
    html: str
    src: str
    caption: str = ""

    @property
    def format_type(self) -> FormatType:
        return FormatType.VIDEO

    def to_html(self) -> str:
        return _figure_html(self.html, self.caption)


@dataclass
class MediaFormat(Format):
    """A generic embed (iframe) with a caption.

    Attributes:
        html: Serialized embed element
        src: Embed source URL
        caption: Caption text
    """
    html: str
    src: str
    caption: str = ""

    @property
    def format_type(self) -> FormatType:
        return FormatType.IFRAME

    def to_html(self) -> str:
        return _figure_html(self.html, self.caption)


def pending_upload_count(formats: Sequence[Format]) -> int:
    """Count images whose upload is still in progress."""
    return sum(
        1
        for item in formats
        if isinstance(item, ImageFormat) and item.upload_status == ImageUploadStatus.IN_PROGRESS
    )


def has_pending_uploads(formats: Sequence[Format]) -> bool:
    """Check if any image is still uploading."""
    return pending_upload_count(formats) > 0


def page_image_url(formats: List[Format]) -> Optional[str]:
    """Get the preview image of a page: the source of a leading image."""
    if formats and isinstance(formats[0], ImageFormat):
        return formats[0].src
    return None

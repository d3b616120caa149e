"""Format model: the editor-facing representation of content blocks."""

from .formats import (
    Format,
    FormatType,
    ImageFormat,
    ImageUploadStatus,
    MediaFormat,
    TextFormat,
    VideoFormat,
    INLINE_FORMAT_TYPES,
    MEDIA_FORMAT_TYPES,
    has_pending_uploads,
    pending_upload_count,
    page_image_url,
)

__all__ = [
    "Format",
    "FormatType",
    "ImageFormat",
    "ImageUploadStatus",
    "MediaFormat",
    "TextFormat",
    "VideoFormat",
    "INLINE_FORMAT_TYPES",
    "MEDIA_FORMAT_TYPES",
    "has_pending_uploads",
    "pending_upload_count",
    "page_image_url",
]

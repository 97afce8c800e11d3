"""Image attachments for prompts."""

from __future__ import annotations

import base64
from pathlib import Path

from vouch.errors import ImageNotFoundError, UnsupportedImageError
from vouch.session import ImageContent

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}


def image_mime_type(path: Path) -> str:
    mime_type = _MIME_TYPES.get(path.suffix.lower())
    if mime_type is None:
        raise UnsupportedImageError(f"Unsupported image file extension for {path}")
    return mime_type


def load_image(path: Path) -> ImageContent:
    """Read an image file into a base64 attachment."""
    if not path.is_file():
        raise ImageNotFoundError(f"Image not found: {path}")
    mime_type = image_mime_type(path)
    data = base64.b64encode(path.read_bytes()).decode("ascii")
    return ImageContent(data=data, mime_type=mime_type)

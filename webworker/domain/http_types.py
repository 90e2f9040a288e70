"""Shared request and resource types."""

from dataclasses import dataclass
from enum import Enum


class ContentType(Enum):
    """Resource classes the server knows how to serve, valued by MIME type."""

    HTML = "text/html"
    GIF = "image/gif"
    JPEG = "image/jpeg"
    PNG = "image/png"
    ICO = "image/x-icon"

    @property
    def mime_type(self) -> str:
        return self.value

    @property
    def is_image(self) -> bool:
        return self is not ContentType.HTML


@dataclass(frozen=True)
class RequestLine:
    """The method and path taken from the first GET line of a request."""

    method: str
    path: str

    @property
    def is_root(self) -> bool:
        return self.path == ""


@dataclass(frozen=True)
class ResolvedResource:
    """A request path mapped onto the filesystem."""

    absolute_path: str
    content_type: ContentType
    exists: bool

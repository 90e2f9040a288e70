"""Map request paths onto files under the document root."""

import logging
import os
from typing import Optional

from webworker.domain.correlation_id import CorrelationLoggerAdapter
from webworker.domain.http_types import ContentType, ResolvedResource
from webworker.domain.sandbox import ForbiddenPath, ensure_within_root

RESOLVER_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.domain.resolver"), {}
)

# Paths shorter than this never reach the suffix comparisons.
MIN_SUFFIX_PATH_LENGTH = 5
DEFAULT_SUFFIX = ".html"

# Checked in order; the first matching suffix wins.
SUFFIX_TABLE: tuple[tuple[str, ContentType], ...] = (
    (".html", ContentType.HTML),
    (".gif", ContentType.GIF),
    (".png", ContentType.PNG),
    (".jpeg", ContentType.JPEG),
    (".ico", ContentType.ICO),
)


def classify(path: str) -> tuple[ContentType, bool]:
    """Return the content type for ``path`` and whether ``.html`` must be appended."""
    if len(path) >= MIN_SUFFIX_PATH_LENGTH:
        for suffix, content_type in SUFFIX_TABLE:
            if path[-len(suffix) :] == suffix:
                return content_type, False
    return ContentType.HTML, True


def resolve(
    path: str, root: Optional[str] = None, sandboxed: bool = False
) -> ResolvedResource:
    """Resolve a request path to a filesystem candidate and classify it.

    The document root is joined to the request path by plain string
    concatenation, so ``path`` is expected to carry its own leading slash.
    With ``sandboxed`` set, a path that climbs out of the root resolves to a
    resource that does not exist.
    """
    document_root = root if root is not None else os.getcwd()
    content_type, append_suffix = classify(path)
    candidate = (document_root + path).strip()
    if append_suffix:
        candidate += DEFAULT_SUFFIX

    if sandboxed:
        try:
            ensure_within_root(document_root, candidate, path)
        except ForbiddenPath:
            RESOLVER_LOGGER.warning(
                "Forbidden path access blocked",
                extra={"event": "forbidden_path", "route": path},
            )
            return ResolvedResource(candidate, content_type, False)

    exists = os.path.isfile(candidate)
    if RESOLVER_LOGGER.logger.isEnabledFor(logging.DEBUG):
        RESOLVER_LOGGER.debug(
            "Resource resolved",
            extra={
                "event": "resource_resolved",
                "route": path,
                "path": candidate,
                "content_type": content_type.mime_type,
                "exists": exists,
            },
        )
    return ResolvedResource(candidate, content_type, exists)

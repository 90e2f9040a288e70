"""Document-root containment checks used when sandbox mode is enabled."""

from pathlib import Path


class ForbiddenPath(Exception):
    """Raised when a requested path escapes the document root."""


def ensure_within_root(root: str, candidate: str, request_path: str) -> None:
    """Reject request paths with traversal segments or that resolve outside root."""
    if "\x00" in request_path:
        raise ForbiddenPath(request_path)

    if ".." in Path(request_path.lstrip("/")).parts:
        raise ForbiddenPath(request_path)

    root_path = Path(root).resolve()
    target = Path(candidate).resolve()
    if not (target == root_path or root_path in target.parents):
        raise ForbiddenPath(request_path)

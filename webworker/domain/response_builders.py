"""Byte builders for the fixed response headers and inline pages."""

import time
from typing import Optional

from webworker.bootstrap.config import (
    ADMIN_CONTACT,
    HTTP_DATE_FORMAT,
    SERVER_IDENTITY,
)
from webworker.domain.http_types import ContentType

STATUS_OK = "HTTP/1.1 200 OK"
STATUS_NOT_FOUND = "HTTP/1.1 404 Not Found"

CONNECTED_PAGE = (
    b"<html><head></head><body>\n"
    b"<h3>You are connected to the server</h3>\n"
    b"</body></html>\n"
)


def http_date(now: Optional[float] = None) -> str:
    """Format ``now`` (default: the current time) in GMT."""
    return time.strftime(HTTP_DATE_FORMAT, time.gmtime(now))


def header_block(
    status_line: str,
    content_type: ContentType,
    date: Optional[str] = None,
    server_identity: str = SERVER_IDENTITY,
) -> bytes:
    """Build the status line and fixed headers, terminated by a blank line.

    Lines end with a bare LF and no Content-Length is sent; the closed
    connection marks the end of the body.
    """
    lines = [
        status_line,
        f"Date: {date if date is not None else http_date()}",
        f"Server: {server_identity}",
        "Connection: close",
        f"Content-Type: {content_type.mime_type}",
    ]
    return ("\n".join(lines) + "\n\n").encode()


def ok_header(content_type: ContentType, date: Optional[str] = None) -> bytes:
    return header_block(STATUS_OK, content_type, date)


def not_found_response(path: str, date: Optional[str] = None) -> bytes:
    """Build a complete 404 response naming the requested path.

    The path is reflected into the page as received, without HTML escaping.
    """
    body = (
        "<html><head></head><body>\n"
        "<h3>404 Not Found</h3>\n"
        f"<p>The requested URL {path} was not found on this server.</p>"
        "<p>Please contact the server's admin for assistance</p>"
        f"<p>{ADMIN_CONTACT}</p>"
        "</body></html>\n"
    )
    return header_block(STATUS_NOT_FOUND, ContentType.HTML, date) + body.encode()


def connected_response(date: Optional[str] = None) -> bytes:
    return ok_header(ContentType.HTML, date) + CONNECTED_PAGE

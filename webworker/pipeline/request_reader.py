"""Extract the requested path from a raw request header stream."""

import logging
from typing import BinaryIO

from webworker.bootstrap.config import ROOT_REQUEST_LINE
from webworker.domain.correlation_id import CorrelationLoggerAdapter
from webworker.domain.http_types import RequestLine

READER_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.pipeline.request_reader"), {}
)

REQUEST_LINE_ENCODING = "iso-8859-1"
METHOD_TOKEN = "GET"
# "GET " in front, the protocol suffix at the back.
PREFIX_LENGTH = 4
SUFFIX_LENGTH = 8


class MalformedRequest(Exception):
    """Raised when the header stream ends early or cannot be read."""


def _read_line(stream: BinaryIO) -> str:
    raw = stream.readline()
    if not raw:
        raise MalformedRequest("connection closed before end of headers")
    return raw.decode(REQUEST_LINE_ENCODING).rstrip("\r\n")


def extract_path(line: str) -> str:
    """Slice the path out of a GET line such as ``GET /a.html HTTP/1.1``."""
    if len(line) < PREFIX_LENGTH + SUFFIX_LENGTH:
        raise MalformedRequest(f"request line too short: {line!r}")
    return line[PREFIX_LENGTH:-SUFFIX_LENGTH].strip()


def read_request_line(stream: BinaryIO) -> RequestLine:
    """Consume header lines up to the blank line and return the GET target.

    The first line mentioning GET, other than the bare root request, supplies
    the path. Any read failure ends the scan and keeps whatever path was found
    so far, so a broken request degrades to the root page instead of an error.
    """
    path = None
    try:
        while True:
            line = _read_line(stream)
            if READER_LOGGER.logger.isEnabledFor(logging.DEBUG):
                READER_LOGGER.debug(
                    "Request line read", extra={"event": "request_line", "line": line}
                )
            if path is None and METHOD_TOKEN in line and line != ROOT_REQUEST_LINE:
                path = extract_path(line)
            if not line:
                break
    except (MalformedRequest, OSError, ValueError) as error:
        READER_LOGGER.warning(
            "Request parsing stopped early",
            extra={"event": "malformed_request", "error_type": type(error).__name__},
        )

    request_line = RequestLine(METHOD_TOKEN, path or "")
    READER_LOGGER.debug(
        "Request parsed",
        extra={"event": "request_parsed", "route": request_line.path},
    )
    return request_line


def parse_path(stream: BinaryIO) -> str:
    return read_request_line(stream).path

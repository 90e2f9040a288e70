"""Dispatch a parsed request to the matching response and stream it out."""

import logging
import socket
import time

from webworker.bootstrap.config import DATE_MARKER, SERVER_HOST_LABEL, SERVER_MARKER
from webworker.domain.correlation_id import CorrelationLoggerAdapter
from webworker.domain.http_types import ContentType, ResolvedResource
from webworker.domain.resolver import resolve
from webworker.domain.response_builders import (
    connected_response,
    http_date,
    not_found_response,
    ok_header,
)
from webworker.pipeline.request_reader import read_request_line
from webworker.transport.context import WorkerContext

WRITER_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.pipeline.response_writer"), {}
)

TEMPLATE_ENCODING = "utf-8"


def render_template_line(
    line: str, date: str, host_label: str = SERVER_HOST_LABEL
) -> str:
    """Substitute the date and server markers in one line of an HTML file."""
    return line.replace(DATE_MARKER, date).replace(SERVER_MARKER, host_label)


def stream_html(connection: socket.socket, resource: ResolvedResource) -> int:
    """Send an HTML file line by line with its markers filled in.

    Line terminators are dropped, matching the template format served here.
    Returns the number of body bytes sent.
    """
    date = http_date()
    sent = 0
    with open(resource.absolute_path, encoding=TEMPLATE_ENCODING) as handle:
        for line in handle:
            payload = render_template_line(line.rstrip("\r\n"), date).encode(
                TEMPLATE_ENCODING
            )
            connection.sendall(payload)
            sent += len(payload)
    return sent


def stream_binary(connection: socket.socket, resource: ResolvedResource) -> int:
    """Send an image file as a single block read fully into memory."""
    with open(resource.absolute_path, "rb") as handle:
        payload = handle.read()
    connection.sendall(payload)
    return len(payload)


def dispatch(
    connection: socket.socket, path: str, resource: ResolvedResource
) -> tuple[str, int]:
    """Write the response for ``path`` and return its status and body size."""
    if resource.exists and resource.content_type is ContentType.HTML:
        connection.sendall(ok_header(ContentType.HTML))
        return "200", stream_html(connection, resource)
    if resource.exists and resource.content_type.is_image:
        connection.sendall(ok_header(resource.content_type))
        return "200", stream_binary(connection, resource)
    if path == "":
        connection.sendall(connected_response())
        return "200", 0
    WRITER_LOGGER.info(
        "Resource not found",
        extra={"event": "resource_not_found", "route": path},
    )
    connection.sendall(not_found_response(path))
    return "404", 0


def respond(
    connection: socket.socket, context: WorkerContext, client: str = "-"
) -> None:
    """Read one request from ``connection`` and write one response to it.

    Failures are logged and contained; the caller closes the connection.
    """
    started = time.perf_counter()
    try:
        with connection.makefile("rb") as stream:
            request_line = read_request_line(stream)
        resource = resolve(
            request_line.path,
            context.config.document_root,
            context.config.sandboxed,
        )
        status, bytes_out = dispatch(connection, request_line.path, resource)
    except (OSError, UnicodeDecodeError) as error:
        WRITER_LOGGER.error(
            "Response aborted",
            extra={
                "event": "connection_error",
                "client": client,
                "error_type": type(error).__name__,
            },
        )
        return
    except Exception as error:  # pylint: disable=broad-except
        WRITER_LOGGER.error(
            "Unexpected error while responding",
            extra={
                "event": "worker_error",
                "client": client,
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=True,
        )
        return

    WRITER_LOGGER.info(
        "Response sent",
        extra={
            "event": "response_sent",
            "client": client,
            "route": request_line.path,
            "status": status,
            "content_type": resource.content_type.mime_type,
            "bytes_out": bytes_out,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )

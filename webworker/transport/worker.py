"""Worker thread logic for handling one client connection."""

import logging
import socket
import threading

from webworker.domain.correlation_id import CorrelationLoggerAdapter, connection_scope
from webworker.pipeline.response_writer import respond
from webworker.transport.context import WorkerContext

WORKER_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.transport.worker"), {}
)


def _close_connection(client_socket: socket.socket, client_addr_str: str) -> None:
    try:
        client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    client_socket.close()
    WORKER_LOGGER.debug(
        "Socket closed",
        extra={"event": "socket_closed", "client": client_addr_str},
    )


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Serve exactly one request on ``client_socket`` and close it."""
    client_addr_str = f"{client_address[0]}:{client_address[1]}"

    with connection_scope():
        try:
            client_socket.settimeout(context.config.socket_timeout)
            WORKER_LOGGER.debug(
                "Connection handling started",
                extra={"event": "request_started", "client": client_addr_str},
            )
            respond(client_socket, context, client_addr_str)
        except OSError as error:
            WORKER_LOGGER.error(
                "Error handling client connection",
                extra={
                    "event": "connection_error",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                },
            )
        finally:
            _close_connection(client_socket, client_addr_str)
            context.lifecycle.worker_finished(threading.current_thread())

"""Main connection acceptance loop."""

import argparse
import logging
import socket
import threading

from webworker.bootstrap.config import ServerConfig
from webworker.bootstrap.socket_factory import create_server_socket
from webworker.domain.correlation_id import CorrelationLoggerAdapter
from webworker.lifecycle.state import ServerLifecycle
from webworker.transport.context import WorkerContext
from webworker.transport.worker import handle_client

ACCEPT_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.transport.accept"), {}
)


def spawn_worker(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> threading.Thread:
    """Start a dedicated thread that owns ``client_socket`` until it is closed."""
    if ACCEPT_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ACCEPT_LOGGER.debug(
            "Client connection accepted",
            extra={
                "event": "client_accepted",
                "client": f"{client_address[0]}:{client_address[1]}",
            },
        )
    thread = threading.Thread(
        target=handle_client,
        args=(client_socket, client_address, context),
        daemon=False,
    )
    context.lifecycle.track_worker(thread)
    try:
        thread.start()
    except RuntimeError:
        context.lifecycle.worker_finished(thread)
        client_socket.close()
        raise
    return thread


def run_server(
    args: argparse.Namespace, config: ServerConfig, lifecycle: ServerLifecycle
) -> None:
    """Accept connections until shutdown, one worker thread per connection."""

    server_socket = create_server_socket(args)

    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={"event": "server_listening", "host": args.host, "port": args.port},
    )

    context = WorkerContext(config=config, lifecycle=lifecycle)

    try:
        while not lifecycle.is_draining():
            try:
                client_socket, client_address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as error:
                if lifecycle.is_draining():
                    break
                ACCEPT_LOGGER.error(
                    "Socket accept failed",
                    extra={"event": "accept_error", "error_type": type(error).__name__},
                )
                continue

            if lifecycle.is_draining():
                client_socket.close()
                break

            spawn_worker(client_socket, client_address, context)
    finally:
        server_socket.close()
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={
                "event": "shutdown_waiting",
                "grace_seconds": config.shutdown_grace_seconds,
            },
        )
        lifecycle.wait_for_workers(config.shutdown_grace_seconds)
        ACCEPT_LOGGER.info(
            "Server shutdown complete", extra={"event": "server_stopped"}
        )

"""Static HTML and image server: one thread and one request per connection."""

import logging
import signal
import sys

from webworker.bootstrap.config import build_server_config, parse_cli_args
from webworker.bootstrap.logging_setup import configure_logging
from webworker.domain.correlation_id import CorrelationLoggerAdapter
from webworker.lifecycle.state import ServerLifecycle
from webworker.transport.accept_loop import run_server

SERVER_LOGGER = CorrelationLoggerAdapter(logging.getLogger("webworker.server"), {})


def main() -> None:
    """Start the server and spawn a worker thread per accepted connection."""
    args = parse_cli_args(sys.argv[1:])
    configure_logging(
        args.log_level, args.log_destination, use_json=args.log_format == "json"
    )

    config = build_server_config(args)
    lifecycle = ServerLifecycle()

    def shutdown_handler(signum: int, _frame) -> None:
        SERVER_LOGGER.info("Received shutdown signal", extra={"signal": signum})
        lifecycle.begin_draining()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting server",
        extra={
            "event": "server_starting",
            "host": args.host,
            "port": args.port,
            "directory": config.document_root or "(working directory)",
            "sandbox": config.sandboxed,
            "log_destination": args.log_destination,
            "log_level": args.log_level,
            "socket_timeout": config.socket_timeout,
            "shutdown_grace_seconds": config.shutdown_grace_seconds,
        },
    )
    run_server(args, config, lifecycle)


if __name__ == "__main__":
    main()

"""Server configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


DEFAULT_HOST = _env_str("WEBWORKER_HOST", "localhost")
DEFAULT_PORT = _env_int("WEBWORKER_PORT", 8080)
DEFAULT_SOCKET_TIMEOUT = _env_int("WEBWORKER_SOCKET_TIMEOUT", 60)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("WEBWORKER_SHUTDOWN_GRACE_SECONDS", 30)
DEFAULT_SANDBOX = _env_bool("WEBWORKER_SANDBOX", False)

SERVER_IDENTITY = _env_str("WEBWORKER_SERVER_IDENTITY", "WebWorker static server")
SERVER_HOST_LABEL = _env_str("WEBWORKER_SERVER_HOST_LABEL", "User's workstation")
ADMIN_CONTACT = _env_str(
    "WEBWORKER_ADMIN_CONTACT", "Server admin: webmaster, webmaster@localhost"
)

DATE_MARKER = "<cs371date>"
SERVER_MARKER = "<cs371server>"
# strftime's locale-default date and time representation.
HTTP_DATE_FORMAT = "%c"
ROOT_REQUEST_LINE = "GET / HTTP/1.1"


@dataclass
class ServerConfig:
    """Runtime settings handed to every worker."""

    socket_timeout: int
    shutdown_grace_seconds: int
    document_root: Optional[str] = None
    sandboxed: bool = False


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(description="Static HTML and image server")
    parser.add_argument(
        "--directory",
        default=os.getenv("WEBWORKER_DIRECTORY"),
        help="Document root (defaults to the working directory)",
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    default_log_level = os.getenv("WEBWORKER_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("WEBWORKER_LOG_DESTINATION", "stdout")
    default_log_format = os.getenv("WEBWORKER_LOG_FORMAT", "json").lower()
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--log-format",
        default=default_log_format,
        choices=["json", "text"],
        type=str.lower,
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Seconds a connection may stall while sending its request",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for graceful shutdown",
    )
    parser.add_argument(
        "--sandbox",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_SANDBOX,
        help="Treat paths that escape the document root as not found",
    )
    return parser.parse_args(argv)


def build_server_config(args: argparse.Namespace) -> ServerConfig:
    """Collect the worker-facing settings from parsed CLI arguments."""
    document_root = None
    if args.directory:
        document_root = os.path.abspath(args.directory)
    return ServerConfig(
        socket_timeout=args.socket_timeout,
        shutdown_grace_seconds=args.shutdown_grace_seconds,
        document_root=document_root,
        sandboxed=args.sandbox,
    )

"""Connection-scoped correlation ids attached to every log record."""

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, MutableMapping, Optional

PROJECT_LOGGER = "webworker"
NO_CONNECTION = "-"

_connection_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "connection_id", default=None
)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """Return the id of the connection served by the current thread, if any."""
    return _connection_id.get()


@contextmanager
def connection_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the lifetime of one connection.

    The previous binding is restored on exit, so a scope never leaks into
    whatever the thread runs next.
    """
    bound = correlation_id or generate_correlation_id()
    token = _connection_id.set(bound)
    try:
        yield bound
    finally:
        _connection_id.reset(token)


def component_name(logger_name: str) -> str:
    """``webworker.transport.worker`` becomes ``transport.worker``."""
    prefix = PROJECT_LOGGER + "."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix) :]
    return logger_name


class CorrelationLoggerAdapter(logging.LoggerAdapter):
    """Adds ``correlation_id`` and ``component`` to each record's extras."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        extra["correlation_id"] = get_correlation_id() or NO_CONNECTION
        extra["component"] = component_name(self.logger.name)
        kwargs["extra"] = extra
        return msg, kwargs

"""Context object shared across worker threads."""

from dataclasses import dataclass, field

from webworker.bootstrap.config import ServerConfig
from webworker.lifecycle.state import ServerLifecycle


@dataclass(frozen=True)
class WorkerContext:
    """Read-only dependencies handed to every connection handler."""

    config: ServerConfig
    lifecycle: ServerLifecycle = field(default_factory=ServerLifecycle)

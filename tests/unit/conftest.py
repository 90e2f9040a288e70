"""Shared fixtures for unit tests."""

import logging

import pytest

from webworker.bootstrap.config import ServerConfig
from webworker.transport.context import WorkerContext


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Ensure logs propagate to root so caplog can catch them."""
    logger = logging.getLogger("webworker")
    old_propagate = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = old_propagate


@pytest.fixture(name="worker_context")
def worker_context_fixture(site_dir):
    """Worker context serving the populated site directory."""
    config = ServerConfig(
        socket_timeout=2,
        shutdown_grace_seconds=1,
        document_root=str(site_dir),
    )
    return WorkerContext(config=config)

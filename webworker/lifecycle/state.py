"""Shutdown coordination between the accept loop and connection workers."""

import logging
import threading

from webworker.domain.correlation_id import CorrelationLoggerAdapter

LIFECYCLE_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("webworker.lifecycle"), {}
)


class ServerLifecycle:
    """Draining flag plus the connection threads that are still running.

    The accept loop tracks each thread before starting it and the worker
    reports back once its socket is closed, so a connection accepted just
    before a signal is always waited for.
    """

    def __init__(self) -> None:
        self._draining = threading.Event()
        self._idle = threading.Condition()
        self._workers: set[threading.Thread] = set()

    def is_draining(self) -> bool:
        return self._draining.is_set()

    def begin_draining(self) -> None:
        """Stop accepting connections; in-flight workers run to completion."""
        if self._draining.is_set():
            return
        self._draining.set()
        LIFECYCLE_LOGGER.info(
            "Beginning graceful shutdown", extra={"event": "shutdown_started"}
        )

    def track_worker(self, thread: threading.Thread) -> None:
        with self._idle:
            self._workers.add(thread)

    def worker_finished(self, thread: threading.Thread) -> None:
        with self._idle:
            self._workers.discard(thread)
            if not self._workers:
                self._idle.notify_all()

    def wait_for_workers(self, timeout: float) -> bool:
        """Block until every tracked worker has finished or ``timeout`` passes."""
        with self._idle:
            finished = self._idle.wait_for(lambda: not self._workers, timeout)
            remaining = len(self._workers)
        if not finished:
            LIFECYCLE_LOGGER.warning(
                "Shutdown grace period exceeded",
                extra={"event": "shutdown_timeout", "remaining_workers": remaining},
            )
        return finished

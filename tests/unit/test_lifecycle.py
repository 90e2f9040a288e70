"""Unit tests for shutdown coordination."""

import logging
import threading
import time

from webworker.bootstrap.config import ServerConfig
from webworker.lifecycle.state import ServerLifecycle


class TestServerLifecycle:
    """Tests for ServerLifecycle draining and worker tracking."""

    def test_initial_state(self):
        """A fresh lifecycle is not draining and has nothing to wait for."""
        lifecycle = ServerLifecycle()
        assert not lifecycle.is_draining()
        assert lifecycle.wait_for_workers(timeout=0) is True

    def test_begin_draining_is_logged_once(self, caplog):
        """A second signal does not restart the shutdown."""
        caplog.set_level(logging.INFO, logger="webworker")
        lifecycle = ServerLifecycle()
        lifecycle.begin_draining()
        lifecycle.begin_draining()
        assert lifecycle.is_draining()
        started = [
            r for r in caplog.records if getattr(r, "event", None) == "shutdown_started"
        ]
        assert len(started) == 1

    def test_finishing_unknown_worker_is_safe(self):
        """Reporting a thread that was never tracked does not raise."""
        lifecycle = ServerLifecycle()
        lifecycle.worker_finished(threading.Thread(target=lambda: None))
        assert lifecycle.wait_for_workers(timeout=0) is True

    def test_wait_for_workers_blocks_until_finished(self):
        """In-flight workers are waited for before returning."""
        lifecycle = ServerLifecycle()
        completed = threading.Event()

        def worker():
            time.sleep(0.2)
            completed.set()
            lifecycle.worker_finished(threading.current_thread())

        thread = threading.Thread(target=worker)
        lifecycle.track_worker(thread)
        thread.start()
        assert lifecycle.wait_for_workers(timeout=2.0) is True
        assert completed.is_set()
        thread.join()

    def test_wait_for_workers_timeout_exceeded(self, caplog):
        """A worker outliving the grace period is reported."""
        caplog.set_level(logging.WARNING, logger="webworker")
        lifecycle = ServerLifecycle()
        release = threading.Event()

        def worker():
            release.wait(5.0)
            lifecycle.worker_finished(threading.current_thread())

        thread = threading.Thread(target=worker)
        lifecycle.track_worker(thread)
        thread.start()
        try:
            start = time.monotonic()
            result = lifecycle.wait_for_workers(timeout=0.3)
            elapsed = time.monotonic() - start
        finally:
            release.set()
            thread.join()
        assert result is False
        assert 0.2 < elapsed < 1.0
        record = next(
            r for r in caplog.records if getattr(r, "event", None) == "shutdown_timeout"
        )
        assert record.remaining_workers == 1

    def test_all_tracked_workers_must_finish(self):
        """Waiting only succeeds once the last of several workers reports."""
        lifecycle = ServerLifecycle()
        threads = [threading.Thread(target=lambda: None) for _ in range(5)]
        for thread in threads:
            lifecycle.track_worker(thread)
        for thread in threads[:-1]:
            lifecycle.worker_finished(thread)
        assert lifecycle.wait_for_workers(timeout=0.05) is False
        lifecycle.worker_finished(threads[-1])
        assert lifecycle.wait_for_workers(timeout=0) is True


def test_server_config_defaults():
    """Optional settings default to the working directory without a sandbox."""
    config = ServerConfig(socket_timeout=30, shutdown_grace_seconds=15)
    assert config.socket_timeout == 30
    assert config.shutdown_grace_seconds == 15
    assert config.document_root is None
    assert config.sandboxed is False

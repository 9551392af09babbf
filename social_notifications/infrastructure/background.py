"""Bounded worker pool for work that must outlive the triggering request."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Any, Callable

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Run fire-and-forget tasks on a bounded thread pool.

    Callers never wait on a submitted task and never see its errors; failures
    are logged here. Each task is expected to open its own store operation
    instead of borrowing the request's session.
    """

    def __init__(self, max_workers: int = 4, *, thread_name_prefix: str = "notifications") -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._pending: set[Future] = set()
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, name: str, func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future | None:
        """Schedule ``func`` and return immediately."""

        with self._lock:
            if self._closed:
                logger.warning("Background runner is shut down; dropping task %s", name)
                return None
            future = self._executor.submit(self._run, name, func, args, kwargs)
            self._pending.add(future)
        future.add_done_callback(self._discard)
        return future

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every task submitted so far finished; ``False`` on timeout."""

        with self._lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = wait_futures(pending, timeout=timeout)
        return not not_done

    def shutdown(self, *, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _run(name: str, func: Callable[..., Any], args: tuple, kwargs: dict) -> None:
        try:
            func(*args, **kwargs)
        except Exception:
            logger.exception("Background task %s failed", name)

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)


__all__ = ["BackgroundTaskRunner"]

# src/taskweave/tasks/dispatcher.py

"""
Continuation dispatcher.

Runs continuations that were registered on an already-resolved task. They are
queued here instead of being invoked inline by the registering call, and run
one at a time in FIFO order on a single background thread.

The thread is started lazily and exits after `idle_seconds` without work, so an
unused dispatcher costs nothing and an idle one does not keep a thread alive.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ContinuationDispatcher:
    def __init__(self, *, name: str = "taskweave-dispatcher", idle_seconds: float = 1.0) -> None:
        self.name = name
        self.idle_seconds = max(0.01, float(idle_seconds))

        self._queue: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    def schedule(self, fn: Callable[[], None]) -> None:
        """Queue fn; starts the worker thread if none is running."""
        with self._lock:
            self._queue.put(fn)
            if self._thread is None:
                self._start_locked()

    @property
    def active(self) -> bool:
        with self._lock:
            return self._thread is not None

    def _start_locked(self) -> None:
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug("%s started", self.name)

    def _run(self) -> None:
        try:
            self._loop()
        finally:
            with self._lock:
                if self._thread is threading.current_thread():
                    self._thread = None
                    # Died with work still queued: hand it to a fresh thread.
                    if not self._queue.empty():
                        self._start_locked()

    def _loop(self) -> None:
        while True:
            try:
                fn = self._queue.get(timeout=self.idle_seconds)
            except queue.Empty:
                # Exit only if nothing was queued between the timeout and taking the lock;
                # schedule() puts and checks _thread under the same lock.
                with self._lock:
                    if self._queue.empty():
                        self._thread = None
                        logger.debug("%s idle, exiting", self.name)
                        return
                continue

            try:
                fn()
            except BaseException:
                logger.exception("continuation raised in %s", self.name)

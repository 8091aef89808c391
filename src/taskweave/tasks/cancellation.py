# src/taskweave/tasks/cancellation.py

"""Cooperative cancellation flag, checked voluntarily by task bodies."""

from __future__ import annotations

import threading

from ..core.errors import TaskCancelled


class CancellationToken:
    """
    Shared flag a caller can set and a running task can poll.

    The pool never interrupts work: a task that wants to stop early calls
    raise_if_cancelled() at convenient points, and its ComposableTask then
    fails with TaskCancelled like any other error (recover() can absorb it).
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TaskCancelled("task cancelled")

    def wait(self, timeout: float | None = None) -> bool:
        """Sleep up to timeout seconds; returns True early if cancelled."""
        return self._event.wait(timeout)

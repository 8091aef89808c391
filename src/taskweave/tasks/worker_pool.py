# src/taskweave/tasks/worker_pool.py

"""
Fixed-size worker pool.

A WorkerPool owns `size` worker threads and a FIFO queue of pending work.
Each submission returns a ComposableTask that is resolved by the worker that
ran it; that worker also runs the task's pending continuations.

Queue, running count and closed flag are guarded by a single condition
variable. Nothing outside the pool touches them.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.errors import PoolClosed
from ..core.ports import Work
from .composable import ComposableTask
from .dispatcher import ContinuationDispatcher
from .task_models import PoolStats

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _WorkItem:
    fn: Work
    task: ComposableTask[Any]
    seq: int


class WorkerPool:
    def __init__(
        self,
        size: int,
        *,
        thread_name_prefix: str = "taskweave-worker",
        dispatcher: ContinuationDispatcher | None = None,
    ) -> None:
        if int(size) < 1:
            raise ValueError(f"pool size must be >= 1, got {size}")
        self._size = int(size)
        self._thread_name_prefix = thread_name_prefix
        self._dispatcher = dispatcher or ContinuationDispatcher(name=f"{thread_name_prefix}-dispatcher")

        self._cond = threading.Condition()
        self._pending: deque[_WorkItem] = deque()
        self._closed = False
        self._running = 0
        self._peak_running = 0
        self._completed = 0
        self._failed = 0
        self._seq = 0

        self._workers = [
            threading.Thread(target=self._worker, args=(idx,), name=f"{thread_name_prefix}-{idx}", daemon=True)
            for idx in range(self._size)
        ]
        for t in self._workers:
            t.start()

        logger.info("WorkerPool started (size=%d).", self._size)

    @classmethod
    def from_settings(cls, settings: Settings) -> WorkerPool:
        dispatcher = ContinuationDispatcher(
            name=f"{settings.thread_name_prefix}-dispatcher",
            idle_seconds=settings.dispatcher_idle_seconds,
        )
        return cls(
            settings.pool_size,
            thread_name_prefix=settings.thread_name_prefix,
            dispatcher=dispatcher,
        )

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.shutdown(wait=True)

    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def stats(self) -> PoolStats:
        with self._cond:
            return PoolStats(
                size=self._size,
                pending=len(self._pending),
                running=self._running,
                completed=self._completed,
                failed=self._failed,
                peak_running=self._peak_running,
                closed=self._closed,
            )

    # ------------------------------------------------------------------
    def submit(self, fn: Work) -> ComposableTask[Any]:
        """Queue fn for execution. Never blocks; raises PoolClosed after shutdown()."""
        task: ComposableTask[Any] = ComposableTask(scheduler=self._dispatcher)
        with self._cond:
            if self._closed:
                raise PoolClosed("submit() called after shutdown()")
            self._seq += 1
            self._pending.append(_WorkItem(fn=fn, task=task, seq=self._seq))
            seq = self._seq
            self._cond.notify()
        logger.debug("queued task #%d", seq)
        return task

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting work. Queued and running tasks still drain.

        wait=True blocks until every worker has exited; wait=False returns at once.
        Safe to call more than once.
        """
        with self._cond:
            first = not self._closed
            self._closed = True
            self._cond.notify_all()
        if first:
            logger.info("WorkerPool shutdown requested (wait=%s).", wait)

        if not wait:
            return

        current = threading.current_thread()
        for t in self._workers:
            # A task calling shutdown(wait=True) on its own pool must not join itself.
            if t is not current:
                t.join()

    # ------------------------------------------------------------------
    def _worker(self, worker_id: int) -> None:
        logger.debug("worker %d started", worker_id)
        while True:
            with self._cond:
                while not self._pending and not self._closed:
                    self._cond.wait()
                if not self._pending:
                    logger.debug("worker %d exiting", worker_id)
                    return
                item = self._pending.popleft()
                self._running += 1
                self._peak_running = max(self._peak_running, self._running)

            ok = False
            try:
                ok = self._execute(item, worker_id)
            finally:
                with self._cond:
                    self._running -= 1
                    if ok:
                        self._completed += 1
                    else:
                        self._failed += 1

    def _execute(self, item: _WorkItem, worker_id: int) -> bool:
        task = item.task
        if not task._mark_running():
            # Resolved externally while still queued (task.complete()/fail()).
            logger.debug("task #%d already %s; skipping", item.seq, task.state.value)
            return task.failure is None

        logger.debug("worker %d running task #%d", worker_id, item.seq)
        try:
            value = item.fn()
        except BaseException as exc:
            logger.debug("task #%d failed: %r", item.seq, exc)
            task.fail(exc)
            return False

        task.complete(value)
        return True


__all__ = ["WorkerPool"]

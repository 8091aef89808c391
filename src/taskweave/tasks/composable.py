# src/taskweave/tasks/composable.py

"""
Composable deferred results.

A ComposableTask is an explicit state machine (pending -> completed | failed)
plus a list of continuations. Continuations registered while the task is
pending run on the thread that resolves it, in registration order. Those
registered after resolution are handed to a ContinuationScheduler so the
registering call never runs user code inline.

Failures are values (TaskFailure). They travel down map/consume/combine chains
untouched and are only raised again by result() or by awaiting the task from
asyncio. A chain that nobody waits on drops its failure silently.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

from ..core.errors import CombineFailure
from ..core.ports import ContinuationScheduler
from .dispatcher import ContinuationDispatcher
from .task_models import TaskFailure, TaskState

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

DoneCallback = Callable[["ComposableTask[Any]"], None]


class ComposableTask(Generic[T]):
    def __init__(self, *, scheduler: ContinuationScheduler | None = None) -> None:
        # Tasks created outside a pool get a private dispatcher; it only starts a
        # thread if a continuation is ever registered after resolution.
        self._scheduler: ContinuationScheduler = (
            scheduler if scheduler is not None else ContinuationDispatcher()
        )
        self._cond = threading.Condition()
        self._state = TaskState.PENDING
        self._value: T | None = None
        self._failure: TaskFailure | None = None
        self._callbacks: deque[DoneCallback] = deque()
        # True while the resolving thread is still running pending continuations.
        self._draining = False

    @classmethod
    def completed(cls, value: T, *, scheduler: ContinuationScheduler | None = None) -> ComposableTask[T]:
        task: ComposableTask[T] = cls(scheduler=scheduler)
        task.complete(value)
        return task

    @classmethod
    def failed(
        cls, error: BaseException, *, scheduler: ContinuationScheduler | None = None
    ) -> ComposableTask[Any]:
        task: ComposableTask[Any] = cls(scheduler=scheduler)
        task.fail(error)
        return task

    def __repr__(self) -> str:
        with self._cond:
            state = self._state
            failure = self._failure
        if failure is not None:
            return f"<ComposableTask state={state.value} failure={failure}>"
        return f"<ComposableTask state={state.value}>"

    # ------------------------------------------------------------------
    # Introspection (never blocks)

    @property
    def state(self) -> TaskState:
        with self._cond:
            return self._state

    @property
    def failure(self) -> TaskFailure | None:
        with self._cond:
            return self._failure

    def done(self) -> bool:
        return self.state.terminal

    # ------------------------------------------------------------------
    # Resolution

    def complete(self, value: T) -> bool:
        """Resolve with a value. Returns False if the task was already terminal."""
        return self._settle(TaskState.COMPLETED, value=value)

    def fail(self, error: BaseException) -> bool:
        """Resolve with an error. Returns False if the task was already terminal."""
        return self._settle(TaskState.FAILED, failure=TaskFailure(error))

    def _mark_running(self) -> bool:
        with self._cond:
            if self._state is not TaskState.PENDING:
                return False
            self._state = TaskState.RUNNING
            return True

    def _settle(
        self,
        state: TaskState,
        *,
        value: T | None = None,
        failure: TaskFailure | None = None,
    ) -> bool:
        with self._cond:
            if self._state.terminal:
                return False
            self._state = state
            self._value = value
            self._failure = failure
            self._draining = True
            self._cond.notify_all()
        self._drain()
        return True

    def _drain(self) -> None:
        while True:
            with self._cond:
                if not self._callbacks:
                    self._draining = False
                    return
                fn = self._callbacks.popleft()
            self._invoke(fn)

    def _invoke(self, fn: DoneCallback) -> None:
        try:
            fn(self)
        except BaseException:
            logger.exception("done callback %r raised", fn)

    # ------------------------------------------------------------------
    # Waiting

    def result(self, timeout: float | None = None) -> T:
        """
        Block the calling thread until the task is terminal.

        Returns the value, or re-raises the captured exception. Raises
        TimeoutError if `timeout` seconds pass first.
        """
        with self._cond:
            finished = self._cond.wait_for(lambda: self._state.terminal, timeout)
            value = self._value
            failure = self._failure
        if not finished:
            raise TimeoutError(f"task did not finish within {timeout}s")
        if failure is not None:
            raise failure.error
        return value  # type: ignore[return-value]

    def __await__(self) -> Generator[Any, None, T]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()

        def _relay(task: ComposableTask[T]) -> None:
            try:
                loop.call_soon_threadsafe(_copy_outcome, task, future)
            except RuntimeError:
                logger.debug("event loop closed before %r resolved", task)

        self.add_done_callback(_relay)
        return future.__await__()

    # ------------------------------------------------------------------
    # Composition

    def add_done_callback(self, fn: DoneCallback) -> None:
        """
        Register fn(task) to run once the task is terminal.

        Callbacks fire in registration order. If the task is already terminal,
        fn is queued on the scheduler rather than called here.
        """
        with self._cond:
            if not self._state.terminal or self._draining:
                self._callbacks.append(fn)
                return
        self._scheduler.schedule(lambda: self._invoke(fn))

    def _derive(self) -> ComposableTask[Any]:
        return ComposableTask(scheduler=self._scheduler)

    def map(self, fn: Callable[[T], U]) -> ComposableTask[U]:
        downstream: ComposableTask[U] = self._derive()

        def _on_done(task: ComposableTask[T]) -> None:
            if task._failure is not None:
                downstream._settle(TaskState.FAILED, failure=task._failure)
                return
            try:
                value = fn(task._value)  # type: ignore[arg-type]
            except BaseException as exc:
                downstream.fail(exc)
                return
            downstream.complete(value)

        self.add_done_callback(_on_done)
        return downstream

    def consume(self, fn: Callable[[T], object]) -> ComposableTask[None]:
        def _apply(value: T) -> None:
            fn(value)

        return self.map(_apply)

    def recover(self, fn: Callable[[BaseException], T]) -> ComposableTask[T]:
        downstream: ComposableTask[T] = self._derive()

        def _on_done(task: ComposableTask[T]) -> None:
            if task._failure is None:
                downstream.complete(task._value)  # type: ignore[arg-type]
                return
            try:
                value = fn(task._failure.error)
            except BaseException as exc:
                downstream.fail(exc)
                return
            downstream.complete(value)

        self.add_done_callback(_on_done)
        return downstream

    def combine(self, other: ComposableTask[U], fn: Callable[[T, U], V]) -> ComposableTask[V]:
        """
        Join two tasks; fn(left, right) runs exactly once, after both succeed.

        A left failure settles the result at once. A right failure waits for the
        left outcome, so when both sides fail the left one is always reported.
        """
        downstream: ComposableTask[V] = self._derive()
        lock = threading.Lock()
        seen = {"left": False, "right": False}

        def _finish() -> None:
            if other._failure is not None:
                downstream.fail(CombineFailure("right", other._failure.error))
                return
            try:
                value = fn(self._value, other._value)  # type: ignore[arg-type]
            except BaseException as exc:
                downstream.fail(exc)
                return
            downstream.complete(value)

        def _on_left(task: ComposableTask[T]) -> None:
            if task._failure is not None:
                downstream.fail(CombineFailure("left", task._failure.error))
                return
            with lock:
                seen["left"] = True
                ready = seen["right"]
            if ready:
                _finish()

        def _on_right(task: ComposableTask[U]) -> None:
            with lock:
                seen["right"] = True
                ready = seen["left"]
            if ready:
                _finish()

        self.add_done_callback(_on_left)
        other.add_done_callback(_on_right)
        return downstream


def _copy_outcome(task: ComposableTask[Any], future: asyncio.Future[Any]) -> None:
    if future.cancelled():
        return
    failure = task.failure
    if failure is not None:
        future.set_exception(failure.error)
    else:
        future.set_result(task._value)

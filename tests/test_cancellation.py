# tests/test_cancellation.py

from __future__ import annotations

import threading

import pytest

from taskweave.core.errors import TaskCancelled
from taskweave.tasks.cancellation import CancellationToken
from taskweave.tasks.worker_pool import WorkerPool


def test_task_observes_token_and_fails_with_task_cancelled(pool: WorkerPool) -> None:
    token = CancellationToken()
    started = threading.Event()
    steps: list[int] = []

    def work() -> int:
        started.set()
        for i in range(1000):
            token.raise_if_cancelled()
            steps.append(i)
            token.wait(0.01)
        return len(steps)

    task = pool.submit(work)
    assert started.wait(timeout=2.0)
    token.cancel()

    with pytest.raises(TaskCancelled):
        task.result(timeout=2.0)
    assert token.cancelled
    assert len(steps) < 1000


def test_cancelled_task_can_be_recovered(pool: WorkerPool) -> None:
    token = CancellationToken()
    token.cancel()

    task = pool.submit(lambda: token.raise_if_cancelled() or "ran").recover(
        lambda exc: "skipped" if isinstance(exc, TaskCancelled) else "other"
    )
    assert task.result(timeout=2.0) == "skipped"


def test_uncancelled_token_is_inert() -> None:
    token = CancellationToken()
    token.raise_if_cancelled()
    assert token.wait(0.01) is False
    assert not token.cancelled

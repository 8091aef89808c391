# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest

from taskweave.tasks.dispatcher import ContinuationDispatcher
from taskweave.tasks.worker_pool import WorkerPool

from .fakes import ManualScheduler


@pytest.fixture()
def pool() -> Iterator[WorkerPool]:
    """Two-worker pool, always shut down (and drained) after the test."""
    p = WorkerPool(2, thread_name_prefix="test-worker")
    try:
        yield p
    finally:
        p.shutdown(wait=True)


@pytest.fixture()
def dispatcher() -> ContinuationDispatcher:
    # Short idle timeout so dispatcher threads do not outlive the test by much.
    return ContinuationDispatcher(name="test-dispatcher", idle_seconds=0.05)


@pytest.fixture()
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()

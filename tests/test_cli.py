# tests/test_cli.py

from __future__ import annotations

import dataclasses
import logging
import threading
import time

from taskweave.cli.main import run_demo
from taskweave.config import get_settings
from taskweave.tasks.worker_pool import WorkerPool


def test_demo_combines_squares_with_recovered_fallback(caplog) -> None:
    settings = dataclasses.replace(get_settings(), demo_tasks=4, demo_sleep_seconds=0.0)
    pool = WorkerPool(2)
    try:
        with caplog.at_level(logging.INFO, logger="taskweave.cli.main"):
            total = run_demo(pool, settings)
    finally:
        pool.shutdown(wait=True)

    # 1 + 4 + 9 + 16, plus -1 from the recovered failure
    assert total == 29
    assert any("sum of squares" in r.getMessage() for r in caplog.records)
    assert pool.stats().failed == 1


def test_demo_returns_early_when_stop_is_set() -> None:
    settings = dataclasses.replace(get_settings(), demo_tasks=4, demo_sleep_seconds=0.3)
    pool = WorkerPool(1)
    stop = threading.Event()
    timer = threading.Timer(0.05, stop.set)
    timer.start()
    started = time.perf_counter()
    try:
        total = run_demo(pool, settings, stop)
    finally:
        timer.cancel()
        pool.shutdown(wait=False)

    assert total is None
    # The full batch would take four sleeps on a single worker.
    assert time.perf_counter() - started < 0.6

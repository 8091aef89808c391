# src/taskweave/cli/main.py

"""
CLI entrypoint (`taskweave-demo`).

Initializes logging, builds a WorkerPool from settings, then runs a small
composition demo:
- a batch of sleeping tasks (bounded by the pool size),
- their results folded together with map/combine,
- one deliberately failing task absorbed by recover().
"""

from __future__ import annotations

import logging
import signal
import threading
import time
from functools import reduce

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.composable import ComposableTask
from ..tasks.worker_pool import WorkerPool

logger = logging.getLogger(__name__)


def _sleeper(index: int, seconds: float):
    def work() -> int:
        time.sleep(seconds)
        return index

    return work


def _boom() -> int:
    raise RuntimeError("demo failure")


def run_demo(pool: WorkerPool, settings: Settings, stop: threading.Event | None = None) -> int | None:
    """
    Submit the demo batch and return the combined total.

    Returns None if `stop` is set before the batch finishes.
    """
    tasks: list[ComposableTask[int]] = [
        pool.submit(_sleeper(i, settings.demo_sleep_seconds)) for i in range(1, settings.demo_tasks + 1)
    ]
    for i, task in enumerate(tasks, start=1):
        task.consume(lambda value, i=i: logger.info("task %d finished -> %s", i, value))

    squares = [t.map(lambda v: v * v) for t in tasks]
    total = reduce(lambda acc, t: acc.combine(t, lambda a, b: a + b), squares)

    fallback = pool.submit(_boom).recover(lambda exc: -1)

    final = total.combine(fallback, lambda a, b: a + b)
    # Poll so a signal handler setting `stop` is noticed while work is still running.
    if stop is not None:
        while not final.done():
            if stop.wait(0.05):
                logger.info("Stop requested; abandoning the demo batch.")
                return None

    result = final.result()
    logger.info("sum of squares + fallback = %d", result)
    return result


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info(
        "Starting %s (pool_size=%d, demo_tasks=%d, sleep=%.3fs)...",
        settings.app_name,
        settings.pool_size,
        settings.demo_tasks,
        settings.demo_sleep_seconds,
    )

    pool = WorkerPool.from_settings(settings)

    # Use an Event so main notices the signal while it waits on the batch.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        pool.shutdown(wait=False)

    try:
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError):
        # Not in the main thread, or the platform lacks SIGTERM.
        pass

    started = time.perf_counter()
    try:
        run_demo(pool, settings, stop_main)
    finally:
        # After a signal, do not wait for queued work; workers are daemon threads.
        pool.shutdown(wait=not stop_main.is_set())
        elapsed = time.perf_counter() - started
        stats = pool.stats()
        logger.info(
            "Done in %.3fs (completed=%d failed=%d peak_running=%d). Bye.",
            elapsed,
            stats.completed,
            stats.failed,
            stats.peak_running,
        )


if __name__ == "__main__":
    main()

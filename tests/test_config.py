# tests/test_config.py

from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

from taskweave.config import Settings
from taskweave.tasks.worker_pool import WorkerPool


def test_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKWEAVE_POOL_SIZE", "3")
    monkeypatch.setenv("TASKWEAVE_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKWEAVE_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TASKWEAVE_THREAD_NAME_PREFIX", "cfg-worker")
    monkeypatch.setenv("TASKWEAVE_DISPATCHER_IDLE_SECONDS", "0.25")
    monkeypatch.setenv("TASKWEAVE_DEMO_TASKS", "7")

    s = Settings.from_env()

    assert s.pool_size == 3
    assert s.log_level == "DEBUG"
    assert s.log_dir == tmp_path / "logs"
    assert s.thread_name_prefix == "cfg-worker"
    assert s.dispatcher_idle_seconds == 0.25
    assert s.demo_tasks == 7


@pytest.mark.parametrize("raw", ["zero", "0", "-4", ""])
def test_invalid_pool_size_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("TASKWEAVE_POOL_SIZE", raw)
    s = Settings.from_env()
    assert s.pool_size == max(1, os.cpu_count() or 4)


def test_pool_from_settings_uses_size_and_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKWEAVE_POOL_SIZE", "2")
    monkeypatch.setenv("TASKWEAVE_THREAD_NAME_PREFIX", "cfg-worker")
    pool = WorkerPool.from_settings(Settings.from_env())
    try:
        assert pool.size == 2
        name = pool.submit(lambda: threading.current_thread().name).result(timeout=2.0)
        assert name.startswith("cfg-worker-")
    finally:
        pool.shutdown(wait=True)

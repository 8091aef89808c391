# src/taskweave/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole process (normal "settings layer").
- Components take settings by injection; nothing reads the environment lazily.
- Invalid values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKWEAVE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_float(name: str, default: float, *, minimum: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _default_pool_size() -> int:
    return max(1, os.cpu_count() or 4)


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Pool ----
    pool_size: int
    thread_name_prefix: str
    dispatcher_idle_seconds: float

    # ---- Demo batch (cli) ----
    demo_tasks: int
    demo_sleep_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskweave").strip() or "taskweave"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskweave"))

        pool_size = _env_int(_k("POOL_SIZE"), _default_pool_size(), minimum=1)
        thread_name_prefix = _env(_k("THREAD_NAME_PREFIX"), "taskweave-worker").strip() or "taskweave-worker"
        dispatcher_idle_seconds = _env_float(_k("DISPATCHER_IDLE_SECONDS"), 1.0, minimum=0.01)

        demo_tasks = _env_int(_k("DEMO_TASKS"), 5, minimum=1)
        demo_sleep_seconds = _env_float(_k("DEMO_SLEEP_SECONDS"), 0.1, minimum=0.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            pool_size=pool_size,
            thread_name_prefix=thread_name_prefix,
            dispatcher_idle_seconds=dispatcher_idle_seconds,
            demo_tasks=demo_tasks,
            demo_sleep_seconds=demo_sleep_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS

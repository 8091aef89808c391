# src/taskweave/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskState(StrEnum):
    """
    Task lifecycle state.

    Notes:
    - "running" is only set for tasks executed by a WorkerPool; derived tasks
      (map/combine/...) go straight from pending to a terminal state.
    - completed and failed are terminal: no further transition happens.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.FAILED)


@dataclass(frozen=True, slots=True)
class TaskFailure:
    """The captured error of a failed task, carried as a value."""

    error: BaseException

    def __str__(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True, slots=True)
class PoolStats:
    size: int
    pending: int
    running: int
    completed: int
    failed: int
    peak_running: int
    closed: bool

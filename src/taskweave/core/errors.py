# src/taskweave/core/errors.py

"""
Error taxonomy.

Failures of user work are never thrown across threads: they are captured as a
TaskFailure value (see tasks/task_models.py) and re-raised only where a caller
explicitly waits for a result.
"""

from __future__ import annotations

from typing import Literal

CombineSide = Literal["left", "right"]


class TaskweaveError(Exception):
    """Base class for errors raised by taskweave itself."""


class PoolClosed(TaskweaveError):
    """Raised by WorkerPool.submit() once shutdown has been requested."""


class TaskCancelled(TaskweaveError):
    """Raised from inside a task body that observed its cancellation token."""


class CombineFailure(TaskweaveError):
    """
    One side of a combine() failed.

    `side` names the failing input ("left" is the task combine() was called on),
    `error` is the original exception, also chained as __cause__.
    """

    def __init__(self, side: CombineSide, error: BaseException) -> None:
        super().__init__(f"{side} side of combine failed: {error!r}")
        self.side = side
        self.error = error
        self.__cause__ = error

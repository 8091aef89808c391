"""
taskweave: a bounded worker pool with composable deferred results.

    from taskweave import WorkerPool

    with WorkerPool(2) as pool:
        total = pool.submit(lambda: 3).combine(pool.submit(lambda: 4), lambda a, b: a + b)
        print(total.result())  # 7
"""

from .core.errors import CombineFailure, PoolClosed, TaskCancelled, TaskweaveError
from .tasks.cancellation import CancellationToken
from .tasks.composable import ComposableTask
from .tasks.dispatcher import ContinuationDispatcher
from .tasks.task_models import PoolStats, TaskFailure, TaskState
from .tasks.worker_pool import WorkerPool

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "CombineFailure",
    "ComposableTask",
    "ContinuationDispatcher",
    "PoolClosed",
    "PoolStats",
    "TaskCancelled",
    "TaskFailure",
    "TaskState",
    "TaskweaveError",
    "WorkerPool",
]

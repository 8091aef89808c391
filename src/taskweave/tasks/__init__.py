"""
Task subsystem.

Components:
- task_models.py: data structures (TaskState, TaskFailure, PoolStats)
- composable.py: ComposableTask, the chainable deferred result
- dispatcher.py: background runner for continuations registered after resolution
- worker_pool.py: fixed-size thread pool that resolves ComposableTasks
- cancellation.py: cooperative cancellation flag for task bodies
"""

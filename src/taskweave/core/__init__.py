"""
Core building blocks shared by the task layer.

Components:
- errors.py: exception taxonomy (PoolClosed, CombineFailure, TaskCancelled)
- ports.py: protocols the task layer depends on (ContinuationScheduler)
"""

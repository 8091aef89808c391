# src/taskweave/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task layer.

ComposableTask depends on a Protocol for "run this later" instead of a concrete
dispatcher, which keeps tests able to inject a synchronous fake.
"""

from collections.abc import Callable
from typing import Any, Protocol

Work = Callable[[], Any]
# A unit of work: no arguments, returns a value or raises.


class ContinuationScheduler(Protocol):
    """Queues a continuation to run on some other thread, in FIFO order."""

    def schedule(self, fn: Callable[[], None]) -> None: ...

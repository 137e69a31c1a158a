"""A bounded FIFO of tasks that a fixed pool of worker threads runs."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Optional

DEFAULT_POOL_SIZE = 4
DEFAULT_SIZE = 256


@dataclass
class Task:
    """One unit of work.

    ``result_code`` receives the handler's return value once the task
    has run. ``error`` receives any exception the handler raised.
    """

    type: int = 0
    data: Any = None
    return_data: Any = None
    result_code: Any = None
    error: Optional[BaseException] = None


class TaskQueue:
    """Ring-buffer style task queue served by a pool of worker threads.

    ``size`` must be a power of two; one slot is always kept free, so at
    most ``size - 1`` tasks wait at once. Pushing onto a full queue
    blocks until a worker takes a task.
    """

    def __init__(
        self,
        handler: Callable[[Task], Any],
        pool_size: int = DEFAULT_POOL_SIZE,
        size: int = DEFAULT_SIZE,
    ):
        if size < 2 or size & (size - 1):
            raise ValueError("queue size must be a power of two of at least 2")
        if pool_size < 1:
            raise ValueError("pool size must be at least 1")
        self.handler = handler
        self.pool_size = pool_size
        self.size = size
        self._capacity = size - 1
        self._tasks: Deque[Task] = deque()
        self._cond = threading.Condition()
        self._shutdown = False
        self._completed = 0
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._work, name=f"taskqueue-{i}", daemon=True)
            for i in range(pool_size)
        ]
        for thread in self._threads:
            thread.start()

    @property
    def completion_count(self) -> int:
        """Number of tasks the workers have finished running."""
        with self._cond:
            return self._completed

    @property
    def closed(self) -> bool:
        return self._shutdown

    def _work(self) -> None:
        while True:
            with self._cond:
                while not self._tasks and not self._shutdown:
                    self._cond.wait()
                if self._shutdown:
                    return
                task = self._tasks.popleft()
                self._cond.notify_all()
            try:
                task.result_code = self.handler(task)
            except Exception as exc:  # the worker must survive a failing task
                task.error = exc
            with self._cond:
                self._completed += 1
                self._cond.notify_all()

    def push(self, task: Task) -> None:
        """Queue a task, blocking while the queue is full."""
        with self._cond:
            if self._shutdown:
                raise RuntimeError("cannot push onto a closed task queue")
            while len(self._tasks) >= self._capacity:
                self._cond.wait()
                if self._shutdown:
                    raise RuntimeError("cannot push onto a closed task queue")
            self._tasks.append(task)
            self._cond.notify_all()

    def is_full(self) -> bool:
        """True when no more tasks can be queued without blocking."""
        with self._cond:
            return len(self._tasks) >= self._capacity

    def is_empty(self) -> bool:
        """True when every queued task has been taken by a worker."""
        with self._cond:
            return not self._tasks

    def wait_for_empty(self) -> None:
        """Block until every queued task has been taken by a worker."""
        with self._cond:
            while self._tasks and not self._shutdown:
                self._cond.wait()

    def close(self) -> None:
        """Stop the pool and wait for every worker to finish.

        Tasks already running complete; tasks still waiting are dropped.
        """
        with self._cond:
            self._shutdown = True
            self._cond.notify_all()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join()

    def __enter__(self) -> "TaskQueue":
        return self

    def __exit__(self, *args) -> None:
        self.close()
"""In-memory storage backend for task records.

Beginner terms:
- Protocol: a structural interface; any class with matching methods fits.
- Lock: serializes access so concurrent requests never see half-written state.
- Capacity: the store refuses inserts past `max_records`; nothing is evicted.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from .errors import CapacityExceededError
from .models import MAX_RECORDS, Task


class TaskStore(Protocol):
    def insert(self, task: Task) -> Task: ...

    def get_by_id(self, task_id: str) -> Task | None: ...

    def update(self, task_id: str, **fields: Any) -> Task | None: ...

    def get_all(self) -> list[Task]: ...


class InMemoryTaskStore:
    """Thread-safe, process-scoped storage for Task records."""

    def __init__(self, max_records: int = MAX_RECORDS) -> None:
        if max_records < 1:
            raise ValueError("max_records must be at least 1")
        self.max_records = max_records
        # Lock guards every read and write of the underlying dict.
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}

    def insert(self, task: Task) -> Task:
        """Store a new task; raise when full or when the id is already taken."""
        with self._lock:
            if len(self._tasks) >= self.max_records:
                raise CapacityExceededError(self.max_records)
            if task.task_id in self._tasks:
                raise KeyError(f"Task {task.task_id} already exists")
            self._tasks[task.task_id] = task
        return task

    def get_by_id(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def update(self, task_id: str, **fields: Any) -> Task | None:
        """Shallow-replace the given fields; return None for unknown ids."""
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None
            # Build the full replacement first, then swap it in one assignment.
            updated = current.model_copy(update=fields)
            self._tasks[task_id] = updated
        return updated

    def get_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def exists(self, task_id: str) -> bool:
        with self._lock:
            return task_id in self._tasks

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

"""Task lifecycle: validation, ownership, defaults, and status transitions.

Every public method returns either a `Task` or a `TaskError`. Callers check
with `isinstance(result, TaskError)` and map the error to their transport.

Status values may follow one another in any order. The only transition
side-effect is `completed_at`, which is set when a task enters COMPLETED and
cleared when it leaves.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from .errors import CapacityExceededError, TaskError
from .models import INITIAL_PRIORITY, INITIAL_STATUS, Task, TaskStatus, utc_now
from .storage import TaskStore
from .validation import validate_create_payload, validate_task_params, validate_update_payload

logger = logging.getLogger(__name__)

TaskResult = Task | TaskError


def next_completed_at(
    previous: TaskStatus,
    requested: TaskStatus,
    current: datetime | None,
    now: datetime,
) -> datetime | None:
    """Completion timestamp after moving from `previous` to `requested`."""
    if requested == TaskStatus.COMPLETED and previous != TaskStatus.COMPLETED:
        return now
    if requested != TaskStatus.COMPLETED and previous == TaskStatus.COMPLETED:
        return None
    return current


class TaskService:
    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self._clock = clock

    def create_task(self, owner_id: str, raw_payload: Any) -> TaskResult:
        now = self._clock()
        validation = validate_create_payload(raw_payload, now=now)
        if not validation.ok:
            return self._rejected(
                TaskError.validation_failed("Validation failed", validation.violations),
                event="create",
                user_id=owner_id,
            )

        payload = validation.value
        task = Task(
            task_id=str(uuid.uuid4()),
            user_id=owner_id,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            priority=INITIAL_PRIORITY,
            status=INITIAL_STATUS,
            created_at=now,
            updated_at=now,
            completed_at=None,
        )
        try:
            self.store.insert(task)
        except CapacityExceededError as exc:
            logger.error(
                "task event=capacity_exceeded user_id=%s max_records=%s",
                owner_id,
                exc.max_records,
            )
            return TaskError.capacity_exceeded(exc.max_records)

        logger.info("task event=created task_id=%s user_id=%s", task.task_id, owner_id)
        return task

    def get_task(self, caller_id: str, raw_params: Any) -> TaskResult:
        params = validate_task_params(raw_params)
        if not params.ok:
            return self._rejected(
                TaskError.validation_failed("Invalid task ID", params.violations),
                event="get",
                user_id=caller_id,
            )
        return self._load_owned(caller_id, params.value.task_id, action="access")

    def update_task(self, caller_id: str, raw_params: Any, raw_body: Any) -> TaskResult:
        params = validate_task_params(raw_params)
        if not params.ok:
            return self._rejected(
                TaskError.validation_failed("Invalid task ID", params.violations),
                event="update",
                user_id=caller_id,
            )
        body = validate_update_payload(raw_body)
        if not body.ok:
            return self._rejected(
                TaskError.validation_failed("Validation failed", body.violations),
                event="update",
                user_id=caller_id,
            )

        task_id = params.value.task_id
        existing = self._load_owned(caller_id, task_id, action="update")
        if isinstance(existing, TaskError):
            return existing

        changes = body.value
        now = self._clock()
        updated = self.store.update(
            task_id,
            title=changes.title,
            description=changes.description,
            due_date=changes.due_date,
            priority=changes.priority,
            status=changes.status,
            updated_at=now,
            completed_at=next_completed_at(
                existing.status, changes.status, existing.completed_at, now
            ),
        )
        if updated is None:
            return TaskError.not_found()

        logger.info(
            "task event=updated task_id=%s user_id=%s status_from=%s status_to=%s",
            task_id,
            caller_id,
            existing.status,
            updated.status,
        )
        return updated

    def _load_owned(self, caller_id: str, task_id: str, *, action: str) -> TaskResult:
        # Existence is checked before ownership.
        task = self.store.get_by_id(task_id)
        if task is None:
            return self._rejected(TaskError.not_found(), event=action, user_id=caller_id)
        if task.user_id != caller_id:
            return self._rejected(TaskError.forbidden(action), event=action, user_id=caller_id)
        return task

    @staticmethod
    def _rejected(error: TaskError, *, event: str, user_id: str) -> TaskError:
        logger.warning(
            "task event=%s_rejected user_id=%s code=%s violations=%s",
            event,
            user_id,
            error.kind,
            len(error.details),
        )
        return error

"""Pydantic models shared across API, service, and storage.

Beginner terms used in this file:
- Model: a typed schema class used for validation/serialization.
- StrEnum: an enum whose members are also plain strings on the wire.
- frozen: instances cannot be mutated; updates produce a new copy.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MAX_RECORDS = 1000


class TaskPriority(StrEnum):
    LOW = "Baixa"
    MEDIUM = "Média"
    HIGH = "Alta"


class TaskStatus(StrEnum):
    PENDING = "Pendente"
    IN_PROGRESS = "Em andamento"
    COMPLETED = "Concluída"
    CANCELLED = "Cancelada"


INITIAL_PRIORITY = TaskPriority.MEDIUM
INITIAL_STATUS = TaskStatus.PENDING


class Task(BaseModel):
    """Canonical task record shape returned by API/storage."""

    # Stored records are swapped whole on update, never edited in place.
    model_config = ConfigDict(frozen=True)

    task_id: str
    # Caller identifier of the creator; the only party allowed to read/modify.
    user_id: str
    title: str
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority = INITIAL_PRIORITY
    status: TaskStatus = INITIAL_STATUS
    created_at: datetime
    updated_at: datetime
    # Set when status enters COMPLETED, cleared when it leaves.
    completed_at: datetime | None = None


def utc_now() -> datetime:
    return datetime.now(tz=UTC)

"""Input validation for task create/update payloads and task identifiers.

Each `validate_*` function accepts raw, untyped input (decoded JSON, path
params) and returns a `ValidationOutcome`: either the typed value or the full
list of field violations. Pydantic does the checking; its `ValidationError`
never escapes this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .errors import FieldViolation
from .models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    TaskPriority,
    TaskStatus,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Full date plus time, optional fraction, optional Z/offset. No epoch or date-only forms.
ISO_DATETIME_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:\d{2})?"
)
# Canonical 8-4-4-4-12 hyphenated form only.
UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class PayloadModel(BaseModel):
    # Unknown keys are dropped rather than rejected.
    model_config = ConfigDict(extra="ignore")

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def due_date_must_be_string(cls, value: Any) -> Any:
        # JSON clients send ISO-8601 strings; reject numbers/epoch values.
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, str) and ISO_DATETIME_PATTERN.fullmatch(value):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                pass
        raise PydanticCustomError(
            "due_date_format",
            "Invalid due date. Use the ISO 8601 format.",
        )

    @field_validator("due_date", mode="after", check_fields=False)
    @classmethod
    def due_date_as_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class CreateTaskPayload(PayloadModel):
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None = None

    @field_validator("due_date", mode="after")
    @classmethod
    def due_date_in_future(cls, value: datetime | None, info: ValidationInfo) -> datetime | None:
        if value is None:
            return value
        now = (info.context or {}).get("now") or datetime.now(tz=UTC)
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        if value <= now:
            raise PydanticCustomError("due_date_past", "Due date cannot be in the past.")
        return value


class UpdateTaskPayload(PayloadModel):
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    # Required keys, but explicit null is allowed.
    description: str | None = Field(max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime | None
    priority: TaskPriority
    status: TaskStatus


class TaskParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UUID

    @field_validator("id", mode="before")
    @classmethod
    def id_must_be_hyphenated(cls, value: Any) -> Any:
        if isinstance(value, UUID):
            return value
        if isinstance(value, str) and UUID_PATTERN.fullmatch(value):
            return value
        raise PydanticCustomError("task_id_format", "Task ID must be a valid UUID.")

    @property
    def task_id(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class ValidationOutcome(Generic[ModelT]):
    value: ModelT | None = None
    violations: tuple[FieldViolation, ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.violations


def validate_create_payload(
    raw: Any, *, now: datetime | None = None
) -> ValidationOutcome[CreateTaskPayload]:
    """Validate a create body; `now` anchors the future-due-date check."""
    return _validate(CreateTaskPayload, raw, root="body", context={"now": now})


def validate_update_payload(raw: Any) -> ValidationOutcome[UpdateTaskPayload]:
    """Validate an update body. Due dates are format-checked only."""
    return _validate(UpdateTaskPayload, raw, root="body")


def validate_task_params(raw: Any) -> ValidationOutcome[TaskParams]:
    return _validate(TaskParams, raw, root="params")


def _validate(
    model: type[ModelT],
    raw: Any,
    *,
    root: str,
    context: dict[str, Any] | None = None,
) -> ValidationOutcome[ModelT]:
    try:
        value = model.model_validate(raw, context=context)
    except ValidationError as exc:
        return ValidationOutcome(violations=_violations_from(exc, root=root))
    return ValidationOutcome(value=value)


def _violations_from(exc: ValidationError, *, root: str) -> tuple[FieldViolation, ...]:
    """Flatten every pydantic error into one violation per failed constraint."""
    violations: list[FieldViolation] = []
    for error in exc.errors(include_url=False):
        loc = [str(part) for part in error["loc"]]
        field = ".".join(loc) if loc else root
        violations.append(FieldViolation(field=field, message=error["msg"]))
    return tuple(violations)

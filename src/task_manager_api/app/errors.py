"""Typed failures returned by the task service and mapped by the HTTP layer.

Domain failures travel as `TaskError` values, not exceptions. Only the store
raises, and only for conditions the caller cannot fix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    # Raised by the HTTP boundary only, when no caller identity is present.
    UNAUTHORIZED = "UNAUTHORIZED"


class CapacityExceededError(RuntimeError):
    """Store is full; inserting another record is refused."""

    def __init__(self, max_records: int) -> None:
        super().__init__(f"Maximum records limit reached ({max_records})")
        self.max_records = max_records


@dataclass(frozen=True)
class FieldViolation:
    """One failed constraint on one input field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class TaskError:
    kind: ErrorKind
    message: str
    status_code: int
    details: tuple[FieldViolation, ...] = ()

    @classmethod
    def validation_failed(
        cls, message: str, violations: list[FieldViolation] | tuple[FieldViolation, ...]
    ) -> TaskError:
        return cls(ErrorKind.VALIDATION_ERROR, message, 400, tuple(violations))

    @classmethod
    def not_found(cls) -> TaskError:
        return cls(ErrorKind.NOT_FOUND, "Task not found", 404)

    @classmethod
    def forbidden(cls, action: str = "access") -> TaskError:
        return cls(
            ErrorKind.FORBIDDEN,
            f"You do not have permission to {action} this task",
            403,
        )

    @classmethod
    def capacity_exceeded(cls, max_records: int) -> TaskError:
        return cls(
            ErrorKind.CAPACITY_EXCEEDED,
            f"Task store is full ({max_records} records)",
            503,
        )

    @classmethod
    def unauthorized(cls, header_name: str) -> TaskError:
        return cls(
            ErrorKind.UNAUTHORIZED,
            f"Authentication required. Please provide {header_name} header.",
            401,
        )

    def to_payload(self) -> dict[str, Any]:
        """Error envelope body: {"success": false, "error": {...}}."""
        error: dict[str, Any] = {"code": str(self.kind), "message": self.message}
        if self.details:
            error["details"] = [violation.to_dict() for violation in self.details]
        return {"success": False, "error": error}

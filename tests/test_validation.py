from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from task_manager_api.app.models import TaskPriority, TaskStatus
from task_manager_api.app.validation import (
    validate_create_payload,
    validate_task_params,
    validate_update_payload,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _fields(outcome) -> set[str]:
    return {violation.field for violation in outcome.violations}


def _update_body(**overrides):
    body = {
        "title": "Write report",
        "description": None,
        "due_date": None,
        "priority": "Alta",
        "status": "Em andamento",
    }
    body.update(overrides)
    return body


def test_create_accepts_title_only() -> None:
    outcome = validate_create_payload({"title": "Buy milk"}, now=NOW)
    assert outcome.ok
    assert outcome.value.title == "Buy milk"
    assert outcome.value.description is None
    assert outcome.value.due_date is None


def test_create_reports_every_violated_field() -> None:
    outcome = validate_create_payload({"title": "ab", "description": "x" * 600}, now=NOW)
    assert not outcome.ok
    assert outcome.value is None
    assert _fields(outcome) == {"title", "description"}


def test_create_requires_title() -> None:
    outcome = validate_create_payload({"description": "no title"}, now=NOW)
    assert _fields(outcome) == {"title"}


def test_create_rejects_title_over_limit() -> None:
    outcome = validate_create_payload({"title": "t" * 101}, now=NOW)
    assert _fields(outcome) == {"title"}


def test_create_accepts_boundary_lengths() -> None:
    outcome = validate_create_payload(
        {"title": "abc", "description": "d" * 500}, now=NOW
    )
    assert outcome.ok


def test_create_rejects_past_and_present_due_dates() -> None:
    past = validate_create_payload(
        {"title": "Old task", "due_date": (NOW - timedelta(days=1)).isoformat()}, now=NOW
    )
    present = validate_create_payload(
        {"title": "Old task", "due_date": NOW.isoformat()}, now=NOW
    )
    assert _fields(past) == {"due_date"}
    assert past.violations[0].message == "Due date cannot be in the past."
    assert _fields(present) == {"due_date"}


def test_create_accepts_future_due_date_as_utc() -> None:
    outcome = validate_create_payload(
        {"title": "Plan trip", "due_date": "2026-03-02T09:30:00"}, now=NOW
    )
    assert outcome.ok
    assert outcome.value.due_date == datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


@pytest.mark.parametrize(
    "due_date",
    [
        "tomorrow",
        1767225600,
        "4102444800",
        "2030-01-01",
        "2030-01-01 10:00:00",
        "2030-13-01T10:00",
    ],
)
def test_create_rejects_malformed_due_date(due_date) -> None:
    outcome = validate_create_payload({"title": "Plan trip", "due_date": due_date}, now=NOW)
    assert _fields(outcome) == {"due_date"}
    assert outcome.violations[0].message == "Invalid due date. Use the ISO 8601 format."


@pytest.mark.parametrize("due_date", ["1700000000", "2023-11-14", 1700000000])
def test_update_rejects_non_iso_due_date(due_date) -> None:
    outcome = validate_update_payload(_update_body(due_date=due_date))
    assert _fields(outcome) == {"due_date"}


def test_update_accepts_fractional_seconds_and_offset() -> None:
    outcome = validate_update_payload(_update_body(due_date="2030-01-01T10:00:00.250-03:00"))
    assert outcome.ok
    assert outcome.value.due_date == datetime(2030, 1, 1, 13, 0, 0, 250000, tzinfo=UTC)


def test_create_rejects_non_object_body() -> None:
    outcome = validate_create_payload(["title"], now=NOW)
    assert _fields(outcome) == {"body"}


def test_create_ignores_unknown_keys() -> None:
    outcome = validate_create_payload(
        {"title": "Buy milk", "status": "Concluída", "user_id": "someone"}, now=NOW
    )
    assert outcome.ok


def test_update_accepts_full_body() -> None:
    outcome = validate_update_payload(_update_body())
    assert outcome.ok
    assert outcome.value.priority is TaskPriority.HIGH
    assert outcome.value.status is TaskStatus.IN_PROGRESS


def test_update_allows_past_due_date() -> None:
    outcome = validate_update_payload(_update_body(due_date="2001-01-01T00:00:00Z"))
    assert outcome.ok


def test_update_requires_nullable_keys_to_be_present() -> None:
    body = _update_body()
    del body["description"]
    del body["due_date"]
    outcome = validate_update_payload(body)
    assert _fields(outcome) == {"description", "due_date"}


def test_update_rejects_unknown_enum_values() -> None:
    outcome = validate_update_payload(_update_body(priority="Urgent", status="Done"))
    assert _fields(outcome) == {"priority", "status"}


def test_update_requires_priority_and_status() -> None:
    body = _update_body()
    del body["priority"]
    del body["status"]
    outcome = validate_update_payload(body)
    assert _fields(outcome) == {"priority", "status"}


def test_task_params_accepts_uuid_and_normalizes() -> None:
    raw_id = "3F2504E0-4F89-41D3-9A0C-0305E82C3301"
    outcome = validate_task_params({"id": raw_id})
    assert outcome.ok
    assert outcome.value.task_id == raw_id.lower()


def test_task_params_rejects_non_uuid() -> None:
    outcome = validate_task_params({"id": "not-a-uuid"})
    assert _fields(outcome) == {"id"}


@pytest.mark.parametrize(
    "raw_id",
    [
        "3f2504e04f8941d39a0c0305e82c3301",
        "{3f2504e0-4f89-41d3-9a0c-0305e82c3301}",
        "urn:uuid:3f2504e0-4f89-41d3-9a0c-0305e82c3301",
    ],
)
def test_task_params_rejects_non_canonical_uuid_forms(raw_id: str) -> None:
    outcome = validate_task_params({"id": raw_id})
    assert _fields(outcome) == {"id"}
    assert outcome.violations[0].message == "Task ID must be a valid UUID."

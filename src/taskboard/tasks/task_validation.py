# src/taskboard/tasks/task_validation.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import TaskValidationError
from .task_models import Priority, TaskDraft, TaskStatus
from .task_query import parse_due_date

FORM_FIELDS = ("title", "description", "due_date", "priority", "status")


def _text(fields: Mapping[str, Any], name: str) -> str:
    v = fields.get(name)
    return "" if v is None else str(v)


def validate_draft(fields: Mapping[str, Any]) -> dict[str, str]:
    """
    Check submitted form fields and return per-field error messages.

    An empty dict means the input is acceptable. priority/status may be
    omitted (form defaults apply), but if present must be known values.
    """
    errors: dict[str, str] = {}

    if not _text(fields, "title").strip():
        errors["title"] = "Title is required"

    if not _text(fields, "description").strip():
        errors["description"] = "Description is required"

    due = _text(fields, "due_date").strip()
    if not due:
        errors["due_date"] = "Due date is required"
    elif parse_due_date(due) is None:
        errors["due_date"] = "Due date must be a valid date (YYYY-MM-DD)"

    if fields.get("priority") not in (None, ""):
        try:
            Priority.parse(_text(fields, "priority"))
        except ValueError:
            errors["priority"] = "Priority must be one of: High, Medium, Low"

    if fields.get("status") not in (None, ""):
        try:
            TaskStatus.parse(_text(fields, "status"))
        except ValueError:
            errors["status"] = "Status must be one of: In Progress, Completed"

    return errors


def build_draft(fields: Mapping[str, Any]) -> TaskDraft:
    """Validate and convert form fields; raises TaskValidationError."""
    errors = validate_draft(fields)
    if errors:
        raise TaskValidationError(errors)

    priority_raw = _text(fields, "priority")
    status_raw = _text(fields, "status")
    return TaskDraft(
        title=_text(fields, "title"),
        description=_text(fields, "description"),
        due_date=_text(fields, "due_date").strip(),
        priority=Priority.parse(priority_raw) if priority_raw else Priority.MEDIUM,
        status=TaskStatus.parse(status_raw) if status_raw else TaskStatus.IN_PROGRESS,
    )

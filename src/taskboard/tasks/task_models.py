# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

# Filter sentinel: "do not filter on this field".
ALL = "All"


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, raw: str | None) -> Priority:
        """Accept the canonical value or any casing of it ("high", "HIGH")."""
        text = (raw or "").strip()
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        raise ValueError(f"Unknown priority: {raw!r}")


class TaskStatus(StrEnum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus:
        # "in-progress" / "in_progress" / "in progress" all map to IN_PROGRESS.
        text = (raw or "").strip().lower().replace("-", " ").replace("_", " ")
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Unknown status: {raw!r}")


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


def _coerce_enums(obj: TaskDraft | Task) -> None:
    # "High" == Priority.HIGH, but only the member has .value; store members.
    # Raises ValueError for values outside the enums.
    object.__setattr__(obj, "priority", Priority(obj.priority))
    object.__setattr__(obj, "status", TaskStatus(obj.status))


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """A task without an id: what a form submits for creation."""

    title: str
    description: str
    due_date: str
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.IN_PROGRESS

    def __post_init__(self) -> None:
        _coerce_enums(self)

    @classmethod
    def blank(cls, today: date | None = None) -> TaskDraft:
        """Defaults of a fresh "Add Task" form (due today, Medium, In Progress)."""
        today = today or date.today()
        return cls(title="", description="", due_date=today.isoformat())

    def with_id(self, task_id: str) -> Task:
        return Task(
            id=task_id,
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            priority=self.priority,
            status=self.status,
        )


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    description: str
    due_date: str
    priority: Priority
    status: TaskStatus

    def __post_init__(self) -> None:
        _coerce_enums(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "priority": self.priority.value,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Raises KeyError for a missing field and ValueError for an unknown
        priority/status value.
        """
        return cls(
            id=str(raw["id"]),
            title=str(raw["title"]),
            description=str(raw["description"]),
            due_date=str(raw["dueDate"]),
            priority=Priority(raw["priority"]),
            status=TaskStatus(raw["status"]),
        )


DEFAULT_TASKS: tuple[Task, ...] = (
    Task(
        id="1",
        title="Setup project structure",
        description="Create the initial project structure with all necessary files",
        due_date="2025-05-12",
        priority=Priority.MEDIUM,
        status=TaskStatus.COMPLETED,
    ),
    Task(
        id="2",
        title="Implement search feature",
        description="Add search functionality to the dashboard",
        due_date="2025-05-15",
        priority=Priority.HIGH,
        status=TaskStatus.IN_PROGRESS,
    ),
    Task(
        id="3",
        title="Fix navigation bug",
        description="Resolve the navigation issue on mobile devices",
        due_date="2025-05-17",
        priority=Priority.MEDIUM,
        status=TaskStatus.IN_PROGRESS,
    ),
    Task(
        id="4",
        title="Update user profile page",
        description="Redesign the user profile page with new UI elements",
        due_date="2025-05-18",
        priority=Priority.LOW,
        status=TaskStatus.COMPLETED,
    ),
    Task(
        id="5",
        title="Optimize database queries",
        description="Improve performance of dashboard queries",
        due_date="2025-05-20",
        priority=Priority.LOW,
        status=TaskStatus.COMPLETED,
    ),
)

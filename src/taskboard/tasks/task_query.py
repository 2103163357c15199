# src/taskboard/tasks/task_query.py

"""
Pure query functions over a snapshot of tasks.

None of these mutate their input. Callers compose them as
search -> filter -> sort (see apply_view); the store's own ordering is
never affected by display-time sorting.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime

from .task_models import ALL, Priority, SortOrder, Task, TaskStatus

logger = logging.getLogger(__name__)


def parse_due_date(raw: str | None) -> date | None:
    """
    Parse a due date as a calendar date.

    Accepts YYYY-MM-DD with or without zero padding ("2025-5-9") and a full
    ISO datetime (only the date part is kept). Returns None if unparseable.
    """
    if not raw:
        return None
    text = raw.strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def search(tasks: Sequence[Task], query: str | None) -> Sequence[Task]:
    """Case-insensitive substring match on title or description."""
    if not query:
        return tasks
    q = query.lower()
    return [t for t in tasks if q in t.title.lower() or q in t.description.lower()]


def filter_tasks(
    tasks: Sequence[Task],
    priority: Priority | str | None = ALL,
    status: TaskStatus | str | None = ALL,
) -> Sequence[Task]:
    """
    Exact-match filter on priority and status (AND-combined).

    "All" or None disables a criterion; with both disabled the input is
    returned as is.
    """
    want_priority = None if priority in (None, ALL) else str(priority)
    want_status = None if status in (None, ALL) else str(status)

    if want_priority is None and want_status is None:
        return tasks

    return [
        t
        for t in tasks
        if (want_priority is None or t.priority.value == want_priority)
        and (want_status is None or t.status.value == want_status)
    ]


def _due_key(task: Task) -> date:
    d = parse_due_date(task.due_date)
    if d is None:
        logger.debug("Unparseable due date for task %s: %r", task.id, task.due_date)
        return date.max
    return d


def sort_tasks(tasks: Sequence[Task], order: SortOrder | str = SortOrder.ASC) -> list[Task]:
    """
    Stable sort by due date.

    Ties keep their input order in both directions. Tasks whose due date
    cannot be parsed sort as the latest possible date.
    """
    direction = SortOrder(order)
    # sorted(reverse=True) keeps equal elements in input order.
    return sorted(tasks, key=_due_key, reverse=direction is SortOrder.DESC)


def apply_view(
    tasks: Sequence[Task],
    *,
    query: str | None = None,
    priority: Priority | str | None = ALL,
    status: TaskStatus | str | None = ALL,
    order: SortOrder | str = SortOrder.ASC,
) -> list[Task]:
    """Compose search -> filter -> sort into the list a front-end displays."""
    result = search(tasks, query)
    result = filter_tasks(result, priority, status)
    return sort_tasks(result, order)

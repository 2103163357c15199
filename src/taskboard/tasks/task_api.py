# src/taskboard/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..core.debounce import Debouncer
from ..core.state import AppState
from .errors import TaskNotFoundError
from .task_models import Task
from .task_query import apply_view
from .task_validation import build_draft

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3


def _settings_delay(settings: Any) -> float:
    ms = getattr(settings, "search_debounce_ms", None)
    if ms is None:
        return DEFAULT_SEARCH_DEBOUNCE_SECONDS
    return max(0, int(ms)) / 1000.0


def visible_tasks(state: AppState) -> list[Task]:
    """
    What the front-end should display right now.

    Applies the current view selections (search -> filter -> sort) to a
    snapshot of the store; the store itself is not reordered.
    """
    view = state.view
    return apply_view(
        state.store.list(),
        query=view.query,
        priority=view.priority,
        status=view.status,
        order=view.order,
    )


def submit_task_form(
    state: AppState, fields: Mapping[str, Any], task_id: str | None = None
) -> Task:
    """
    Convenience helper for an add/edit form.

    Validates first (TaskValidationError carries per-field messages), then
    creates a new task (no task_id) or replaces the existing one.
    Editing an id that no longer exists raises TaskNotFoundError so the form
    can tell the user, regardless of the store's strictness.
    """
    draft = build_draft(fields)

    if task_id is None:
        task = state.store.create(draft)
        logger.info("Created task id=%s", task.id)
        return task

    task = draft.with_id(task_id)
    if not state.store.update(task):
        raise TaskNotFoundError(task_id)
    logger.info("Updated task id=%s", task_id)
    return task


def form_fields_for(task: Task) -> dict[str, str]:
    """Pre-fill values for editing an existing task."""
    return {
        "title": task.title,
        "description": task.description,
        "due_date": task.due_date,
        "priority": task.priority.value,
        "status": task.status.value,
    }


class SearchInput:
    """
    Debounced search box bound to AppState.view.query.

    on_input() is called for every keystroke; the query is applied once the
    input pauses for `delay` seconds (default: TASKBOARD_SEARCH_DEBOUNCE_MS
    from settings). `on_change` (optional) receives the freshly computed
    visible tasks.
    """

    def __init__(
        self,
        state: AppState,
        *,
        delay: float | None = None,
        on_change: Callable[[list[Task]], None] | None = None,
    ) -> None:
        self._state = state
        self._on_change = on_change
        if delay is None:
            delay = _settings_delay(state.settings)
        self._debouncer = Debouncer(delay, self._apply)
        self.text = state.view.query

    @property
    def delay(self) -> float:
        return self._debouncer.delay

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, text: str) -> None:
        self.text = text
        self._debouncer.trigger(text)

    def flush(self) -> None:
        self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    def _apply(self, text: str) -> None:
        self._state.view.query = text
        logger.debug("Search query applied: %r", text)
        if self._on_change is not None:
            self._on_change(visible_tasks(self._state))

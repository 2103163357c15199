# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import ALL, Priority, SortOrder, TaskStatus
from .ports import TaskRepo


@dataclass
class ViewState:
    """Transient display selections held by the front-end (never persisted)."""

    query: str = ""
    priority: Priority | str = ALL
    status: TaskStatus | str = ALL
    order: SortOrder = SortOrder.ASC

    def reset(self) -> None:
        self.query = ""
        self.priority = ALL
        self.status = ALL
        self.order = SortOrder.ASC


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskRepo
    storage: Any

    view: ViewState = field(default_factory=ViewState)

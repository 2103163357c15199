# src/taskboard/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Sequence

from ..core.state import AppState
from ..tasks.errors import TaskboardError, TaskValidationError
from ..tasks.task_api import form_fields_for, submit_task_form, visible_tasks
from ..tasks.task_models import ALL, Priority, SortOrder, Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

# key=value names accepted by /add and /edit -> form field names
_FIELD_ALIASES = {
    "title": "title",
    "description": "description",
    "desc": "description",
    "due": "due_date",
    "due_date": "due_date",
    "duedate": "due_date",
    "priority": "priority",
    "prio": "priority",
    "status": "status",
}

_FIELD_LABELS = {
    "title": "title",
    "description": "description",
    "due_date": "due",
    "priority": "priority",
    "status": "status",
}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}"
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskValidationError as e:
            return format_validation_errors(e.errors)
        except TaskboardError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def format_validation_errors(errors: dict[str, str]) -> str:
    lines = ["Task not saved:"]
    for field_name, message in errors.items():
        if field_name in _FIELD_LABELS:
            lines.append(f"  {_FIELD_LABELS[field_name]}: {message}")
        else:
            lines.append(f"  {message}")
    return "\n".join(lines)


def format_task_table(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "No tasks found."

    headers = ("ID", "Due", "Priority", "Status", "Title", "Description")
    rows = [
        (t.id[:8], t.due_date, t.priority.value, t.status.value, t.title, t.description)
        for t in tasks
    ]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        padded = [c.ljust(widths[i]) for i, c in enumerate(cells[:-1])]
        return "  ".join([*padded, cells[-1]])

    out = [_line(headers), _line(["-" * w for w in widths[:-1]] + ["-" * len(headers[-1])])]
    out.extend(_line(row) for row in rows)
    return "\n".join(out)


def _describe_view(state: AppState) -> str:
    v = state.view
    query = f'"{v.query}"' if v.query else "-"
    return f"search={query} priority={v.priority} status={v.status} sort={v.order}"


# ---- argument helpers ----


def _parse_fields(args: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise TaskValidationError({"args": f"Expected key=value, got {arg!r}"})
        name = _FIELD_ALIASES.get(key.strip().lower())
        if name is None:
            raise TaskValidationError({"args": f"Unknown field {key!r}"})
        fields[name] = value
    return fields


def _resolve_id(state: AppState, raw: str) -> str | None:
    """Accept a full id or an unambiguous prefix (the table shows 8 chars)."""
    raw = raw.strip()
    if not raw:
        return None
    tasks = state.store.list()
    for t in tasks:
        if t.id == raw:
            return t.id
    matches = [t.id for t in tasks if t.id.startswith(raw)]
    return matches[0] if len(matches) == 1 else None


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = visible_tasks(state)
    total = state.store.count_tasks()
    return f"{format_task_table(tasks)}\n\nShowing {len(tasks)} of {total} ({_describe_view(state)})"


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add title="Write report" description="Q2 numbers" due=2025-06-01 [priority=High] [status=Completed]
    """
    task = submit_task_form(state, _parse_fields(args))
    return f"Task added: {task.id[:8]} {task.title}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> field=value ...   (unspecified fields keep their current value)
    """
    if not args:
        return "Usage: /edit <id> title=.. description=.. due=.. priority=.. status=.."
    task_id = _resolve_id(state, args[0])
    current = state.store.get(task_id) if task_id else None
    if current is None:
        return f"No task with id {args[0]}."

    fields = form_fields_for(current)
    fields.update(_parse_fields(args[1:]))
    task = submit_task_form(state, fields, task_id=current.id)
    return f"Task updated: {task.id[:8]} {task.title}"


def cmd_prio(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /prio <id> high|medium|low"
    task_id = _resolve_id(state, args[0])
    if task_id is None:
        return f"No task with id {args[0]}."
    try:
        priority = Priority.parse(args[1])
    except ValueError:
        return "Priority must be one of: High, Medium, Low"
    state.store.update_priority(task_id, priority)
    return f"Task {task_id[:8]} priority -> {priority.value}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    task_id = _resolve_id(state, args[0])
    current = state.store.get(task_id) if task_id else None
    if current is None:
        return f"No task with id {args[0]}."
    fields = form_fields_for(current)
    fields["status"] = TaskStatus.COMPLETED.value
    submit_task_form(state, fields, task_id=current.id)
    return f"Task {current.id[:8]} marked as completed."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /del <id>"
    task_id = _resolve_id(state, args[0])
    if task_id is None or not state.store.delete(task_id):
        return f"No task with id {args[0]}."
    return f"Task {task_id[:8]} deleted."


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search text   -> match title/description (case-insensitive)
    /search        -> clear the search
    """
    state.view.query = " ".join(args)
    return cmd_list(state, [])


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                      -> show current filters
    /filter high                 -> priority only
    /filter all completed        -> status only
    /filter medium in-progress   -> both
    """
    if not args:
        return f"Filters: priority={state.view.priority} status={state.view.status}"
    if len(args) > 2:
        return "Usage: /filter [priority|all] [status|all]"

    try:
        priority = ALL if args[0].lower() == "all" else Priority.parse(args[0])
        status = ALL
        if len(args) == 2 and args[1].lower() != "all":
            status = TaskStatus.parse(args[1])
    except ValueError as e:
        return str(e)

    state.view.priority = priority
    state.view.status = status
    return cmd_list(state, [])


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not args:
        # Toggle, like a header click.
        state.view.order = SortOrder.DESC if state.view.order is SortOrder.ASC else SortOrder.ASC
    else:
        try:
            state.view.order = SortOrder(args[0].lower())
        except ValueError:
            return "Usage: /sort [asc|desc]"
    return cmd_list(state, [])


def cmd_reset(state: AppState, args: list[str]) -> str:
    state.view.reset()
    return cmd_list(state, [])


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks with the current search/filter/sort.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text='Add a task: /add title=".." description=".." due=YYYY-MM-DD [priority=..] [status=..]',
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> field=value ...")
registry.register("prio", cmd_prio, help_text="Change priority: /prio <id> high|medium|low.")
registry.register("done", cmd_done, help_text="Mark a task as completed: /done <id>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["delete", "rm"])
registry.register("search", cmd_search, help_text="Search title/description: /search [text].")
registry.register("filter", cmd_filter, help_text="Filter: /filter [priority|all] [status|all].")
registry.register("sort", cmd_sort, help_text="Sort by due date: /sort [asc|desc] (no arg toggles).")
registry.register("reset", cmd_reset, help_text="Clear search, filters and sort.")

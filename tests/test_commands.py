# tests/test_commands.py

from __future__ import annotations

from taskboard.cli.commands import CommandRegistry, format_task_table, registry
from taskboard.tasks.task_models import ALL, Priority, SortOrder, TaskStatus


def test_command_registry_routes_names_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0, "b": 0}

    def ha(state, args):
        called["a"] += 1
        return "a:" + ",".join(args)

    def hb(state, args):
        called["b"] += 1
        return "b"

    reg.register("a", ha, "a")
    reg.register("b", hb, "b", aliases=["bee"])

    assert reg.handle(state, '/a x "y z"') == "a:x,y z"
    assert reg.handle(state, "/BEE") == "b"
    assert called == {"a": 1, "b": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")
    assert "Cannot parse" in (reg.handle(state, '/a "unterminated') or "")


def test_add_command_creates_task(state) -> None:
    reply = registry.handle(
        state, '/add title="Book venue" description="Team offsite" due=2025-09-01 priority=high'
    )
    assert reply is not None and reply.startswith("Task added")

    task = state.store.list()[-1]
    assert task.title == "Book venue"
    assert task.priority is Priority.HIGH
    assert task.status is TaskStatus.IN_PROGRESS


def test_add_command_reports_field_errors(state, storage) -> None:
    reply = registry.handle(state, '/add title="" description=x due=2025-01-01')
    assert reply is not None
    assert "title: Title is required" in reply
    assert len(state.store.list()) == 5
    assert storage.writes == []


def test_add_command_rejects_unknown_field(state) -> None:
    reply = registry.handle(state, "/add colour=red")
    assert reply is not None and "Unknown field" in reply


def test_edit_keeps_unspecified_fields(state) -> None:
    reply = registry.handle(state, '/edit 3 title="Fix mobile navigation" status=completed')
    assert reply is not None and reply.startswith("Task updated")

    task = state.store.get("3")
    assert task.title == "Fix mobile navigation"
    assert task.status is TaskStatus.COMPLETED
    assert task.description == "Resolve the navigation issue on mobile devices"
    assert task.due_date == "2025-05-17"


def test_prio_done_and_delete(state) -> None:
    assert "High" in (registry.handle(state, "/prio 5 HIGH") or "")
    assert state.store.get("5").priority is Priority.HIGH

    assert "completed" in (registry.handle(state, "/done 2") or "")
    assert state.store.get("2").status is TaskStatus.COMPLETED

    assert "deleted" in (registry.handle(state, "/rm 1") or "")
    assert state.store.get("1") is None

    assert "No task" in (registry.handle(state, "/del 1") or "")
    assert "No task" in (registry.handle(state, "/prio 42 low") or "")
    assert "Priority must be" in (registry.handle(state, "/prio 4 urgent") or "")


def test_id_prefix_resolution(state) -> None:
    registry.handle(state, '/add title=T description=D due=2025-01-01')
    created = state.store.list()[-1]
    assert "deleted" in (registry.handle(state, f"/del {created.id[:8]}") or "")
    assert state.store.get(created.id) is None


def test_empty_id_matches_nothing(state) -> None:
    for task_id in ("2", "3", "4", "5"):
        state.store.delete(task_id)
    assert len(state.store.list()) == 1

    assert "No task" in (registry.handle(state, '/del ""') or "")
    assert "No task" in (registry.handle(state, "/del ' '") or "")
    assert "No task" in (registry.handle(state, '/done ""') or "")
    assert state.store.get("1") is not None


def test_search_filter_sort_update_view(state) -> None:
    reply = registry.handle(state, "/search DASHBOARD")
    assert state.view.query == "DASHBOARD"
    assert reply is not None and "Showing 2 of 5" in reply

    registry.handle(state, "/filter low")
    assert state.view.priority is Priority.LOW
    assert state.view.status == ALL

    registry.handle(state, "/search")
    reply = registry.handle(state, '/filter all "in progress"')
    assert state.view.priority == ALL
    assert state.view.status is TaskStatus.IN_PROGRESS
    assert reply is not None and "Showing 2 of 5" in reply

    registry.handle(state, "/sort")
    assert state.view.order is SortOrder.DESC
    registry.handle(state, "/sort asc")
    assert state.view.order is SortOrder.ASC
    assert "Usage" in (registry.handle(state, "/sort up") or "")

    registry.handle(state, "/reset")
    assert (state.view.query, state.view.priority, state.view.status) == ("", ALL, ALL)


def test_list_shows_sorted_table(state) -> None:
    state.view.order = SortOrder.DESC
    reply = registry.handle(state, "/list") or ""
    lines = reply.splitlines()
    assert lines[0].split()[:4] == ["ID", "Due", "Priority", "Status"]
    assert lines[2].startswith("5 ")
    assert "Showing 5 of 5" in reply


def test_format_task_table_empty() -> None:
    assert format_task_table([]) == "No tasks found."


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/edit", "/prio", "/del", "/search", "/filter", "/sort"):
        assert name in text

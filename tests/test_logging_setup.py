# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from taskboard.logging_setup import _ConsoleFilter, console_floor, parse_level


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "floor"),
    [
        ("taskboard.tasks.task_store", logging.WARNING),
        ("taskboard.tasks.task_codec", logging.WARNING),
        ("taskboard.storage.sqlite_storage", logging.WARNING),
        ("taskboard.connectors.console_connector", logging.WARNING),
        ("taskboard.tasks.task_api", logging.NOTSET),
        ("taskboard.cli.main", logging.NOTSET),
        ("taskboard", logging.NOTSET),
        ("py.warnings", logging.ERROR),
        ("urllib3.connectionpool", logging.ERROR),
        ("taskboardx", logging.ERROR),
    ],
)
def test_console_floor_per_logger(name: str, floor: int) -> None:
    assert console_floor(name) == floor


def test_console_filter_hides_store_chatter_but_not_failures() -> None:
    f = _ConsoleFilter(logging.INFO)

    assert not f.filter(_record("taskboard.tasks.task_store", logging.DEBUG))
    assert not f.filter(_record("taskboard.tasks.task_store", logging.INFO))
    assert f.filter(_record("taskboard.tasks.task_store", logging.ERROR))
    assert f.filter(_record("taskboard.tasks.task_codec", logging.WARNING))

    assert f.filter(_record("taskboard.cli.main", logging.INFO))
    assert not f.filter(_record("taskboard.cli.main", logging.DEBUG))


def test_console_filter_respects_configured_level() -> None:
    f = _ConsoleFilter(logging.ERROR)
    assert not f.filter(_record("taskboard.cli.main", logging.WARNING))
    assert f.filter(_record("taskboard.cli.main", logging.ERROR))


def test_parse_level() -> None:
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" Warning ") == logging.WARNING
    assert parse_level(logging.ERROR) == logging.ERROR
    assert parse_level("loud") == logging.INFO
    assert parse_level(None, logging.DEBUG) == logging.DEBUG

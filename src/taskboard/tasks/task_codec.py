# src/taskboard/tasks/task_codec.py

"""
JSON codec for the task collection.

Wire format: a JSON array of objects with the string fields
id, title, description, dueDate, priority, status (in that order).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from .errors import TaskCodecError
from .task_models import Task

logger = logging.getLogger(__name__)


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str) -> list[Task]:
    """
    Decode a stored collection.

    The text must be a JSON array, otherwise TaskCodecError is raised.
    Individual records that are malformed are skipped (logged), so one bad
    entry does not make the whole collection unreadable.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise TaskCodecError(f"Stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskCodecError(f"Stored tasks must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping stored task #%d: not an object", i)
            continue
        try:
            out.append(Task.from_dict(item))
        except (KeyError, ValueError) as e:
            logger.warning("Skipping stored task #%d: %s", i, e)
    return out

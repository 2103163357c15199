# src/taskboard/storage/json_file_storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

from ..tasks.errors import StorageError

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStorage:
    """
    Key-value storage backed by one file per key: <directory>/<key>.json.

    Writes go to a temporary sibling first and are moved into place with
    os.replace, so a crash mid-write never leaves a truncated file.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileStorage ready dir=%s", self._dir)

    def close(self) -> None:
        return

    def _path_for(self, key: str) -> Path:
        if not key or not _SAFE_KEY.match(key) or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(value, "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote key=%s bytes=%d to %s", key, len(value), path)

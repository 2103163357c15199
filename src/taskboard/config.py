# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

STORAGE_BACKENDS = ("file", "sqlite", "memory")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    storage_path: Path
    storage_key: str

    # ---- Store behaviour ----
    seed_defaults: bool
    strict_not_found: bool

    # ---- Search ----
    search_debounce_ms: int

    @property
    def search_debounce_seconds(self) -> float:
        return max(0, self.search_debounce_ms) / 1000.0

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard") or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        storage_backend = _env(_k("STORAGE_BACKEND"), "file").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            storage_backend = "file"

        # file backend: a directory of <key>.json; sqlite backend: a db file.
        default_storage_path = data_dir / ("taskboard.sqlite3" if storage_backend == "sqlite" else "storage")
        storage_path = _env_path(_k("STORAGE_PATH"), default_storage_path)
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        seed_defaults = _env_bool(_k("SEED_DEFAULTS"), True)
        strict_not_found = _env_bool(_k("STRICT_NOT_FOUND"), False)

        search_debounce_ms = _env_int(_k("SEARCH_DEBOUNCE_MS"), 300)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            storage_key=storage_key,
            seed_defaults=seed_defaults,
            strict_not_found=strict_not_found,
            search_debounce_ms=search_debounce_ms,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS

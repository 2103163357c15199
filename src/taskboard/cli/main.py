# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (store loaded or seeded), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # The store writes through on every mutation; nothing is buffered.
    try:
        storage = getattr(state, "storage", None)
        if storage is not None and hasattr(storage, "close"):
            storage.close()
    except Exception:
        logger.debug("Storage close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    log_dir = getattr(settings, "data_dir", ".local/taskboard")
    log_file = setup_logging(log_dir=log_dir, console_level=getattr(settings, "log_level", "INFO"))
    logger.debug("Logging to %s", log_file)

    logger.info(
        "Starting %s (storage=%s path=%s)...",
        settings.app_name,
        settings.storage_backend,
        settings.storage_path,
    )

    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; %d tasks loaded. Nothing else to run.", state.store.count_tasks())
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()

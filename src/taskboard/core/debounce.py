# src/taskboard/core/debounce.py

from __future__ import annotations

"""
Debounce for rapidly repeated input (search box keystrokes).

Runs on the asyncio event loop (single thread): each trigger() cancels the
pending call and schedules a fresh one after `delay` seconds, so a burst of
input results in exactly one evaluation with the last arguments.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._delay = max(0.0, float(delay))
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._args: tuple[Any, ...] = ()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def trigger(self, *args: Any) -> None:
        """(Re)start the timer; the callback will receive these args."""
        self.cancel()
        self._args = args
        self._handle = self._get_loop().call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run the pending call now (no-op if nothing is pending)."""
        if self._handle is None:
            return
        self.cancel()
        self._fire()

    def _fire(self) -> None:
        self._handle = None
        args, self._args = self._args, ()
        try:
            self._callback(*args)
        except Exception:
            logger.exception("Debounced callback %r failed", self._callback)

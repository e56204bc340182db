"""
Schedulers - when a coalesced publish actually runs.

A publish is deferred to the next loop tick so that every synchronous
store write of one interaction is complete before any listener re-reads.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], object]


class Scheduler(Protocol):
    def call_soon(self, callback: Callback) -> None: ...


class AsyncioScheduler:
    """
    Runs callbacks on the next tick of an asyncio loop.

    Without a running loop (plain synchronous callers) the callback runs
    immediately.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_soon(self, callback: Callback) -> None:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                callback()
                return
        loop.call_soon(callback)


class ManualScheduler:
    """Queues callbacks until ``run_pending`` is called."""

    def __init__(self) -> None:
        self._pending: list[Callback] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_soon(self, callback: Callback) -> None:
        self._pending.append(callback)

    def run_pending(self) -> int:
        """Run queued callbacks, including any they queue; returns how many ran."""
        ran = 0
        while self._pending:
            callback = self._pending.pop(0)
            callback()
            ran += 1
        return ran


class ImmediateScheduler:
    """Runs callbacks synchronously."""

    def call_soon(self, callback: Callback) -> None:
        callback()

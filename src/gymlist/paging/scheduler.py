"""Schedulers for the incremental loader's settling delay.

The loader never sleeps itself; it hands the "commit the next page" callback
to a `SettleScheduler`. Tests use `ImmediateScheduler` to settle
synchronously, while an asyncio host defers the commit on its own event loop
through APScheduler.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from gymlist.logging import get_logger

logger = get_logger(__name__)


class SettleScheduler(ABC):
    """Runs a callback once after a delay, on the host's event loop."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Invoke `callback` once, `delay` seconds from now."""
        raise NotImplementedError


class ImmediateScheduler(SettleScheduler):
    """Runs callbacks synchronously, ignoring the delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        callback()


class AsyncIOSettleScheduler(SettleScheduler):
    """Defers callbacks on the running asyncio loop using AsyncIOScheduler.

    Callbacks are wrapped in coroutines so the executor runs them on the event
    loop rather than in a worker thread. The underlying scheduler is started
    lazily on first use, which must happen inside a running loop.
    """

    def __init__(self) -> None:
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def _ensure_started(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            loop = asyncio.get_running_loop()
            self._scheduler = AsyncIOScheduler(event_loop=loop)
            self._scheduler.start(paused=False)
        return self._scheduler

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        scheduler = self._ensure_started()

        async def _job() -> None:
            callback()

        run_date = datetime.now(timezone.utc) + timedelta(seconds=max(0.0, delay))
        scheduler.add_job(
            _job,
            trigger=DateTrigger(run_date=run_date),
            max_instances=1,
            misfire_grace_time=None,
        )
        logger.debug("settle_scheduled", delay=delay)

    def shutdown(self, *, wait: bool = False) -> None:
        """Shut down the scheduler, dropping pending callbacks."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=wait)
            self._scheduler = None

"""Recurring removal of expired sessions.

Request-time validation already rejects expired sessions, so the sweep only
bounds how many dead records pile up in the store.
"""

import asyncio
import contextlib
from datetime import timedelta

import structlog

from notebox.core.modules.session.service import SessionService

logger = structlog.get_logger(__name__)


class SessionSweeper:
    """Runs ``SessionService.cleanup_expired_sessions`` on a fixed interval."""

    def __init__(self, sessions: SessionService, interval: timedelta) -> None:
        self._sessions = sessions
        self._interval = interval.total_seconds()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="session-sweeper")
        logger.debug("session_sweeper_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("session_sweeper_stopped")

    async def run_once(self) -> int:
        return await self._sessions.cleanup_expired_sessions()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.run_once()
            except Exception:
                # A failed pass must not kill the schedule, the next one retries
                logger.exception("session_sweep_failed")

"""Periodic session expiry check on the running asyncio loop."""

import asyncio
from datetime import timedelta

import structlog

from eventease import conf
from eventease.services.session_service import SessionStore

logger = structlog.get_logger(__name__)


class SessionExpiryMonitor:
    """Calls ``SessionStore.check_expiry`` at a fixed interval.

    Runs as a task on the caller's event loop, so a tick never runs in the
    middle of another operation, only between them.
    """

    def __init__(self, sessions: SessionStore, interval: timedelta | None = None) -> None:
        self._sessions = sessions
        self.interval = interval or conf.EXPIRY_CHECK_INTERVAL
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("expiry_monitor_started", interval_seconds=self.interval.total_seconds())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("expiry_monitor_stopped")

    def tick(self) -> bool:
        return self._sessions.check_expiry()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval.total_seconds())
            try:
                self.tick()
            except Exception as e:
                logger.exception("expiry_check_failed", error=str(e))

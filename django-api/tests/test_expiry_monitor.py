"""Tests for SessionExpiryMonitor.

Run with: pytest tests/test_expiry_monitor.py -v
"""

import asyncio
from datetime import timedelta

from eventease.services import SessionExpiryMonitor
from eventease.signals import session_expired


class TestSessionExpiryMonitor:
    def test_tick_expires_idle_session(self, session_store, clock):
        monitor = SessionExpiryMonitor(session_store)
        assert not monitor.tick()
        clock.advance(minutes=30)
        assert monitor.tick()

    def test_default_interval(self, session_store):
        assert SessionExpiryMonitor(session_store).interval == timedelta(minutes=1)

    def test_running_monitor_expires_session_once(self, session_store, clock, capture_signal):
        expired = capture_signal(session_expired)
        monitor = SessionExpiryMonitor(session_store, interval=timedelta(milliseconds=10))
        clock.advance(minutes=45)

        async def scenario():
            monitor.start()
            assert monitor.running
            await asyncio.sleep(0.1)
            await monitor.stop()

        asyncio.run(scenario())

        assert len(expired) == 1
        assert not monitor.running

    def test_stop_without_start_is_a_no_op(self, session_store):
        monitor = SessionExpiryMonitor(session_store)
        asyncio.run(monitor.stop())
        assert not monitor.running

    def test_failed_check_does_not_stop_the_monitor(self):
        class FlakySessions:
            def __init__(self):
                self.calls = 0

            def check_expiry(self):
                self.calls += 1
                if self.calls == 1:
                    raise RuntimeError("receiver failed")
                return False

        sessions = FlakySessions()
        monitor = SessionExpiryMonitor(sessions, interval=timedelta(milliseconds=10))

        async def scenario():
            monitor.start()
            await asyncio.sleep(0.1)
            assert monitor.running
            await monitor.stop()

        asyncio.run(scenario())

        assert sessions.calls >= 2

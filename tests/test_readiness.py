"""
Tests for waiting on backend availability.
"""

import asyncio
import time

from conftest import FakeBackend

from window_chat.services import wait_until_available


class SlowStartBackend(FakeBackend):
    """Becomes available after a number of probes."""

    def __init__(self, ready_after: int) -> None:
        super().__init__()
        self.ready_after = ready_after
        self.probes = 0

    async def is_available(self) -> bool:
        self.probes += 1
        return self.probes > self.ready_after


def test_available_immediately():
    backend = SlowStartBackend(ready_after=0)
    assert asyncio.run(wait_until_available(backend, timeout=1.0, interval=0.01)) is True
    assert backend.probes == 1


def test_becomes_available_while_waiting():
    backend = SlowStartBackend(ready_after=3)
    assert asyncio.run(wait_until_available(backend, timeout=1.0, interval=0.01)) is True
    assert backend.probes == 4


def test_times_out():
    backend = FakeBackend(available=False)
    start = time.monotonic()
    assert asyncio.run(wait_until_available(backend, timeout=0.05, interval=0.01)) is False
    assert time.monotonic() - start < 1.0

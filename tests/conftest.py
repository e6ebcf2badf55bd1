"""
Shared fixtures: fake generation backend, manual clock, wired coordinator.
"""

import asyncio
from typing import Any

import pytest

from window_chat.errors import GenerationError
from window_chat.repositories import InMemoryCacheRepository, TranscriptRepository
from window_chat.services import CacheService, MessageCoordinator


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


class FakeBackend:
    """Scripted GenerationBackend.

    Returns ``responses`` in order (the last one repeats). A response that is
    an exception instance is raised instead. When ``gate`` is set, every
    ``generate`` call waits for it before answering.
    """

    def __init__(self, *responses: Any, available: bool = True, name: str = "fake") -> None:
        self.responses = list(responses) or ["ok"]
        self.available = available
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.closed = False
        self.availability_checks = 0
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def generate(self, message: str) -> Any:
        self.calls.append(message)
        if self.gate is not None:
            await self.gate.wait()
        index = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, BaseException):
            raise response
        return response

    async def is_available(self) -> bool:
        self.availability_checks += 1
        return self.available

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def cache(clock):
    return CacheService.create(
        repository=InMemoryCacheRepository.create(max_size=100, clock=clock),
        context_turns=2,
    )


@pytest.fixture
def backend():
    return FakeBackend({"message": {"content": "Recursion is..."}})


@pytest.fixture
def failing_backend():
    return FakeBackend(GenerationError("backend exploded"), "Recovered answer")


@pytest.fixture
def transcript(clock):
    return TranscriptRepository(clock=clock)


def make_coordinator(cache, backend, sink) -> MessageCoordinator:
    return MessageCoordinator(
        cache=cache,
        backend=backend,
        sink=sink,
        readiness_timeout=0.05,
        readiness_interval=0.01,
    )


@pytest.fixture
def coordinator(cache, backend, transcript):
    return make_coordinator(cache, backend, transcript)

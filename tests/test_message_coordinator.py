"""
Tests for the message coordinator: cache-first answering, single-flight,
failure recovery.
"""

import asyncio

import pytest
from conftest import FakeBackend, make_coordinator

from window_chat.entities import CacheKeyEntity, ReplySource
from window_chat.errors import ChatBusyError
from window_chat.services import FAILURE_NOTICE, READY_NOTICE, WAITING_NOTICE


def emissions(transcript):
    return [(m.text, m.is_user) for m in transcript.messages()]


def test_end_to_end_miss_then_hit(coordinator, backend, cache, transcript):
    """A repeated question in the same context is answered from cache."""
    reply = asyncio.run(coordinator.handle("Explain recursion", []))

    assert reply.text == "Recursion is..."
    assert reply.source is ReplySource.GENERATED
    assert backend.calls == ["Explain recursion"]
    assert cache.repository.contains(CacheKeyEntity("explain recursion", ()))
    assert emissions(transcript) == [("Explain recursion", True), ("Recursion is...", False)]

    again = asyncio.run(coordinator.handle("Explain recursion", []))

    assert again.text == "Recursion is..."
    assert again.source is ReplySource.CACHE
    assert backend.calls == ["Explain recursion"]
    assert not coordinator.is_generating


def test_different_context_calls_backend_again(coordinator, backend):
    asyncio.run(coordinator.handle("Explain recursion", []))
    asyncio.run(coordinator.handle("Explain recursion", ["Explain recursion", "Recursion is..."]))
    assert len(backend.calls) == 2


def test_user_message_is_trimmed_for_display_and_generation(coordinator, backend, transcript):
    asyncio.run(coordinator.handle("  Hi there \n", []))
    assert backend.calls == ["Hi there"]
    assert transcript.history()[0] == "Hi there"


@pytest.mark.parametrize("message", ["", "   ", "\n\t"])
def test_blank_message_is_ignored(coordinator, backend, transcript, message):
    assert asyncio.run(coordinator.handle(message, [])) is None
    assert backend.calls == []
    assert len(transcript) == 0


def test_single_flight_drops_concurrent_message(coordinator, backend, transcript):
    """A second message during generation is dropped, not queued."""

    async def scenario():
        backend.gate = asyncio.Event()
        first = asyncio.create_task(coordinator.handle("first", []))
        await asyncio.sleep(0)
        while not backend.calls:
            await asyncio.sleep(0.001)

        assert coordinator.is_generating
        second = await coordinator.handle("second", [])

        backend.gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert second is None
    assert first.source is ReplySource.GENERATED
    assert backend.calls == ["first"]
    assert emissions(transcript) == [("first", True), ("Recursion is...", False)]
    assert not coordinator.is_generating


def test_clear_during_generation_is_not_undone(cache, transcript):
    """A reply that finishes after a clear is neither cached nor displayed."""
    backend = FakeBackend("late answer")
    coordinator = make_coordinator(cache, backend, transcript)

    async def scenario():
        backend.gate = asyncio.Event()
        task = asyncio.create_task(coordinator.handle("q", []))
        await asyncio.sleep(0)
        while not backend.calls:
            await asyncio.sleep(0.001)

        transcript.clear()
        coordinator.clear_cache()

        backend.gate.set()
        return await task

    reply = asyncio.run(scenario())

    assert reply.text == "late answer"
    assert cache.size == 0
    assert cache.lookup("q", []) is None
    assert len(transcript) == 0
    assert not coordinator.is_generating


def test_failure_emits_notice_and_caches_nothing(cache, failing_backend, transcript):
    coordinator = make_coordinator(cache, failing_backend, transcript)

    reply = asyncio.run(coordinator.handle("Hello", []))

    assert reply.text == FAILURE_NOTICE
    assert reply.is_error
    assert cache.size == 0
    assert emissions(transcript) == [("Hello", True), (FAILURE_NOTICE, False)]
    assert not coordinator.is_generating


def test_failure_recovery(cache, failing_backend, transcript):
    """After a failure the next message consults the cache and the backend normally."""
    coordinator = make_coordinator(cache, failing_backend, transcript)

    asyncio.run(coordinator.handle("Hello", []))
    reply = asyncio.run(coordinator.handle("Hello", []))

    assert reply.text == "Recovered answer"
    assert reply.source is ReplySource.GENERATED
    assert failing_backend.calls == ["Hello", "Hello"]
    assert cache.metrics.cache_misses == 2


def test_unexpected_exception_is_contained(cache, transcript):
    """Any exception from the backend becomes the failure notice."""
    backend = FakeBackend(KeyError("boom"))
    coordinator = make_coordinator(cache, backend, transcript)

    reply = asyncio.run(coordinator.handle("Hello", []))

    assert reply.text == FAILURE_NOTICE
    assert not coordinator.is_generating


def test_unavailable_backend_is_a_failure(cache, transcript):
    backend = FakeBackend("never sent", available=False)
    coordinator = make_coordinator(cache, backend, transcript)

    reply = asyncio.run(coordinator.handle("Hello", []))

    assert reply.text == FAILURE_NOTICE
    assert backend.calls == []
    assert cache.size == 0


def test_cache_hit_skips_readiness(cache, transcript):
    """A cached answer is served even when the backend is down."""
    cache.store("Hello", "Cached hello", [])
    backend = FakeBackend(available=False)
    coordinator = make_coordinator(cache, backend, transcript)

    reply = asyncio.run(coordinator.handle("hello", []))

    assert reply.text == "Cached hello"
    assert reply.source is ReplySource.CACHE


def test_odd_response_shapes_are_normalized_before_caching(cache, transcript):
    backend = FakeBackend([{"message": {"content": "from choices"}}])
    coordinator = make_coordinator(cache, backend, transcript)

    reply = asyncio.run(coordinator.handle("q", []))

    assert reply.text == "from choices"
    assert cache.lookup("q", []) == "from choices"


def test_greet(cache, transcript):
    ready = make_coordinator(cache, FakeBackend(), transcript)
    assert asyncio.run(ready.greet()) is True

    down = make_coordinator(cache, FakeBackend(available=False), transcript)
    assert asyncio.run(down.greet()) is False

    assert emissions(transcript) == [(READY_NOTICE, False), (WAITING_NOTICE, False)]


def test_switch_backend_clears_cache(coordinator, cache):
    asyncio.run(coordinator.handle("Explain recursion", []))
    assert cache.size == 1

    replacement = FakeBackend("other answer", name="other")
    assert coordinator.switch_backend(replacement) == 1
    assert coordinator.backend is replacement
    assert cache.size == 0

    reply = asyncio.run(coordinator.handle("Explain recursion", []))
    assert reply.text == "other answer"


def test_switch_backend_refused_while_generating(coordinator, backend):
    async def scenario():
        backend.gate = asyncio.Event()
        task = asyncio.create_task(coordinator.handle("first", []))
        while not backend.calls:
            await asyncio.sleep(0.001)
        try:
            with pytest.raises(ChatBusyError):
                coordinator.switch_backend(FakeBackend())
        finally:
            backend.gate.set()
            await task

    asyncio.run(scenario())
    assert not coordinator.is_generating

#!/usr/bin/env python3
"""
Terminal chat against the local AI backend.

Type a message and press Enter. Repeating a question right after the same
exchange is answered from the cache. Commands:

    /clear   clear the chat and the cache
    /stats   show cache statistics
    /quit    exit
"""

import asyncio

from window_chat.config import configure_logging, settings
from window_chat.entities import ReplySource
from window_chat.repositories import InMemoryCacheRepository, create_backend
from window_chat.services import CacheService, MessageCoordinator


class TerminalSink:
    """Prints messages as they are emitted and remembers them as history."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def emit(self, text: str, is_user: bool) -> None:
        self.texts.append(text)
        if not is_user:
            print(f"\n🤖 {text}\n")


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_stats(cache: CacheService) -> None:
    print_section("Cache Statistics")
    for name, value in cache.get_stats().items():
        print(f"  {name}: {value}")


async def chat() -> None:
    sink = TerminalSink()
    backend = create_backend(settings)
    cache = CacheService.create(repository=InMemoryCacheRepository.create())
    coordinator = MessageCoordinator(cache=cache, backend=backend, sink=sink)

    print_section(f"Window Chat ({backend.name})")
    await coordinator.greet()

    try:
        while True:
            try:
                line = await asyncio.to_thread(input, "you> ")
            except EOFError:
                break

            command = line.strip().lower()
            if command == "/quit":
                break
            if command == "/stats":
                print_stats(cache)
                continue
            if command == "/clear":
                sink.texts.clear()
                print(f"  ✓ Cleared {coordinator.clear_cache()} cached replies")
                continue

            reply = await coordinator.handle(line, list(sink.texts))
            if reply is not None and reply.source is ReplySource.CACHE:
                print("  (served from cache)")
    finally:
        await backend.close()


def main() -> None:
    configure_logging("WARNING")
    asyncio.run(chat())


if __name__ == "__main__":
    main()

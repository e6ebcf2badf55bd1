"""Message coordination.

The coordinator is the only place that talks to the generation backend.
It owns the single-flight flag: while one message is being answered, any
other message is dropped rather than queued, so replies can never land out
of order.
"""

import logging
from collections.abc import Sequence
from typing import Any

from window_chat.entities import ChatReplyEntity, ReplySource
from window_chat.errors import BackendUnavailableError, ChatBusyError
from window_chat.protocols import DisplaySink, GenerationBackend

from .cache_service import CacheService
from .normalizer import normalize_response
from .readiness import wait_until_available

logger = logging.getLogger(__name__)

FAILURE_NOTICE = "Error: Unable to get a response from the AI. Please check the backend is running."
READY_NOTICE = "Ready to chat! Type your message to begin."
WAITING_NOTICE = "Waiting for the AI backend..."


class MessageCoordinator:
    """Answers chat messages from cache or from the generation backend.

    One instance per chat session. Its state is either idle or generating;
    ``handle`` always returns it to idle, whatever happens.

    Example:
        ```python
        coordinator = MessageCoordinator(
            cache=CacheService.create(repository=InMemoryCacheRepository.create()),
            backend=OllamaGenerationBackend.create(),
            sink=TranscriptRepository(),
        )
        reply = await coordinator.handle("Explain recursion", history=[])
        ```
    """

    def __init__(
        self,
        cache: CacheService,
        backend: GenerationBackend,
        sink: DisplaySink,
        check_readiness: bool = True,
        readiness_timeout: float | None = None,
        readiness_interval: float | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            cache: Response cache shared for the session.
            backend: Generation backend for cache misses.
            sink: Where user messages and replies are displayed.
            check_readiness: Wait for the backend before each generation.
            readiness_timeout: Seconds to wait for the backend. Defaults to settings.
            readiness_interval: Seconds between availability probes. Defaults to settings.
        """
        self._cache = cache
        self._backend = backend
        self._sink = sink
        self._check_readiness = check_readiness
        self._readiness_timeout = readiness_timeout
        self._readiness_interval = readiness_interval
        self._generating = False
        self._clears = 0

    @property
    def is_generating(self) -> bool:
        return self._generating

    @property
    def backend(self) -> GenerationBackend:
        return self._backend

    @property
    def cache(self) -> CacheService:
        return self._cache

    async def handle(self, user_message: str, history: Sequence[str]) -> ChatReplyEntity | None:
        """Answer one user message.

        The user's message is displayed first, then exactly one reply: the
        cached answer, a freshly generated one, or ``FAILURE_NOTICE``. If the chat
        is cleared before the reply is ready, the reply is returned but not
        displayed.

        Args:
            user_message: Raw text typed by the user
            history: Conversation before this message, oldest first

        Returns:
            The reply, or None when the message was empty or dropped because
            another generation was in flight
        """
        message = user_message.strip()
        if not message:
            return None
        if self._generating:
            logger.info("Dropped message while a generation is in flight: %r", message[:50])
            return None

        clears = self._clears
        self._generating = True
        try:
            self._sink.emit(message, True)
            reply = await self._answer(message, history, clears)
            if self._clears != clears:
                logger.info("Chat cleared while answering %r; reply discarded", message[:50])
                return reply
            self._sink.emit(reply.text, False)
            return reply
        finally:
            self._generating = False

    async def _answer(self, message: str, history: Sequence[str], clears: int) -> ChatReplyEntity:
        cached = self._cache.lookup(message, history)
        if cached is not None:
            return ChatReplyEntity(text=cached, source=ReplySource.CACHE)

        try:
            raw = await self._generate(message)
        except Exception:
            logger.exception("Generation failed for %r", message[:50])
            return ChatReplyEntity(text=FAILURE_NOTICE, source=ReplySource.ERROR)

        response = normalize_response(raw)
        # a clear during generation invalidates the history this reply was asked with
        if self._clears == clears:
            self._cache.store(message, response, history)
        return ChatReplyEntity(text=response, source=ReplySource.GENERATED)

    async def _generate(self, message: str) -> Any:
        if self._check_readiness and not await self.wait_for_backend():
            raise BackendUnavailableError(f"{self._backend.name} is not available")
        return await self._backend.generate(message)

    async def wait_for_backend(self) -> bool:
        """Wait for the backend using this coordinator's readiness settings."""
        return await wait_until_available(
            self._backend,
            timeout=self._readiness_timeout,
            interval=self._readiness_interval,
        )

    async def greet(self) -> bool:
        """Display the greeting matching the backend's availability.

        Returns:
            True if the backend is ready
        """
        ready = await self.wait_for_backend()
        self._sink.emit(READY_NOTICE if ready else WAITING_NOTICE, False)
        return ready

    def clear_cache(self) -> int:
        """Drop every cached reply (the "clear chat" action).

        A reply still being generated when this runs is neither cached nor
        displayed.
        """
        self._clears += 1
        return self._cache.clear()

    def switch_backend(self, backend: GenerationBackend) -> int:
        """Use another backend from now on.

        Cached replies came from the previous backend, so the cache is
        cleared wholesale.

        Returns:
            Number of cache entries dropped

        Raises:
            ChatBusyError: If a generation is in flight
        """
        if self._generating:
            raise ChatBusyError("Cannot switch backends while a reply is being generated")
        logger.info("Switching backend from %s to %s", self._backend.name, backend.name)
        self._backend = backend
        return self._cache.clear()

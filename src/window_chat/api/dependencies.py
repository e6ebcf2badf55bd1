"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from window_chat.config import Settings, configure_logging
from window_chat.handlers import ChatHandler
from window_chat.protocols import GenerationBackend
from window_chat.repositories import (
    InMemoryCacheRepository,
    TranscriptRepository,
    create_backend,
)
from window_chat.services import CacheService, MessageCoordinator

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "chat_handler", None)
    if handler is None:
        raise RuntimeError("ChatHandler not initialized. Check lifespan setup.")
    return handler


def build_lifespan(app_settings: Settings, backend: GenerationBackend | None = None):
    """Create the lifespan context manager for one chat session.

    Args:
        app_settings: Settings used to build every layer
        backend: Generation backend to use. If None, built from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state.

        1. Backend and cache repository (data access)
        2. CacheService and MessageCoordinator (business logic)
        3. ChatHandler (HTTP endpoints)
        """
        configure_logging(app_settings.log_level)

        generation_backend = backend or create_backend(app_settings)
        repository = InMemoryCacheRepository.create(max_size=app_settings.cache_max_size)
        cache_service = CacheService.create(
            repository=repository,
            context_turns=app_settings.context_turns,
        )
        transcript = TranscriptRepository()
        coordinator = MessageCoordinator(
            cache=cache_service,
            backend=generation_backend,
            sink=transcript,
            readiness_timeout=app_settings.readiness_timeout,
            readiness_interval=app_settings.readiness_interval,
        )

        app.state.coordinator = coordinator
        app.state.transcript = transcript
        app.state.chat_handler = ChatHandler(coordinator=coordinator, transcript=transcript)

        logger.info("Chat session started with backend %s", generation_backend.name)
        logger.info("Cache max size: %d, context turns: %d", cache_service.max_size, cache_service.context_turns)
        await coordinator.greet()

        yield

        await coordinator.backend.close()
        del app.state.chat_handler
        del app.state.transcript
        del app.state.coordinator
        logger.info("Chat session shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ChatHandler, Depends(get_handler)]

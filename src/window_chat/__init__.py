"""Window Chat - chat with a local AI backend through a context-aware cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, GenerationBackend, DisplaySink)
    - repositories: In-memory storage and local AI backends
    - services: Normalizer, context extractor, response cache, coordinator
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from window_chat.repositories import InMemoryCacheRepository, OllamaGenerationBackend
    from window_chat.repositories import TranscriptRepository
    from window_chat.services import CacheService, MessageCoordinator

    transcript = TranscriptRepository()
    coordinator = MessageCoordinator(
        cache=CacheService.create(repository=InMemoryCacheRepository.create()),
        backend=OllamaGenerationBackend.create(),
        sink=transcript,
    )
    reply = await coordinator.handle("Explain recursion", transcript.history())
    ```

For HTTP API:
    ```python
    from window_chat.api.app import app
    ```
"""

__version__ = "0.1.0"

from window_chat.config import configure_logging, get_settings, settings
from window_chat.entities import CacheEntryEntity, CacheKeyEntity, ChatReplyEntity, ReplySource
from window_chat.errors import BackendUnavailableError, ChatBusyError, ChatError, GenerationError
from window_chat.handlers import ChatHandler
from window_chat.protocols import CacheStore, DisplaySink, GenerationBackend
from window_chat.repositories import (
    InMemoryCacheRepository,
    OllamaGenerationBackend,
    OpenAICompatibleBackend,
    TranscriptRepository,
    create_backend,
)
from window_chat.services import (
    CacheService,
    MessageCoordinator,
    extract_context,
    normalize_response,
)

__all__ = [
    "__version__",
    # Configuration
    "settings",
    "get_settings",
    "configure_logging",
    # Errors
    "ChatError",
    "BackendUnavailableError",
    "GenerationError",
    "ChatBusyError",
    # Protocols (interfaces)
    "CacheStore",
    "DisplaySink",
    "GenerationBackend",
    # Services (business logic)
    "CacheService",
    "MessageCoordinator",
    "extract_context",
    "normalize_response",
    # Handlers (HTTP)
    "ChatHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "OllamaGenerationBackend",
    "OpenAICompatibleBackend",
    "TranscriptRepository",
    "create_backend",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheKeyEntity",
    "ChatReplyEntity",
    "ReplySource",
]

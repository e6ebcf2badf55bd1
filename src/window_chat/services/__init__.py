"""Service layer for business logic.

This layer contains the core chat logic: response normalization, context
extraction, the response cache and the message coordinator. Services
depend on protocols (interfaces), not concrete implementations, making them
testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access / Backend)

Usage:
    ```python
    from window_chat.services import CacheService, MessageCoordinator

    cache = CacheService.create(repository=InMemoryCacheRepository.create())
    coordinator = MessageCoordinator(cache=cache, backend=backend, sink=transcript)
    ```
"""

from .cache_service import CacheService
from .context import extract_context, normalize_message
from .message_coordinator import (
    FAILURE_NOTICE,
    READY_NOTICE,
    WAITING_NOTICE,
    MessageCoordinator,
)
from .normalizer import (
    EMPTY_RESPONSE_TEXT,
    NO_RESPONSE_TEXT,
    ResponseShape,
    classify_response,
    normalize_response,
)
from .readiness import wait_until_available

__all__ = [
    "CacheService",
    "MessageCoordinator",
    "FAILURE_NOTICE",
    "READY_NOTICE",
    "WAITING_NOTICE",
    "extract_context",
    "normalize_message",
    "ResponseShape",
    "classify_response",
    "normalize_response",
    "NO_RESPONSE_TEXT",
    "EMPTY_RESPONSE_TEXT",
    "wait_until_available",
]

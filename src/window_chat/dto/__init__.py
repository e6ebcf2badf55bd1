"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatMessageRequest
from .responses import (
    CacheStatsResponse,
    ChatMessageResponse,
    ClearChatResponse,
    HealthCheckResponse,
    TranscriptItem,
    TranscriptResponse,
)

__all__ = [
    "ChatMessageRequest",
    "ChatMessageResponse",
    "TranscriptItem",
    "TranscriptResponse",
    "ClearChatResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]

"""Response DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessageResponse(BaseModel):
    """Response DTO for a sent chat message."""

    accepted: bool = Field(
        ...,
        description="False when the message was blank or another reply was still being generated",
    )
    reply: str | None = Field(None, description="The assistant's reply, if accepted")
    source: Literal["cache", "generated", "error"] | None = Field(
        None,
        description="Where the reply came from",
    )


class TranscriptItem(BaseModel):
    """Single message in the chat transcript."""

    text: str = Field(..., description="Display text")
    is_user: bool = Field(..., description="True if written by the user")
    timestamp: float = Field(..., description="When the message was displayed (Unix timestamp)")


class TranscriptResponse(BaseModel):
    """Response DTO for the chat transcript."""

    messages: list[TranscriptItem] = Field(default_factory=list, description="Messages, oldest first")


class ClearChatResponse(BaseModel):
    """Response DTO for the clear-chat action."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_messages: int = Field(..., description="Transcript messages removed", ge=0)
    deleted_cache_entries: int = Field(..., description="Cached replies removed", ge=0)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Number of cached replies", ge=0)
    max_size: int = Field(..., description="Entry bound enforced by eviction", ge=1)
    context_turns: int = Field(..., description="Preceding turns included in each key", ge=0)
    total_lookups: int = Field(..., ge=0)
    cache_hits: int = Field(..., ge=0)
    cache_misses: int = Field(..., ge=0)
    evictions: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    backend: str = Field(..., description="Generation backend identifier")
    backend_available: bool = Field(..., description="Whether the backend answered in time")

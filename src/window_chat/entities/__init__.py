"""Domain entities for internal representation.

These are plain dataclasses used internally by services and repositories.
They are NOT used for API contracts - use DTOs from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
"""

from .cache_entry import CacheEntryEntity
from .cache_key import CacheKeyEntity
from .cache_metrics import CacheMetrics
from .chat_reply import ChatReplyEntity, ReplySource
from .transcript_message import TranscriptMessageEntity

__all__ = [
    "CacheEntryEntity",
    "CacheKeyEntity",
    "CacheMetrics",
    "ChatReplyEntity",
    "ReplySource",
    "TranscriptMessageEntity",
]

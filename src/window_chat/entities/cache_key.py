"""Cache key domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheKeyEntity:
    """Key of a cached reply.

    Two keys are equal only when both the message and every context turn
    match, in the same order. An empty context only equals an empty context.

    Attributes:
        message: The trimmed, case-folded user message
        context: The normalized preceding turns, oldest first
    """

    message: str
    context: tuple[str, ...] = ()

"""Chat reply domain entity."""

from dataclasses import dataclass
from enum import Enum


class ReplySource(str, Enum):
    """Where an assistant reply came from."""

    CACHE = "cache"
    GENERATED = "generated"
    ERROR = "error"


@dataclass(frozen=True)
class ChatReplyEntity:
    """The single assistant emission produced by an accepted message.

    Attributes:
        text: The text shown to the user
        source: Whether it was served from cache, generated, or a failure notice
    """

    text: str
    source: ReplySource

    @property
    def is_error(self) -> bool:
        return self.source is ReplySource.ERROR

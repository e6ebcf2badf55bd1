"""In-memory chat transcript.

Acts as both the display sink the coordinator emits into and the
conversation history source the context extractor reads from.
"""

import time
from collections.abc import Callable

from window_chat.entities import TranscriptMessageEntity


class TranscriptRepository:
    """Ordered list of displayed messages. Satisfies DisplaySink."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.time
        self._messages: list[TranscriptMessageEntity] = []

    def emit(self, text: str, is_user: bool) -> None:
        self._messages.append(
            TranscriptMessageEntity(text=text, is_user=is_user, timestamp=self._clock())
        )

    def messages(self) -> list[TranscriptMessageEntity]:
        return list(self._messages)

    def history(self) -> list[str]:
        """Texts of all displayed messages, oldest first."""
        return [message.text for message in self._messages]

    def clear(self) -> int:
        count = len(self._messages)
        self._messages.clear()
        return count

    def __len__(self) -> int:
        return len(self._messages)

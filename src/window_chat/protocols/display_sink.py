"""Display sink protocol.

Anything that renders chat messages: an in-memory transcript, a terminal,
a websocket pushing to a browser widget.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class DisplaySink(Protocol):
    """Receives ``(text, is_user)`` pairs in call order."""

    def emit(self, text: str, is_user: bool) -> None:
        """Display a message.

        Args:
            text: The message text, as it should be shown
            is_user: True for the user's own message, False for assistant output
        """
        ...

"""Transcript message domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TranscriptMessageEntity:
    """A message as shown in the chat window.

    Attributes:
        text: Display text (never case-folded)
        is_user: True for user-authored messages, False for assistant output
        timestamp: Unix timestamp of the emission
    """

    text: str
    is_user: bool
    timestamp: float

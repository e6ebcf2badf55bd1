"""Conversation context for cache keys."""

from collections.abc import Sequence

DEFAULT_CONTEXT_TURNS = 2


def normalize_message(text: str) -> str:
    """Key form of a message: surrounding whitespace stripped, case folded.

    Only used for comparison. Display text is never case folded.
    """
    return text.strip().casefold()


def extract_context(history: Sequence[str], turns: int = DEFAULT_CONTEXT_TURNS) -> tuple[str, ...]:
    """Normalized last ``turns`` messages of ``history``, oldest first.

    >>> extract_context(["Hi", " What is 2+2? ", "4"])
    ('what is 2+2?', '4')
    >>> extract_context([])
    ()
    """
    if turns <= 0:
        return ()
    return tuple(normalize_message(text) for text in history[-turns:])

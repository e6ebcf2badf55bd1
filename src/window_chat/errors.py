"""Exceptions raised by window_chat.

Backend failures never reach the user as-is: the message coordinator turns
every one of them into a fixed failure notice.
"""


class ChatError(RuntimeError):
    pass


class BackendUnavailableError(ChatError):
    """The generation backend did not become ready before the deadline."""


class GenerationError(ChatError):
    """The backend was reached but the call failed or returned garbage."""


class ChatBusyError(ChatError):
    """The operation is not allowed while a generation is in flight."""

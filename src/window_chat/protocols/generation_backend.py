"""Generation backend protocol.

Defines the interface for the local AI that answers chat messages.

Implementations can include:
- Ollama (default)
- Any OpenAI-compatible local server (llama.cpp, LM Studio, vLLM)
- Fakes for tests
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GenerationBackend(Protocol):
    """Protocol for text generation backends.

    The raw result of ``generate`` is deliberately untyped: backends return
    whatever shape their API produces and the response normalizer turns it
    into display text.
    """

    @property
    def name(self) -> str:
        """Return a short identifier for the backend and model.

        Returns:
            Backend name, e.g. "ollama:llama3.2"
        """
        ...

    async def generate(self, message: str) -> Any:
        """Generate a reply to a single user message.

        Args:
            message: The user's message

        Returns:
            The raw response (string, list of messages, or a record)

        Raises:
            GenerationError: If the backend cannot produce a response
        """
        ...

    async def is_available(self) -> bool:
        """Check if the backend is reachable right now.

        Returns:
            True if available, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...

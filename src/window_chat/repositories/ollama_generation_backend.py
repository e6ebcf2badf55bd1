"""Ollama-based generation backend.

Uses Ollama's local chat API to answer messages. Ollama serves models
locally, so nothing leaves the machine.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull llama3.2`
    - Ollama running: `ollama serve` (usually runs automatically)

The reply of ``POST /api/chat`` with ``stream: false`` looks like::

    {"model": "llama3.2", "message": {"role": "assistant", "content": "..."}, "done": true}

It is returned as-is; the response normalizer extracts ``message.content``.
"""

import logging
from typing import Any

import httpx

from window_chat.config import settings
from window_chat.errors import GenerationError

logger = logging.getLogger(__name__)


class OllamaGenerationBackend:
    """Ollama implementation of the GenerationBackend protocol.

    This class satisfies the GenerationBackend protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        backend = OllamaGenerationBackend.create(model_name="llama3.2")

        if await backend.is_available():
            raw = await backend.generate("Hello!")
            print(raw["message"]["content"])
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama generation backend.

        Args:
            model_name: Name of the Ollama model. Defaults to settings.ollama_model.
            base_url: Ollama API base URL. Defaults to settings.ollama_base_url.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            client: Pre-built async client (tests inject one with a mock transport).
        """
        self._model_name = model_name or settings.ollama_model
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OllamaGenerationBackend":
        """Factory method to create OllamaGenerationBackend with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.

        Returns:
            Configured OllamaGenerationBackend
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def name(self) -> str:
        return f"ollama:{self._model_name}"

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate(self, message: str) -> Any:
        """Send one user message to ``/api/chat``.

        Args:
            message: The user's message

        Returns:
            The decoded JSON body

        Raises:
            GenerationError: If the request fails or the body is not JSON
        """
        url = f"{self._base_url}/api/chat"
        payload = {
            "model": self._model_name,
            "messages": [{"role": "user", "content": message}],
            "stream": False,
        }

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if isinstance(e, httpx.ConnectError):
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            elif isinstance(e, httpx.HTTPStatusError) and e.response.status_code == 404:
                error_msg += f"\n  → Model not found. Try: ollama pull {self._model_name}"
            raise GenerationError(error_msg) from e
        except ValueError as e:
            raise GenerationError(f"Ollama returned a non-JSON body: {e}") from e

    async def is_available(self) -> bool:
        """Check if the Ollama server answers ``/api/tags``.

        Returns:
            True if Ollama is running, False otherwise
        """
        try:
            response = await self.client.get(f"{self._base_url}/api/tags")
        except httpx.HTTPError as e:
            logger.debug("Ollama not reachable: %s", e)
            return False
        return response.is_success

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None

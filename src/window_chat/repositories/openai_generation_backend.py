"""OpenAI-compatible generation backend.

Talks to any local server exposing the OpenAI chat completions API
(llama.cpp server, LM Studio, vLLM, LocalAI). The ``choices`` array of the
completion is returned untouched, so the normalizer sees a list of
``{"message": {"content": ...}}`` items.
"""

import logging
from typing import Any

import httpx

from window_chat.config import settings
from window_chat.errors import GenerationError

logger = logging.getLogger(__name__)


class OpenAICompatibleBackend:
    """OpenAI chat-completions implementation of GenerationBackend."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            model_name: Model identifier sent in the request. Defaults to settings.
            base_url: API root including the version, e.g. http://localhost:8080/v1.
            api_key: Optional bearer token. Defaults to settings.openai_api_key.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            client: Pre-built async client (tests inject one with a mock transport).
        """
        self._model_name = model_name or settings.openai_model
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ) -> "OpenAICompatibleBackend":
        return cls(model_name=model_name, base_url=base_url, api_key=api_key)

    @property
    def name(self) -> str:
        return f"openai:{self._model_name}"

    def _headers(self) -> dict[str, str]:
        if self._api_key:
            return {"Authorization": f"Bearer {self._api_key}"}
        return {}

    async def generate(self, message: str) -> Any:
        """Send one user message to ``/chat/completions``.

        Returns:
            The ``choices`` list, or the whole body when it has none

        Raises:
            GenerationError: If the request fails or the body is not JSON
        """
        payload = {
            "model": self._model_name,
            "messages": [{"role": "user", "content": message}],
        }

        try:
            response = await self.client.post(
                f"{self._base_url}/chat/completions",
                json=payload,
                headers=self._headers(),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise GenerationError(f"OpenAI-compatible API error: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Server returned a non-JSON body: {e}") from e

        if isinstance(data, dict) and "choices" in data:
            return data["choices"]
        return data

    async def is_available(self) -> bool:
        try:
            response = await self.client.get(f"{self._base_url}/models", headers=self._headers())
        except httpx.HTTPError as e:
            logger.debug("OpenAI-compatible server not reachable: %s", e)
            return False
        return response.is_success

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

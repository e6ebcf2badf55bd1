"""Repository layer for data access.

This layer hides storage and external services (the local AI server)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Ollama → OpenAI-compatible server)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from window_chat.config import Settings, settings
from window_chat.protocols import CacheStore, DisplaySink, GenerationBackend

from .memory_cache_repository import InMemoryCacheRepository
from .ollama_generation_backend import OllamaGenerationBackend
from .openai_generation_backend import OpenAICompatibleBackend
from .transcript_repository import TranscriptRepository


def create_backend(app_settings: Settings | None = None) -> GenerationBackend:
    """Build the generation backend named by GENERATION_BACKEND.

    Raises:
        ValueError: If the backend name is not supported
    """
    app_settings = app_settings or settings
    if app_settings.generation_backend == "ollama":
        return OllamaGenerationBackend(
            model_name=app_settings.ollama_model,
            base_url=app_settings.ollama_base_url,
            timeout=app_settings.request_timeout,
        )
    if app_settings.generation_backend == "openai":
        return OpenAICompatibleBackend(
            model_name=app_settings.openai_model,
            base_url=app_settings.openai_base_url,
            api_key=app_settings.openai_api_key,
            timeout=app_settings.request_timeout,
        )
    raise ValueError(f"Unsupported generation backend: {app_settings.generation_backend!r}")


__all__ = [
    "CacheStore",
    "DisplaySink",
    "GenerationBackend",
    "InMemoryCacheRepository",
    "OllamaGenerationBackend",
    "OpenAICompatibleBackend",
    "TranscriptRepository",
    "create_backend",
]

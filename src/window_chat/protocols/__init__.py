"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Ollama → OpenAI-compatible server, etc.)
- Unit testing with fake backends and sinks
- Clear separation of concerns

Usage:
    ```python
    from window_chat.protocols import GenerationBackend

    backend: GenerationBackend = OllamaGenerationBackend()  # works
    backend: GenerationBackend = OpenAICompatibleBackend()  # also works
    ```
"""

from .cache_store import CacheStore
from .display_sink import DisplaySink
from .generation_backend import GenerationBackend

__all__ = [
    "CacheStore",
    "DisplaySink",
    "GenerationBackend",
]

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_BACKENDS = ("ollama", "openai")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "100"))
    context_turns: int = int(os.getenv("CONTEXT_TURNS", "2"))

    # Backend readiness (seconds)
    readiness_timeout: float = float(os.getenv("READINESS_TIMEOUT", "2.0"))
    readiness_interval: float = float(os.getenv("READINESS_INTERVAL", "0.1"))

    # Generation backend
    generation_backend: str = os.getenv("GENERATION_BACKEND", "ollama")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "120.0"))

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "llama3.2")

    # OpenAI-compatible local server (llama.cpp, LM Studio, vLLM, ...)
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "http://localhost:8080/v1")
    openai_model: str = os.getenv("OPENAI_MODEL", "local-model")
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_max_size < 1:
            raise ValueError(f"CACHE_MAX_SIZE must be at least 1, got {self.cache_max_size}")

        if self.context_turns < 0:
            raise ValueError(f"CONTEXT_TURNS must not be negative, got {self.context_turns}")

        for name in ("readiness_timeout", "readiness_interval", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive")

        if self.generation_backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"GENERATION_BACKEND must be one of {list(SUPPORTED_BACKENDS)}, "
                f"got {self.generation_backend!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic console handler for the window_chat loggers."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

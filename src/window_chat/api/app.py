from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from window_chat import __version__
from window_chat.api.dependencies import HandlerDep, build_lifespan
from window_chat.config import Settings, settings
from window_chat.dto import (
    CacheStatsResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ClearChatResponse,
    HealthCheckResponse,
    TranscriptResponse,
)
from window_chat.protocols import GenerationBackend


def create_app(
    backend: GenerationBackend | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Build the chat API.

    Args:
        backend: Generation backend. If None, built from settings on startup.
        app_settings: Settings override. Defaults to the environment settings.

    Returns:
        The FastAPI application
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Window Chat API",
        description="Chat with a local AI backend, with a context-aware response cache",
        version=__version__,
        lifespan=build_lifespan(app_settings, backend),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Window Chat API",
            "version": __version__,
            "endpoints": {
                "chat": "/chat/messages",
                "clear": "/chat",
                "stats": "/cache/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Report whether the generation backend is reachable."""
        return await handler.health_check()

    @app.post("/chat/messages", response_model=ChatMessageResponse)
    async def send_message(request: ChatMessageRequest, handler: HandlerDep) -> ChatMessageResponse:
        """Send a message and get the assistant's reply."""
        return await handler.send_message(request)

    @app.get("/chat/messages", response_model=TranscriptResponse)
    async def get_transcript(handler: HandlerDep) -> TranscriptResponse:
        """Get every message displayed so far."""
        return await handler.get_transcript()

    @app.delete("/chat", response_model=ClearChatResponse)
    async def clear_chat(handler: HandlerDep) -> ClearChatResponse:
        """Clear the transcript and all cached replies."""
        return await handler.clear_chat()

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "window_chat.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )

"""HTTP handlers for chat operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from window_chat.dto import (
    CacheStatsResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    ClearChatResponse,
    HealthCheckResponse,
    TranscriptItem,
    TranscriptResponse,
)
from window_chat.repositories import TranscriptRepository
from window_chat.services import MessageCoordinator


class ChatHandler:
    """HTTP handlers for one chat session.

    This handler delegates chat logic to MessageCoordinator and reads the
    conversation from the transcript it displays into.

    Example:
        ```python
        handler = ChatHandler(coordinator=coordinator, transcript=transcript)

        @app.post("/chat/messages", response_model=ChatMessageResponse)
        async def send_message(request: ChatMessageRequest):
            return await handler.send_message(request)
        ```
    """

    def __init__(self, coordinator: MessageCoordinator, transcript: TranscriptRepository) -> None:
        """Initialize the chat handler.

        Args:
            coordinator: The coordinator answering messages (required).
            transcript: The transcript the coordinator emits into (required).
        """
        self._coordinator = coordinator
        self._transcript = transcript

    async def send_message(self, request: ChatMessageRequest) -> ChatMessageResponse:
        """Handle POST /chat/messages requests.

        Backend failures are not errors here: they come back as an accepted
        message whose reply is the failure notice.

        Raises:
            HTTPException: If an unexpected error occurs
        """
        try:
            history = self._transcript.history()
            reply = await self._coordinator.handle(request.message, history)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to handle message: {e}",
            ) from e

        if reply is None:
            return ChatMessageResponse(accepted=False)

        return ChatMessageResponse(accepted=True, reply=reply.text, source=reply.source.value)

    async def get_transcript(self) -> TranscriptResponse:
        """Handle GET /chat/messages requests."""
        return TranscriptResponse(
            messages=[
                TranscriptItem(text=m.text, is_user=m.is_user, timestamp=m.timestamp)
                for m in self._transcript.messages()
            ]
        )

    async def clear_chat(self) -> ClearChatResponse:
        """Handle DELETE /chat requests.

        Empties the transcript and every cached reply.
        """
        try:
            deleted_messages = self._transcript.clear()
            deleted_entries = self._coordinator.clear_cache()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear chat: {e}",
            ) from e

        return ClearChatResponse(
            success=True,
            deleted_messages=deleted_messages,
            deleted_cache_entries=deleted_entries,
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._coordinator.cache.get_stats()
            return CacheStatsResponse(
                total_entries=stats["total_entries"],
                max_size=stats["max_size"],
                context_turns=stats["context_turns"],
                total_lookups=stats["total_lookups"],
                cache_hits=stats["cache_hits"],
                cache_misses=stats["cache_misses"],
                evictions=stats["evictions"],
                hit_rate=stats["hit_rate"],
            )
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        backend = self._coordinator.backend
        available = await backend.is_available()

        return HealthCheckResponse(
            status="healthy" if available else "unhealthy",
            backend=backend.name,
            backend_available=available,
        )

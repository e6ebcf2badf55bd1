"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ChatMessageRequest(BaseModel):
    """Request DTO for sending a chat message.

    The handler takes the conversation history from the transcript, so only
    the new message travels over the wire.
    """

    message: str = Field(..., description="The user's message", min_length=1)

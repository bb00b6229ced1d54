from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single turn in the conversation."""

    role: str = Field(..., pattern="^(user|assistant)$")
    content: str


class ChatRequest(BaseModel):
    """Request body for the chat endpoint. The last message is the new turn."""

    messages: list[ChatMessage] = Field(..., min_length=1)


class ChatResponse(BaseModel):
    message: str


class ChatErrorResponse(BaseModel):
    error: str
    details: str | None = None

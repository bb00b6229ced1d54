"""Chat API endpoint for the Tech Helper support assistant.

Stateless: the caller sends the whole conversation on every request.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.schemas.chat import ChatErrorResponse, ChatRequest, ChatResponse
from app.services.chat import ChatService

logger = logging.getLogger(__name__)
router = APIRouter()

API_KEY_MISSING = "API key not configured"
PROCESSING_FAILED = "Failed to process message"


def error_response(error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=500, content=content)


@router.post(
    "",
    response_model=ChatResponse,
    responses={500: {"model": ChatErrorResponse}},
)
async def send_chat_message(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Send the conversation and return the assistant's reply.

    The body is parsed here rather than by FastAPI so that malformed input
    gets the same 500 JSON error as a failed model call.
    """
    try:
        payload = ChatRequest.model_validate(await request.json())

        if not settings.api_key_configured:
            logger.error("Chat request rejected: GEMINI_API_KEY is not configured")
            return error_response(API_KEY_MISSING)

        chat_service = ChatService(settings=settings)
        reply = await chat_service.generate_reply(payload.messages)
        return ChatResponse(message=reply)

    except Exception as e:
        logger.exception("Chat API error")
        details = str(e) if settings.expose_error_details else None
        return error_response(PROCESSING_FAILED, details)

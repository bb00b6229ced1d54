"""Chat service for the Tech Helper support assistant.

Turns a caller-supplied message list into persona + history + new turn
and asks the chat LLM for a single, non-streaming reply.
"""
import logging
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.config import Settings
from app.schemas.chat import ChatMessage
from app.services.llm_provider import get_chat_llm

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"


@lru_cache
def load_system_persona() -> str:
    """Load the Tech Helper persona (read once per process)."""
    prompt_path = PROMPTS_DIR / "system_persona.txt"
    return prompt_path.read_text(encoding="utf-8").strip()


class ChatProcessingError(Exception):
    """Raised when a reply cannot be produced for a conversation."""

    def __init__(self, message: str = "Failed to process message"):
        self.message = message
        super().__init__(self.message)


def build_history(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    """Convert every message except the last into model turns.

    Anything before the first user message (e.g. the widget's canned
    greeting) is dropped, so history always opens with a user turn.
    No user message means no history.
    """
    prior = list(messages[:-1])
    first_user = next(
        (i for i, msg in enumerate(prior) if msg.role == "user"), None
    )
    if first_user is None:
        return []

    history: list[BaseMessage] = []
    for msg in prior[first_user:]:
        if msg.role == "user":
            history.append(HumanMessage(content=msg.content))
        else:
            history.append(AIMessage(content=msg.content))
    return history


class ChatService:
    """Service for generating Tech Helper replies."""

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        settings: Settings | None = None,
    ):
        self.persona = load_system_persona()
        self.settings = settings
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = get_chat_llm(self.settings)
        return self._llm

    def build_messages(self, messages: Sequence[ChatMessage]) -> list[BaseMessage]:
        """Persona first, then history, then the newest message as a user turn."""
        if not messages:
            raise ChatProcessingError("Conversation has no messages.")

        return [
            SystemMessage(content=self.persona),
            *build_history(messages),
            HumanMessage(content=messages[-1].content),
        ]

    async def generate_reply(self, messages: Sequence[ChatMessage]) -> str:
        """Send the conversation to the LLM and return its reply text."""
        prompt = self.build_messages(messages)
        logger.info(
            f"Requesting chat reply (history_turns={len(prompt) - 2}, "
            f"message_len={len(messages[-1].content)})"
        )

        response = await self.llm.ainvoke(prompt)
        reply = _response_text(response)

        logger.info(f"Chat reply received ({len(reply)} chars)")
        return reply


def _response_text(response: BaseMessage) -> str:
    """Extract plain text from a chat model response."""
    content = response.content
    if isinstance(content, str):
        return content

    # Some providers return a list of content parts
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)

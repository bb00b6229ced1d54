"""Unit tests for ChatService history handling and reply extraction."""
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from app.schemas.chat import ChatMessage
from app.services.chat import (
    ChatProcessingError,
    ChatService,
    build_history,
    load_system_persona,
)


def _conversation(*turns):
    return [ChatMessage(role=role, content=content) for role, content in turns]


class TestBuildHistory:
    def test_last_message_never_in_history(self):
        history = build_history(_conversation(("user", "hi")))

        assert history == []

    def test_no_user_turn_means_empty_history(self):
        history = build_history(
            _conversation(("assistant", "Hello! How can I help?"), ("assistant", "Still there?"), ("user", "yes"))
        )

        assert history == []

    def test_turns_before_first_user_dropped(self):
        history = build_history(
            _conversation(
                ("assistant", "Hello! How can I help?"),
                ("user", "email won't sync"),
                ("assistant", "Which email app?"),
                ("user", "Outlook"),
            )
        )

        assert history == [
            HumanMessage(content="email won't sync"),
            AIMessage(content="Which email app?"),
        ]


class TestChatService:
    def test_persona_loaded_from_prompt_file(self):
        persona = load_system_persona()

        assert persona.startswith("You are a friendly IT troubleshooting assistant")
        assert "(208) 450-3730" in persona

    def test_build_messages_order(self, fake_llm):
        service = ChatService(llm=fake_llm)

        prompt = service.build_messages(
            _conversation(("user", "printer jammed"), ("assistant", "Open the tray."), ("user", "done"))
        )

        assert [type(m) for m in prompt] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert prompt[0].content == service.persona
        assert prompt[-1].content == "done"

    def test_build_messages_rejects_empty_conversation(self, fake_llm):
        with pytest.raises(ChatProcessingError):
            ChatService(llm=fake_llm).build_messages([])

    @pytest.mark.anyio
    async def test_generate_reply_returns_model_text(self, install_llm):
        llm = install_llm(reply="Try turning it off and on again.")

        reply = await ChatService().generate_reply(_conversation(("user", "laptop frozen")))

        assert reply == "Try turning it off and on again."
        assert len(llm.calls) == 1

    @pytest.mark.anyio
    async def test_generate_reply_joins_content_parts(self):
        class PartsLLM:
            async def ainvoke(self, messages):
                return AIMessage(content=[{"type": "text", "text": "Step one. "}, "Step two."])

        reply = await ChatService(llm=PartsLLM()).generate_reply(_conversation(("user", "help")))

        assert reply == "Step one. Step two."

    @pytest.mark.anyio
    async def test_generate_reply_propagates_llm_errors(self, install_llm):
        install_llm(error=TimeoutError("deadline exceeded"))

        with pytest.raises(TimeoutError):
            await ChatService().generate_reply(_conversation(("user", "hi")))


@pytest.fixture
def anyio_backend():
    return "asyncio"

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from app.config import Settings, get_settings
from app.main import app


class FakeChatLLM:
    """Stands in for a BaseChatModel; records prompts and returns a fixed reply."""

    def __init__(self, reply: str = "Let's restart your router first.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def ainvoke(self, messages, *args, **kwargs):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


@pytest.fixture
def make_settings():
    """Build Settings that ignore the developer's .env file."""
    def _make(**overrides) -> Settings:
        values = {"gemini_api_key": "test-key", "llm_provider": "google"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def test_settings(make_settings):
    """Settings with a configured API key."""
    return make_settings()


@pytest.fixture
def install_llm(monkeypatch):
    """Replace the chat LLM factory with a recording fake."""
    def _install(**kwargs) -> FakeChatLLM:
        llm = FakeChatLLM(**kwargs)
        monkeypatch.setattr("app.services.chat.get_chat_llm", lambda *args, **kwargs: llm)
        return llm

    return _install


@pytest.fixture
def fake_llm(install_llm):
    """Recording fake chat LLM returning a fixed reply."""
    return install_llm()


@pytest.fixture
def override_settings():
    """Install settings for the request cycle via dependency overrides."""
    def _override(settings: Settings):
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    yield _override
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def test_client(override_settings, test_settings):
    """FastAPI test client with a configured API key."""
    override_settings(test_settings)
    with TestClient(app) as client:
        yield client

"""Multi-provider LLM service abstraction.

Supports: Google (Gemini), Groq, OpenAI
"""
import logging
from typing import Literal

from langchain_core.language_models import BaseChatModel

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

LLMProvider = Literal["google", "groq", "openai"]

# Fixed generation parameters for the support chat
CHAT_MAX_OUTPUT_TOKENS = 500
CHAT_TEMPERATURE = 0.7


class LLMNotConfiguredError(ValueError):
    """Raised when no usable API key is configured for the provider."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def get_llm(
    model: str | None = None,
    provider: LLMProvider | None = None,
    temperature: float = 0.0,
    max_output_tokens: int | None = None,
    timeout: float | None = None,
    settings: Settings | None = None,
) -> BaseChatModel:
    """Get an LLM instance for the configured provider.

    Args:
        model: Model name. If None, uses LLM_CHAT_MODEL from settings.
        provider: Provider name. If None, uses LLM_PROVIDER from settings.
        temperature: Sampling temperature.
        max_output_tokens: Cap on generated tokens (None = provider default).
        timeout: Request timeout in seconds. If None, uses LLM_TIMEOUT.
        settings: Settings to read provider, model and key from. If None,
            uses the cached application settings.

    Returns:
        BaseChatModel instance for the provider.
    """
    if settings is None:
        settings = get_settings()
    provider = provider or settings.llm_provider
    model = model or settings.llm_chat_model
    timeout = timeout if timeout is not None else settings.llm_timeout

    if not settings.api_key_configured:
        raise LLMNotConfiguredError(
            f"LLM API key not configured. Set GEMINI_API_KEY in .env for provider '{provider}'."
        )
    api_key = settings.llm_api_key.strip()

    logger.info(f"Creating LLM: provider={provider}, model={model}")

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            timeout=timeout,
            max_retries=0,
        )

    elif provider == "groq":
        from langchain_groq import ChatGroq

        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_output_tokens,
            timeout=timeout,
            max_retries=0,
        )

    elif provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_output_tokens,
            timeout=timeout,
            max_retries=0,
        )

    else:
        raise ValueError(
            f"Unknown LLM provider: '{provider}'. Supported: google, groq, openai."
        )


def get_chat_llm(settings: Settings | None = None) -> BaseChatModel:
    """Get the LLM configured for the support chat (500 tokens, temperature 0.7)."""
    if settings is None:
        settings = get_settings()
    return get_llm(
        model=settings.llm_chat_model,
        provider=settings.llm_provider,
        temperature=CHAT_TEMPERATURE,
        max_output_tokens=CHAT_MAX_OUTPUT_TOKENS,
        settings=settings,
    )

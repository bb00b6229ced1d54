from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_KEYS = ("placeholder", "your-api-key-here", "your-gemini-api-key-here")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM - Multi-provider support (google, groq, openai)
    llm_provider: str = "google"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "llm_api_key"),
    )
    llm_chat_model: str = "gemini-1.5-flash"
    llm_timeout: float = 30.0  # seconds

    # Errors
    expose_error_details: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def api_key_configured(self) -> bool:
        key = self.llm_api_key.strip()
        return bool(key) and key not in PLACEHOLDER_KEYS

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()

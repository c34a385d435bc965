"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    environment: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    # Comma-separated list of origins allowed by CORS
    allowed_origins: str = Field(default="http://localhost:3000")

    # Provider API keys. Request headers take precedence over these.
    google_api_key: str = Field(default="")
    openai_api_key: str = Field(default="")
    openrouter_api_key: str = Field(default="")

    # OpenRouter
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1")
    openrouter_referer: str = Field(default="https://chat0.dev")
    openrouter_title: str = Field(default="Chat0")

    # Deadlines
    chat_timeout_seconds: float = Field(default=60.0, gt=0)
    title_timeout_seconds: float = Field(default=30.0, gt=0)

    # Title generation
    title_model: str = Field(default="gemini-2.5-flash")

    # Mock adapter pacing
    mock_chunk_delay_seconds: float = Field(default=0.2, ge=0)

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if not self.allowed_origins:
            return []
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def loaded_key_names(self) -> List[str]:
        """Names of providers whose API key was configured in the environment."""
        loaded = []
        if self.google_api_key:
            loaded.append("Google")
        if self.openai_api_key:
            loaded.append("OpenAI")
        if self.openrouter_api_key:
            loaded.append("OpenRouter")
        return loaded

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        vv = (v or "").strip().lower()
        if vv not in {"development", "staging", "production"}:
            raise ValueError("ENVIRONMENT must be one of: development, staging, production")
        return vv


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

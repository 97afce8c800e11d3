"""Configuration management for Vouch."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vouch.errors import ApiKeyNotConfiguredError, InvalidModelFormatError

DEFAULT_MODEL = "anthropic:claude-opus-4-5"
KEYED_PROVIDERS = frozenset({"openrouter", "openai", "anthropic", "gemini", "xai", "groq", "mistral", "deepseek"})


class Settings(BaseSettings):
    """Application settings."""

    # Later dotenv files win, so the working directory overrides its parents.
    model_config = SettingsConfigDict(
        env_prefix="VOUCH_",
        case_sensitive=False,
        env_file=("../../.env", "../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Model Configuration
    model: str = Field(default=DEFAULT_MODEL, description="Model in provider:model format")
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("VOUCH_API_KEY", "ANTHROPIC_API_KEY"),
        description="API key for the model provider",
    )
    api_base: Optional[str] = Field(default=None, description="Optional API base URL")
    max_tokens: int = Field(default=4096, description="Maximum tokens for responses")
    timeout_seconds: int = Field(default=120, description="Timeout for one model response in seconds")
    system_prompt: str = Field(default="", description="System prompt for every turn")

    # Native Web Search Configuration
    native_web_search: bool = Field(default=True, description="Offer the provider's native web search tool")
    web_search_max_uses: int = Field(default=5, ge=1, description="Maximum native searches per turn")
    city: str = Field(default="New York", description="City for the forecast turn and search location")
    region: str = Field(default="New York", description="Region of the approximate search location")
    country: str = Field(default="US", description="ISO country code of the approximate search location")
    timezone: str = Field(default="America/New_York", description="IANA timezone of the approximate search location")

    # Forecast Configuration
    forecast_days: int = Field(default=14, ge=1, description="Number of forecast days")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def provider(self) -> str:
        provider, separator, name = self.model.partition(":")
        if not separator or not provider or not name:
            raise InvalidModelFormatError(f"model must be provider:model, got {self.model!r}")
        return provider.casefold()

    def require_api_key(self) -> Optional[str]:
        """Return the API key, raising when the provider needs one and none is set."""
        api_key = (self.api_key or "").strip()
        if api_key:
            return api_key
        if self.provider in KEYED_PROVIDERS:
            raise ApiKeyNotConfiguredError(
                f"API key for '{self.provider}' was not found. "
                "Set VOUCH_API_KEY or ANTHROPIC_API_KEY in your environment or in a .env file."
            )
        return None


def load_settings() -> Settings:
    """Load settings from the environment and nearby .env files."""
    return Settings()

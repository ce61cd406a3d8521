"""Pydantic models for wut configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

from wut.providers.base import ProviderType


class OpenAIConfig(BaseModel):
    """OpenAI-compatible endpoint configuration."""

    base_url: str = "http://localhost:1234/v1"
    api_key: str | None = None  # Use OPENAI_API_KEY env var
    timeout: float | None = None  # No timeout: wait for the server


class ProvidersConfig(BaseModel):
    """Configuration for all completion providers."""

    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class WutConfig(BaseModel):
    """Root configuration for wut."""

    default_provider: ProviderType = ProviderType.OPENAI
    default_model: str = "mistralai/magistral-small-2509"
    context_length: int = Field(default=128000, gt=0)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

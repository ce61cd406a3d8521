"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from wut.config.defaults import (
    ENV_BASE_URL,
    ENV_CONTEXT_LENGTH,
    ENV_DEFAULT_MODEL,
    ENV_DEFAULT_PROVIDER,
    ENV_LOG_LEVEL,
    ENV_OPENAI_API_KEY,
    get_config_path,
)
from wut.config.schema import WutConfig
from wut.exceptions import ConfigError, ConfigValidationError
from wut.providers.base import ProviderType

# Global config instance (singleton)
_config: WutConfig | None = None


def load_config(config_path: Path | None = None) -> WutConfig:
    """Load configuration from a TOML file and environment variables.

    A missing file is not an error: defaults apply and nothing is written.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return _apply_env_overrides(WutConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = WutConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: WutConfig) -> WutConfig:
    """Apply environment variable overrides to configuration."""
    provider_env = os.environ.get(ENV_DEFAULT_PROVIDER)
    if provider_env:
        with contextlib.suppress(ValueError):
            config.default_provider = ProviderType(provider_env.lower())

    model_env = os.environ.get(ENV_DEFAULT_MODEL)
    if model_env:
        config.default_model = model_env

    base_url = os.environ.get(ENV_BASE_URL)
    if base_url:
        config.providers.openai.base_url = base_url

    context_length = os.environ.get(ENV_CONTEXT_LENGTH)
    if context_length:
        try:
            value = int(context_length)
        except ValueError as e:
            raise ConfigValidationError(
                f"{ENV_CONTEXT_LENGTH} must be an integer, got {context_length!r}"
            ) from e
        if value <= 0:
            raise ConfigValidationError(f"{ENV_CONTEXT_LENGTH} must be positive")
        config.context_length = value

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    openai_key = os.environ.get(ENV_OPENAI_API_KEY)
    if openai_key and not config.providers.openai.api_key:
        config.providers.openai.api_key = openai_key

    return config


def get_config() -> WutConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None

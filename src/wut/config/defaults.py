"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "wut"
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "WUT_CONFIG"
ENV_DEFAULT_PROVIDER: Final[str] = "WUT_PROVIDER"
ENV_DEFAULT_MODEL: Final[str] = "WUT_MODEL"
ENV_BASE_URL: Final[str] = "WUT_BASE_URL"
ENV_CONTEXT_LENGTH: Final[str] = "WUT_CONTEXT_LENGTH"
ENV_LOG_LEVEL: Final[str] = "WUT_LOG_LEVEL"
ENV_OPENAI_API_KEY: Final[str] = "OPENAI_API_KEY"

# Example config content (TOML)
EXAMPLE_CONFIG_TOML: Final[str] = """\
# wut configuration

default_provider = "openai"
default_model = "mistralai/magistral-small-2509"
context_length = 128000  # tokens

[providers.openai]
base_url = "http://localhost:1234/v1"
# api_key = ""  # Use OPENAI_API_KEY env var
# timeout = 120.0

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE

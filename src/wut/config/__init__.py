"""Configuration management."""

from wut.config.loader import get_config, load_config, reset_config
from wut.config.schema import WutConfig

__all__ = ["WutConfig", "get_config", "load_config", "reset_config"]

"""Completion provider abstraction layer.

This module provides a single interface for talking to a chat-completion
service: an ordered list of role-tagged messages goes in, the service's
choices come out.

Usage:
    from langchain_core.messages import HumanMessage
    from wut.providers import ProviderRegistry, ProviderType

    provider = ProviderRegistry.get(
        ProviderType.OPENAI,
        model="mistralai/magistral-small-2509",
        base_url="http://localhost:1234/v1",
    )
    response = provider.complete([HumanMessage("Hello")])
    print(response.content)
"""

from wut.providers.base import CompletionProvider, LLMResponse, ProviderType

# Importing the providers registers their factories
from wut.providers.mock import MockProvider
from wut.providers.openai import OpenAIProvider
from wut.providers.registry import ProviderRegistry

__all__ = [
    # Base classes
    "CompletionProvider",
    "LLMResponse",
    "ProviderType",
    # Registry
    "ProviderRegistry",
    # Providers
    "MockProvider",
    "OpenAIProvider",
]

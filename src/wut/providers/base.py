"""Base provider class and types for the completion-service abstraction."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from langchain_core.messages import BaseMessage


class ProviderType(str, Enum):
    """Supported completion provider types."""

    OPENAI = "openai"
    MOCK = "mock"


@dataclass
class LLMResponse:
    """Standardized response from any completion provider.

    ``choices`` holds the text of every choice the service returned, in
    order. It may be empty; callers decide what that means.
    """

    choices: list[str]
    model: str
    provider: ProviderType
    tokens_used: int | None = None
    finish_reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def content(self) -> str | None:
        """Text of the first choice, or None when there are no choices."""
        return self.choices[0] if self.choices else None


class CompletionProvider(ABC):
    """Abstract base class for chat-completion providers.

    A provider accepts a model name and an ordered list of role-tagged
    messages and returns the service's choices, or raises a
    ``ProviderError`` for transport, auth and model failures.
    """

    def __init__(
        self,
        provider_type: ProviderType,
        model_name: str,
    ) -> None:
        """Initialize the provider.

        Args:
            provider_type: Type of provider (openai, mock).
            model_name: Default model, used when a call names none.
        """
        self._provider_type = provider_type
        self._model_name = model_name

    @property
    def provider_type(self) -> ProviderType:
        """Get the provider type."""
        return self._provider_type

    @property
    def model_name(self) -> str:
        """Get the default model name."""
        return self._model_name

    @abstractmethod
    def complete(
        self,
        messages: Sequence[BaseMessage],
        *,
        model: str | None = None,
    ) -> LLMResponse:
        """Send one chat-completion request.

        Args:
            messages: Ordered system/user messages.
            model: Model to use; falls back to ``model_name``.

        Returns:
            LLMResponse carrying every returned choice.

        Raises:
            ProviderError: If the request fails.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider_type.value}, model={self.model_name})"

"""Mock provider for testing."""

import hashlib
from collections.abc import Sequence
from typing import Any

from langchain_core.messages import BaseMessage

from wut.providers.base import CompletionProvider, LLMResponse, ProviderType
from wut.providers.registry import ProviderRegistry


def message_text(message: BaseMessage) -> str:
    """Flatten a message's content into plain text.

    Multi-part content keeps text parts and image URLs, in order.
    """
    if isinstance(message.content, str):
        return message.content

    pieces = []
    for part in message.content:
        if isinstance(part, str):
            pieces.append(part)
        elif part.get("type") == "text":
            pieces.append(part.get("text", ""))
        elif part.get("type") == "image_url":
            pieces.append(part.get("image_url", {}).get("url", ""))
    return "\n".join(pieces)


class MockProvider(CompletionProvider):
    """Mock completion provider for testing.

    Generates deterministic responses based on the conversation, making
    tests predictable. Can be configured with custom responses, with a
    fixed list of choices (an empty list simulates a service that answers
    with no choices), or with an error to raise.
    """

    def __init__(
        self,
        model: str = "mock-model",
        responses: dict[str, str] | None = None,
        choices: list[str] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Initialize mock provider.

        Args:
            model: Default model name to report.
            responses: Dict mapping conversation substrings to responses.
            choices: Fixed choices returned for every call.
            error: Exception raised on every call.
        """
        super().__init__(ProviderType.MOCK, model)
        self._responses = responses or {}
        self._choices = choices
        self._error = error
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Get history of all calls made to this provider."""
        return self._call_history

    @property
    def call_count(self) -> int:
        """Get the number of calls made to this provider."""
        return len(self._call_history)

    @property
    def last_messages(self) -> list[BaseMessage]:
        """Messages sent by the most recent call."""
        if not self._call_history:
            return []
        return self._call_history[-1]["messages"]

    def clear_history(self) -> None:
        """Clear call history."""
        self._call_history.clear()

    def _generate_response(self, conversation: str) -> str:
        """Generate a deterministic response based on the conversation."""
        for key, response in self._responses.items():
            if key.lower() in conversation.lower():
                return response

        digest = hashlib.sha256(conversation.encode()).hexdigest()[:8]
        return f"Mock description (hash: {digest})."

    def complete(
        self,
        messages: Sequence[BaseMessage],
        *,
        model: str | None = None,
    ) -> LLMResponse:
        """Record the call and answer without touching the network."""
        model = model or self.model_name
        self._call_history.append({"messages": list(messages), "model": model})

        if self._error is not None:
            raise self._error

        if self._choices is not None:
            choices = list(self._choices)
        else:
            conversation = "\n".join(message_text(m) for m in messages)
            choices = [self._generate_response(conversation)]

        return LLMResponse(
            choices=choices,
            model=model,
            provider=self.provider_type,
            tokens_used=sum(len(message_text(m).split()) for m in messages),
            finish_reason="stop" if choices else None,
        )


@ProviderRegistry.register(ProviderType.MOCK)
def create_mock_provider(
    model: str = "mock-model",
    responses: dict[str, str] | None = None,
    choices: list[str] | None = None,
    error: Exception | None = None,
    **kwargs: Any,
) -> MockProvider:
    """Factory function to create a mock provider.

    Args:
        model: Default model name to report.
        responses: Dict mapping conversation substrings to responses.
        choices: Fixed choices returned for every call.
        error: Exception raised on every call.
        **kwargs: Additional arguments (ignored, e.g. base_url).

    Returns:
        MockProvider instance.
    """
    return MockProvider(
        model=model,
        responses=responses,
        choices=choices,
        error=error,
    )

"""OpenAI-compatible provider implementation using LangChain."""

import os
from collections.abc import Sequence
from typing import Any

from langchain_core.messages import BaseMessage

from wut.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from wut.providers.base import CompletionProvider, LLMResponse, ProviderType
from wut.providers.registry import ProviderRegistry
from wut.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:1234/v1"

# Local OpenAI-compatible servers ignore the key, but the client refuses an
# empty one.
PLACEHOLDER_API_KEY = "not-needed"


class OpenAIProvider(CompletionProvider):
    """Chat completions against any OpenAI-compatible endpoint.

    One ``ChatOpenAI`` client is created lazily per model name. Requests
    are single blocking round trips: no retries, no streaming.
    """

    def __init__(
        self,
        model: str = "mistralai/magistral-small-2509",
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize OpenAI provider.

        Args:
            model: Default chat model name.
            base_url: Base URL of the endpoint (e.g. "http://localhost:1234/v1").
            api_key: API key (uses OPENAI_API_KEY env var if None).
            timeout: Request timeout in seconds; None waits indefinitely.
            **kwargs: Additional arguments passed to ChatOpenAI.
        """
        super().__init__(ProviderType.OPENAI, model)
        self._base_url = base_url or DEFAULT_BASE_URL
        self._api_key = (
            api_key or os.environ.get("OPENAI_API_KEY") or PLACEHOLDER_API_KEY
        )
        self._timeout = timeout
        self._extra_kwargs = kwargs
        self._chat_models: dict[str, Any] = {}

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_chat_model(self, model: str) -> Any:
        """Lazily initialize and return the chat model for ``model``."""
        if model not in self._chat_models:
            try:
                from langchain_openai import ChatOpenAI
            except ImportError as e:
                raise ProviderError(
                    "langchain-openai not installed. Install with: pip install wut"
                ) from e

            self._chat_models[model] = ChatOpenAI(
                model=model,
                base_url=self._base_url,
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
                **self._extra_kwargs,
            )
        return self._chat_models[model]

    def _handle_error(self, e: Exception) -> None:
        """Convert exceptions to appropriate provider errors."""
        error_str = str(e).lower()

        if (
            "authentication" in error_str
            or "invalid api key" in error_str
            or "401" in error_str
        ):
            raise ProviderAuthError(f"OpenAI authentication failed: {e}") from e

        if "rate limit" in error_str or "429" in error_str:
            raise ProviderRateLimitError(f"OpenAI rate limit exceeded: {e}") from e

        if "timeout" in error_str or "timed out" in error_str:
            raise ProviderTimeoutError(f"OpenAI request timed out: {e}") from e

        raise ProviderError(f"OpenAI error: {e}") from e

    def complete(
        self,
        messages: Sequence[BaseMessage],
        *,
        model: str | None = None,
    ) -> LLMResponse:
        """Send one chat completion request."""
        model = model or self.model_name
        logger.debug(
            "Requesting completion from %s (model=%s, messages=%d)",
            self._base_url,
            model,
            len(messages),
        )
        try:
            chat = self._get_chat_model(model)
            result = chat.generate([list(messages)])
        except ProviderError:
            raise
        except Exception as e:
            self._handle_error(e)
            raise

        generations = result.generations[0] if result.generations else []
        choices = [generation.text for generation in generations]

        llm_output = result.llm_output or {}
        token_usage = llm_output.get("token_usage") or {}
        finish_reason = None
        if generations and generations[0].generation_info:
            finish_reason = generations[0].generation_info.get("finish_reason")

        return LLMResponse(
            choices=choices,
            model=llm_output.get("model_name", model),
            provider=self.provider_type,
            tokens_used=token_usage.get("total_tokens"),
            finish_reason=finish_reason,
        )


@ProviderRegistry.register(ProviderType.OPENAI)
def create_openai_provider(
    model: str = "mistralai/magistral-small-2509",
    base_url: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> OpenAIProvider:
    """Factory function to create an OpenAI-compatible provider.

    Args:
        model: Default chat model name.
        base_url: Base URL of the endpoint.
        api_key: API key (uses OPENAI_API_KEY env var if None).
        timeout: Request timeout in seconds.
        **kwargs: Additional arguments.

    Returns:
        OpenAIProvider instance.
    """
    return OpenAIProvider(
        model=model,
        base_url=base_url,
        api_key=api_key,
        timeout=timeout,
        **kwargs,
    )

"""Lookup of completion providers by type.

Each provider module registers a factory at import time. The CLI resolves
the ``--provider`` name to a type and asks the registry for an instance
configured with the endpoint settings of the current run.
"""

from collections.abc import Callable, Hashable
from typing import Any

from wut.exceptions import ProviderError, ProviderNotAvailableError
from wut.providers.base import CompletionProvider, ProviderType

ProviderFactory = Callable[..., CompletionProvider]

# (type, model, sorted keyword arguments)
CacheKey = tuple[ProviderType, str | None, tuple[tuple[str, Hashable], ...]]


class ProviderRegistry:
    """Registered provider factories and the instances built from them.

    Usage:
        @ProviderRegistry.register(ProviderType.OPENAI)
        def create_openai_provider(model: str = "qwen3-8b", **kwargs) -> OpenAIProvider:
            return OpenAIProvider(model=model, **kwargs)

        provider = ProviderRegistry.get(
            ProviderType.OPENAI, model="qwen3-8b", base_url="http://localhost:1234/v1"
        )
    """

    _factories: dict[ProviderType, ProviderFactory] = {}
    _instances: dict[CacheKey, CompletionProvider] = {}

    @classmethod
    def register(
        cls, provider_type: ProviderType
    ) -> Callable[[ProviderFactory], ProviderFactory]:
        """Decorator registering ``factory`` as the builder for ``provider_type``."""

        def decorator(factory: ProviderFactory) -> ProviderFactory:
            cls._factories[provider_type] = factory
            return factory

        return decorator

    @classmethod
    def resolve(cls, name: str) -> ProviderType:
        """Map a provider name such as ``"OpenAI"`` to a registered type.

        Raises:
            ProviderNotAvailableError: If no provider of that name is registered.
        """
        try:
            provider_type = ProviderType(name.strip().lower())
        except ValueError:
            provider_type = None
        if provider_type is None or provider_type not in cls._factories:
            raise ProviderNotAvailableError(
                f"Unknown provider '{name}'. Available providers: "
                f"{', '.join(cls.names())}"
            )
        return provider_type

    @classmethod
    def get(
        cls,
        provider_type: ProviderType,
        model: str | None = None,
        *,
        use_cache: bool = True,
        **kwargs: Any,
    ) -> CompletionProvider:
        """Get or create a provider instance.

        Instances are shared between calls with the same type, model and
        endpoint settings.

        Args:
            provider_type: Type of provider to get.
            model: Default model name (uses provider default if None).
            use_cache: Whether to reuse a previously built instance.
            **kwargs: Endpoint settings for the factory (base_url, api_key...).

        Returns:
            Provider instance.

        Raises:
            ProviderNotAvailableError: If provider type is not registered.
            ProviderError: If the factory fails.
        """
        factory = cls._factories.get(provider_type)
        if factory is None:
            raise ProviderNotAvailableError(
                f"Provider '{provider_type.value}' is not registered. "
                f"Available providers: {cls.names()}"
            )

        key: CacheKey = (provider_type, model, tuple(sorted(kwargs.items())))
        if use_cache and key in cls._instances:
            return cls._instances[key]

        if model is not None:
            kwargs["model"] = model
        try:
            instance = factory(**kwargs)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Failed to create provider '{provider_type.value}': {e}"
            ) from e

        if use_cache:
            cls._instances[key] = instance
        return instance

    @classmethod
    def list_available(cls) -> list[ProviderType]:
        """List all registered provider types."""
        return list(cls._factories)

    @classmethod
    def names(cls) -> list[str]:
        return [provider_type.value for provider_type in cls._factories]

    @classmethod
    def is_registered(cls, provider_type: ProviderType) -> bool:
        return provider_type in cls._factories

    @classmethod
    def clear_cache(cls) -> None:
        """Forget every built instance; factories stay registered."""
        cls._instances.clear()

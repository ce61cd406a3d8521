"""Context factory for creating CommandContext from CLI options."""

from typing import Any

from rich.console import Console

from wut.cli.options import get_provider_type
from wut.commands.base import CommandContext
from wut.config import get_config
from wut.config.schema import WutConfig
from wut.content.extract import ContentExtractor
from wut.content.runner import CommandRunner
from wut.providers.base import CompletionProvider, ProviderType
from wut.providers.registry import ProviderRegistry
from wut.summarizer.llm import LLMSummarizer


def create_provider(
    provider_type: ProviderType,
    model: str | None = None,
    *,
    base_url: str | None = None,
    api_key: str | None = None,
    config: WutConfig | None = None,
) -> CompletionProvider:
    """Create a completion provider from configuration.

    Args:
        provider_type: Type of provider to create.
        model: Optional model override.
        base_url: Optional endpoint override.
        api_key: Optional API key override.
        config: Configuration to use. If None, uses global config.

    Returns:
        Configured CompletionProvider instance.
    """
    if config is None:
        config = get_config()

    kwargs: dict[str, Any] = {}
    if provider_type == ProviderType.OPENAI:
        openai_config = config.providers.openai
        kwargs["base_url"] = base_url or openai_config.base_url
        key = api_key or openai_config.api_key
        if key:
            kwargs["api_key"] = key
        if openai_config.timeout is not None:
            kwargs["timeout"] = openai_config.timeout

    return ProviderRegistry.get(
        provider_type,
        model=model or config.default_model,
        **kwargs,
    )


def create_context(
    *,
    provider: str | None = None,
    model: str | None = None,
    base_url: str | None = None,
    api_key: str | None = None,
    context_length: int | None = None,
    verbose: bool = False,
    console: Console | None = None,
    config: WutConfig | None = None,
    completion_provider: CompletionProvider | None = None,
    runner: CommandRunner | None = None,
) -> CommandContext:
    """Create a CommandContext from CLI options.

    Args:
        provider: Provider name override (openai, mock).
        model: Model name override.
        base_url: Endpoint override.
        api_key: API key override.
        context_length: Token budget override.
        verbose: Whether to print per-file diagnostics.
        console: Console the report is printed to.
        config: Configuration to use. If None, uses global config.
        completion_provider: Ready-made provider, bypassing the registry.
        runner: Command runner for the extractor. Defaults to subprocesses.

    Returns:
        Fully configured CommandContext.

    Example:
        ctx = create_context(model="qwen3-8b", verbose=True)
        DescribeCommand().execute(ctx, files=["notes.txt"])
    """
    if config is None:
        config = get_config()

    model = model or config.default_model
    if completion_provider is None:
        provider_type = get_provider_type(provider, config.default_provider.value)
        completion_provider = create_provider(
            provider_type,
            model,
            base_url=base_url,
            api_key=api_key,
            config=config,
        )

    summarizer = LLMSummarizer(
        completion_provider,
        context_length=context_length or config.context_length,
    )

    return CommandContext(
        summarizer=summarizer,
        extractor=ContentExtractor(runner),
        config=config,
        console=console or Console(highlight=False),
        model=model,
        verbose=verbose,
    )

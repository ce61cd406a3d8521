"""CLI options for wut.

Options left unset fall back to the configuration file and environment.
"""

from typing import Annotated

import typer

from wut.exceptions import ProviderNotAvailableError
from wut.providers.base import ProviderType
from wut.providers.registry import ProviderRegistry

FilesArgument = Annotated[
    list[str] | None,
    typer.Argument(
        help="Files to describe.",
        show_default=False,
    ),
]

ModelOption = Annotated[
    str | None,
    typer.Option(
        "--model",
        "-m",
        help="Model name, passed verbatim to the completion service.",
    ),
]

BaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--base-url",
        help="Base URL of an OpenAI-compatible endpoint.",
    ),
]

ApiKeyOption = Annotated[
    str | None,
    typer.Option(
        "--api-key",
        help="API key for the endpoint. Defaults to OPENAI_API_KEY.",
    ),
]

ProviderOption = Annotated[
    str | None,
    typer.Option(
        "--provider",
        "-p",
        help="Completion provider to use (openai, mock).",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Print content type, length and content of each file.",
    ),
]

SummaryOption = Annotated[
    bool,
    typer.Option(
        "--summary",
        "-s",
        help="Generate an overall summary of all files.",
    ),
]

ContextLengthOption = Annotated[
    int | None,
    typer.Option(
        "--context-length",
        min=1,
        help="LLM context length in tokens.",
    ),
]


def get_provider_type(provider: str | None, default: str = "openai") -> ProviderType:
    """Convert CLI provider string to ProviderType.

    Raises:
        typer.BadParameter: If no provider of that name is registered.
    """
    try:
        return ProviderRegistry.resolve(provider or default)
    except ProviderNotAvailableError as e:
        raise typer.BadParameter(str(e), param_hint="'--provider'") from e

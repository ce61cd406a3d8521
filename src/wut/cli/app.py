"""Main CLI application for wut."""

import typer
from rich.console import Console

from wut import __version__
from wut.cli.context import create_context
from wut.cli.options import (
    ApiKeyOption,
    BaseUrlOption,
    ContextLengthOption,
    FilesArgument,
    ModelOption,
    ProviderOption,
    SummaryOption,
    VerboseOption,
)
from wut.commands import DescribeCommand
from wut.config import get_config
from wut.exceptions import WutError
from wut.utils.logging import setup_logging

app = typer.Typer(
    name="wut",
    help="Describe unfamiliar files in one sentence using an LLM.",
    add_completion=False,
)

# The report goes to stdout as plain lines; errors about the run go to stderr.
console = Console(highlight=False)
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.out(f"wut version {__version__}")
        raise typer.Exit()


@app.command()
def describe(
    files: FilesArgument = None,
    model: ModelOption = None,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    provider: ProviderOption = None,
    verbose: VerboseOption = False,
    summary: SummaryOption = False,
    context_length: ContextLengthOption = None,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Describe each FILE in one sentence, optionally with an overall summary."""
    if not files:
        console.out("Please specify at least one file")
        raise typer.Exit(1)

    try:
        config = get_config()
        setup_logging(
            level=config.logging.level,
            log_file=config.logging.file,
            json_format=config.logging.json_format,
        )
        ctx = create_context(
            provider=provider,
            model=model,
            base_url=base_url,
            api_key=api_key,
            context_length=context_length,
            verbose=verbose,
            console=console,
            config=config,
        )
    except WutError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    DescribeCommand().execute(ctx, files=files, summary=summary)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

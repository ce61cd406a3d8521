"""Base command pattern implementation.

This module provides the CommandContext used for dependency injection
and the BaseCommand abstract class commands implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console

from wut.config.schema import WutConfig
from wut.content.extract import ContentExtractor
from wut.summarizer.base import Summarizer


@dataclass
class CommandContext:
    """Context object passed to commands for dependency injection.

    Attributes:
        summarizer: Describes files through the completion service.
        extractor: Classifies files and extracts their content.
        config: The application configuration.
        console: Where the report is printed.
        model: Model name passed through to the completion service.
        verbose: Whether to print per-file diagnostics.
    """

    summarizer: Summarizer
    extractor: ContentExtractor
    config: WutConfig
    console: Console = field(default_factory=lambda: Console(highlight=False))
    model: str = ""
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.model:
            self.model = self.config.default_model


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command succeeded.
        data: The result data (type depends on command).
        error: Error message if command failed.
        metadata: Additional metadata about the execution.
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any, **metadata: Any) -> "CommandResult":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, **metadata: Any) -> "CommandResult":
        """Create a failed result."""
        return cls(success=False, error=error, metadata=metadata)


class BaseCommand(ABC):
    """Abstract base class for wut commands.

    Commands receive a CommandContext with all necessary dependencies
    and return a CommandResult.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The command name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """A short description of what the command does."""
        pass

    @abstractmethod
    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the command.

        Args:
            ctx: The command context with dependencies.
            **kwargs: Command-specific arguments.

        Returns:
            CommandResult indicating success/failure and data.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

"""Command implementations for wut.

Usage:
    from wut.commands import CommandContext, DescribeCommand

    result = DescribeCommand().execute(ctx, files=["a.txt"], summary=True)
    report = result.data
"""

from wut.commands.base import BaseCommand, CommandContext, CommandResult
from wut.commands.describe import (
    DescribeCommand,
    DescribeReport,
    FileFailure,
)

__all__ = [
    # Base classes
    "BaseCommand",
    "CommandContext",
    "CommandResult",
    # Commands
    "DescribeCommand",
    "DescribeReport",
    "FileFailure",
]

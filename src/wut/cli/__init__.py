"""CLI layer for wut.

Usage:
    wut notes.txt report.pdf logo.png
    wut --summary --model qwen3-8b src/*.py
"""

from wut.cli.app import app, main
from wut.cli.context import create_context, create_provider

__all__ = [
    "app",
    "main",
    "create_context",
    "create_provider",
]

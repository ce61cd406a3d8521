"""Budgeted file summaries.

Usage:
    from wut.providers import MockProvider
    from wut.summarizer import LLMSummarizer

    summarizer = LLMSummarizer(MockProvider(), context_length=128000)
    result = summarizer.summarize("print('hi')", "text/x-script.python", "m", "hi.py")
    print(result.summary)
"""

from wut.summarizer.base import FileSummary, Summarizer
from wut.summarizer.budget import (
    CHARS_PER_TOKEN,
    OMITTED_PLACEHOLDER,
    TRUNCATION_MARKER,
    char_budget,
    per_file_budget,
    truncate,
)
from wut.summarizer.llm import LLMSummarizer

__all__ = [
    "CHARS_PER_TOKEN",
    "OMITTED_PLACEHOLDER",
    "TRUNCATION_MARKER",
    "FileSummary",
    "LLMSummarizer",
    "Summarizer",
    "char_budget",
    "per_file_budget",
    "truncate",
]

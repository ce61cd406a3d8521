"""File classification and content extraction.

Usage:
    from wut.content import ContentExtractor

    content, content_type = ContentExtractor().read_file_content("report.pdf")
"""

from wut.content.binary import BinaryInspector
from wut.content.extract import (
    ContentExtractor,
    ExtractedContent,
    classify_and_extract,
    parse_content_type,
)
from wut.content.runner import CommandOutput, CommandRunner, SubprocessRunner

__all__ = [
    "BinaryInspector",
    "CommandOutput",
    "CommandRunner",
    "ContentExtractor",
    "ExtractedContent",
    "SubprocessRunner",
    "classify_and_extract",
    "parse_content_type",
]

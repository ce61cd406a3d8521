"""Character budgets derived from the model's token budget."""

from typing import Final

# Simple heuristic: 1 token ~= 4 chars
CHARS_PER_TOKEN: Final[int] = 4

TRUNCATION_MARKER: Final[str] = "\n...[TRUNCATED]..."
OMITTED_PLACEHOLDER: Final[str] = "[CONTENT OMITTED DUE TO CONTEXT LIMIT]"

# Room kept for the aggregate prompt's scaffolding and for each file's
# header and summary line.
AGGREGATE_BASE_OVERHEAD: Final[int] = 200
AGGREGATE_PER_FILE_OVERHEAD: Final[int] = 500


def char_budget(tokens: int) -> int:
    """Convert a token budget to a character budget."""
    return tokens * CHARS_PER_TOKEN


def truncate(content: str, max_chars: int) -> str:
    """Cut ``content`` to ``max_chars`` characters, marking the cut.

    Content that already fits is returned unchanged.
    """
    if len(content) <= max_chars:
        return content
    return content[:max_chars] + TRUNCATION_MARKER


def per_file_budget(tokens: int, file_count: int) -> int:
    """Characters of content each file may contribute to the aggregate prompt.

    Returns 0 when the fixed overhead alone exceeds the budget, meaning no
    file content fits at all.
    """
    if file_count <= 0:
        return 0
    overhead = AGGREGATE_BASE_OVERHEAD + file_count * AGGREGATE_PER_FILE_OVERHEAD
    available = char_budget(tokens) - overhead
    if available <= 0:
        return 0
    return available // file_count

"""Summarizer interface and result type."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class FileSummary:
    """Summary of one processed file.

    Attributes:
        filename: The path as given on the command line.
        summary: The model's one-sentence description.
        content: The (possibly truncated) representation sent to the model.
    """

    filename: str
    summary: str
    content: str


class Summarizer(ABC):
    """Describes files, one at a time or as a batch."""

    @abstractmethod
    def summarize(
        self,
        content: str,
        content_type: str,
        model: str,
        filename: str,
    ) -> FileSummary:
        """Describe a single file in one sentence.

        Args:
            content: Extracted representation of the file.
            content_type: MIME-like type of the file.
            model: Model name passed to the completion service.
            filename: Name shown to the model.

        Returns:
            FileSummary holding the description and the content sent.
        """
        ...

    @abstractmethod
    def summarize_all(self, file_summaries: Sequence[FileSummary], model: str) -> str:
        """Describe a batch of already summarized files as a whole.

        Args:
            file_summaries: Per-file results, in processing order.
            model: Model name passed to the completion service.

        Returns:
            The aggregate summary text.
        """
        ...

"""Summarizer backed by a chat-completion provider."""

from collections.abc import Sequence

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from wut.exceptions import InvalidArgumentError, NoResponseError
from wut.providers.base import CompletionProvider, LLMResponse
from wut.summarizer.base import FileSummary, Summarizer
from wut.summarizer.budget import (
    OMITTED_PLACEHOLDER,
    char_budget,
    per_file_budget,
    truncate,
)
from wut.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONTEXT_LENGTH = 128000

DESCRIBE_FILE_PROMPT = "Describe the following file in one sentence"
DESCRIBE_IMAGE_PROMPT = "Describe this image."
AGGREGATE_PROMPT = (
    "You are a helpful assistant. Provide a comprehensive summary of the "
    "provided files, highlighting the overall purpose and relationships "
    "between them."
)
AGGREGATE_INTRO = "Here are the summaries and truncated contents of the files analyzed:\n\n"


def build_file_messages(
    content: str, content_type: str, filename: str
) -> list[BaseMessage]:
    """Build the conversation asking for a one-sentence description.

    Images travel as an inline data URI next to a short text instruction;
    everything else is sent as the user turn verbatim.
    """
    messages: list[BaseMessage] = [
        SystemMessage(content=DESCRIBE_FILE_PROMPT),
        SystemMessage(content=f"The file name is called {filename}"),
        SystemMessage(
            content=f"The output of the /usr/bin/file command is: {content_type}"
        ),
    ]

    if content_type.startswith("image/"):
        messages.append(
            HumanMessage(
                content=[
                    {"type": "text", "text": DESCRIBE_IMAGE_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{content_type};base64,{content}"},
                    },
                ]
            )
        )
    else:
        messages.append(HumanMessage(content=content))

    return messages


def build_aggregate_prompt(file_summaries: Sequence[FileSummary], chars_per_file: int) -> str:
    """Lay out every file's summary and budgeted content in one prompt."""
    blocks = [AGGREGATE_INTRO]
    for file_summary in file_summaries:
        if chars_per_file > 0:
            content = truncate(file_summary.content, chars_per_file)
        else:
            content = OMITTED_PLACEHOLDER
        blocks.append(
            f"--- File: {file_summary.filename} ---\n"
            f"Summary: {file_summary.summary}\n"
            f"Content:\n{content}\n\n"
        )
    return "".join(blocks)


def first_choice(response: LLMResponse) -> str:
    """Text of the first choice.

    Raises:
        NoResponseError: If the service returned no choices.
    """
    if not response.choices:
        raise NoResponseError()
    return response.choices[0]


class LLMSummarizer(Summarizer):
    """Summarizer that keeps every prompt inside a token budget.

    Content longer than ``context_length * 4`` characters is cut and
    marked before it is sent.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        context_length: int = DEFAULT_CONTEXT_LENGTH,
    ) -> None:
        """Initialize the summarizer.

        Args:
            provider: Completion service to ask.
            context_length: Token budget for each request.
        """
        self._provider = provider
        self._context_length = context_length

    @property
    def provider(self) -> CompletionProvider:
        return self._provider

    @property
    def context_length(self) -> int:
        return self._context_length

    def summarize(
        self,
        content: str,
        content_type: str,
        model: str,
        filename: str,
    ) -> FileSummary:
        # Image payloads are cut like any other content, which can leave
        # invalid base64 behind when an image exceeds the budget.
        max_chars = char_budget(self._context_length)
        truncated = truncate(content, max_chars)
        if len(truncated) != len(content):
            logger.debug(
                "Truncated from %d to %d characters",
                len(content),
                max_chars,
                extra={"file": filename, "content_type": content_type},
            )

        messages = build_file_messages(truncated, content_type, filename)
        response = self._provider.complete(messages, model=model)

        return FileSummary(
            filename=filename,
            summary=first_choice(response),
            content=truncated,
        )

    def summarize_all(self, file_summaries: Sequence[FileSummary], model: str) -> str:
        """Describe the batch as a whole.

        Raises:
            InvalidArgumentError: If ``file_summaries`` is empty.
            NoResponseError: If the service returned no choices.
        """
        if not file_summaries:
            raise InvalidArgumentError("no file summaries to aggregate")

        chars_per_file = per_file_budget(self._context_length, len(file_summaries))
        logger.debug(
            "Aggregating %d files with %d characters each",
            len(file_summaries),
            chars_per_file,
        )

        messages = [
            SystemMessage(content=AGGREGATE_PROMPT),
            HumanMessage(content=build_aggregate_prompt(file_summaries, chars_per_file)),
        ]
        response = self._provider.complete(messages, model=model)
        return first_choice(response)

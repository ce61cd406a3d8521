"""Describe a batch of files, one sentence each.

Files are processed one at a time in the order given. A failure while
reading or summarizing one file is printed and the batch moves on; no
error from one file affects another.
"""

import contextlib
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from rich.progress import Progress, SpinnerColumn, TextColumn

from wut.commands.base import BaseCommand, CommandContext, CommandResult
from wut.content.extract import ExtractedContent
from wut.exceptions import WutError
from wut.summarizer.base import FileSummary
from wut.utils.logging import get_logger

logger = get_logger(__name__)

OVERALL_SUMMARY_HEADER = "=== OVERALL SUMMARY ==="


@dataclass(frozen=True)
class FileFailure:
    """A file that was skipped, and why."""

    filename: str
    stage: str  # "extract" or "summarize"
    reason: str


@dataclass
class DescribeReport:
    """Everything a describe run produced."""

    summaries: list[FileSummary] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    overall_summary: str | None = None
    overall_error: str | None = None


class DescribeCommand(BaseCommand):
    """Describe files with an LLM, optionally followed by an overall summary."""

    @property
    def name(self) -> str:
        return "describe"

    @property
    def description(self) -> str:
        return "Describe each file in one sentence"

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the describe command.

        Args:
            ctx: Command context with summarizer, extractor, console.
            **kwargs: Command arguments:
                - files: Paths to describe, in order
                - summary: Also produce an overall summary (default: False)

        Returns:
            CommandResult with a DescribeReport.
        """
        files: Sequence[str] = kwargs.get("files") or []
        if not files:
            return CommandResult.fail("Please specify at least one file")
        aggregate = kwargs.get("summary", False)

        report = DescribeReport()

        with self._progress(ctx) as update:
            for filename in files:
                update(filename)
                file_summary = self._describe_file(ctx, filename, report)
                if file_summary is not None:
                    report.summaries.append(file_summary)

        if aggregate and report.summaries:
            self._summarize_all(ctx, report)

        return CommandResult.ok(
            data=report,
            described=len(report.summaries),
            skipped=len(report.failures),
        )

    def _describe_file(
        self, ctx: CommandContext, filename: str, report: DescribeReport
    ) -> FileSummary | None:
        out = ctx.console.out

        if ctx.verbose:
            out(f"Processing {filename}...")

        try:
            extracted: ExtractedContent = ctx.extractor.read_file_content(filename)
        except (WutError, OSError) as e:
            logger.debug("Extraction failed", exc_info=True, extra={"file": filename})
            out(f"Skipping {filename}: {e}")
            report.failures.append(FileFailure(filename, "extract", str(e)))
            return None

        content, content_type = extracted
        if ctx.verbose:
            out(f"Content type: {content_type}")
            out(f"Content length: {len(content)}")
            out(f"Content: {content}")

        try:
            file_summary = ctx.summarizer.summarize(
                content, content_type, ctx.model, filename
            )
        except Exception as e:
            logger.debug(
                "Summarizing failed",
                exc_info=True,
                extra={"file": filename, "content_type": content_type},
            )
            out(f"Failed to guess file {filename}: {e}")
            report.failures.append(FileFailure(filename, "summarize", str(e)))
            return None

        out(f"{filename}: {file_summary.summary}")
        return file_summary

    def _summarize_all(self, ctx: CommandContext, report: DescribeReport) -> None:
        out = ctx.console.out
        out(f"\n{OVERALL_SUMMARY_HEADER}")
        try:
            report.overall_summary = ctx.summarizer.summarize_all(
                report.summaries, ctx.model
            )
        except Exception as e:
            logger.debug("Overall summary failed", exc_info=True)
            report.overall_error = str(e)
            out(f"Failed to generate overall summary: {e}")
            return
        out(report.overall_summary)

    @contextlib.contextmanager
    def _progress(self, ctx: CommandContext) -> Iterator[Any]:
        """Spinner naming the file being described, on terminals only."""
        if not ctx.console.is_terminal:
            yield lambda filename: None
            return

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=ctx.console,
            transient=True,
        ) as progress:
            task = progress.add_task(description="Describing...", total=None)

            def update(filename: str) -> None:
                progress.update(task, description=f"Describing {filename}...")

            yield update

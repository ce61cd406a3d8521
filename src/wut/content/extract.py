"""Classify a file and extract a representation a model can read.

The content type comes from ``file --mime-type``; it picks the strategy:

- PDF documents are converted with ``pdftotext``.
- Mach-O binaries get a diagnostic dump (see ``wut.content.binary``).
- Images are base64 encoded, byte for byte.
- Text is decoded as UTF-8.
- Anything else is kept as text only if it holds no NUL byte.
"""

import base64
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from wut.content.binary import BinaryInspector
from wut.content.runner import CommandRunner, SubprocessRunner
from wut.exceptions import (
    ClassificationError,
    CommandFailedError,
    ExtractionError,
    FileReadError,
    IsDirectoryError,
    NotRegularFileError,
)
from wut.utils.logging import get_logger

logger = get_logger(__name__)

PDF_PREFIX = "application/pdf"
MACH_BINARY_MARKER = "mach-binary"
IMAGE_PREFIX = "image/"
TEXT_PREFIX = "text/"


@dataclass(frozen=True)
class ExtractedContent:
    """Extracted representation of a file and its content type."""

    content: str
    content_type: str

    def __iter__(self) -> Iterator[str]:
        # Unpacks as (content, content_type).
        yield self.content
        yield self.content_type


def parse_content_type(output: str) -> str:
    """Parse ``file --mime-type`` output of the form ``name: type``.

    Raises:
        ClassificationError: If the output has no type portion.
    """
    _, sep, content_type = output.strip().rpartition(":")
    content_type = content_type.strip()
    if not sep or not content_type:
        raise ClassificationError(
            f"unexpected output from file command: {output.strip()!r}"
        )
    return content_type


def decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class ContentExtractor:
    """Turns a path into ``(content, content_type)``."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        """Initialize the extractor.

        Args:
            runner: Runner for external utilities. Defaults to subprocesses.
        """
        self._runner = runner or SubprocessRunner()
        self._inspector = BinaryInspector(self._runner)

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    def get_content_type(self, path: str | Path) -> str:
        """Ask ``file`` for the MIME type of ``path``.

        Raises:
            ClassificationError: If the utility fails or its output is unparseable.
        """
        try:
            output = self._runner.check(["file", "--mime-type", str(path)])
        except CommandFailedError as e:
            raise ClassificationError(f"file command failed: {e}") from e
        return parse_content_type(output)

    def extract_pdf_text(self, path: str | Path) -> str:
        """Extract the text layer of a PDF with ``pdftotext``.

        Raises:
            ExtractionError: If ``pdftotext`` fails.
        """
        try:
            return self._runner.check(["pdftotext", str(path), "-"])
        except CommandFailedError as e:
            raise ExtractionError(f"pdftotext failed: {e}") from e

    def extract_binary_info(self, path: str | Path) -> str:
        """Dump what the inspection utilities can tell about a binary."""
        return self._inspector.inspect(path)

    def read_file_content(self, path: str | Path) -> ExtractedContent:
        """Classify ``path`` and extract its content.

        Args:
            path: File to inspect.

        Returns:
            ExtractedContent; ``content`` may be empty.

        Raises:
            FileReadError: If the file cannot be stat'ed or read.
            IsDirectoryError: If ``path`` is a directory.
            NotRegularFileError: If ``path`` is a socket, device or FIFO.
            ClassificationError: If the content type cannot be determined.
            ExtractionError: If PDF text extraction fails.
        """
        path = Path(path)
        try:
            mode = path.stat().st_mode
        except OSError as e:
            raise FileReadError(f"failed to stat file: {e}") from e
        if stat.S_ISDIR(mode):
            raise IsDirectoryError(f"{path} is a directory")
        if not stat.S_ISREG(mode):
            raise NotRegularFileError(f"{path} is not a regular file")

        try:
            content_type = self.get_content_type(path)
        except ClassificationError as e:
            raise ClassificationError(f"failed to determine content type: {e}") from e
        logger.debug("Classified", extra={"file": path, "content_type": content_type})

        if content_type.startswith(PDF_PREFIX):
            try:
                content = self.extract_pdf_text(path)
            except ExtractionError as e:
                raise ExtractionError(f"failed to extract text from PDF: {e}") from e
        elif MACH_BINARY_MARKER in content_type:
            content = self.extract_binary_info(path)
        elif content_type.startswith(IMAGE_PREFIX):
            content = base64.b64encode(self._read_bytes(path)).decode("ascii")
        elif content_type.startswith(TEXT_PREFIX) or "text" in content_type:
            content = decode_text(self._read_bytes(path))
        else:
            content = self._read_unknown(path)

        return ExtractedContent(content=content, content_type=content_type)

    def _read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise FileReadError(f"failed to read file: {e}") from e

    def _read_unknown(self, path: Path) -> str:
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.debug("Could not read: %s", e, extra={"file": path})
            return ""
        if b"\x00" in data:
            logger.debug("NUL byte found, sending no content", extra={"file": path})
            return ""
        return decode_text(data)


def classify_and_extract(
    path: str | Path,
    runner: CommandRunner | None = None,
) -> ExtractedContent:
    """Classify and extract ``path`` with a one-off extractor."""
    return ContentExtractor(runner).read_file_content(path)

"""Tests for file classification and content extraction."""

import base64
import os
import socket
from pathlib import Path

import pytest

from wut.content import ContentExtractor, classify_and_extract, parse_content_type
from wut.content.binary import SECTION_ORDER, section_header
from wut.exceptions import (
    ClassificationError,
    ContentError,
    ExtractionError,
    FileReadError,
    IsDirectoryError,
    NotRegularFileError,
)

# 1x1 pixel PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAAAAAA6fptVAAAACklEQVR4nGP6DwABBAEAAAAA"


class TestParseContentType:
    """Tests for parsing `file --mime-type` output."""

    def test_plain_output(self) -> None:
        assert parse_content_type("notes.txt: text/plain\n") == "text/plain"

    def test_whitespace_is_trimmed(self) -> None:
        assert parse_content_type("notes.txt:    text/plain   \n") == "text/plain"

    def test_colon_in_filename(self) -> None:
        """Test that only the last colon separates name and type."""
        assert parse_content_type("a:b.txt: text/plain") == "text/plain"

    def test_missing_colon_is_error(self) -> None:
        with pytest.raises(ClassificationError):
            parse_content_type("cannot open")

    def test_empty_type_is_error(self) -> None:
        with pytest.raises(ClassificationError):
            parse_content_type("notes.txt:   \n")


class TestGetContentType:
    """Tests for ContentExtractor.get_content_type."""

    def test_reports_text_plain(self, fake_runner) -> None:
        extractor = ContentExtractor(fake_runner)

        assert extractor.get_content_type("dummy.txt") == "text/plain"
        assert fake_runner.calls == [("file", "--mime-type", "dummy.txt")]

    def test_utility_missing(self, fake_runner) -> None:
        """Test that a missing `file` utility is a classification error."""
        fake_runner.on("file", returncode=127, stderr="file: not found")
        extractor = ContentExtractor(fake_runner)

        with pytest.raises(ClassificationError, match="file command failed"):
            extractor.get_content_type("dummy.txt")


class TestReadFileContentErrors:
    """Tests for paths that cannot be extracted."""

    def test_missing_file(self, fake_runner, temp_dir: Path) -> None:
        with pytest.raises(FileReadError, match="failed to stat file"):
            ContentExtractor(fake_runner).read_file_content(temp_dir / "missing.txt")
        assert fake_runner.calls == []

    def test_directory(self, fake_runner, temp_dir: Path) -> None:
        with pytest.raises(IsDirectoryError, match="is a directory"):
            ContentExtractor(fake_runner).read_file_content(temp_dir)
        assert fake_runner.calls == []

    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="needs unix sockets")
    def test_socket(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "s.sock"
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(path))
            with pytest.raises(NotRegularFileError, match="not a regular file"):
                ContentExtractor(fake_runner).read_file_content(path)
        finally:
            sock.close()

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
    def test_fifo(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "pipe"
        os.mkfifo(path)

        with pytest.raises(NotRegularFileError):
            ContentExtractor(fake_runner).read_file_content(path)

    def test_classification_failure(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "notes.txt"
        path.write_text("hello")
        fake_runner.on("file", stdout="garbage without separator")

        with pytest.raises(ClassificationError, match="failed to determine content type"):
            ContentExtractor(fake_runner).read_file_content(path)

    def test_errors_share_a_base(self) -> None:
        for error in (
            FileReadError(),
            IsDirectoryError(),
            NotRegularFileError(),
            ClassificationError(),
            ExtractionError(),
        ):
            assert isinstance(error, ContentError)


class TestReadFileContent:
    """Tests for the extraction strategy picked by content type."""

    def test_text_file(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "notes.txt"
        path.write_text("Remember the milk.\n")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content_type == "text/plain"
        assert content == "Remember the milk.\n"

    def test_type_containing_text(self, fake_runner, temp_dir: Path) -> None:
        """Test that e.g. application/x-subrip-text is read as text."""
        path = temp_dir / "movie.srt"
        path.write_text("1\n00:00:01,000 --> 00:00:02,000\nHi\n")
        fake_runner.mime_type("application/x-subrip-text")

        extracted = ContentExtractor(fake_runner).read_file_content(path)

        assert extracted.content.endswith("Hi\n")
        assert extracted.content_type == "application/x-subrip-text"

    def test_pdf(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "doc.pdf"
        path.write_bytes(b"%PDF-1.4 not really")
        fake_runner.mime_type("application/pdf")
        fake_runner.on("pdftotext", stdout="Hello World")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content == "Hello World"
        assert content_type == "application/pdf"
        assert ("pdftotext", str(path), "-") in fake_runner.calls

    def test_pdf_extraction_failure(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "doc.pdf"
        path.write_bytes(b"%PDF-1.4")
        fake_runner.mime_type("application/pdf")
        fake_runner.on("pdftotext", returncode=1, stderr="Syntax Error: Couldn't read xref table")

        with pytest.raises(ExtractionError, match="failed to extract text from PDF"):
            ContentExtractor(fake_runner).read_file_content(path)

    def test_image_is_base64_of_exact_bytes(self, fake_runner, temp_dir: Path) -> None:
        raw = base64.b64decode(PNG_BASE64)
        path = temp_dir / "pixel.png"
        path.write_bytes(raw)
        fake_runner.mime_type("image/png")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content_type == "image/png"
        assert content == PNG_BASE64
        assert base64.b64decode(content) == raw

    def test_image_with_every_byte_value(self, fake_runner, temp_dir: Path) -> None:
        raw = bytes(range(256)) * 3
        path = temp_dir / "noise.gif"
        path.write_bytes(raw)
        fake_runner.mime_type("image/gif")

        content, _ = ContentExtractor(fake_runner).read_file_content(path)

        assert base64.b64decode(content, validate=True) == raw

    def test_unknown_binary_has_empty_content(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "blob.bin"
        path.write_bytes(b"Binary\x00Content")
        fake_runner.mime_type("application/octet-stream")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content_type == "application/octet-stream"
        assert content == ""

    def test_unknown_type_without_nul_is_kept(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "data.json"
        path.write_text('{"key": "value"}')
        fake_runner.mime_type("application/json")

        content, _ = ContentExtractor(fake_runner).read_file_content(path)

        assert content == '{"key": "value"}'

    def test_empty_file(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "empty"
        path.write_bytes(b"")
        fake_runner.mime_type("inode/x-empty")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content == ""
        assert content_type == "inode/x-empty"

    def test_mach_binary_runs_every_inspector(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "tool"
        path.write_bytes(b"\xcf\xfa\xed\xfe\x00\x00")
        fake_runner.mime_type("application/x-mach-binary")

        content, content_type = ContentExtractor(fake_runner).read_file_content(path)

        assert content_type == "application/x-mach-binary"
        positions = [content.index(section_header(name)) for name in SECTION_ORDER]
        assert positions == sorted(positions)
        assert {"file", "otool", "codesign", "nm", "strings"} <= set(fake_runner.programs())

    def test_classify_and_extract_helper(self, fake_runner, temp_dir: Path) -> None:
        path = temp_dir / "notes.md"
        path.write_text("# Notes")

        extracted = classify_and_extract(path, runner=fake_runner)

        assert extracted.content == "# Notes"
        assert extracted.content_type == "text/plain"

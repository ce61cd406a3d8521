"""Tests for external command execution."""

import sys

import pytest

from wut.content.runner import COMMAND_NOT_FOUND, CommandOutput, SubprocessRunner
from wut.exceptions import CommandFailedError, ContentError


class TestCommandOutput:
    """Tests for CommandOutput."""

    def test_ok(self) -> None:
        assert CommandOutput(args=("true",), returncode=0).ok
        assert not CommandOutput(args=("false",), returncode=1).ok


class TestSubprocessRunner:
    """Tests for SubprocessRunner."""

    def test_captures_stdout(self) -> None:
        output = SubprocessRunner().run([sys.executable, "-c", "print('hello')"])

        assert output.ok
        assert output.stdout.strip() == "hello"
        assert output.args[0] == sys.executable

    def test_captures_stderr_and_status(self) -> None:
        script = "import sys; sys.stderr.write('boom'); sys.exit(3)"
        output = SubprocessRunner().run([sys.executable, "-c", script])

        assert output.returncode == 3
        assert output.stderr == "boom"

    def test_feeds_input(self) -> None:
        script = "import sys; sys.stdout.write(sys.stdin.read().upper())"
        output = SubprocessRunner().run([sys.executable, "-c", script], input="abc\n")

        assert output.stdout == "ABC\n"

    def test_invalid_utf8_is_replaced(self) -> None:
        script = "import sys; sys.stdout.buffer.write(b'ok\\xff')"
        output = SubprocessRunner().run([sys.executable, "-c", script])

        assert output.stdout == "ok�"

    def test_missing_program(self) -> None:
        output = SubprocessRunner().run(["wut-no-such-program-xyz"])

        assert output.returncode == COMMAND_NOT_FOUND
        assert output.stderr

    def test_check_returns_stdout(self) -> None:
        assert SubprocessRunner().check([sys.executable, "-c", "print(42)"]).strip() == "42"

    def test_check_raises_on_failure(self) -> None:
        script = "import sys; sys.stderr.write('bad input'); sys.exit(2)"

        with pytest.raises(CommandFailedError) as exc_info:
            SubprocessRunner().check([sys.executable, "-c", script])

        assert exc_info.value.returncode == 2
        assert "exited with status 2: bad input" in str(exc_info.value)
        assert isinstance(exc_info.value, ContentError)

    def test_check_missing_program(self) -> None:
        with pytest.raises(CommandFailedError) as exc_info:
            SubprocessRunner().check(["wut-no-such-program-xyz"])

        assert exc_info.value.returncode == COMMAND_NOT_FOUND

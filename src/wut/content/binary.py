"""Diagnostic dump of executable binaries.

Runs a battery of inspection utilities over a Mach-O binary and joins
their output under fixed section headers. The dump is best-effort: a
utility that is missing or fails leaves its section empty.
"""

import re
from collections.abc import Callable
from pathlib import Path

from wut.content.runner import CommandRunner
from wut.utils.logging import get_logger

logger = get_logger(__name__)

FILE_INFO = "FILE INFO"
SHARED_LIBRARIES = "SHARED LIBRARIES & FRAMEWORKS"
ENTITLEMENTS = "ENTITLEMENTS & SIGNING"
LOAD_COMMANDS = "LOAD COMMANDS (Headers)"
EXTERNAL_SYMBOLS = "EXTERNAL SYMBOLS (Imports)"
INTERESTING_STRINGS = "INTERESTING STRINGS"

SECTION_ORDER = (
    FILE_INFO,
    SHARED_LIBRARIES,
    ENTITLEMENTS,
    LOAD_COMMANDS,
    EXTERNAL_SYMBOLS,
    INTERESTING_STRINGS,
)

LOAD_COMMAND_PATTERN = re.compile(r"LC_VERSION_MIN|LC_BUILD_VERSION|LC_ENCRYPTION_INFO")
LOAD_COMMAND_CONTEXT = 5
MAX_SYMBOLS = 100
INTERESTING_STRING_PATTERN = re.compile(r"https?://|/usr/|/System/|/var/")
MAX_STRINGS = 50


def section_header(name: str) -> str:
    return f"=== {name} ==="


def grep_after(lines: list[str], pattern: re.Pattern[str], after: int) -> list[str]:
    """Keep matching lines plus ``after`` lines of trailing context.

    Non-adjacent groups are separated by ``--`` the way ``grep -A`` does.
    """
    selected: list[str] = []
    last = -1
    for index, line in enumerate(lines):
        if not pattern.search(line):
            continue
        start = max(index, last + 1)
        end = min(index + after, len(lines) - 1)
        if start > end:
            continue
        if selected and start > last + 1:
            selected.append("--")
        selected.extend(lines[start : end + 1])
        last = end
    return selected


def _join_lines(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


class BinaryInspector:
    """Collects the sections of a binary dump through a command runner."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def _output(self, args: list[str], *, input: str | None = None) -> str | None:
        output = self._runner.run(args, input=input)
        if not output.ok:
            logger.debug(
                "Failed with status %d: %s",
                output.returncode,
                output.stderr.strip(),
                extra={"program": args[0]},
            )
            return None
        return output.stdout

    def _combined(self, args: list[str]) -> str:
        # Some tools (codesign) report on stderr even when they succeed.
        output = self._runner.run(args)
        if not output.ok:
            logger.debug(
                "Failed with status %d", output.returncode, extra={"program": args[0]}
            )
            return ""
        return output.stdout + output.stderr

    def file_info(self, path: str) -> str:
        return self._combined(["file", path])

    def shared_libraries(self, path: str) -> str:
        return self._combined(["otool", "-L", path])

    def entitlements(self, path: str) -> str:
        return self._combined(["codesign", "-d", "--entitlements", ":-", path])

    def load_commands(self, path: str) -> str:
        listing = self._output(["otool", "-l", path])
        if listing is None:
            return ""
        lines = listing.splitlines()
        return _join_lines(grep_after(lines, LOAD_COMMAND_PATTERN, LOAD_COMMAND_CONTEXT))

    def external_symbols(self, path: str) -> str:
        symbols = self._output(["nm", "-u", path])
        if symbols is None:
            return ""
        demangled = self._output(["c++filt"], input=symbols)
        if demangled is None:
            return ""
        return _join_lines(demangled.splitlines()[:MAX_SYMBOLS])

    def interesting_strings(self, path: str) -> str:
        strings = self._output(["strings", path])
        if strings is None:
            return ""
        matches = [
            line
            for line in strings.splitlines()
            if INTERESTING_STRING_PATTERN.search(line)
        ]
        return _join_lines(matches[:MAX_STRINGS])

    def inspect(self, path: str | Path) -> str:
        """Build the full dump for ``path``.

        Returns:
            All six sections, in ``SECTION_ORDER``, separated by blank lines.
        """
        path = str(path)
        collectors: dict[str, Callable[[str], str]] = {
            FILE_INFO: self.file_info,
            SHARED_LIBRARIES: self.shared_libraries,
            ENTITLEMENTS: self.entitlements,
            LOAD_COMMANDS: self.load_commands,
            EXTERNAL_SYMBOLS: self.external_symbols,
            INTERESTING_STRINGS: self.interesting_strings,
        }
        sections = [
            f"{section_header(name)}\n{collectors[name](path)}" for name in SECTION_ORDER
        ]
        return "\n".join(sections)

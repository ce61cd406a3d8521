"""External command execution.

Every call to an OS utility (``file``, ``pdftotext``, ``otool``...) goes
through a ``CommandRunner`` so tests can swap in canned outputs.
"""

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from wut.exceptions import CommandFailedError
from wut.utils.logging import get_logger

logger = get_logger(__name__)

# Exit status reported when the executable cannot be started at all,
# matching what a POSIX shell reports for "command not found".
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandOutput:
    """Result of one external command invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """Runs external commands and captures their output."""

    @abstractmethod
    def run(self, args: Sequence[str], *, input: str | None = None) -> CommandOutput:
        """Run a command to completion.

        Never raises for a failing command: a non-zero exit status (or
        ``COMMAND_NOT_FOUND`` when the program cannot be started) is
        reported in the returned ``CommandOutput``.

        Args:
            args: Program name followed by its arguments.
            input: Text fed to the command's stdin.

        Returns:
            CommandOutput with exit status and captured streams.
        """
        ...

    def check(self, args: Sequence[str], *, input: str | None = None) -> str:
        """Run a command and return its stdout.

        Raises:
            CommandFailedError: If the command exits with a non-zero status.
        """
        output = self.run(args, input=input)
        if not output.ok:
            detail = output.stderr.strip() or output.stdout.strip()
            message = f"{args[0]} exited with status {output.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise CommandFailedError(message, returncode=output.returncode)
        return output.stdout


class SubprocessRunner(CommandRunner):
    """Runs commands with ``subprocess.run``.

    Calls block until the command exits; no timeout is applied.
    """

    def run(self, args: Sequence[str], *, input: str | None = None) -> CommandOutput:
        args = tuple(str(arg) for arg in args)
        logger.debug("Running %s", " ".join(args), extra={"program": args[0]})
        try:
            completed = subprocess.run(
                args,
                input=input.encode("utf-8") if input is not None else None,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            logger.debug("Could not start: %s", e, extra={"program": args[0]})
            return CommandOutput(args=args, returncode=COMMAND_NOT_FOUND, stderr=str(e))

        return CommandOutput(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
        )

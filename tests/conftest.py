"""Pytest fixtures for wut tests."""

import tempfile
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest

from wut.config import reset_config
from wut.config.schema import WutConfig
from wut.content.runner import COMMAND_NOT_FOUND, CommandOutput, CommandRunner
from wut.providers.registry import ProviderRegistry

Handler = Callable[[tuple[str, ...], str | None], CommandOutput]


class FakeRunner(CommandRunner):
    """Command runner answering from canned outputs.

    Programs without a canned answer behave like missing executables.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.inputs: list[str | None] = []
        self._handlers: dict[str, Handler] = {}

    def on(self, program: str, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        """Answer every call to ``program`` with fixed output."""
        self._handlers[program] = lambda args, input: CommandOutput(
            args=args, returncode=returncode, stdout=stdout, stderr=stderr
        )

    def handle(self, program: str, handler: Handler) -> None:
        """Answer calls to ``program`` with ``handler(args, input)``."""
        self._handlers[program] = handler

    def mime_type(self, content_type: str) -> None:
        """Make ``file --mime-type`` report ``content_type`` for any path."""
        self.handle("file", mime_type_handler(content_type))

    def programs(self) -> list[str]:
        return [call[0] for call in self.calls]

    def run(self, args: Sequence[str], *, input: str | None = None) -> CommandOutput:
        args = tuple(str(arg) for arg in args)
        self.calls.append(args)
        self.inputs.append(input)
        handler = self._handlers.get(args[0])
        if handler is None:
            return CommandOutput(
                args=args,
                returncode=COMMAND_NOT_FOUND,
                stderr=f"{args[0]}: command not found",
            )
        return handler(args, input)


def mime_type_handler(content_type: str) -> Handler:
    """Make ``file --mime-type`` report ``content_type`` for any path."""

    def handler(args: tuple[str, ...], input: str | None) -> CommandOutput:
        return CommandOutput(args=args, returncode=0, stdout=f"{args[-1]}: {content_type}\n")

    return handler


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A runner where ``file`` reports text/plain for every path."""
    runner = FakeRunner()
    runner.mime_type("text/plain")
    return runner


@pytest.fixture
def default_config() -> WutConfig:
    """Get default configuration."""
    return WutConfig()


@pytest.fixture(autouse=True)
def reset_config_fixture(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the user's config file, environment and cached providers."""
    for name in (
        "WUT_PROVIDER",
        "WUT_MODEL",
        "WUT_BASE_URL",
        "WUT_CONTEXT_LENGTH",
        "WUT_LOG_LEVEL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WUT_CONFIG", str(Path(tempfile.gettempdir()) / "wut-tests-missing.toml"))
    reset_config()
    ProviderRegistry.clear_cache()
    yield
    reset_config()
    ProviderRegistry.clear_cache()


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
default_provider = "mock"
default_model = "test-model"
context_length = 4096

[providers.openai]
base_url = "http://llm.internal:8080/v1"

[logging]
level = "DEBUG"
""")
    return config_path

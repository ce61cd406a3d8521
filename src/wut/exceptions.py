"""Exception hierarchy for wut."""


class WutError(Exception):
    """Base exception for all wut errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Content Errors
class ContentError(WutError):
    """Errors raised while classifying or extracting a file."""

    exit_code = 10
    user_message = "Could not read file content"


class FileReadError(ContentError):
    """The file could not be stat'ed or read."""

    exit_code = 11
    user_message = "Failed to read file"


class IsDirectoryError(ContentError):
    """A directory was given where a file was expected."""

    exit_code = 12
    user_message = "Path is a directory"


class NotRegularFileError(ContentError):
    """The path is a socket, device, FIFO or other special file."""

    exit_code = 13
    user_message = "Path is not a regular file"


class ClassificationError(ContentError):
    """The content type could not be determined."""

    exit_code = 14
    user_message = "Failed to determine content type"


class ExtractionError(ContentError):
    """An extraction utility failed."""

    exit_code = 15
    user_message = "Failed to extract file content"


class CommandFailedError(ContentError):
    """An external utility exited with a non-zero status."""

    exit_code = 16
    user_message = "External command failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        returncode: int | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message=user_message)
        self.returncode = returncode


# Provider Errors
class ProviderError(WutError):
    """Completion service errors (transport, auth, model)."""

    exit_code = 2
    user_message = "LLM provider error"


class ProviderNotAvailableError(ProviderError):
    """Provider is not registered or not configured."""

    exit_code = 2
    user_message = "LLM provider is not available"


class ProviderRateLimitError(ProviderError):
    """Rate limit exceeded."""

    exit_code = 3
    user_message = "Rate limit exceeded. Try again later."


class ProviderAuthError(ProviderError):
    """Authentication failed."""

    exit_code = 4
    user_message = "Authentication failed. Check your API key."


class ProviderTimeoutError(ProviderError):
    """Request timed out."""

    exit_code = 5
    user_message = "Request timed out. Try again."


# Summary Errors
class SummaryError(WutError):
    """Errors raised while building or requesting a summary."""

    exit_code = 30
    user_message = "Summary error"


class NoResponseError(SummaryError):
    """The completion service returned no choices."""

    exit_code = 31
    user_message = "no response from AI"


class InvalidArgumentError(SummaryError):
    """Invalid argument provided."""

    exit_code = 32
    user_message = "Invalid argument"


# Config Errors
class ConfigError(WutError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"

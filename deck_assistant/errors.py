"""Error types raised by the I/O layers (API clients, parsers, LLM)."""

from typing import Optional


class DeckAssistantError(Exception):
    """Base class for failures the CLI can report to the user."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiError(DeckAssistantError):
    """
    Card data provider failure.

    429, 5xx and connection failures are retryable; 404 and other
    client errors are not.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)

    @classmethod
    def from_status(cls, status_code: int, context: str) -> "ApiError":
        """Build an error from an HTTP status code."""
        if status_code == 404:
            return cls(f"Not found: {context}", status_code, retryable=False)
        if status_code == 429:
            return cls(f"Rate limited: {context}", status_code, retryable=True)
        if status_code >= 500:
            return cls(
                f"Server error {status_code}: {context}",
                status_code,
                retryable=True,
            )
        return cls(f"HTTP {status_code}: {context}", status_code, retryable=False)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DeckParseError(DeckAssistantError):
    """Raised when a decklist cannot be read or yields no cards."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class LLMError(DeckAssistantError):
    """LLM provider failure."""

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)

    @classmethod
    def missing_api_key(cls, env_var: str) -> "LLMError":
        return cls(
            f"Missing API key. Set {env_var} in your environment or .env file.",
            retryable=False,
        )

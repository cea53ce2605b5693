"""Error taxonomy for the chat client.

Every error carries a ``retryable`` flag read by the request manager's retry
loop and by the controller when deciding whether to offer a retry button.
"""

REQUEST_TIMEOUT_STATUS = 408
RATE_LIMIT_STATUS = 429


class ChatClientError(Exception):
    """Base class for failures surfaced by the request manager."""

    retryable: bool = False


class InputValidationError(ChatClientError):
    """Raised when user input is empty, too long, or unsafe."""

    retryable = False


class NetworkError(ChatClientError):
    """Raised when the relay cannot be reached."""

    retryable = True


class RequestTimeoutError(ChatClientError):
    """Raised when a request exceeds its deadline."""

    retryable = True


class FormatError(ChatClientError):
    """Raised when a success response does not have the expected shape."""

    retryable = False


class ServerError(ChatClientError):
    """Raised when the relay answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the relay.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code == REQUEST_TIMEOUT_STATUS or self.status_code >= 500

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == RATE_LIMIT_STATUS

"""
Error taxonomy for the network layer.

Every failure that leaves a session is one of the exceptions below. Each
exception carries an ``ErrorKind`` so callers can branch on the category
without caring about the concrete subclass.
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from netlayer.pydantic_models.errors.api_error_model import ApiErrorDTO


class ErrorKind(str, Enum):
    """Closed set of failure categories returned to callers."""

    TRANSPORT_FAILED = "transport_failed"
    TOKEN_EXPIRED = "token_expired"
    API_ERROR = "api_error"
    EMPTY_ERROR_WITH_STATUS_CODE = "empty_error_with_status_code"
    DECODE_FAILED = "decode_failed"
    NORMAL_ERROR = "normal_error"


class NetworkError(Exception):
    """
    Base exception for all network layer errors.

    Catch this to handle any classified failure generically, then inspect
    ``kind`` to decide what to show the user.
    """

    kind: ErrorKind = ErrorKind.NORMAL_ERROR

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None
    ):
        """
        Initialize network error.

        Args:
            message: Human-readable error description
            url: The URL that was being accessed (optional)
            status_code: HTTP status code if applicable (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.message = message
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class TransportError(NetworkError):
    """
    Exception raised when the HTTP exchange itself could not be completed.

    No status code was received, so nothing about the server's answer is known.
    """

    kind = ErrorKind.TRANSPORT_FAILED


class HTTPConnectionError(TransportError):
    """
    Exception raised when connection to the server fails.

    This includes DNS resolution failures, refused or reset connections, etc.
    """
    pass


class HTTPTimeoutError(TransportError):
    """
    Exception raised when a request times out.

    This occurs when the server doesn't respond within the transport's timeout.
    """
    pass


class InvalidResponseError(TransportError):
    """Exception raised when the server answer has no usable status line."""
    pass


class TokenExpiredError(NetworkError):
    """Exception raised when the server answers 401 Unauthorized."""

    kind = ErrorKind.TOKEN_EXPIRED

    def __init__(self, url: Optional[str] = None):
        super().__init__("Authentication token expired", url=url, status_code=401)


class APIError(NetworkError):
    """Exception raised for a non-2xx answer carrying a structured error payload."""

    kind = ErrorKind.API_ERROR

    def __init__(self, payload: "ApiErrorDTO", status_code: Optional[int] = None, url: Optional[str] = None):
        self.payload = payload
        super().__init__(payload.message, url=url, status_code=status_code)


class EmptyErrorWithStatusCode(NetworkError):
    """Exception raised for a non-2xx answer whose body is not a known error payload."""

    kind = ErrorKind.EMPTY_ERROR_WITH_STATUS_CODE

    def __init__(self, status_code: int, url: Optional[str] = None):
        super().__init__(f"Request failed with status code {status_code}", url=url, status_code=status_code)


class DecodeFailedError(NetworkError):
    """Exception raised when a 2xx body does not match the expected type."""

    kind = ErrorKind.DECODE_FAILED

    def __init__(self, original_error: BaseException, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(
            f"Failed to decode response body: {original_error}",
            url=url,
            status_code=status_code,
            original_error=original_error
        )


class NormalError(NetworkError):
    """Wraps any other failure so that only NetworkError leaves a session."""

    kind = ErrorKind.NORMAL_ERROR

    def __init__(self, original_error: BaseException, url: Optional[str] = None):
        super().__init__(str(original_error) or type(original_error).__name__, url=url, original_error=original_error)

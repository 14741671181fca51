"""
Error Classification Module

Maps low-level httpx failures into a small taxonomy of user-facing
error categories. Every failure the API client surfaces is a
ClassifiedError carrying a non-empty, human-readable message.
"""

import logging
import socket
import ssl
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

import httpx


logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Categories of a classified failure."""
    CONNECT_TIMEOUT = "connect-timeout"
    SEND_TIMEOUT = "send-timeout"
    RECEIVE_TIMEOUT = "receive-timeout"
    CONNECTION_ERROR = "connection-error"
    CANCELLED = "cancelled"
    BAD_CERTIFICATE = "bad-certificate"
    UNKNOWN_TRANSPORT = "unknown-transport"
    NO_NETWORK = "no-network"
    RESPONSE_ERROR = "response-error"
    PARSE_ERROR = "parse-error"
    UNKNOWN = "unknown"


DEFAULT_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.CONNECT_TIMEOUT: "Connection timed out, please check your network and try again",
    ErrorCategory.SEND_TIMEOUT: "Sending data took too long, please try again",
    ErrorCategory.RECEIVE_TIMEOUT: "The server is responding too slowly, please try again later",
    ErrorCategory.CONNECTION_ERROR: "Cannot connect to the server. Check your network connection",
    ErrorCategory.CANCELLED: "The request was cancelled",
    ErrorCategory.BAD_CERTIFICATE: "Invalid SSL certificate",
    ErrorCategory.UNKNOWN_TRANSPORT: "Unknown network error",
    ErrorCategory.NO_NETWORK: "No network connection",
    ErrorCategory.PARSE_ERROR: "Could not read the server response",
    ErrorCategory.UNKNOWN: "An unexpected error occurred",
}

STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid request",
    401: "Your session has expired. Please log in again",
    403: "You do not have permission to access this resource",
    404: "The requested data was not found",
    409: "The data conflicts with the current state",
    422: "The submitted data is invalid",
    429: "Too many requests. Please try again later",
    500: "Server error. Please try again later",
    502: "Bad Gateway. The server is temporarily unavailable",
    503: "The server is under maintenance. Please try again later",
    504: "Gateway Timeout. The server took too long to respond",
}

# Checked in order; the first present, non-empty field wins
SERVER_MESSAGE_FIELDS: Tuple[str, ...] = ("message", "error", "msg")


class ClassifiedError(Exception):
    """
    A failure normalized into one of the ErrorCategory values.

    Attributes:
        category: The error category.
        message: Human-readable message (never empty).
        status_code: HTTP status code for response errors.
        server_message: Message extracted from the response body, if any.
        cause: The raw failure that was classified.
    """

    def __init__(
        self,
        category: ErrorCategory,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        if not message:
            message = DEFAULT_MESSAGES.get(category) or DEFAULT_MESSAGES[ErrorCategory.UNKNOWN]
        super().__init__(message)
        self.category = category
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(category={self.category.value!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class RequestCancelled(Exception):
    """Raised to abort a request before it is sent."""


class ResponseParseError(Exception):
    """Raised when a response body cannot be decoded or parsed."""


def extract_server_message(body: Any) -> Optional[str]:
    """
    Extract an error message supplied by the server.

    Args:
        body: Decoded JSON response body.

    Returns:
        The first non-empty value among SERVER_MESSAGE_FIELDS, or None.
    """
    if not isinstance(body, dict):
        return None

    for key in SERVER_MESSAGE_FIELDS:
        value = body.get(key)
        # Only text counts; flags like {"error": false} are skipped
        if isinstance(value, str) and value.strip():
            return value
    return None


def default_message_for_status(status_code: Optional[int]) -> str:
    """Get the fixed message for a status code."""
    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]
    return f"Server error ({status_code})"


def _exception_chain(error: BaseException) -> Iterator[BaseException]:
    """Walk an exception and its causes, guarding against cycles."""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _is_certificate_failure(error: BaseException) -> bool:
    for exc in _exception_chain(error):
        if isinstance(exc, ssl.SSLCertVerificationError):
            return True
        if "CERTIFICATE_VERIFY_FAILED" in str(exc):
            return True
    return False


def _is_socket_failure(error: BaseException) -> bool:
    for exc in _exception_chain(error):
        if isinstance(exc, (socket.gaierror, ConnectionError)):
            return True
        if "socket" in str(exc).lower():
            return True
    return False


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _classify_transport(error: httpx.RequestError) -> Tuple[ErrorCategory, str]:
    if isinstance(error, (httpx.ConnectTimeout, httpx.PoolTimeout)):
        category = ErrorCategory.CONNECT_TIMEOUT
    elif isinstance(error, httpx.WriteTimeout):
        category = ErrorCategory.SEND_TIMEOUT
    elif isinstance(error, httpx.ReadTimeout):
        category = ErrorCategory.RECEIVE_TIMEOUT
    elif isinstance(error, httpx.ConnectError):
        if _is_certificate_failure(error):
            category = ErrorCategory.BAD_CERTIFICATE
        else:
            category = ErrorCategory.CONNECTION_ERROR
    elif _is_socket_failure(error):
        category = ErrorCategory.NO_NETWORK
    else:
        detail = str(error) or type(error).__name__
        return ErrorCategory.UNKNOWN_TRANSPORT, f"Unknown network error: {detail}"

    return category, DEFAULT_MESSAGES[category]


def classify(
    error: BaseException,
    custom_message: Optional[str] = None,
) -> ClassifiedError:
    """
    Convert any failure into a ClassifiedError.

    Message precedence: custom_message, then the server-supplied
    message, then the fixed default for the category.

    Args:
        error: The raw failure.
        custom_message: Caller-supplied message that overrides all others.

    Returns:
        ClassifiedError. An already classified error is returned
        unchanged, or copied with custom_message when one is given.
    """
    if isinstance(error, ClassifiedError):
        if not custom_message or custom_message == error.message:
            return error
        return ClassifiedError(
            category=error.category,
            message=custom_message,
            status_code=error.status_code,
            server_message=error.server_message,
            cause=error.cause,
        )

    status_code = None
    server_message = None

    if isinstance(error, httpx.HTTPStatusError):
        category = ErrorCategory.RESPONSE_ERROR
        status_code = error.response.status_code
        server_message = extract_server_message(_response_body(error.response))
        default = server_message or default_message_for_status(status_code)

    elif isinstance(error, httpx.RequestError):
        category, default = _classify_transport(error)

    elif isinstance(error, RequestCancelled):
        category = ErrorCategory.CANCELLED
        default = DEFAULT_MESSAGES[category]

    elif isinstance(error, ResponseParseError):
        category = ErrorCategory.PARSE_ERROR
        default = DEFAULT_MESSAGES[category]

    else:
        category = ErrorCategory.UNKNOWN
        detail = str(error) or type(error).__name__
        default = f"Unexpected error: {detail}"

    classified = ClassifiedError(
        category=category,
        message=custom_message or default,
        status_code=status_code,
        server_message=server_message,
        cause=error,
    )

    logger.warning(
        f"Request failed [{category.value}]"
        + (f" status={status_code}" if status_code is not None else "")
        + f": {type(error).__name__}: {error}"
    )
    return classified

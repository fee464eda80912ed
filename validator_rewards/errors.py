"""Domain exceptions for the validator rewards pipeline.

Upstream failures (transport and decoding) are separated from lookup misses so
the API layer can map each to its own response. None of these are fatal; the
core never terminates the process.
"""

from enum import Enum


class FetchErrorClass(str, Enum):
    """Classification of upstream fetch failures.

    - NETWORK_TIMEOUT: Request timed out
    - CONNECTION_ERROR: Could not establish connection
    - HTTP_STATUS: Upstream answered with a non-2xx status
    - RESPONSE_SIZE_EXCEEDED: Response exceeded max size limit
    - UNKNOWN: Any other transport failure
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    RESPONSE_SIZE_EXCEEDED = "RESPONSE_SIZE_EXCEEDED"
    UNKNOWN = "UNKNOWN"


class ValidatorRewardsError(Exception):
    """Base exception for all validator rewards errors."""


class UpstreamError(ValidatorRewardsError):
    """Base exception for failures talking to the upstream explorer API.

    Provides structured error information for logging.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, str | int | None] | None = None,
    ) -> None:
        """Initialize the upstream error.

        Args:
            message: Human-readable error message.
            url: URL of the failed request.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = details or {}

    def to_dict(self) -> dict[str, str | None | dict[str, str | int | None]]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "url": self.url,
            "details": self.details,
        }


class UpstreamFetchError(UpstreamError):
    """Raised when the upstream request fails at the transport level.

    Covers timeouts, connection failures, non-2xx statuses and
    oversized responses.
    """

    def __init__(
        self,
        error_class: FetchErrorClass,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the fetch error.

        Args:
            error_class: Classification of the failure.
            message: Human-readable error message.
            url: URL of the failed request.
            status_code: HTTP status code if a response was received.
        """
        details: dict[str, str | int | None] = {"error_class": error_class.value}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, url=url, details=details)
        self.error_class = error_class
        self.status_code = status_code


class UpstreamDecodeError(UpstreamError):
    """Raised when the upstream response cannot be parsed into entity records."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize the decode error.

        Args:
            message: Human-readable error message.
            url: URL of the failed request.
            field: Location of the first offending field, if known.
        """
        details: dict[str, str | int | None] = {}
        if field is not None:
            details["field"] = field
        super().__init__(message, url=url, details=details)
        self.field = field


class NotFoundError(ValidatorRewardsError):
    """Raised when a validator id is not present in the snapshot."""

    def __init__(self, validator_id: int) -> None:
        """Initialize the error with the missing validator id.

        Args:
            validator_id: The id that was not found.
        """
        self.validator_id = validator_id
        super().__init__(f"Validator not found: {validator_id}")

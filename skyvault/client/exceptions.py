"""
SkyVault SDK exceptions.

Every failure surfaced by the SDK is an ``SdkException``. Data-plane calls do
not raise these; they are wrapped in the error variant of the operation's
response. Constructors and configuration helpers raise them directly.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Classified error kinds exposed on error responses."""

    INVALID_ARGUMENT_ERROR = "INVALID_ARGUMENT_ERROR"
    UNKNOWN_SERVICE_ERROR = "UNKNOWN_SERVICE_ERROR"
    ALREADY_EXISTS_ERROR = "ALREADY_EXISTS_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    CANCELLED_ERROR = "CANCELLED_ERROR"
    LIMIT_EXCEEDED_ERROR = "LIMIT_EXCEEDED_ERROR"
    BAD_REQUEST_ERROR = "BAD_REQUEST_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    FAILED_PRECONDITION_ERROR = "FAILED_PRECONDITION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class Service(str, Enum):
    """Remote service an error originated from."""

    AUTH = "auth"
    CACHE = "cache"
    CONTROL = "control"
    LEADERBOARD = "leaderboard"
    STORAGE = "storage"
    TOPICS = "topics"


@dataclass
class TransportDetails:
    """Raw gRPC failure information kept for debugging."""

    code: Any = None
    details: str | None = None
    metadata: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


class SdkException(Exception):
    """Base exception for all SkyVault SDK errors."""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    message_wrapper: str = "Unknown error has occurred"

    def __init__(
        self,
        message: str,
        service: Service | None = None,
        transport_details: TransportDetails | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.transport_details = transport_details or TransportDetails()

    def __str__(self) -> str:
        return f"{self.message_wrapper}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(error_code={self.error_code.value!r}, message={self.message!r})"


class AlreadyExistsException(SdkException):
    """Resource already exists."""

    error_code = ErrorCode.ALREADY_EXISTS_ERROR
    message_wrapper = "A resource with the specified name already exists"


class AuthenticationException(SdkException):
    """Authentication token is not provided or is invalid."""

    error_code = ErrorCode.AUTHENTICATION_ERROR
    message_wrapper = "Invalid authentication credentials to connect to the service"


class BadRequestException(SdkException):
    """The request was malformed or asked for something the service does not support."""

    error_code = ErrorCode.BAD_REQUEST_ERROR
    message_wrapper = "The request was invalid; please contact SkyVault"


class CancelledException(SdkException):
    """Operation was cancelled."""

    error_code = ErrorCode.CANCELLED_ERROR
    message_wrapper = "The request was cancelled by the server; please contact SkyVault"


class FailedPreconditionException(SdkException):
    """System is not in a state required for the operation's execution."""

    error_code = ErrorCode.FAILED_PRECONDITION_ERROR
    message_wrapper = "System is not in a state required for the operation's execution"


class InternalServerException(SdkException):
    """Unexpected error encountered while trying to fulfill the request."""

    error_code = ErrorCode.INTERNAL_SERVER_ERROR
    message_wrapper = "An unexpected error occurred while trying to fulfill the request; please contact SkyVault"


class InvalidArgumentException(SdkException):
    """Invalid argument passed to the SDK."""

    error_code = ErrorCode.INVALID_ARGUMENT_ERROR
    message_wrapper = "Invalid argument passed to SkyVault client"


class LimitExceededException(SdkException):
    """Requested resource or request rate exceeds the account limits."""

    error_code = ErrorCode.LIMIT_EXCEEDED_ERROR
    message_wrapper = "Request rate, bandwidth, or object size exceeded the limits for this account"


class NotFoundException(SdkException):
    """Requested resource or resource path doesn't exist."""

    error_code = ErrorCode.NOT_FOUND_ERROR
    message_wrapper = "A cache with the specified name does not exist"

    def __init__(
        self,
        message: str,
        service: Service | None = None,
        transport_details: TransportDetails | None = None,
    ):
        super().__init__(message, service, transport_details)
        if service == Service.CACHE or service == Service.TOPICS:
            self.message_wrapper = (
                "A cache with the specified name does not exist.  To resolve this error, "
                "make sure you have created the cache before attempting to use it"
            )
        elif service == Service.LEADERBOARD:
            self.message_wrapper = "A leaderboard with the specified name does not exist"
        elif service == Service.STORAGE:
            self.message_wrapper = "A store with the specified name does not exist"
        elif service is not None:
            self.message_wrapper = "The requested resource does not exist"


class PermissionDeniedException(SdkException):
    """Insufficient permissions to execute the operation."""

    error_code = ErrorCode.PERMISSION_ERROR
    message_wrapper = "Insufficient permissions to perform an operation on a cache"


class ServerUnavailableException(SdkException):
    """The server was unable to handle the request."""

    error_code = ErrorCode.SERVER_UNAVAILABLE
    message_wrapper = "The server was unable to handle the request; consider retrying"


class TimeoutException(SdkException):
    """Requested operation did not complete in allotted time."""

    error_code = ErrorCode.TIMEOUT_ERROR
    message_wrapper = (
        "The client's configured timeout was exceeded; you may need to use a "
        "Configuration with more lenient timeouts"
    )


class UnknownServiceException(SdkException):
    """The service reported an unknown error."""

    error_code = ErrorCode.UNKNOWN_SERVICE_ERROR
    message_wrapper = "The service returned an unknown response; please contact SkyVault"


class UnknownException(SdkException):
    """Unhandled error from the SDK itself or an unexpected reply."""

    error_code = ErrorCode.UNKNOWN_ERROR
    message_wrapper = "Unknown error has occurred"

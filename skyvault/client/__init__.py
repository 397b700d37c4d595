"""
SkyVault Client SDK.

Exceptions, typed responses and retry strategies. The clients themselves are
exported from the top-level ``skyvault`` package.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.client.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    BadRequestException,
    CancelledException,
    ErrorCode,
    FailedPreconditionException,
    InternalServerException,
    InvalidArgumentException,
    LimitExceededException,
    NotFoundException,
    PermissionDeniedException,
    SdkException,
    ServerUnavailableException,
    Service,
    TimeoutException,
    TransportDetails,
    UnknownException,
    UnknownServiceException,
)
from skyvault.client.retry import (
    DefaultEligibilityStrategy,
    FixedCountRetryStrategy,
    NoRetryStrategy,
    RetryableProps,
    RetryStrategy,
)

__all__ = [
    # Exceptions
    "SdkException",
    "ErrorCode",
    "Service",
    "TransportDetails",
    "AlreadyExistsException",
    "AuthenticationException",
    "BadRequestException",
    "CancelledException",
    "FailedPreconditionException",
    "InternalServerException",
    "InvalidArgumentException",
    "LimitExceededException",
    "NotFoundException",
    "PermissionDeniedException",
    "ServerUnavailableException",
    "TimeoutException",
    "UnknownException",
    "UnknownServiceException",
    # Retry
    "RetryStrategy",
    "RetryableProps",
    "FixedCountRetryStrategy",
    "NoRetryStrategy",
    "DefaultEligibilityStrategy",
]

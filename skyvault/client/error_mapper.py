"""
Conversion of transport failures into typed SDK exceptions.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio

import grpc
from loguru import logger

from skyvault.client.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    BadRequestException,
    CancelledException,
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

STATUS_TO_EXCEPTION: dict[grpc.StatusCode, type[SdkException]] = {
    grpc.StatusCode.PERMISSION_DENIED: PermissionDeniedException,
    grpc.StatusCode.DATA_LOSS: InternalServerException,
    grpc.StatusCode.INTERNAL: InternalServerException,
    grpc.StatusCode.ABORTED: InternalServerException,
    grpc.StatusCode.UNKNOWN: UnknownServiceException,
    grpc.StatusCode.UNAVAILABLE: ServerUnavailableException,
    grpc.StatusCode.NOT_FOUND: NotFoundException,
    grpc.StatusCode.OUT_OF_RANGE: BadRequestException,
    grpc.StatusCode.UNIMPLEMENTED: BadRequestException,
    grpc.StatusCode.FAILED_PRECONDITION: FailedPreconditionException,
    grpc.StatusCode.INVALID_ARGUMENT: InvalidArgumentException,
    grpc.StatusCode.CANCELLED: CancelledException,
    grpc.StatusCode.DEADLINE_EXCEEDED: TimeoutException,
    grpc.StatusCode.UNAUTHENTICATED: AuthenticationException,
    grpc.StatusCode.RESOURCE_EXHAUSTED: LimitExceededException,
    grpc.StatusCode.ALREADY_EXISTS: AlreadyExistsException,
}


def exception_for_status(code: grpc.StatusCode | None) -> type[SdkException]:
    """Return the exception class for a gRPC status code; unknown codes map to UnknownException."""
    return STATUS_TO_EXCEPTION.get(code, UnknownException)


def convert_error(error: BaseException, service: Service | None = None) -> SdkException:
    """
    Convert any error raised while issuing a request into an SdkException.

    Args:
        error: Exception raised by the transport or by request preparation
        service: Remote service the request was addressed to

    Returns:
        SdkException carrying the classified error code
    """
    if isinstance(error, SdkException):
        return error

    if isinstance(error, grpc.RpcError):
        code = _call_or_none(error, "code")
        details = _call_or_none(error, "details")
        metadata = _call_or_none(error, "trailing_metadata")
        exception_class = exception_for_status(code)
        message = details or "Unable to process request"
        if code is not None:
            message = f"{code.value[0]} {code.name}: {message}"
        return exception_class(
            message,
            service,
            TransportDetails(code=code, details=details, metadata=metadata),
        )

    if isinstance(error, asyncio.TimeoutError):
        return TimeoutException("Request timed out", service)

    return UnknownException(f"Unexpected error: {error!r}", service)


def _call_or_none(error: BaseException, attribute: str):
    accessor = getattr(error, attribute, None)
    if not callable(accessor):
        return None
    return accessor()


def handle_error(error: BaseException, service: Service, operation: str) -> SdkException:
    """Convert an error raised by ``operation`` and log it."""
    exception = convert_error(error, service)
    if isinstance(exception, InvalidArgumentException):
        logger.debug(f"{operation} rejected: {exception}")
    else:
        logger.warning(f"{operation} failed: {exception!r}")
    return exception

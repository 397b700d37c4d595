"""Tests for status code to exception mapping."""

import asyncio

import grpc
import pytest

from skyvault.client.error_mapper import STATUS_TO_EXCEPTION, convert_error, exception_for_status
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
    UnknownException,
    UnknownServiceException,
)
from skyvault.client.transport.local import rpc_error

EXPECTED = {
    grpc.StatusCode.OK: (UnknownException, ErrorCode.UNKNOWN_ERROR),
    grpc.StatusCode.CANCELLED: (CancelledException, ErrorCode.CANCELLED_ERROR),
    grpc.StatusCode.UNKNOWN: (UnknownServiceException, ErrorCode.UNKNOWN_SERVICE_ERROR),
    grpc.StatusCode.INVALID_ARGUMENT: (InvalidArgumentException, ErrorCode.INVALID_ARGUMENT_ERROR),
    grpc.StatusCode.DEADLINE_EXCEEDED: (TimeoutException, ErrorCode.TIMEOUT_ERROR),
    grpc.StatusCode.NOT_FOUND: (NotFoundException, ErrorCode.NOT_FOUND_ERROR),
    grpc.StatusCode.ALREADY_EXISTS: (AlreadyExistsException, ErrorCode.ALREADY_EXISTS_ERROR),
    grpc.StatusCode.PERMISSION_DENIED: (PermissionDeniedException, ErrorCode.PERMISSION_ERROR),
    grpc.StatusCode.RESOURCE_EXHAUSTED: (LimitExceededException, ErrorCode.LIMIT_EXCEEDED_ERROR),
    grpc.StatusCode.FAILED_PRECONDITION: (FailedPreconditionException, ErrorCode.FAILED_PRECONDITION_ERROR),
    grpc.StatusCode.ABORTED: (InternalServerException, ErrorCode.INTERNAL_SERVER_ERROR),
    grpc.StatusCode.OUT_OF_RANGE: (BadRequestException, ErrorCode.BAD_REQUEST_ERROR),
    grpc.StatusCode.UNIMPLEMENTED: (BadRequestException, ErrorCode.BAD_REQUEST_ERROR),
    grpc.StatusCode.INTERNAL: (InternalServerException, ErrorCode.INTERNAL_SERVER_ERROR),
    grpc.StatusCode.UNAVAILABLE: (ServerUnavailableException, ErrorCode.SERVER_UNAVAILABLE),
    grpc.StatusCode.DATA_LOSS: (InternalServerException, ErrorCode.INTERNAL_SERVER_ERROR),
    grpc.StatusCode.UNAUTHENTICATED: (AuthenticationException, ErrorCode.AUTHENTICATION_ERROR),
}


class TestStatusMapping:
    """Test that every status code maps to exactly one error kind."""

    def test_every_status_code_is_covered(self):
        """Test the expectations list every gRPC status code."""
        assert set(EXPECTED) == set(grpc.StatusCode)

    @pytest.mark.parametrize("code", list(grpc.StatusCode), ids=lambda code: code.name)
    def test_mapping(self, code):
        """Test each status code maps to its exception class and error code."""
        expected_class, expected_code = EXPECTED[code]

        error = convert_error(rpc_error(code, "boom"), Service.CACHE)

        assert type(error) is expected_class
        assert error.error_code == expected_code

    @pytest.mark.parametrize("code", list(grpc.StatusCode), ids=lambda code: code.name)
    def test_mapping_is_deterministic(self, code):
        """Test converting the same status twice yields the same kind."""
        first = convert_error(rpc_error(code, "first"))
        second = convert_error(rpc_error(code, "second"))

        assert type(first) is type(second)
        assert first.error_code == second.error_code

    def test_table_matches_lookup(self):
        """Test exception_for_status agrees with the table and defaults to unknown."""
        for code, exception_class in STATUS_TO_EXCEPTION.items():
            assert exception_for_status(code) is exception_class
        assert exception_for_status(None) is UnknownException


class TestConvertError:
    """Test conversion of non-status errors and error details."""

    def test_sdk_exception_passes_through(self):
        """Test an SdkException is returned unchanged."""
        original = InvalidArgumentException("bad key")

        assert convert_error(original) is original

    def test_asyncio_timeout(self):
        """Test asyncio timeouts become TimeoutException."""
        error = convert_error(asyncio.TimeoutError())

        assert isinstance(error, TimeoutException)
        assert error.error_code == ErrorCode.TIMEOUT_ERROR

    def test_arbitrary_exception(self):
        """Test unexpected exceptions become UnknownException."""
        error = convert_error(ValueError("weird"))

        assert isinstance(error, UnknownException)
        assert "weird" in error.message

    def test_transport_details_are_kept(self):
        """Test status code and details survive conversion."""
        error = convert_error(rpc_error(grpc.StatusCode.NOT_FOUND, "Cache not found: x"), Service.CACHE)

        assert error.transport_details.code == grpc.StatusCode.NOT_FOUND
        assert error.transport_details.details == "Cache not found: x"
        assert error.service == Service.CACHE
        assert "NOT_FOUND" in error.message

    def test_message_wrapper_in_str(self):
        """Test str() prefixes the fixed per-kind wrapper."""
        error = convert_error(rpc_error(grpc.StatusCode.PERMISSION_DENIED, "nope"))

        assert str(error).startswith(PermissionDeniedException.message_wrapper)

    def test_not_found_wrapper_depends_on_service(self):
        """Test NotFound messages name the missing resource."""
        cache_error = NotFoundException("x", Service.CACHE)
        leaderboard_error = NotFoundException("x", Service.LEADERBOARD)

        assert "cache" in str(cache_error)
        assert "leaderboard" in str(leaderboard_error)

    def test_all_exceptions_are_sdk_exceptions(self):
        """Test every mapped class derives from SdkException."""
        for exception_class, _ in EXPECTED.values():
            assert issubclass(exception_class, SdkException)

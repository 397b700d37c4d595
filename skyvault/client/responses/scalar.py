"""
Responses for scalar cache operations.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass

from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase


class CacheGetResponse(ResponseBase):
    """Parent of CacheGet.Hit, CacheGet.Miss and CacheGet.Error."""


class CacheGet:
    @dataclass
    class Hit(CacheGetResponse):
        """The key was found; carries its value."""

        value_bytes: bytes

        @property
        def value_string(self) -> str:
            return self.value_bytes.decode("utf-8")

    @dataclass
    class Miss(CacheGetResponse):
        """The key was not found."""

    class Error(CacheGetResponse, ErrorResponseMixin):
        """The get failed."""


class CacheSetResponse(ResponseBase):
    """Parent of CacheSet.Success and CacheSet.Error."""


class CacheSet:
    @dataclass
    class Success(CacheSetResponse):
        """The value was stored."""

    class Error(CacheSetResponse, ErrorResponseMixin):
        """The set failed."""


class CacheDeleteResponse(ResponseBase):
    """Parent of CacheDelete.Success and CacheDelete.Error."""


class CacheDelete:
    @dataclass
    class Success(CacheDeleteResponse):
        """The key was deleted, or was not present."""

    class Error(CacheDeleteResponse, ErrorResponseMixin):
        """The delete failed."""


class CacheIncrementResponse(ResponseBase):
    """Parent of CacheIncrement.Success and CacheIncrement.Error."""


class CacheIncrement:
    @dataclass
    class Success(CacheIncrementResponse):
        """The counter after incrementing."""

        value: int

    class Error(CacheIncrementResponse, ErrorResponseMixin):
        """The increment failed, e.g. the stored value is not an integer."""


class CacheSetIfNotExistsResponse(ResponseBase):
    """Parent of the CacheSetIfNotExists variants."""


class CacheSetIfNotExists:
    @dataclass
    class Stored(CacheSetIfNotExistsResponse):
        """The key was absent and the value was stored."""

    @dataclass
    class NotStored(CacheSetIfNotExistsResponse):
        """The key already existed; nothing was written."""

    class Error(CacheSetIfNotExistsResponse, ErrorResponseMixin):
        """The conditional set failed."""

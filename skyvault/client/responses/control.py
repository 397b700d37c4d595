"""
Responses for cache lifecycle and signing-key operations.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from datetime import datetime

from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase


class CreateCacheResponse(ResponseBase):
    """Parent of the CreateCache variants."""


class CreateCache:
    @dataclass
    class Success(CreateCacheResponse):
        """The cache was created."""

    @dataclass
    class CacheAlreadyExists(CreateCacheResponse):
        """A cache with this name already exists; treated as a non-error outcome."""

    class Error(CreateCacheResponse, ErrorResponseMixin):
        """The cache could not be created."""


class DeleteCacheResponse(ResponseBase):
    """Parent of the DeleteCache variants."""


class DeleteCache:
    @dataclass
    class Success(DeleteCacheResponse):
        """The cache was deleted."""

    class Error(DeleteCacheResponse, ErrorResponseMixin):
        """The cache could not be deleted."""


@dataclass
class CacheInfo:
    name: str


class ListCachesResponse(ResponseBase):
    """Parent of the ListCaches variants."""


class ListCaches:
    @dataclass
    class Success(ListCachesResponse):
        """One page of caches; ``next_token`` is empty on the last page."""

        caches: list[CacheInfo] = field(default_factory=list)
        next_token: str = ""

        @property
        def cache_names(self) -> list[str]:
            return [cache.name for cache in self.caches]

    class Error(ListCachesResponse, ErrorResponseMixin):
        """Listing failed."""


class FlushCacheResponse(ResponseBase):
    """Parent of the FlushCache variants."""


class FlushCache:
    @dataclass
    class Success(FlushCacheResponse):
        """All items in the cache were removed."""

    class Error(FlushCacheResponse, ErrorResponseMixin):
        """The flush failed."""


class CreateSigningKeyResponse(ResponseBase):
    """Parent of the CreateSigningKey variants."""


class CreateSigningKey:
    @dataclass
    class Success(CreateSigningKeyResponse):
        """
        A new signing key.

        ``key`` is the JSON web key used to sign presigned URLs; ``endpoint`` is
        the cache endpoint those URLs must target.
        """

        key_id: str
        endpoint: str
        key: str
        expires_at: datetime

    class Error(CreateSigningKeyResponse, ErrorResponseMixin):
        """The signing key could not be created."""


class RevokeSigningKeyResponse(ResponseBase):
    """Parent of the RevokeSigningKey variants."""


class RevokeSigningKey:
    @dataclass
    class Success(RevokeSigningKeyResponse):
        """The key was revoked; tokens it signed are no longer valid."""

    class Error(RevokeSigningKeyResponse, ErrorResponseMixin):
        """The key could not be revoked."""


@dataclass
class SigningKey:
    key_id: str
    expires_at: datetime
    endpoint: str


class ListSigningKeysResponse(ResponseBase):
    """Parent of the ListSigningKeys variants."""


class ListSigningKeys:
    @dataclass
    class Success(ListSigningKeysResponse):
        signing_keys: list[SigningKey] = field(default_factory=list)
        next_token: str = ""

    class Error(ListSigningKeysResponse, ErrorResponseMixin):
        """Listing failed."""

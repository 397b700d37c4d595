"""
Responses for token generation.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field

from skyvault.auth.expiration import ExpiresAt
from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase


class GenerateApiKeyResponse(ResponseBase):
    """Parent of the GenerateApiKey variants."""


class GenerateApiKey:
    @dataclass
    class Success(GenerateApiKeyResponse):
        api_key: str = field(repr=False)
        refresh_token: str = field(repr=False)
        endpoint: str
        expires_at: ExpiresAt

    class Error(GenerateApiKeyResponse, ErrorResponseMixin):
        """The key could not be generated."""


class RefreshApiKeyResponse(ResponseBase):
    """Parent of the RefreshApiKey variants."""


class RefreshApiKey:
    @dataclass
    class Success(RefreshApiKeyResponse):
        api_key: str = field(repr=False)
        refresh_token: str = field(repr=False)
        endpoint: str
        expires_at: ExpiresAt

    class Error(RefreshApiKeyResponse, ErrorResponseMixin):
        """The key could not be refreshed."""


class GenerateDisposableTokenResponse(ResponseBase):
    """Parent of the GenerateDisposableToken variants."""


class GenerateDisposableToken:
    @dataclass
    class Success(GenerateDisposableTokenResponse):
        auth_token: str = field(repr=False)
        endpoint: str
        expires_at: ExpiresAt

    class Error(GenerateDisposableTokenResponse, ErrorResponseMixin):
        """The token could not be generated."""

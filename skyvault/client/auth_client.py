"""
SkyVault auth client: API key and disposable token generation.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.auth.expiration import ExpiresAt, ExpiresIn
from skyvault.auth.scope import TokenScope, permissions_to_wire
from skyvault.client import wire
from skyvault.client.data import DataClient
from skyvault.client.error_mapper import handle_error
from skyvault.client.exceptions import InvalidArgumentException, Service
from skyvault.client.responses.auth import (
    GenerateApiKey,
    GenerateApiKeyResponse,
    GenerateDisposableToken,
    GenerateDisposableTokenResponse,
    RefreshApiKey,
    RefreshApiKeyResponse,
)
from skyvault.client.transport import default_transport_factory
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import validate_configuration, validate_disposable_token_expiry
from skyvault.config.configuration import Configuration


class AuthClient:
    """
    Async client for minting scoped credentials.

    Example:
        ```python
        async with AuthClient(credential_provider, configuration) as auth:
            response = await auth.generate_disposable_token(
                TokenScopes.cache_key_read_only("orders", "order:1"),
                ExpiresIn.minutes(30),
            )
        ```
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        transport_factory: TransportFactory | None = None,
    ):
        validate_configuration(configuration)
        transport_factory = transport_factory or default_transport_factory
        grpc_configuration = configuration.grpc_configuration

        self.configuration = configuration
        self._auth_token = credential_provider.auth_token
        self._auth = DataClient(
            transport_factory(credential_provider, credential_provider.control_endpoint, grpc_configuration),
            configuration,
        )
        self._token = DataClient(
            transport_factory(credential_provider, credential_provider.token_endpoint, grpc_configuration),
            configuration,
        )
        self._closed = False

    async def __aenter__(self) -> "AuthClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def generate_api_key(
        self, scope: TokenScope, expires_in: ExpiresIn | None = None
    ) -> GenerateApiKeyResponse:
        """
        Generate a long-lived API key.

        Args:
            scope: What the key may access
            expires_in: Lifetime of the key; never expires when None

        Returns:
            ``GenerateApiKey.Success`` carrying the key and its refresh token
        """
        try:
            expires_in = expires_in or ExpiresIn.never()
            if not isinstance(expires_in, ExpiresIn):
                raise InvalidArgumentException("expires_in must be an ExpiresIn")
            request = wire.GenerateApiTokenRequest(
                auth_token=self._auth_token,
                permissions=permissions_to_wire(scope),
                valid_for_seconds=expires_in.valid_for_seconds(),
            )
            reply = await self._auth.invoke(wire.GENERATE_API_TOKEN, request)
        except Exception as e:
            return GenerateApiKey.Error(handle_error(e, Service.AUTH, "generate_api_key"))

        return GenerateApiKey.Success(
            api_key=reply.api_key,
            refresh_token=reply.refresh_token,
            endpoint=reply.endpoint,
            expires_at=ExpiresAt.from_epoch(reply.valid_until),
        )

    async def refresh_api_key(self, refresh_token: str, api_key: str | None = None) -> RefreshApiKeyResponse:
        """
        Exchange a refresh token for a new API key.

        Args:
            refresh_token: Token returned alongside the key being refreshed
            api_key: Key being refreshed; defaults to this client's own key
        """
        try:
            if not refresh_token:
                raise InvalidArgumentException("Refresh token must not be empty")
            request = wire.RefreshApiTokenRequest(
                api_key=api_key or self._auth_token,
                refresh_token=refresh_token,
            )
            reply = await self._auth.invoke(wire.REFRESH_API_TOKEN, request)
        except Exception as e:
            return RefreshApiKey.Error(handle_error(e, Service.AUTH, "refresh_api_key"))

        return RefreshApiKey.Success(
            api_key=reply.api_key,
            refresh_token=reply.refresh_token,
            endpoint=reply.endpoint,
            expires_at=ExpiresAt.from_epoch(reply.valid_until),
        )

    async def generate_disposable_token(
        self, scope: TokenScope, expires_in: ExpiresIn
    ) -> GenerateDisposableTokenResponse:
        """
        Generate a short-lived token that cannot be refreshed.

        ``expires_in`` must expire, and within one hour.
        """
        try:
            request = wire.GenerateDisposableTokenRequest(
                auth_token=self._auth_token,
                permissions=permissions_to_wire(scope),
                valid_for_seconds=validate_disposable_token_expiry(expires_in),
            )
            reply = await self._token.invoke(wire.GENERATE_DISPOSABLE_TOKEN, request)
        except Exception as e:
            return GenerateDisposableToken.Error(
                handle_error(e, Service.AUTH, "generate_disposable_token")
            )

        return GenerateDisposableToken.Success(
            auth_token=reply.api_key,
            endpoint=reply.endpoint,
            expires_at=ExpiresAt.from_epoch(reply.valid_until),
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._auth.close()
        await self._token.close()
        for middleware in self.configuration.middlewares:
            await middleware.close()

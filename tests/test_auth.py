"""Tests for credentials, token scopes, expiry and the auth client."""

import base64
import json
from datetime import datetime, timedelta, timezone

import grpc
import jwt
import pytest

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.auth.expiration import ExpiresAt, ExpiresIn
from skyvault.auth.scope import (
    ALL_CACHES,
    ALL_DATA_READ_WRITE,
    ALL_TOPICS,
    CacheName,
    CachePermission,
    CacheRole,
    InternalSuperUserPermissions,
    Permissions,
    TokenScopes,
    TopicName,
    TopicPermission,
    TopicRole,
    permissions_to_wire,
)
from skyvault.client import wire
from skyvault.client.exceptions import ErrorCode, InvalidArgumentException
from skyvault.client.responses.auth import GenerateApiKey, GenerateDisposableToken, RefreshApiKey


def v1_key(endpoint: str, api_key: str) -> str:
    payload = json.dumps({"endpoint": endpoint, "api_key": api_key}).encode("utf-8")
    return base64.b64encode(payload).decode("ascii")


class TestCredentialProvider:
    """Test API key parsing and endpoint resolution."""

    def test_v1_key(self):
        """Test base64 keys carry the token and base endpoint."""
        provider = CredentialProvider.from_string(v1_key("skyvault.example", "secret"))

        assert provider.auth_token == "secret"
        assert provider.control_endpoint == "control.skyvault.example"
        assert provider.cache_endpoint == "cache.skyvault.example"
        assert provider.token_endpoint == "token.skyvault.example"
        assert provider.secure

    def test_jwt_key(self):
        """Test JWT keys take endpoints from their claims."""
        token = jwt.encode(
            {"c": "control.region.skyvault.example", "cp": "cache.region.skyvault.example"},
            "signing-secret",
            algorithm="HS256",
        )

        provider = CredentialProvider.from_string(token)

        assert provider.auth_token == token
        assert provider.control_endpoint == "control.region.skyvault.example"
        assert provider.cache_endpoint == "cache.region.skyvault.example"
        assert provider.token_endpoint == "token.region.skyvault.example"

    def test_jwt_missing_claims(self):
        """Test JWTs without endpoint claims are rejected."""
        token = jwt.encode({"sub": "someone"}, "signing-secret", algorithm="HS256")

        with pytest.raises(InvalidArgumentException):
            CredentialProvider.from_string(token)

    def test_explicit_endpoint(self):
        """Test an explicit endpoint wins over anything embedded in the key."""
        provider = CredentialProvider.from_string("opaque-key", endpoint="local.test")

        assert provider.auth_token == "opaque-key"
        assert provider.cache_endpoint == "cache.local.test"

    @pytest.mark.parametrize("api_key", ["", "   ", "not a key at all"])
    def test_invalid_keys(self, api_key):
        """Test empty and unparseable keys are rejected."""
        with pytest.raises(InvalidArgumentException):
            CredentialProvider.from_string(api_key)

    def test_from_environment_variable(self, monkeypatch):
        """Test the key is read from the named variable."""
        monkeypatch.setenv("MY_SKYVAULT_KEY", v1_key("skyvault.example", "from-env"))

        provider = CredentialProvider.from_environment_variable("MY_SKYVAULT_KEY")

        assert provider.auth_token == "from-env"

    def test_missing_environment_variable(self, monkeypatch):
        """Test an unset variable is rejected."""
        monkeypatch.delenv("SKYVAULT_API_KEY", raising=False)

        with pytest.raises(InvalidArgumentException, match="SKYVAULT_API_KEY"):
            CredentialProvider.from_environment_variable()

    def test_overrides_return_copies(self, credential_provider):
        """Test endpoint and TLS overrides leave the original untouched."""
        local = credential_provider.with_endpoints(cache_endpoint="localhost").with_insecure(port=9090)

        assert local.cache_endpoint == "localhost"
        assert local.control_endpoint == credential_provider.control_endpoint
        assert not local.secure and local.port == 9090
        assert credential_provider.secure and credential_provider.cache_endpoint == "cache.skyvault.local"

    def test_token_hidden_from_repr(self, credential_provider):
        """Test the auth token does not leak into repr."""
        assert "test-token" not in repr(credential_provider)


class TestExpiration:
    """Test expiry value objects."""

    def test_expires_in(self):
        """Test lifetimes convert to seconds."""
        assert ExpiresIn.minutes(2).valid_for_seconds() == 120
        assert ExpiresIn.hours(1).valid_for_seconds() == 3600
        assert ExpiresIn.days(1).does_expire()
        assert not ExpiresIn.never().does_expire()
        assert ExpiresIn.never().valid_for_seconds() is None

    def test_expires_at(self):
        """Test zero epoch means never and other values map to UTC datetimes."""
        assert not ExpiresAt.from_epoch(0).does_expire()
        assert ExpiresAt.from_epoch(0).as_datetime() is None

        expires_at = ExpiresAt.from_epoch(1_700_000_000)
        assert expires_at.epoch() == 1_700_000_000
        assert expires_at.as_datetime() == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert expires_at == ExpiresAt.from_epoch(1_700_000_000)


class TestPermissionsToWire:
    """Test scope translation."""

    def test_all_data_read_write(self):
        """Test the all-access scope uses unset selectors."""
        permissions = permissions_to_wire(ALL_DATA_READ_WRITE)

        assert permissions.explicit == [
            wire.CachePermissionEntry(role="CacheReadWrite"),
            wire.TopicPermissionEntry(role="TopicReadWrite"),
        ]

    def test_named_selectors(self):
        """Test named and plain-string selectors carry their names."""
        scope = Permissions(
            [
                CachePermission(CacheRole.READ_ONLY, CacheName("orders")),
                TopicPermission(TopicRole.PUBLISH_ONLY, "orders", TopicName("events")),
            ]
        )

        permissions = permissions_to_wire(scope)

        assert permissions.explicit == [
            wire.CachePermissionEntry(role="CacheReadOnly", cache_name="orders"),
            wire.TopicPermissionEntry(role="TopicWriteOnly", cache_name="orders", topic_name="events"),
        ]

    def test_disposable_key_scopes(self):
        """Test key and key-prefix scopes narrow to items."""
        key = permissions_to_wire(TokenScopes.cache_key_read_only(ALL_CACHES, "order:1"))
        prefix = permissions_to_wire(TokenScopes.cache_key_prefix_read_write("orders", b"order:"))

        assert key.explicit[0].item_key == b"order:1"
        assert key.explicit[0].role == "CacheReadOnly"
        assert prefix.explicit[0].item_key_prefix == b"order:"
        assert prefix.explicit[0].cache_name == "orders"

    def test_super_user(self):
        """Test the internal super user scope."""
        assert permissions_to_wire(InternalSuperUserPermissions()).super_user

    def test_subscribe_only_topic(self):
        """Test the subscribe-only role name."""
        permissions = permissions_to_wire(TokenScopes.topic_subscribe_only(ALL_CACHES, ALL_TOPICS))

        assert permissions.explicit == [wire.TopicPermissionEntry(role="TopicReadOnly")]

    @pytest.mark.parametrize(
        "scope",
        [
            "not a scope",
            Permissions([CachePermission("owner", ALL_CACHES)]),
            Permissions([CachePermission(CacheRole.READ_WRITE, 42)]),
            TokenScopes.cache_key_read_write("orders", ""),
        ],
    )
    def test_invalid_scopes(self, scope):
        """Test unrecognized scopes, roles and selectors are rejected."""
        with pytest.raises(InvalidArgumentException):
            permissions_to_wire(scope)


class TestAuthClient:
    """Test token generation against the local backend."""

    @pytest.mark.asyncio
    async def test_generate_api_key_never_expires(self, auth_client):
        """Test keys without an expiry report ExpiresAt that never expires."""
        response = await auth_client.generate_api_key(ALL_DATA_READ_WRITE)

        assert isinstance(response, GenerateApiKey.Success)
        assert response.api_key
        assert response.refresh_token
        assert not response.expires_at.does_expire()
        assert response.api_key not in repr(response)

    @pytest.mark.asyncio
    async def test_generate_api_key_with_expiry(self, auth_client):
        """Test keys with a lifetime expire in the future."""
        response = await auth_client.generate_api_key(
            TokenScopes.cache_read_write("orders"), ExpiresIn.hours(2)
        )

        assert response.expires_at.does_expire()
        remaining = response.expires_at.as_datetime() - datetime.now(timezone.utc)
        assert timedelta(hours=1, minutes=59) < remaining <= timedelta(hours=2)

    @pytest.mark.asyncio
    async def test_refresh(self, auth_client):
        """Test a refresh token buys a new key exactly once."""
        generated = await auth_client.generate_api_key(ALL_DATA_READ_WRITE)

        refreshed = await auth_client.refresh_api_key(generated.refresh_token, generated.api_key)
        replayed = await auth_client.refresh_api_key(generated.refresh_token, generated.api_key)

        assert isinstance(refreshed, RefreshApiKey.Success)
        assert refreshed.api_key != generated.api_key
        assert isinstance(replayed, RefreshApiKey.Error)
        assert replayed.error_code == ErrorCode.AUTHENTICATION_ERROR

    @pytest.mark.asyncio
    async def test_refresh_empty_token(self, auth_client):
        """Test an empty refresh token is rejected."""
        response = await auth_client.refresh_api_key("")

        assert isinstance(response, RefreshApiKey.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_disposable_token(self, auth_client, backend, credential_provider):
        """Test disposable tokens are issued by the token endpoint."""
        response = await auth_client.generate_disposable_token(
            TokenScopes.cache_key_read_only("orders", "order:1"), ExpiresIn.minutes(30)
        )

        assert isinstance(response, GenerateDisposableToken.Success)
        assert response.auth_token
        assert response.expires_at.does_expire()
        by_endpoint = {t.endpoint: t.request_count for t in backend.transports}
        assert by_endpoint[credential_provider.token_endpoint] == 1
        assert by_endpoint[credential_provider.control_endpoint] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "expires_in",
        [ExpiresIn.never(), ExpiresIn.hours(2), ExpiresIn.seconds(0), timedelta(minutes=5)],
        ids=["never", "too-long", "zero", "not-expires-in"],
    )
    async def test_disposable_token_expiry_limits(self, auth_client, backend, expires_in):
        """Test disposable tokens must expire within an hour."""
        response = await auth_client.generate_disposable_token(ALL_DATA_READ_WRITE, expires_in)

        assert isinstance(response, GenerateDisposableToken.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

    @pytest.mark.asyncio
    async def test_service_failure(self, auth_client, backend):
        """Test a rejected request surfaces as an error response."""
        backend.fail_next(wire.GENERATE_API_TOKEN, grpc.StatusCode.PERMISSION_DENIED)

        response = await auth_client.generate_api_key(ALL_DATA_READ_WRITE)

        assert isinstance(response, GenerateApiKey.Error)
        assert response.error_code == ErrorCode.PERMISSION_ERROR

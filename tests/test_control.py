"""Tests for cache lifecycle and signing key management."""

from datetime import datetime, timezone

import grpc
import pytest

from skyvault.client import wire
from skyvault.client.exceptions import ErrorCode
from skyvault.client.responses.control import (
    CreateCache,
    CreateSigningKey,
    DeleteCache,
    FlushCache,
    ListCaches,
    ListSigningKeys,
    RevokeSigningKey,
)
from skyvault.client.responses.scalar import CacheGet, CacheSet
from tests.helpers import CACHE_NAME


class TestCacheLifecycle:
    """Test creating, listing, flushing and deleting caches."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, cache_client):
        """Test a created cache appears in the listing."""
        response = await cache_client.create_cache("orders")

        assert isinstance(response, CreateCache.Success)
        listing = await cache_client.list_caches()
        assert isinstance(listing, ListCaches.Success)
        assert listing.cache_names == sorted(["orders", CACHE_NAME])

    @pytest.mark.asyncio
    async def test_create_existing(self, cache_client):
        """Test creating an existing cache is reported as already existing, not as an error."""
        response = await cache_client.create_cache(CACHE_NAME)

        assert isinstance(response, CreateCache.CacheAlreadyExists)

    @pytest.mark.asyncio
    async def test_create_blank_name(self, cache_client):
        """Test blank cache names are rejected."""
        response = await cache_client.create_cache("  ")

        assert isinstance(response, CreateCache.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_delete(self, cache_client):
        """Test a deleted cache can no longer be used."""
        await cache_client.create_cache("orders")

        assert isinstance(await cache_client.delete_cache("orders"), DeleteCache.Success)

        response = await cache_client.set("orders", "key", "value")
        assert isinstance(response, CacheSet.Error)
        assert response.error_code == ErrorCode.NOT_FOUND_ERROR

    @pytest.mark.asyncio
    async def test_delete_missing(self, cache_client):
        """Test deleting an unknown cache reports not found."""
        response = await cache_client.delete_cache("no-such-cache")

        assert isinstance(response, DeleteCache.Error)
        assert response.error_code == ErrorCode.NOT_FOUND_ERROR

    @pytest.mark.asyncio
    async def test_flush(self, cache_client):
        """Test flushing removes items but keeps the cache."""
        await cache_client.set(CACHE_NAME, "key", "value")

        assert isinstance(await cache_client.flush_cache(CACHE_NAME), FlushCache.Success)

        assert isinstance(await cache_client.get(CACHE_NAME, "key"), CacheGet.Miss)
        assert CACHE_NAME in (await cache_client.list_caches()).cache_names

    @pytest.mark.asyncio
    async def test_control_requests_use_control_endpoint(self, cache_client, backend, credential_provider):
        """Test control operations go to the control endpoint only."""
        await cache_client.create_cache("orders")

        by_endpoint = {t.endpoint: t.request_count for t in backend.transports}
        assert by_endpoint[credential_provider.control_endpoint] == 1
        assert by_endpoint[credential_provider.cache_endpoint] == 0

    @pytest.mark.asyncio
    async def test_list_caches_error(self, cache_client, backend):
        """Test a failed listing is an error response."""
        backend.fail_next(wire.LIST_CACHES, grpc.StatusCode.UNAUTHENTICATED)

        response = await cache_client.list_caches()

        assert isinstance(response, ListCaches.Error)
        assert response.error_code == ErrorCode.AUTHENTICATION_ERROR


class TestSigningKeys:
    """Test the signing key lifecycle."""

    @pytest.mark.asyncio
    async def test_create_list_revoke(self, cache_client, credential_provider):
        """Test a created key is listed until revoked."""
        created = await cache_client.create_signing_key(30)

        assert isinstance(created, CreateSigningKey.Success)
        assert created.key_id
        assert created.key_id in created.key
        assert created.endpoint == credential_provider.cache_endpoint
        assert created.expires_at > datetime.now(timezone.utc)

        listing = await cache_client.list_signing_keys()
        assert isinstance(listing, ListSigningKeys.Success)
        assert [key.key_id for key in listing.signing_keys] == [created.key_id]
        assert listing.signing_keys[0].expires_at == created.expires_at

        assert isinstance(await cache_client.revoke_signing_key(created.key_id), RevokeSigningKey.Success)
        assert (await cache_client.list_signing_keys()).signing_keys == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ttl_minutes", [-1, "10", 1.5, None])
    async def test_invalid_ttl(self, cache_client, ttl_minutes):
        """Test the TTL must be a non-negative whole number of minutes."""
        response = await cache_client.create_signing_key(ttl_minutes)

        assert isinstance(response, CreateSigningKey.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

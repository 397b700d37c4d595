"""
Control-plane client: cache and store lifecycle and signing keys.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import json
from datetime import datetime, timezone

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client import wire
from skyvault.client.data import DataClient
from skyvault.client.error_mapper import handle_error
from skyvault.client.exceptions import AlreadyExistsException, Service
from skyvault.client.responses.control import (
    CacheInfo,
    CreateCache,
    CreateCacheResponse,
    CreateSigningKey,
    CreateSigningKeyResponse,
    DeleteCache,
    DeleteCacheResponse,
    FlushCache,
    FlushCacheResponse,
    ListCaches,
    ListCachesResponse,
    ListSigningKeys,
    ListSigningKeysResponse,
    RevokeSigningKey,
    RevokeSigningKeyResponse,
    SigningKey,
)
from skyvault.client.responses.storage import (
    CreateStore,
    CreateStoreResponse,
    DeleteStore,
    DeleteStoreResponse,
    ListStores,
    ListStoresResponse,
    StoreInfo,
)
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import validate_cache_name, validate_store_name, validate_ttl_minutes
from skyvault.config.configuration import Configuration


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class ControlClient:
    """Issues control-plane requests over a single channel to the control endpoint."""

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        transport_factory: TransportFactory,
    ):
        self._credential_provider = credential_provider
        self._client = DataClient(
            transport_factory(
                credential_provider,
                credential_provider.control_endpoint,
                configuration.grpc_configuration,
            ),
            configuration,
        )

    async def create_cache(self, cache_name: str) -> CreateCacheResponse:
        try:
            validate_cache_name(cache_name)
            await self._client.invoke(wire.CREATE_CACHE, wire.CacheNameRequest(cache_name))
        except Exception as e:
            error = handle_error(e, Service.CACHE, "create_cache")
            if isinstance(error, AlreadyExistsException):
                return CreateCache.CacheAlreadyExists()
            return CreateCache.Error(error)
        return CreateCache.Success()

    async def delete_cache(self, cache_name: str) -> DeleteCacheResponse:
        try:
            validate_cache_name(cache_name)
            await self._client.invoke(wire.DELETE_CACHE, wire.CacheNameRequest(cache_name))
        except Exception as e:
            return DeleteCache.Error(handle_error(e, Service.CACHE, "delete_cache"))
        return DeleteCache.Success()

    async def list_caches(self, next_token: str = "") -> ListCachesResponse:
        try:
            reply = await self._client.invoke(wire.LIST_CACHES, wire.ListCachesRequest(next_token))
        except Exception as e:
            return ListCaches.Error(handle_error(e, Service.CACHE, "list_caches"))
        return ListCaches.Success(
            caches=[CacheInfo(name) for name in reply.cache_names],
            next_token=reply.next_token,
        )

    async def flush_cache(self, cache_name: str) -> FlushCacheResponse:
        try:
            validate_cache_name(cache_name)
            await self._client.invoke(wire.FLUSH_CACHE, wire.CacheNameRequest(cache_name))
        except Exception as e:
            return FlushCache.Error(handle_error(e, Service.CACHE, "flush_cache"))
        return FlushCache.Success()

    async def create_store(self, store_name: str) -> CreateStoreResponse:
        try:
            validate_store_name(store_name)
            await self._client.invoke(wire.CREATE_STORE, wire.StoreNameRequest(store_name))
        except Exception as e:
            error = handle_error(e, Service.STORAGE, "create_store")
            if isinstance(error, AlreadyExistsException):
                return CreateStore.StoreAlreadyExists()
            return CreateStore.Error(error)
        return CreateStore.Success()

    async def delete_store(self, store_name: str) -> DeleteStoreResponse:
        try:
            validate_store_name(store_name)
            await self._client.invoke(wire.DELETE_STORE, wire.StoreNameRequest(store_name))
        except Exception as e:
            return DeleteStore.Error(handle_error(e, Service.STORAGE, "delete_store"))
        return DeleteStore.Success()

    async def list_stores(self, next_token: str = "") -> ListStoresResponse:
        try:
            reply = await self._client.invoke(wire.LIST_STORES, wire.ListStoresRequest(next_token))
        except Exception as e:
            return ListStores.Error(handle_error(e, Service.STORAGE, "list_stores"))
        return ListStores.Success(
            stores=[StoreInfo(name) for name in reply.store_names],
            next_token=reply.next_token,
        )

    async def create_signing_key(self, ttl_minutes: int) -> CreateSigningKeyResponse:
        try:
            request = wire.CreateSigningKeyRequest(validate_ttl_minutes(ttl_minutes))
            reply = await self._client.invoke(wire.CREATE_SIGNING_KEY, request)
            key_id = json.loads(reply.key)["kid"]
        except Exception as e:
            return CreateSigningKey.Error(handle_error(e, Service.CONTROL, "create_signing_key"))
        return CreateSigningKey.Success(
            key_id=key_id,
            endpoint=self._credential_provider.cache_endpoint,
            key=reply.key,
            expires_at=_from_epoch(reply.expires_at),
        )

    async def revoke_signing_key(self, key_id: str) -> RevokeSigningKeyResponse:
        try:
            await self._client.invoke(wire.REVOKE_SIGNING_KEY, wire.RevokeSigningKeyRequest(key_id))
        except Exception as e:
            return RevokeSigningKey.Error(handle_error(e, Service.CONTROL, "revoke_signing_key"))
        return RevokeSigningKey.Success()

    async def list_signing_keys(self, next_token: str = "") -> ListSigningKeysResponse:
        try:
            reply = await self._client.invoke(
                wire.LIST_SIGNING_KEYS, wire.ListSigningKeysRequest(next_token)
            )
        except Exception as e:
            return ListSigningKeys.Error(handle_error(e, Service.CONTROL, "list_signing_keys"))
        return ListSigningKeys.Success(
            signing_keys=[
                SigningKey(
                    key_id=key.key_id,
                    expires_at=_from_epoch(key.expires_at),
                    endpoint=self._credential_provider.cache_endpoint,
                )
                for key in reply.signing_keys
            ],
            next_token=reply.next_token,
        )

    async def close(self) -> None:
        await self._client.close()

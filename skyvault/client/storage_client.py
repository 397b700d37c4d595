"""
SkyVault storage client.

Stores hold typed values under string keys and never expire them. Data
requests share the cache endpoint's channel pool; store lifecycle goes to
the control endpoint.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from datetime import timedelta

from loguru import logger

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client import wire
from skyvault.client.control import ControlClient
from skyvault.client.error_mapper import convert_error, handle_error
from skyvault.client.exceptions import NotFoundException, SdkException, Service, UnknownException
from skyvault.client.pool import DataClientPool
from skyvault.client.responses.storage import (
    CreateStoreResponse,
    DeleteStoreResponse,
    ListStoresResponse,
    StorageDelete,
    StorageDeleteResponse,
    StorageGet,
    StorageGetResponse,
    StoragePut,
    StoragePutResponse,
    StorageValue,
    StorageValueType,
)
from skyvault.client.transport import default_transport_factory
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import (
    validate_configuration,
    validate_eager_connect_timeout,
    validate_storage_key,
    validate_store_name,
)
from skyvault.config.configuration import Configuration

ITEM_NOT_FOUND = "item_not_found"


def _to_wire(value: StorageValue) -> wire.StoreValue:
    if value.type == StorageValueType.INTEGER:
        return wire.StoreValue(integer_value=value.value)
    if value.type == StorageValueType.DOUBLE:
        return wire.StoreValue(double_value=value.value)
    if value.type == StorageValueType.STRING:
        return wire.StoreValue(string_value=value.value)
    return wire.StoreValue(bytes_value=value.value)


def _from_wire(value: wire.StoreValue) -> StorageValue | None:
    if value.integer_value is not None:
        return StorageValue(StorageValueType.INTEGER, value.integer_value)
    if value.double_value is not None:
        return StorageValue(StorageValueType.DOUBLE, value.double_value)
    if value.string_value is not None:
        return StorageValue(StorageValueType.STRING, value.string_value)
    if value.bytes_value is not None:
        return StorageValue(StorageValueType.BYTES, value.bytes_value)
    return None


def _is_missing_item(error: SdkException) -> bool:
    """A missing key and a missing store share NOT_FOUND; the ``err`` trailer tells them apart."""
    if not isinstance(error, NotFoundException):
        return False
    for key, value in error.transport_details.metadata or ():
        if key == "err" and value == ITEM_NOT_FOUND:
            return True
    return False


class StorageClient:
    """
    Async client for persistent stores.

    Example:
        ```python
        async with await StorageClient.create(credential_provider, configuration) as client:
            await client.create_store("profiles")
            await client.put("profiles", "user:1:visits", 3)
            response = await client.get("profiles", "user:1:visits")
            if isinstance(response, StorageGet.Success):
                print(response.value_int)
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
        self.configuration = configuration
        self._control_client = ControlClient(credential_provider, configuration, transport_factory)
        self._pool = DataClientPool.create(
            credential_provider,
            credential_provider.cache_endpoint,
            configuration,
            transport_factory,
        )
        self._closed = False

    @classmethod
    async def create(
        cls,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        eager_connect_timeout: timedelta | float = 30.0,
        transport_factory: TransportFactory | None = None,
    ) -> "StorageClient":
        """Build a client and wait up to ``eager_connect_timeout`` for its channels."""
        timeout = validate_eager_connect_timeout(eager_connect_timeout)
        client = cls(credential_provider, configuration, transport_factory)
        await client._pool.connect(timeout)
        return client

    async def __aenter__(self) -> "StorageClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._control_client.close()
        await self._pool.close()
        for middleware in self.configuration.middlewares:
            await middleware.close()
        logger.debug("Storage client closed")

    # Control plane

    async def create_store(self, store_name: str) -> CreateStoreResponse:
        """Create a store; an existing store yields ``CreateStore.StoreAlreadyExists``."""
        return await self._control_client.create_store(store_name)

    async def delete_store(self, store_name: str) -> DeleteStoreResponse:
        return await self._control_client.delete_store(store_name)

    async def list_stores(self, next_token: str = "") -> ListStoresResponse:
        return await self._control_client.list_stores(next_token)

    # Data

    async def get(self, store_name: str, key: str) -> StorageGetResponse:
        """
        Look up a key.

        Returns:
            ``StorageGet.Success`` with the typed value, ``StorageGet.NotFound``
            when the store has no such key, or ``StorageGet.Error``
        """
        try:
            validate_store_name(store_name)
            request = wire.StoreKeyRequest(key=validate_storage_key(key))
            reply = await self._pool.invoke(wire.STORE_GET, request, cache_name=store_name)
        except Exception as e:
            if _is_missing_item(convert_error(e, Service.STORAGE)):
                return StorageGet.NotFound()
            return StorageGet.Error(handle_error(e, Service.STORAGE, "storage_get"))

        value = _from_wire(reply.value)
        if value is None:
            return StorageGet.Error(UnknownException("Stored value has no type", Service.STORAGE))
        return StorageGet.Success(value)

    async def put(
        self, store_name: str, key: str, value: StorageValue | int | float | str | bytes
    ) -> StoragePutResponse:
        """Store ``value``, inferring its type unless it is already a ``StorageValue``."""
        try:
            validate_store_name(store_name)
            request = wire.StorePutRequest(
                key=validate_storage_key(key),
                value=_to_wire(StorageValue.of(value)),
            )
            await self._pool.invoke(wire.STORE_PUT, request, cache_name=store_name)
        except Exception as e:
            return StoragePut.Error(handle_error(e, Service.STORAGE, "storage_put"))
        return StoragePut.Success()

    async def put_int(self, store_name: str, key: str, value: int) -> StoragePutResponse:
        try:
            typed = StorageValue.of_int(value)
        except Exception as e:
            return StoragePut.Error(handle_error(e, Service.STORAGE, "storage_put"))
        return await self.put(store_name, key, typed)

    async def put_double(self, store_name: str, key: str, value: float) -> StoragePutResponse:
        try:
            typed = StorageValue.of_double(value)
        except Exception as e:
            return StoragePut.Error(handle_error(e, Service.STORAGE, "storage_put"))
        return await self.put(store_name, key, typed)

    async def put_string(self, store_name: str, key: str, value: str) -> StoragePutResponse:
        try:
            typed = StorageValue.of_string(value)
        except Exception as e:
            return StoragePut.Error(handle_error(e, Service.STORAGE, "storage_put"))
        return await self.put(store_name, key, typed)

    async def put_bytes(self, store_name: str, key: str, value: bytes) -> StoragePutResponse:
        try:
            typed = StorageValue.of_bytes(value)
        except Exception as e:
            return StoragePut.Error(handle_error(e, Service.STORAGE, "storage_put"))
        return await self.put(store_name, key, typed)

    async def delete(self, store_name: str, key: str) -> StorageDeleteResponse:
        """Delete a key; deleting a missing key succeeds."""
        try:
            validate_store_name(store_name)
            request = wire.StoreKeyRequest(key=validate_storage_key(key))
            await self._pool.invoke(wire.STORE_DELETE, request, cache_name=store_name)
        except Exception as e:
            return StorageDelete.Error(handle_error(e, Service.STORAGE, "storage_delete"))
        return StorageDelete.Success()

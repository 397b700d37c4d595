"""
SkyVault cache client.

Async client for cache lifecycle, scalar items and collections. Every
operation returns a typed response variant; nothing here raises once the
client is constructed.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from datetime import timedelta
from typing import Iterable, Mapping

from loguru import logger

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client import wire
from skyvault.client.control import ControlClient
from skyvault.client.error_mapper import handle_error
from skyvault.client.exceptions import InvalidArgumentException, Service, UnknownException
from skyvault.client.pool import DataClientPool
from skyvault.client.responses.collections import (
    DictionaryFetch,
    DictionaryFetchResponse,
    DictionaryGetField,
    DictionaryGetFieldResponse,
    DictionaryGetFields,
    DictionaryGetFieldsResponse,
    DictionaryRemoveFields,
    DictionaryRemoveFieldsResponse,
    DictionarySetFields,
    DictionarySetFieldsResponse,
    ListConcatenateBack,
    ListConcatenateBackResponse,
    ListConcatenateFront,
    ListConcatenateFrontResponse,
    ListFetch,
    ListFetchResponse,
    ListLength,
    ListLengthResponse,
    ListPopBack,
    ListPopBackResponse,
    ListPopFront,
    ListPopFrontResponse,
    SetAddElements,
    SetAddElementsResponse,
    SetFetch,
    SetFetchResponse,
    SetRemoveElements,
    SetRemoveElementsResponse,
)
from skyvault.client.responses.control import (
    CreateCacheResponse,
    CreateSigningKeyResponse,
    DeleteCacheResponse,
    FlushCacheResponse,
    ListCachesResponse,
    ListSigningKeysResponse,
    RevokeSigningKeyResponse,
)
from skyvault.client.responses.scalar import (
    CacheDelete,
    CacheDeleteResponse,
    CacheGet,
    CacheGetResponse,
    CacheIncrement,
    CacheIncrementResponse,
    CacheSet,
    CacheSetIfNotExists,
    CacheSetIfNotExistsResponse,
    CacheSetResponse,
)
from skyvault.client.transport import default_transport_factory
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import (
    CollectionTtl,
    as_bytes,
    validate_cache_name,
    validate_collection_name,
    validate_configuration,
    validate_eager_connect_timeout,
    validate_items,
    validate_key,
    validate_truncate_size,
    validate_ttl,
    validate_values,
)
from skyvault.config.configuration import Configuration
from skyvault.config.profiles import configuration_for_profile
from skyvault.config.settings import SkyVaultSettings, get_settings

TtlArg = timedelta | None
Bytesy = str | bytes


class CacheClient:
    """
    Async client for SkyVault caches.

    Example:
        ```python
        async with await CacheClient.create(
            CredentialProvider.from_environment_variable(),
            laptop_configuration(),
            timedelta(seconds=60),
        ) as client:
            await client.create_cache("orders")
            await client.set("orders", "order:1", "pending")
            response = await client.get("orders", "order:1")
            if isinstance(response, CacheGet.Hit):
                print(response.value_string)
        ```
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        default_ttl: timedelta,
        transport_factory: TransportFactory | None = None,
    ):
        """
        Build the client without waiting for connections.

        Prefer ``CacheClient.create``, which can also eagerly connect.

        Raises:
            InvalidArgumentException: If the configuration or default TTL is invalid
        """
        validate_configuration(configuration)
        if not isinstance(default_ttl, timedelta) or default_ttl <= timedelta(0):
            raise InvalidArgumentException("default_ttl must be a positive timedelta")

        transport_factory = transport_factory or default_transport_factory
        self.configuration = configuration
        self.default_ttl = default_ttl
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
        default_ttl: timedelta,
        eager_connect_timeout: timedelta | float = 30.0,
        transport_factory: TransportFactory | None = None,
    ) -> "CacheClient":
        """
        Build a client and wait up to ``eager_connect_timeout`` for its channels.

        A timeout of 0 skips the wait. Running out of time only logs a warning;
        the client is returned either way.
        """
        timeout = validate_eager_connect_timeout(eager_connect_timeout)
        client = cls(credential_provider, configuration, default_ttl, transport_factory)
        await client._pool.connect(timeout)
        return client

    @classmethod
    async def from_settings(
        cls,
        settings: SkyVaultSettings | None = None,
        transport_factory: TransportFactory | None = None,
    ) -> "CacheClient":
        """Build a client from ``SKYVAULT_*`` environment settings."""
        settings = settings or get_settings()
        if settings.api_key is None:
            raise InvalidArgumentException("SKYVAULT_API_KEY is not set")

        credential_provider = CredentialProvider.from_string(
            settings.api_key.get_secret_value(), endpoint=settings.endpoint
        )
        return await cls.create(
            credential_provider,
            configuration_for_profile(settings.profile),
            timedelta(seconds=settings.default_ttl_seconds),
            settings.eager_connect_timeout_seconds,
            transport_factory,
        )

    async def __aenter__(self) -> "CacheClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close all channels and middlewares."""
        if self._closed:
            return
        self._closed = True
        await self._control_client.close()
        await self._pool.close()
        for middleware in self.configuration.middlewares:
            await middleware.close()
        logger.debug("Cache client closed")

    def _ttl_milliseconds(self, ttl: TtlArg) -> int:
        return validate_ttl(self.default_ttl if ttl is None else ttl)

    def _collection_ttl(self, ttl: CollectionTtl | None) -> tuple[int, bool]:
        ttl = ttl or CollectionTtl.from_cache_ttl()
        return self._ttl_milliseconds(ttl.ttl), ttl.refresh_ttl

    # Control plane

    async def create_cache(self, cache_name: str) -> CreateCacheResponse:
        """Create a cache; an existing cache yields ``CreateCache.CacheAlreadyExists``."""
        return await self._control_client.create_cache(cache_name)

    async def delete_cache(self, cache_name: str) -> DeleteCacheResponse:
        return await self._control_client.delete_cache(cache_name)

    async def list_caches(self, next_token: str = "") -> ListCachesResponse:
        return await self._control_client.list_caches(next_token)

    async def flush_cache(self, cache_name: str) -> FlushCacheResponse:
        """Remove every item from a cache, keeping the cache itself."""
        return await self._control_client.flush_cache(cache_name)

    async def create_signing_key(self, ttl_minutes: int) -> CreateSigningKeyResponse:
        return await self._control_client.create_signing_key(ttl_minutes)

    async def revoke_signing_key(self, key_id: str) -> RevokeSigningKeyResponse:
        return await self._control_client.revoke_signing_key(key_id)

    async def list_signing_keys(self, next_token: str = "") -> ListSigningKeysResponse:
        return await self._control_client.list_signing_keys(next_token)

    # Scalar

    async def get(self, cache_name: str, key: Bytesy) -> CacheGetResponse:
        """
        Look up a key.

        Returns:
            ``CacheGet.Hit`` with the value, ``CacheGet.Miss``, or ``CacheGet.Error``
        """
        try:
            validate_cache_name(cache_name)
            request = wire.GetRequest(key=validate_key(key))
            reply = await self._pool.invoke(wire.GET, request, cache_name=cache_name)
        except Exception as e:
            return CacheGet.Error(handle_error(e, Service.CACHE, "get"))

        if reply.result == wire.ECacheResult.HIT:
            return CacheGet.Hit(reply.value)
        if reply.result == wire.ECacheResult.MISS:
            return CacheGet.Miss()
        return CacheGet.Error(
            UnknownException(f"Unexpected get result: {reply.result!r} {reply.message}", Service.CACHE)
        )

    async def set(self, cache_name: str, key: Bytesy, value: Bytesy, ttl: TtlArg = None) -> CacheSetResponse:
        """
        Store a value.

        Args:
            cache_name: Cache to write to
            key: Item key
            value: Item value
            ttl: Time to live; the client's default TTL when None
        """
        try:
            validate_cache_name(cache_name)
            request = wire.SetRequest(
                key=validate_key(key),
                value=as_bytes(value, "Value"),
                ttl_milliseconds=self._ttl_milliseconds(ttl),
            )
            await self._pool.invoke(wire.SET, request, cache_name=cache_name)
        except Exception as e:
            return CacheSet.Error(handle_error(e, Service.CACHE, "set"))
        return CacheSet.Success()

    async def delete(self, cache_name: str, key: Bytesy) -> CacheDeleteResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.DeleteRequest(key=validate_key(key))
            await self._pool.invoke(wire.DELETE, request, cache_name=cache_name)
        except Exception as e:
            return CacheDelete.Error(handle_error(e, Service.CACHE, "delete"))
        return CacheDelete.Success()

    async def increment(
        self, cache_name: str, key: Bytesy, amount: int = 1, ttl: TtlArg = None
    ) -> CacheIncrementResponse:
        """Add ``amount`` to an integer value, creating it at 0 first if missing."""
        try:
            validate_cache_name(cache_name)
            if not isinstance(amount, int):
                raise InvalidArgumentException("Amount must be an integer")
            request = wire.IncrementRequest(
                key=validate_key(key),
                amount=amount,
                ttl_milliseconds=self._ttl_milliseconds(ttl),
            )
            reply = await self._pool.invoke(wire.INCREMENT, request, cache_name=cache_name)
        except Exception as e:
            return CacheIncrement.Error(handle_error(e, Service.CACHE, "increment"))
        return CacheIncrement.Success(reply.value)

    async def set_if_not_exists(
        self, cache_name: str, key: Bytesy, value: Bytesy, ttl: TtlArg = None
    ) -> CacheSetIfNotExistsResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.SetIfNotExistsRequest(
                key=validate_key(key),
                value=as_bytes(value, "Value"),
                ttl_milliseconds=self._ttl_milliseconds(ttl),
            )
            reply = await self._pool.invoke(wire.SET_IF_NOT_EXISTS, request, cache_name=cache_name)
        except Exception as e:
            return CacheSetIfNotExists.Error(handle_error(e, Service.CACHE, "set_if_not_exists"))

        if reply.stored:
            return CacheSetIfNotExists.Stored()
        return CacheSetIfNotExists.NotStored()

    # Dictionary

    async def dictionary_set_fields(
        self,
        cache_name: str,
        dictionary_name: str,
        items: Mapping[Bytesy, Bytesy],
        ttl: CollectionTtl | None = None,
    ) -> DictionarySetFieldsResponse:
        try:
            validate_cache_name(cache_name)
            ttl_milliseconds, refresh_ttl = self._collection_ttl(ttl)
            request = wire.DictionarySetRequest(
                dictionary_name=validate_collection_name(dictionary_name, "Dictionary"),
                items=validate_items(items),
                ttl_milliseconds=ttl_milliseconds,
                refresh_ttl=refresh_ttl,
            )
            await self._pool.invoke(wire.DICTIONARY_SET, request, cache_name=cache_name)
        except Exception as e:
            return DictionarySetFields.Error(handle_error(e, Service.CACHE, "dictionary_set_fields"))
        return DictionarySetFields.Success()

    async def dictionary_get_field(
        self, cache_name: str, dictionary_name: str, field: Bytesy
    ) -> DictionaryGetFieldResponse:
        try:
            field_bytes = validate_key(field, "Field")
        except InvalidArgumentException as e:
            return DictionaryGetField.Error(handle_error(e, Service.CACHE, "dictionary_get_field"))

        response = await self.dictionary_get_fields(cache_name, dictionary_name, [field_bytes])
        if isinstance(response, DictionaryGetFields.Hit):
            return response.responses[0]
        if isinstance(response, DictionaryGetFields.Miss):
            return DictionaryGetField.Miss()
        return DictionaryGetField.Error(response.inner_exception)

    async def dictionary_get_fields(
        self, cache_name: str, dictionary_name: str, fields: Iterable[Bytesy]
    ) -> DictionaryGetFieldsResponse:
        """
        Look up several fields at once.

        Returns:
            ``DictionaryGetFields.Hit`` with one response per requested field,
            in order, or ``Miss`` when the dictionary does not exist
        """
        try:
            validate_cache_name(cache_name)
            field_list = [validate_key(name, "Field") for name in validate_values(fields, "Field")]
            if not field_list:
                raise InvalidArgumentException("Fields must not be empty")
            request = wire.DictionaryGetRequest(
                dictionary_name=validate_collection_name(dictionary_name, "Dictionary"),
                fields=field_list,
            )
            reply = await self._pool.invoke(wire.DICTIONARY_GET, request, cache_name=cache_name)
        except Exception as e:
            return DictionaryGetFields.Error(handle_error(e, Service.CACHE, "dictionary_get_fields"))

        if not reply.found:
            return DictionaryGetFields.Miss()

        responses: list[DictionaryGetFieldResponse] = []
        for field_bytes, item in zip(field_list, reply.items):
            if item.result == wire.ECacheResult.HIT:
                responses.append(DictionaryGetField.Hit(field_bytes, item.value))
            elif item.result == wire.ECacheResult.MISS:
                responses.append(DictionaryGetField.Miss())
            else:
                responses.append(
                    DictionaryGetField.Error(
                        UnknownException(f"Unexpected field result: {item.result!r}", Service.CACHE)
                    )
                )
        return DictionaryGetFields.Hit(responses)

    async def dictionary_fetch(self, cache_name: str, dictionary_name: str) -> DictionaryFetchResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.DictionaryFetchRequest(
                dictionary_name=validate_collection_name(dictionary_name, "Dictionary")
            )
            reply = await self._pool.invoke(wire.DICTIONARY_FETCH, request, cache_name=cache_name)
        except Exception as e:
            return DictionaryFetch.Error(handle_error(e, Service.CACHE, "dictionary_fetch"))

        if not reply.found:
            return DictionaryFetch.Miss()
        return DictionaryFetch.Hit(dict(reply.items))

    async def dictionary_remove_fields(
        self, cache_name: str, dictionary_name: str, fields: Iterable[Bytesy]
    ) -> DictionaryRemoveFieldsResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.DictionaryDeleteRequest(
                dictionary_name=validate_collection_name(dictionary_name, "Dictionary"),
                fields=[validate_key(name, "Field") for name in validate_values(fields, "Field")],
            )
            await self._pool.invoke(wire.DICTIONARY_DELETE, request, cache_name=cache_name)
        except Exception as e:
            return DictionaryRemoveFields.Error(handle_error(e, Service.CACHE, "dictionary_remove_fields"))
        return DictionaryRemoveFields.Success()

    # Set

    async def set_add_elements(
        self,
        cache_name: str,
        set_name: str,
        elements: Iterable[Bytesy],
        ttl: CollectionTtl | None = None,
    ) -> SetAddElementsResponse:
        try:
            validate_cache_name(cache_name)
            ttl_milliseconds, refresh_ttl = self._collection_ttl(ttl)
            request = wire.SetUnionRequest(
                set_name=validate_collection_name(set_name, "Set"),
                elements=validate_values(elements, "Element"),
                ttl_milliseconds=ttl_milliseconds,
                refresh_ttl=refresh_ttl,
            )
            await self._pool.invoke(wire.SET_UNION, request, cache_name=cache_name)
        except Exception as e:
            return SetAddElements.Error(handle_error(e, Service.CACHE, "set_add_elements"))
        return SetAddElements.Success()

    async def set_fetch(self, cache_name: str, set_name: str) -> SetFetchResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.SetFetchRequest(set_name=validate_collection_name(set_name, "Set"))
            reply = await self._pool.invoke(wire.SET_FETCH, request, cache_name=cache_name)
        except Exception as e:
            return SetFetch.Error(handle_error(e, Service.CACHE, "set_fetch"))

        if not reply.found:
            return SetFetch.Miss()
        return SetFetch.Hit(set(reply.elements))

    async def set_remove_elements(
        self, cache_name: str, set_name: str, elements: Iterable[Bytesy]
    ) -> SetRemoveElementsResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.SetDifferenceRequest(
                set_name=validate_collection_name(set_name, "Set"),
                elements=validate_values(elements, "Element"),
            )
            await self._pool.invoke(wire.SET_DIFFERENCE, request, cache_name=cache_name)
        except Exception as e:
            return SetRemoveElements.Error(handle_error(e, Service.CACHE, "set_remove_elements"))
        return SetRemoveElements.Success()

    # List

    def _list_concatenate_request(
        self,
        list_name: str,
        values: Iterable[Bytesy],
        ttl: CollectionTtl | None,
        truncate_to_size: int | None,
    ) -> wire.ListConcatenateRequest:
        ttl_milliseconds, refresh_ttl = self._collection_ttl(ttl)
        return wire.ListConcatenateRequest(
            list_name=validate_collection_name(list_name, "List"),
            values=validate_values(values, "Value"),
            ttl_milliseconds=ttl_milliseconds,
            refresh_ttl=refresh_ttl,
            truncate_to_size=validate_truncate_size(truncate_to_size),
        )

    async def list_concatenate_back(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytesy],
        ttl: CollectionTtl | None = None,
        truncate_front_to_size: int | None = None,
    ) -> ListConcatenateBackResponse:
        """Append values; with ``truncate_front_to_size`` the oldest values are dropped to fit."""
        try:
            validate_cache_name(cache_name)
            request = self._list_concatenate_request(list_name, values, ttl, truncate_front_to_size)
            reply = await self._pool.invoke(wire.LIST_CONCATENATE_BACK, request, cache_name=cache_name)
        except Exception as e:
            return ListConcatenateBack.Error(handle_error(e, Service.CACHE, "list_concatenate_back"))
        return ListConcatenateBack.Success(reply.length)

    async def list_concatenate_front(
        self,
        cache_name: str,
        list_name: str,
        values: Iterable[Bytesy],
        ttl: CollectionTtl | None = None,
        truncate_back_to_size: int | None = None,
    ) -> ListConcatenateFrontResponse:
        """Prepend values; with ``truncate_back_to_size`` values at the back are dropped to fit."""
        try:
            validate_cache_name(cache_name)
            request = self._list_concatenate_request(list_name, values, ttl, truncate_back_to_size)
            reply = await self._pool.invoke(wire.LIST_CONCATENATE_FRONT, request, cache_name=cache_name)
        except Exception as e:
            return ListConcatenateFront.Error(handle_error(e, Service.CACHE, "list_concatenate_front"))
        return ListConcatenateFront.Success(reply.length)

    async def list_fetch(self, cache_name: str, list_name: str) -> ListFetchResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.ListNameRequest(validate_collection_name(list_name, "List"))
            reply = await self._pool.invoke(wire.LIST_FETCH, request, cache_name=cache_name)
        except Exception as e:
            return ListFetch.Error(handle_error(e, Service.CACHE, "list_fetch"))

        if not reply.found:
            return ListFetch.Miss()
        return ListFetch.Hit(list(reply.values))

    async def list_pop_front(self, cache_name: str, list_name: str) -> ListPopFrontResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.ListNameRequest(validate_collection_name(list_name, "List"))
            reply = await self._pool.invoke(wire.LIST_POP_FRONT, request, cache_name=cache_name)
        except Exception as e:
            return ListPopFront.Error(handle_error(e, Service.CACHE, "list_pop_front"))

        if not reply.found:
            return ListPopFront.Miss()
        return ListPopFront.Hit(reply.value)

    async def list_pop_back(self, cache_name: str, list_name: str) -> ListPopBackResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.ListNameRequest(validate_collection_name(list_name, "List"))
            reply = await self._pool.invoke(wire.LIST_POP_BACK, request, cache_name=cache_name)
        except Exception as e:
            return ListPopBack.Error(handle_error(e, Service.CACHE, "list_pop_back"))

        if not reply.found:
            return ListPopBack.Miss()
        return ListPopBack.Hit(reply.value)

    async def list_length(self, cache_name: str, list_name: str) -> ListLengthResponse:
        try:
            validate_cache_name(cache_name)
            request = wire.ListNameRequest(validate_collection_name(list_name, "List"))
            reply = await self._pool.invoke(wire.LIST_LENGTH, request, cache_name=cache_name)
        except Exception as e:
            return ListLength.Error(handle_error(e, Service.CACHE, "list_length"))

        if not reply.found:
            return ListLength.Miss()
        return ListLength.Hit(reply.length)

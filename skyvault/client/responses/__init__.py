"""
Typed response variants for every SkyVault operation.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.client.responses.auth import (
    GenerateApiKey,
    GenerateApiKeyResponse,
    GenerateDisposableToken,
    GenerateDisposableTokenResponse,
    RefreshApiKey,
    RefreshApiKeyResponse,
)
from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase
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
from skyvault.client.responses.leaderboard import (
    LeaderboardDelete,
    LeaderboardDeleteResponse,
    LeaderboardFetch,
    LeaderboardFetchResponse,
    LeaderboardLength,
    LeaderboardLengthResponse,
    LeaderboardRemoveElements,
    LeaderboardRemoveElementsResponse,
    LeaderboardUpsert,
    LeaderboardUpsertResponse,
    RankedElement,
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
from skyvault.client.responses.storage import (
    CreateStore,
    CreateStoreResponse,
    DeleteStore,
    DeleteStoreResponse,
    ListStores,
    ListStoresResponse,
    StorageDelete,
    StorageDeleteResponse,
    StorageGet,
    StorageGetResponse,
    StoragePut,
    StoragePutResponse,
    StorageValue,
    StorageValueType,
    StoreInfo,
)
from skyvault.client.responses.topic import (
    TopicPublish,
    TopicPublishResponse,
    TopicSubscribe,
    TopicSubscribeResponse,
    TopicSubscriptionItem,
    TopicSubscriptionItemResponse,
)

__all__ = [
    "ResponseBase",
    "ErrorResponseMixin",
    # Scalar
    "CacheGet",
    "CacheGetResponse",
    "CacheSet",
    "CacheSetResponse",
    "CacheDelete",
    "CacheDeleteResponse",
    "CacheIncrement",
    "CacheIncrementResponse",
    "CacheSetIfNotExists",
    "CacheSetIfNotExistsResponse",
    # Control
    "CacheInfo",
    "CreateCache",
    "CreateCacheResponse",
    "DeleteCache",
    "DeleteCacheResponse",
    "ListCaches",
    "ListCachesResponse",
    "FlushCache",
    "FlushCacheResponse",
    "SigningKey",
    "CreateSigningKey",
    "CreateSigningKeyResponse",
    "RevokeSigningKey",
    "RevokeSigningKeyResponse",
    "ListSigningKeys",
    "ListSigningKeysResponse",
    # Collections
    "DictionarySetFields",
    "DictionarySetFieldsResponse",
    "DictionaryGetField",
    "DictionaryGetFieldResponse",
    "DictionaryGetFields",
    "DictionaryGetFieldsResponse",
    "DictionaryFetch",
    "DictionaryFetchResponse",
    "DictionaryRemoveFields",
    "DictionaryRemoveFieldsResponse",
    "SetAddElements",
    "SetAddElementsResponse",
    "SetFetch",
    "SetFetchResponse",
    "SetRemoveElements",
    "SetRemoveElementsResponse",
    "ListConcatenateBack",
    "ListConcatenateBackResponse",
    "ListConcatenateFront",
    "ListConcatenateFrontResponse",
    "ListFetch",
    "ListFetchResponse",
    "ListPopFront",
    "ListPopFrontResponse",
    "ListPopBack",
    "ListPopBackResponse",
    "ListLength",
    "ListLengthResponse",
    # Topics
    "TopicPublish",
    "TopicPublishResponse",
    "TopicSubscribe",
    "TopicSubscribeResponse",
    "TopicSubscriptionItem",
    "TopicSubscriptionItemResponse",
    # Leaderboards
    "RankedElement",
    "LeaderboardUpsert",
    "LeaderboardUpsertResponse",
    "LeaderboardFetch",
    "LeaderboardFetchResponse",
    "LeaderboardLength",
    "LeaderboardLengthResponse",
    "LeaderboardRemoveElements",
    "LeaderboardRemoveElementsResponse",
    "LeaderboardDelete",
    "LeaderboardDeleteResponse",
    # Storage
    "StorageValue",
    "StorageValueType",
    "StorageGet",
    "StorageGetResponse",
    "StoragePut",
    "StoragePutResponse",
    "StorageDelete",
    "StorageDeleteResponse",
    "StoreInfo",
    "CreateStore",
    "CreateStoreResponse",
    "DeleteStore",
    "DeleteStoreResponse",
    "ListStores",
    "ListStoresResponse",
    # Auth
    "GenerateApiKey",
    "GenerateApiKeyResponse",
    "RefreshApiKey",
    "RefreshApiKeyResponse",
    "GenerateDisposableToken",
    "GenerateDisposableTokenResponse",
]

"""
SkyVault: async Python SDK for the SkyVault cache, topics, leaderboard and storage service.

Author: Yobie Benjamin
Date: 2026-10-19

Example Usage:
    ```python
    from datetime import timedelta

    from skyvault import CacheClient, CacheGet, CredentialProvider, laptop_configuration

    async with await CacheClient.create(
        CredentialProvider.from_environment_variable("SKYVAULT_API_KEY"),
        laptop_configuration(),
        default_ttl=timedelta(seconds=60),
    ) as client:
        await client.set("cache", "greeting", "hello")
        response = await client.get("cache", "greeting")
        if isinstance(response, CacheGet.Hit):
            print(response.value_string)
    ```
"""

__version__ = "0.1.0"
__author__ = "Yobie Benjamin"
__license__ = "Apache-2.0"

from loguru import logger

from skyvault.auth import (
    ALL_CACHES,
    ALL_DATA_READ_WRITE,
    ALL_ITEMS,
    ALL_TOPICS,
    CacheItemKey,
    CacheItemKeyPrefix,
    CacheName,
    CachePermission,
    CacheRole,
    CredentialProvider,
    DisposableTokenCachePermission,
    DisposableTokenScope,
    ExpiresAt,
    ExpiresIn,
    Permissions,
    TokenScopes,
    TopicName,
    TopicPermission,
    TopicRole,
)
from skyvault.client.auth_client import AuthClient
from skyvault.client.cache_client import CacheClient
from skyvault.client.exceptions import ErrorCode, SdkException
from skyvault.client.leaderboard_client import Leaderboard, LeaderboardClient
from skyvault.client.storage_client import StorageClient
from skyvault.client.responses import *  # noqa: F401,F403
from skyvault.client.responses import __all__ as _responses_all
from skyvault.client.topic_client import TopicClient
from skyvault.client.transport import LocalBackend, LocalTransport
from skyvault.client.validators import CollectionTtl
from skyvault.client.wire import Order
from skyvault.config import (
    Configuration,
    GrpcConfiguration,
    LoggingMiddleware,
    MetricsMiddleware,
    Middleware,
    Profile,
    SkyVaultSettings,
    TransportStrategy,
    configuration_for_profile,
    in_region_configuration,
    lambda_configuration,
    laptop_configuration,
    low_latency_configuration,
)

# Library logs stay silent until the application calls logger.enable("skyvault").
logger.disable("skyvault")

__all__ = [
    # Clients
    "CacheClient",
    "TopicClient",
    "LeaderboardClient",
    "Leaderboard",
    "AuthClient",
    "StorageClient",
    "LocalBackend",
    "LocalTransport",
    # Credentials and scopes
    "CredentialProvider",
    "ExpiresIn",
    "ExpiresAt",
    "CacheRole",
    "TopicRole",
    "CacheName",
    "TopicName",
    "CacheItemKey",
    "CacheItemKeyPrefix",
    "CachePermission",
    "TopicPermission",
    "DisposableTokenCachePermission",
    "Permissions",
    "DisposableTokenScope",
    "TokenScopes",
    "ALL_CACHES",
    "ALL_TOPICS",
    "ALL_ITEMS",
    "ALL_DATA_READ_WRITE",
    # Configuration
    "Configuration",
    "GrpcConfiguration",
    "TransportStrategy",
    "Middleware",
    "LoggingMiddleware",
    "MetricsMiddleware",
    "Profile",
    "SkyVaultSettings",
    "configuration_for_profile",
    "laptop_configuration",
    "in_region_configuration",
    "low_latency_configuration",
    "lambda_configuration",
    # Misc
    "CollectionTtl",
    "Order",
    "ErrorCode",
    "SdkException",
    *_responses_all,
]

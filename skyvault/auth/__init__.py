"""
Credentials, token scopes and expiry for SkyVault.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.auth.expiration import ExpiresAt, ExpiresIn
from skyvault.auth.scope import (
    ALL_CACHES,
    ALL_DATA_READ_WRITE,
    ALL_ITEMS,
    ALL_TOPICS,
    CacheItemKey,
    CacheItemKeyPrefix,
    CacheName,
    CachePermission,
    CacheRole,
    DisposableTokenCachePermission,
    DisposableTokenScope,
    Permissions,
    TokenScope,
    TokenScopes,
    TopicName,
    TopicPermission,
    TopicRole,
    permissions_to_wire,
)

__all__ = [
    "CredentialProvider",
    "ExpiresAt",
    "ExpiresIn",
    "ALL_CACHES",
    "ALL_TOPICS",
    "ALL_ITEMS",
    "ALL_DATA_READ_WRITE",
    "CacheName",
    "TopicName",
    "CacheItemKey",
    "CacheItemKeyPrefix",
    "CachePermission",
    "TopicPermission",
    "DisposableTokenCachePermission",
    "CacheRole",
    "TopicRole",
    "Permissions",
    "DisposableTokenScope",
    "TokenScope",
    "TokenScopes",
    "permissions_to_wire",
]

"""
Token scopes and their translation to the wire permission structure.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from skyvault.client.exceptions import InvalidArgumentException
from skyvault.client.wire import CachePermissionEntry, TopicPermissionEntry, WirePermissions


class CacheRole(str, Enum):
    READ_WRITE = "read_write"
    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"


class TopicRole(str, Enum):
    PUBLISH_SUBSCRIBE = "publish_subscribe"
    SUBSCRIBE_ONLY = "subscribe_only"
    PUBLISH_ONLY = "publish_only"


CACHE_ROLE_WIRE_NAMES = {
    CacheRole.READ_WRITE: "CacheReadWrite",
    CacheRole.READ_ONLY: "CacheReadOnly",
    CacheRole.WRITE_ONLY: "CacheWriteOnly",
}

TOPIC_ROLE_WIRE_NAMES = {
    TopicRole.PUBLISH_SUBSCRIBE: "TopicReadWrite",
    TopicRole.SUBSCRIBE_ONLY: "TopicReadOnly",
    TopicRole.PUBLISH_ONLY: "TopicWriteOnly",
}


@dataclass(frozen=True)
class AllCaches:
    pass


@dataclass(frozen=True)
class AllTopics:
    pass


@dataclass(frozen=True)
class AllItems:
    pass


ALL_CACHES = AllCaches()
ALL_TOPICS = AllTopics()
ALL_ITEMS = AllItems()


@dataclass(frozen=True)
class CacheName:
    name: str


@dataclass(frozen=True)
class TopicName:
    name: str


@dataclass(frozen=True)
class CacheItemKey:
    key: str | bytes


@dataclass(frozen=True)
class CacheItemKeyPrefix:
    key_prefix: str | bytes


CacheSelector = Union[AllCaches, CacheName, str]
TopicSelector = Union[AllTopics, TopicName, str]
CacheItemSelector = Union[AllItems, CacheItemKey, CacheItemKeyPrefix]


@dataclass(frozen=True)
class CachePermission:
    role: CacheRole
    cache: CacheSelector


@dataclass(frozen=True)
class TopicPermission:
    role: TopicRole
    cache: CacheSelector
    topic: TopicSelector


@dataclass(frozen=True)
class DisposableTokenCachePermission:
    """Cache permission narrowed to a single key or key prefix."""

    role: CacheRole
    cache: CacheSelector
    item: CacheItemSelector


Permission = Union[CachePermission, TopicPermission]


@dataclass(frozen=True)
class Permissions:
    permissions: list[Permission] = field(default_factory=list)


@dataclass(frozen=True)
class DisposableTokenScope:
    permissions: list[Permission | DisposableTokenCachePermission] = field(default_factory=list)


@dataclass(frozen=True)
class InternalSuperUserPermissions:
    pass


TokenScope = Union[Permissions, DisposableTokenScope, InternalSuperUserPermissions]

ALL_DATA_READ_WRITE = Permissions(
    permissions=[
        CachePermission(CacheRole.READ_WRITE, ALL_CACHES),
        TopicPermission(TopicRole.PUBLISH_SUBSCRIBE, ALL_CACHES, ALL_TOPICS),
    ]
)


class TokenScopes:
    """Factories for commonly used scopes."""

    @staticmethod
    def cache_read_write(cache: CacheSelector) -> Permissions:
        return Permissions([CachePermission(CacheRole.READ_WRITE, cache)])

    @staticmethod
    def cache_read_only(cache: CacheSelector) -> Permissions:
        return Permissions([CachePermission(CacheRole.READ_ONLY, cache)])

    @staticmethod
    def cache_write_only(cache: CacheSelector) -> Permissions:
        return Permissions([CachePermission(CacheRole.WRITE_ONLY, cache)])

    @staticmethod
    def topic_publish_subscribe(cache: CacheSelector, topic: TopicSelector) -> Permissions:
        return Permissions([TopicPermission(TopicRole.PUBLISH_SUBSCRIBE, cache, topic)])

    @staticmethod
    def topic_subscribe_only(cache: CacheSelector, topic: TopicSelector) -> Permissions:
        return Permissions([TopicPermission(TopicRole.SUBSCRIBE_ONLY, cache, topic)])

    @staticmethod
    def topic_publish_only(cache: CacheSelector, topic: TopicSelector) -> Permissions:
        return Permissions([TopicPermission(TopicRole.PUBLISH_ONLY, cache, topic)])

    @staticmethod
    def cache_key_read_write(cache: CacheSelector, key: str | bytes) -> DisposableTokenScope:
        return DisposableTokenScope(
            [DisposableTokenCachePermission(CacheRole.READ_WRITE, cache, CacheItemKey(key))]
        )

    @staticmethod
    def cache_key_read_only(cache: CacheSelector, key: str | bytes) -> DisposableTokenScope:
        return DisposableTokenScope(
            [DisposableTokenCachePermission(CacheRole.READ_ONLY, cache, CacheItemKey(key))]
        )

    @staticmethod
    def cache_key_prefix_read_write(cache: CacheSelector, key_prefix: str | bytes) -> DisposableTokenScope:
        return DisposableTokenScope(
            [DisposableTokenCachePermission(CacheRole.READ_WRITE, cache, CacheItemKeyPrefix(key_prefix))]
        )

    @staticmethod
    def cache_key_prefix_read_only(cache: CacheSelector, key_prefix: str | bytes) -> DisposableTokenScope:
        return DisposableTokenScope(
            [DisposableTokenCachePermission(CacheRole.READ_ONLY, cache, CacheItemKeyPrefix(key_prefix))]
        )


def permissions_to_wire(scope: TokenScope) -> WirePermissions:
    """
    Translate a token scope into the wire permission structure.

    Raises:
        InvalidArgumentException: On an unrecognized scope, role or selector
    """
    if isinstance(scope, InternalSuperUserPermissions):
        return WirePermissions(super_user=True)

    if isinstance(scope, (Permissions, DisposableTokenScope)):
        return WirePermissions(explicit=[_permission_to_wire(p) for p in scope.permissions])

    raise InvalidArgumentException(f"Unrecognized token scope: {scope!r}")


def _permission_to_wire(permission) -> CachePermissionEntry | TopicPermissionEntry:
    if isinstance(permission, TopicPermission):
        return TopicPermissionEntry(
            role=_topic_role(permission),
            cache_name=_cache_name(permission.cache, permission),
            topic_name=_topic_name(permission.topic, permission),
        )

    if isinstance(permission, DisposableTokenCachePermission):
        entry = CachePermissionEntry(
            role=_cache_role(permission),
            cache_name=_cache_name(permission.cache, permission),
        )
        item = permission.item
        if isinstance(item, AllItems):
            entry.all_items = True
        elif isinstance(item, CacheItemKey):
            entry.item_key = _item_bytes(item.key)
        elif isinstance(item, CacheItemKeyPrefix):
            entry.item_key_prefix = _item_bytes(item.key_prefix)
        else:
            raise InvalidArgumentException(
                f"Unrecognized cache item specification in cache permission: {permission!r}"
            )
        return entry

    if isinstance(permission, CachePermission):
        return CachePermissionEntry(
            role=_cache_role(permission),
            cache_name=_cache_name(permission.cache, permission),
        )

    raise InvalidArgumentException(f"Unrecognized token permission: {permission!r}")


def _cache_role(permission) -> str:
    try:
        return CACHE_ROLE_WIRE_NAMES[CacheRole(permission.role)]
    except ValueError:
        raise InvalidArgumentException(f"Unrecognized cache role: {permission!r}") from None


def _topic_role(permission: TopicPermission) -> str:
    try:
        return TOPIC_ROLE_WIRE_NAMES[TopicRole(permission.role)]
    except ValueError:
        raise InvalidArgumentException(f"Unrecognized topic role: {permission!r}") from None


def _cache_name(cache: CacheSelector, permission) -> str | None:
    if isinstance(cache, AllCaches):
        return None
    if isinstance(cache, CacheName):
        return cache.name
    if isinstance(cache, str):
        return cache
    raise InvalidArgumentException(
        f"Unrecognized cache specification in permission: {permission!r}"
    )


def _topic_name(topic: TopicSelector, permission) -> str | None:
    if isinstance(topic, AllTopics):
        return None
    if isinstance(topic, TopicName):
        return topic.name
    if isinstance(topic, str):
        return topic
    raise InvalidArgumentException(
        f"Unrecognized topic specification in topic permission: {permission!r}"
    )


def _item_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        value = value.encode("utf-8")
    if not value:
        raise InvalidArgumentException("Cache key or key prefix must not be empty")
    return value

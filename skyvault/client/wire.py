"""
Transport-neutral request and reply shapes.

Clients build these, transports translate them to and from the generated
protobuf messages (or serve them in-process). Keeping this layer separate lets
every response mapper work identically over any transport.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import IntEnum


class ECacheResult(IntEnum):
    """Result discriminator carried by scalar and per-field replies."""

    INVALID = 0
    OK = 1
    HIT = 2
    MISS = 3


class Order(IntEnum):
    ASCENDING = 0
    DESCENDING = 1


# Method names, "<service>.<Rpc>"
GET = "cache.Get"
SET = "cache.Set"
DELETE = "cache.Delete"
INCREMENT = "cache.Increment"
SET_IF_NOT_EXISTS = "cache.SetIfNotExists"
DICTIONARY_SET = "cache.DictionarySet"
DICTIONARY_GET = "cache.DictionaryGet"
DICTIONARY_FETCH = "cache.DictionaryFetch"
DICTIONARY_DELETE = "cache.DictionaryDelete"
SET_UNION = "cache.SetUnion"
SET_FETCH = "cache.SetFetch"
SET_DIFFERENCE = "cache.SetDifference"
LIST_CONCATENATE_BACK = "cache.ListConcatenateBack"
LIST_CONCATENATE_FRONT = "cache.ListConcatenateFront"
LIST_FETCH = "cache.ListFetch"
LIST_POP_FRONT = "cache.ListPopFront"
LIST_POP_BACK = "cache.ListPopBack"
LIST_LENGTH = "cache.ListLength"

CREATE_CACHE = "control.CreateCache"
DELETE_CACHE = "control.DeleteCache"
LIST_CACHES = "control.ListCaches"
FLUSH_CACHE = "control.FlushCache"
CREATE_SIGNING_KEY = "control.CreateSigningKey"
REVOKE_SIGNING_KEY = "control.RevokeSigningKey"
LIST_SIGNING_KEYS = "control.ListSigningKeys"

PUBLISH = "pubsub.Publish"
SUBSCRIBE = "pubsub.Subscribe"

LEADERBOARD_UPSERT = "leaderboard.UpsertElements"
LEADERBOARD_GET_BY_SCORE = "leaderboard.GetByScore"
LEADERBOARD_GET_BY_RANK = "leaderboard.GetByRank"
LEADERBOARD_GET_RANK = "leaderboard.GetRank"
LEADERBOARD_LENGTH = "leaderboard.GetLeaderboardLength"
LEADERBOARD_REMOVE = "leaderboard.RemoveElements"
LEADERBOARD_DELETE = "leaderboard.DeleteLeaderboard"

STORE_GET = "store.Get"
STORE_PUT = "store.Put"
STORE_DELETE = "store.Delete"
CREATE_STORE = "control.CreateStore"
DELETE_STORE = "control.DeleteStore"
LIST_STORES = "control.ListStores"

GENERATE_API_TOKEN = "auth.GenerateApiToken"
REFRESH_API_TOKEN = "auth.RefreshApiToken"
GENERATE_DISPOSABLE_TOKEN = "token.GenerateDisposableToken"


# Scalar
@dataclass
class GetRequest:
    key: bytes


@dataclass
class GetReply:
    result: ECacheResult
    value: bytes = b""
    message: str = ""


@dataclass
class SetRequest:
    key: bytes
    value: bytes
    ttl_milliseconds: int


@dataclass
class DeleteRequest:
    key: bytes


@dataclass
class IncrementRequest:
    key: bytes
    amount: int
    ttl_milliseconds: int


@dataclass
class IncrementReply:
    value: int


@dataclass
class SetIfNotExistsRequest:
    key: bytes
    value: bytes
    ttl_milliseconds: int


@dataclass
class SetIfNotExistsReply:
    stored: bool


@dataclass
class EmptyReply:
    pass


# Collections
@dataclass
class DictionarySetRequest:
    dictionary_name: bytes
    items: list[tuple[bytes, bytes]]
    ttl_milliseconds: int
    refresh_ttl: bool = True


@dataclass
class DictionaryGetRequest:
    dictionary_name: bytes
    fields: list[bytes]


@dataclass
class FieldResult:
    result: ECacheResult
    value: bytes = b""


@dataclass
class DictionaryGetReply:
    found: bool
    items: list[FieldResult] = field(default_factory=list)


@dataclass
class DictionaryFetchRequest:
    dictionary_name: bytes


@dataclass
class DictionaryFetchReply:
    found: bool
    items: list[tuple[bytes, bytes]] = field(default_factory=list)


@dataclass
class DictionaryDeleteRequest:
    dictionary_name: bytes
    fields: list[bytes]


@dataclass
class SetUnionRequest:
    set_name: bytes
    elements: list[bytes]
    ttl_milliseconds: int
    refresh_ttl: bool = True


@dataclass
class SetFetchRequest:
    set_name: bytes


@dataclass
class SetFetchReply:
    found: bool
    elements: list[bytes] = field(default_factory=list)


@dataclass
class SetDifferenceRequest:
    set_name: bytes
    elements: list[bytes]


@dataclass
class ListConcatenateRequest:
    list_name: bytes
    values: list[bytes]
    ttl_milliseconds: int
    refresh_ttl: bool = True
    truncate_to_size: int = 0


@dataclass
class ListNameRequest:
    list_name: bytes


@dataclass
class ListFetchReply:
    found: bool
    values: list[bytes] = field(default_factory=list)


@dataclass
class ListPopReply:
    found: bool
    value: bytes = b""


@dataclass
class ListLengthReply:
    found: bool
    length: int = 0


# Control
@dataclass
class CacheNameRequest:
    cache_name: str


@dataclass
class ListCachesRequest:
    next_token: str = ""


@dataclass
class ListCachesReply:
    cache_names: list[str]
    next_token: str = ""


@dataclass
class CreateSigningKeyRequest:
    ttl_minutes: int


@dataclass
class CreateSigningKeyReply:
    key: str
    expires_at: int


@dataclass
class RevokeSigningKeyRequest:
    key_id: str


@dataclass
class ListSigningKeysRequest:
    next_token: str = ""


@dataclass
class SigningKeyInfo:
    key_id: str
    expires_at: int


@dataclass
class ListSigningKeysReply:
    signing_keys: list[SigningKeyInfo]
    next_token: str = ""


# Topics
@dataclass
class TopicValue:
    text: str | None = None
    binary: bytes | None = None


@dataclass
class PublishRequest:
    cache_name: str
    topic: str
    value: TopicValue


@dataclass
class SubscribeRequest:
    cache_name: str
    topic: str
    resume_at_topic_sequence_number: int = 0


@dataclass
class SubscriptionMessage:
    """One message on a subscription stream; kind is item, heartbeat or discontinuity."""

    kind: str
    topic_sequence_number: int = 0
    value: TopicValue | None = None
    last_topic_sequence: int = 0
    new_topic_sequence: int = 0


# Leaderboards
@dataclass
class LeaderboardRequest:
    cache_name: str
    leaderboard: str


@dataclass
class LeaderboardUpsertRequest(LeaderboardRequest):
    elements: list[tuple[int, float]] = field(default_factory=list)


@dataclass
class LeaderboardGetByScoreRequest(LeaderboardRequest):
    min_score: float | None = None
    max_score: float | None = None
    offset: int = 0
    count: int = 8192
    order: Order = Order.ASCENDING


@dataclass
class LeaderboardGetByRankRequest(LeaderboardRequest):
    start_rank: int = 0
    end_rank: int = 8192
    order: Order = Order.ASCENDING


@dataclass
class LeaderboardIdsRequest(LeaderboardRequest):
    ids: list[int] = field(default_factory=list)
    order: Order = Order.ASCENDING


@dataclass
class RankedElementInfo:
    id: int
    score: float
    rank: int


@dataclass
class RankedElementsReply:
    elements: list[RankedElementInfo]


@dataclass
class LeaderboardLengthReply:
    count: int


# Storage
@dataclass
class StoreValue:
    """Exactly one field is set; all None means the reply carried no value."""

    bytes_value: bytes | None = None
    string_value: str | None = None
    integer_value: int | None = None
    double_value: float | None = None


@dataclass
class StoreKeyRequest:
    key: str


@dataclass
class StorePutRequest:
    key: str
    value: StoreValue


@dataclass
class StoreGetReply:
    value: StoreValue


@dataclass
class StoreNameRequest:
    store_name: str


@dataclass
class ListStoresRequest:
    next_token: str = ""


@dataclass
class ListStoresReply:
    store_names: list[str]
    next_token: str = ""


# Auth
@dataclass
class CachePermissionEntry:
    """Wire shape of one cache permission; None selectors mean "all"."""

    role: str
    cache_name: str | None = None
    item_key: bytes | None = None
    item_key_prefix: bytes | None = None
    all_items: bool = False


@dataclass
class TopicPermissionEntry:
    role: str
    cache_name: str | None = None
    topic_name: str | None = None


@dataclass
class WirePermissions:
    super_user: bool = False
    explicit: list[CachePermissionEntry | TopicPermissionEntry] = field(default_factory=list)


@dataclass
class GenerateApiTokenRequest:
    auth_token: str
    permissions: WirePermissions
    valid_for_seconds: int | None = None


@dataclass
class RefreshApiTokenRequest:
    api_key: str
    refresh_token: str


@dataclass
class GenerateDisposableTokenRequest:
    auth_token: str
    permissions: WirePermissions
    valid_for_seconds: int


@dataclass
class TokenReply:
    api_key: str
    endpoint: str
    valid_until: int
    refresh_token: str = ""

"""
Argument validation run before any request is issued.

Every helper raises ``InvalidArgumentException``; the clients turn that into
the operation's error response.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from numbers import Real
from typing import TYPE_CHECKING, Iterable, Mapping

from skyvault.auth.expiration import ExpiresIn
from skyvault.client.exceptions import InvalidArgumentException
from skyvault.client.wire import Order

if TYPE_CHECKING:
    from skyvault.config.configuration import Configuration

LEADERBOARD_MAX_RESULTS = 8192
DISPOSABLE_TOKEN_MAX_SECONDS = 60 * 60


@dataclass(frozen=True)
class CollectionTtl:
    """
    TTL policy for collection writes.

    ``ttl`` of None means the client's default TTL. With ``refresh_ttl`` the
    TTL is reset on every write; otherwise it only applies when the write
    creates the collection.
    """

    ttl: timedelta | None = None
    refresh_ttl: bool = True

    @classmethod
    def from_cache_ttl(cls) -> "CollectionTtl":
        return cls()

    @classmethod
    def of(cls, ttl: timedelta) -> "CollectionTtl":
        return cls(ttl=ttl)

    def with_no_refresh_ttl_on_updates(self) -> "CollectionTtl":
        return CollectionTtl(self.ttl, refresh_ttl=False)


def validate_name(name: object, kind: str) -> str:
    if not isinstance(name, str):
        raise InvalidArgumentException(f"{kind} name must be a string")
    if not name.strip():
        raise InvalidArgumentException(f"{kind} name must not be empty")
    return name


def validate_cache_name(cache_name: object) -> str:
    return validate_name(cache_name, "Cache")


def validate_topic_name(topic_name: object) -> str:
    return validate_name(topic_name, "Topic")


def validate_leaderboard_name(leaderboard_name: object) -> str:
    return validate_name(leaderboard_name, "Leaderboard")


def validate_store_name(store_name: object) -> str:
    return validate_name(store_name, "Store")


def validate_storage_key(key: object) -> str:
    """Storage keys are text, unlike cache keys."""
    if not isinstance(key, str):
        raise InvalidArgumentException(f"Storage key must be a str, got {type(key).__name__}")
    if not key:
        raise InvalidArgumentException("Storage key must not be empty")
    return key


def as_bytes(value: object, kind: str) -> bytes:
    """Encode ``str`` as UTF-8, pass ``bytes`` through, reject anything else."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise InvalidArgumentException(f"{kind} must be a str or bytes, got {type(value).__name__}")


def validate_key(key: object, kind: str = "Key") -> bytes:
    encoded = as_bytes(key, kind)
    if not encoded:
        raise InvalidArgumentException(f"{kind} must not be empty")
    return encoded


def validate_collection_name(name: object, kind: str) -> bytes:
    validate_name(name, kind)
    return as_bytes(name, f"{kind} name")


def validate_values(values: Iterable[object], kind: str) -> list[bytes]:
    if isinstance(values, (str, bytes)):
        raise InvalidArgumentException(f"{kind} must be a collection of str or bytes")
    return [as_bytes(value, kind) for value in values]


def validate_items(items: Mapping[object, object]) -> list[tuple[bytes, bytes]]:
    if not isinstance(items, Mapping):
        raise InvalidArgumentException("Dictionary items must be a mapping")
    return [(validate_key(name, "Field"), as_bytes(value, "Value")) for name, value in items.items()]


def validate_integer(value: object, kind: str) -> int:
    # bool is an int subclass but never a meaningful id, count or rank.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentException(f"{kind} must be an integer, got {type(value).__name__}")
    return value


def validate_score(score: object, kind: str = "Score") -> float:
    if isinstance(score, bool) or not isinstance(score, Real):
        raise InvalidArgumentException(f"{kind} must be a number, got {type(score).__name__}")
    if math.isnan(score):
        raise InvalidArgumentException(f"{kind} must not be NaN")
    return float(score)


def validate_ttl(ttl: timedelta) -> int:
    """Return ``ttl`` in milliseconds."""
    if not isinstance(ttl, timedelta):
        raise InvalidArgumentException("TTL must be a timedelta")
    if ttl < timedelta(0):
        raise InvalidArgumentException("TTL must be a non-negative timedelta")
    return int(ttl.total_seconds() * 1000)


def validate_ttl_minutes(ttl_minutes: int) -> int:
    validate_integer(ttl_minutes, "TTL minutes")
    if ttl_minutes < 0:
        raise InvalidArgumentException("TTL minutes must be non-negative")
    return ttl_minutes


def validate_timeout(timeout: timedelta | float) -> float:
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else timeout
    if seconds <= 0:
        raise InvalidArgumentException("request timeout must be greater than zero.")
    return seconds


def validate_truncate_size(size: int | None) -> int:
    if size is None:
        return 0
    if size <= 0:
        raise InvalidArgumentException("Truncate size must be a positive integer")
    return size


def validate_ids(ids: Iterable[int]) -> list[int]:
    if isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
        raise InvalidArgumentException("Ids must be a collection of integers")
    ids = [validate_integer(element_id, "Id") for element_id in ids]
    if not ids:
        raise InvalidArgumentException("Ids must not be empty")
    return ids


def validate_elements(elements: Mapping[int, float]) -> list[tuple[int, float]]:
    if not isinstance(elements, Mapping):
        raise InvalidArgumentException("Elements must be a mapping of id to score")
    if not elements:
        raise InvalidArgumentException("Elements must not be empty")
    return [
        (validate_integer(element_id, "Id"), validate_score(score))
        for element_id, score in elements.items()
    ]


def validate_score_range(min_score: float | None, max_score: float | None) -> None:
    if min_score is not None:
        validate_score(min_score, "min_score")
    if max_score is not None:
        validate_score(max_score, "max_score")
    if min_score is not None and max_score is not None and min_score >= max_score:
        raise InvalidArgumentException("min_score must be less than max_score")


def validate_order(order: object) -> Order:
    try:
        return Order(order)
    except ValueError:
        raise InvalidArgumentException(f"Unknown order: {order!r}") from None


def validate_count(count: int) -> int:
    validate_integer(count, "Count")
    if count <= 0:
        raise InvalidArgumentException("Count must be a positive integer")
    if count > LEADERBOARD_MAX_RESULTS:
        raise InvalidArgumentException(
            f"Count must be at most {LEADERBOARD_MAX_RESULTS}"
        )
    return count


def validate_offset(offset: int) -> int:
    validate_integer(offset, "Offset")
    if offset < 0:
        raise InvalidArgumentException("Offset must be non-negative")
    return offset


def validate_rank_range(start_rank: int, end_rank: int) -> None:
    validate_integer(start_rank, "start_rank")
    validate_integer(end_rank, "end_rank")
    if start_rank < 0:
        raise InvalidArgumentException("start_rank must be non-negative")
    if end_rank <= start_rank:
        raise InvalidArgumentException("start_rank must be less than end_rank")
    if end_rank - start_rank > LEADERBOARD_MAX_RESULTS:
        raise InvalidArgumentException(
            f"Rank range may span at most {LEADERBOARD_MAX_RESULTS} ranks"
        )


def validate_disposable_token_expiry(expires_in: ExpiresIn) -> int:
    """Disposable tokens must expire, and within one hour."""
    if not isinstance(expires_in, ExpiresIn):
        raise InvalidArgumentException("expires_in must be an ExpiresIn")
    valid_for = expires_in.valid_for_seconds()
    if valid_for is None:
        raise InvalidArgumentException("Disposable tokens must have an expiry")
    if valid_for <= 0:
        raise InvalidArgumentException("Disposable token expiry must be positive")
    if valid_for > DISPOSABLE_TOKEN_MAX_SECONDS:
        raise InvalidArgumentException("Disposable tokens must expire within 1 hour")
    return valid_for


def validate_eager_connect_timeout(timeout: timedelta | float) -> float:
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    if seconds < 0:
        raise InvalidArgumentException("Eager connection timeout must be non-negative")
    return seconds


def validate_configuration(configuration: "Configuration") -> None:
    """Reject configurations no client can be built from."""
    grpc_configuration = configuration.grpc_configuration
    validate_timeout(grpc_configuration.deadline_seconds)
    if grpc_configuration.num_channels < 1:
        raise InvalidArgumentException("num_channels must be at least 1")
    if grpc_configuration.max_concurrent_requests < 1:
        raise InvalidArgumentException("max_concurrent_requests must be at least 1")

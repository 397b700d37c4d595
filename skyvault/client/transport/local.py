"""
Local transport for in-process SkyVault execution.

``LocalBackend`` emulates the service contract in memory: caches must exist
before use, items expire after their TTL, collections refuse operations of
the wrong type, topics fan out to live subscribers and leaderboards rank by
score. Stores keep typed values with no expiry. It is meant for development and tests; nothing is persisted and
nothing is evicted except by TTL.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio
import json
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable
from uuid import uuid4

import grpc
from loguru import logger

from skyvault.client import wire


def rpc_error(
    code: grpc.StatusCode, details: str, trailing: tuple[tuple[str, str], ...] = ()
) -> grpc.aio.AioRpcError:
    """Build the error a real channel would raise for ``code``."""
    return grpc.aio.AioRpcError(code, grpc.aio.Metadata(), grpc.aio.Metadata(*trailing), details)


@dataclass
class _Entry:
    value: Any
    expires_at: float | None


@dataclass
class _Topic:
    sequence_number: int = 0
    subscribers: list["LocalMessageStream"] = field(default_factory=list)


@dataclass
class _Cache:
    items: dict[bytes, _Entry] = field(default_factory=dict)
    topics: dict[str, _Topic] = field(default_factory=dict)
    leaderboards: dict[str, dict[int, float]] = field(default_factory=dict)


class LocalMessageStream:
    """In-memory subscription stream fed by ``LocalBackend.publish``."""

    def __init__(self, topic: _Topic | None, error: grpc.RpcError | None = None):
        self._topic = topic
        self._queue: asyncio.Queue[wire.SubscriptionMessage | None] = asyncio.Queue()
        self._error = error
        self._cancelled = False

    def deliver(self, message: wire.SubscriptionMessage) -> None:
        if not self._cancelled:
            self._queue.put_nowait(message)

    def fail(self, error: grpc.RpcError) -> None:
        """Terminate the stream with ``error`` once queued messages drain."""
        self._error = error
        self._queue.put_nowait(None)
        self._detach()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __aiter__(self) -> "LocalMessageStream":
        return self

    async def __anext__(self) -> wire.SubscriptionMessage:
        if self._cancelled:
            raise asyncio.CancelledError()
        if self._error is not None and self._queue.empty():
            raise self._error

        message = await self._queue.get()
        if message is None:
            if self._cancelled:
                raise asyncio.CancelledError()
            raise self._error
        return message

    def cancel(self) -> bool:
        if self._cancelled:
            return False
        self._cancelled = True
        # Wake a reader blocked on the queue.
        self._queue.put_nowait(None)
        self._detach()
        return True

    def _detach(self) -> None:
        if self._topic is not None and self in self._topic.subscribers:
            self._topic.subscribers.remove(self)


class LocalBackend:
    """
    In-memory emulation of the SkyVault service.

    Args:
        clock: Monotonic clock in seconds used for TTL expiry
        latency: Seconds every request takes, to exercise concurrency limits
        connect_delay: Seconds ``LocalTransport.connect`` takes to become ready

    Example:
        ```python
        backend = LocalBackend()
        backend.create_cache("orders")
        client = await CacheClient.create(
            credential_provider,
            configuration,
            timedelta(seconds=60),
            transport_factory=backend.transport_factory(),
        )
        ```
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        latency: float = 0.0,
        connect_delay: float = 0.0,
    ):
        self.clock = clock
        self.latency = latency
        self.connect_delay = connect_delay
        self.endpoint = "localhost"
        self.transports: list["LocalTransport"] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.request_count = 0

        self._caches: dict[str, _Cache] = {}
        self._stores: dict[str, dict[str, wire.StoreValue]] = {}
        self._signing_keys: dict[str, int] = {}
        self._refresh_tokens: dict[str, str] = {}
        self._failures: dict[str, deque[tuple[grpc.StatusCode, str]]] = {}

        self._handlers: dict[str, Callable[[Any, str | None], Any]] = {
            wire.GET: self._get,
            wire.SET: self._set,
            wire.DELETE: self._delete,
            wire.INCREMENT: self._increment,
            wire.SET_IF_NOT_EXISTS: self._set_if_not_exists,
            wire.DICTIONARY_SET: self._dictionary_set,
            wire.DICTIONARY_GET: self._dictionary_get,
            wire.DICTIONARY_FETCH: self._dictionary_fetch,
            wire.DICTIONARY_DELETE: self._dictionary_delete,
            wire.SET_UNION: self._set_union,
            wire.SET_FETCH: self._set_fetch,
            wire.SET_DIFFERENCE: self._set_difference,
            wire.LIST_CONCATENATE_BACK: self._list_concatenate_back,
            wire.LIST_CONCATENATE_FRONT: self._list_concatenate_front,
            wire.LIST_FETCH: self._list_fetch,
            wire.LIST_POP_FRONT: self._list_pop_front,
            wire.LIST_POP_BACK: self._list_pop_back,
            wire.LIST_LENGTH: self._list_length,
            wire.CREATE_CACHE: self._create_cache,
            wire.DELETE_CACHE: self._delete_cache,
            wire.LIST_CACHES: self._list_caches,
            wire.FLUSH_CACHE: self._flush_cache,
            wire.CREATE_SIGNING_KEY: self._create_signing_key,
            wire.REVOKE_SIGNING_KEY: self._revoke_signing_key,
            wire.LIST_SIGNING_KEYS: self._list_signing_keys,
            wire.PUBLISH: self._publish,
            wire.LEADERBOARD_UPSERT: self._leaderboard_upsert,
            wire.LEADERBOARD_GET_BY_SCORE: self._leaderboard_get_by_score,
            wire.LEADERBOARD_GET_BY_RANK: self._leaderboard_get_by_rank,
            wire.LEADERBOARD_GET_RANK: self._leaderboard_get_rank,
            wire.LEADERBOARD_LENGTH: self._leaderboard_length,
            wire.LEADERBOARD_REMOVE: self._leaderboard_remove,
            wire.LEADERBOARD_DELETE: self._leaderboard_delete,
            wire.STORE_GET: self._store_get,
            wire.STORE_PUT: self._store_put,
            wire.STORE_DELETE: self._store_delete,
            wire.CREATE_STORE: self._create_store,
            wire.DELETE_STORE: self._delete_store,
            wire.LIST_STORES: self._list_stores,
            wire.GENERATE_API_TOKEN: self._generate_api_token,
            wire.REFRESH_API_TOKEN: self._refresh_api_token,
            wire.GENERATE_DISPOSABLE_TOKEN: self._generate_disposable_token,
        }

    # Test helpers

    def transport_factory(self) -> Callable[..., "LocalTransport"]:
        """Return a transport factory whose transports all share this backend."""

        def factory(credential_provider: Any, endpoint: str, grpc_configuration: Any) -> "LocalTransport":
            transport = LocalTransport(self, endpoint)
            self.transports.append(transport)
            return transport

        return factory

    def create_cache(self, cache_name: str) -> None:
        self._caches.setdefault(cache_name, _Cache())

    def create_store(self, store_name: str) -> None:
        self._stores.setdefault(store_name, {})

    def fail_next(
        self,
        method: str,
        code: grpc.StatusCode,
        details: str = "injected failure",
        times: int = 1,
    ) -> None:
        """Make the next ``times`` calls of ``method`` fail with ``code``."""
        queue = self._failures.setdefault(method, deque())
        for _ in range(times):
            queue.append((code, details))

    def fail_subscriptions(self, cache_name: str, topic: str, code: grpc.StatusCode) -> None:
        """Terminate every live subscription on a topic with ``code``."""
        state = self._require_cache(cache_name)
        for stream in list(state.topics.get(topic, _Topic()).subscribers):
            stream.fail(rpc_error(code, "subscription terminated"))

    def subscriber_count(self, cache_name: str, topic: str) -> int:
        state = self._caches.get(cache_name)
        if state is None or topic not in state.topics:
            return 0
        return len(state.topics[topic].subscribers)

    # Dispatch

    async def handle(self, method: str, request: Any, cache_name: str | None) -> Any:
        handler = self._handlers.get(method)
        if handler is None:
            raise rpc_error(grpc.StatusCode.UNIMPLEMENTED, f"Unknown method: {method}")

        self.request_count += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.latency:
                await asyncio.sleep(self.latency)

            failures = self._failures.get(method)
            if failures:
                code, details = failures.popleft()
                raise rpc_error(code, details)

            return handler(request, cache_name)
        finally:
            self.in_flight -= 1

    def subscribe(self, request: wire.SubscribeRequest) -> LocalMessageStream:
        failures = self._failures.get(wire.SUBSCRIBE)
        if failures:
            code, details = failures.popleft()
            return LocalMessageStream(None, rpc_error(code, details))

        state = self._caches.get(request.cache_name)
        if state is None:
            return LocalMessageStream(
                None, rpc_error(grpc.StatusCode.NOT_FOUND, f"Cache not found: {request.cache_name}")
            )

        topic = state.topics.setdefault(request.topic, _Topic())
        stream = LocalMessageStream(topic)
        stream.deliver(wire.SubscriptionMessage(kind="heartbeat"))

        resume_at = request.resume_at_topic_sequence_number
        if resume_at and resume_at != topic.sequence_number + 1:
            stream.deliver(
                wire.SubscriptionMessage(
                    kind="discontinuity",
                    last_topic_sequence=resume_at,
                    new_topic_sequence=topic.sequence_number + 1,
                )
            )

        topic.subscribers.append(stream)
        return stream

    # State helpers

    def _require_cache(self, cache_name: str | None) -> _Cache:
        state = self._caches.get(cache_name or "")
        if state is None:
            raise rpc_error(grpc.StatusCode.NOT_FOUND, f"Cache not found: {cache_name}")
        return state

    def _expires_at(self, ttl_milliseconds: int) -> float:
        return self.clock() + ttl_milliseconds / 1000

    def _live_entry(self, state: _Cache, key: bytes) -> _Entry | None:
        entry = state.items.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self.clock() >= entry.expires_at:
            del state.items[key]
            return None
        return entry

    def _typed_value(self, state: _Cache, key: bytes, kind: type) -> Any:
        entry = self._live_entry(state, key)
        if entry is None:
            return None
        if not isinstance(entry.value, kind):
            raise rpc_error(
                grpc.StatusCode.FAILED_PRECONDITION,
                f"Item is a {type(entry.value).__name__}, not a {kind.__name__}",
            )
        return entry.value

    def _upsert_collection(
        self,
        state: _Cache,
        key: bytes,
        kind: type,
        ttl_milliseconds: int,
        refresh_ttl: bool,
    ) -> Any:
        value = self._typed_value(state, key, kind)
        if value is None:
            value = kind()
            state.items[key] = _Entry(value, self._expires_at(ttl_milliseconds))
        elif refresh_ttl:
            state.items[key].expires_at = self._expires_at(ttl_milliseconds)
        return value

    def _drop_if_empty(self, state: _Cache, key: bytes) -> None:
        entry = state.items.get(key)
        if entry is not None and not entry.value:
            del state.items[key]

    # Scalar

    def _get(self, request: wire.GetRequest, cache_name: str | None) -> wire.GetReply:
        state = self._require_cache(cache_name)
        value = self._typed_value(state, request.key, bytes)
        if value is None:
            return wire.GetReply(result=wire.ECacheResult.MISS)
        return wire.GetReply(result=wire.ECacheResult.HIT, value=value)

    def _set(self, request: wire.SetRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        state.items[request.key] = _Entry(request.value, self._expires_at(request.ttl_milliseconds))
        return wire.EmptyReply()

    def _delete(self, request: wire.DeleteRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        state.items.pop(request.key, None)
        return wire.EmptyReply()

    def _increment(self, request: wire.IncrementRequest, cache_name: str | None) -> wire.IncrementReply:
        state = self._require_cache(cache_name)
        current = self._typed_value(state, request.key, bytes)
        try:
            value = int(current or b"0") + request.amount
        except ValueError:
            raise rpc_error(
                grpc.StatusCode.FAILED_PRECONDITION, "Value stored was not a valid integer"
            ) from None
        state.items[request.key] = _Entry(
            str(value).encode("utf-8"), self._expires_at(request.ttl_milliseconds)
        )
        return wire.IncrementReply(value=value)

    def _set_if_not_exists(
        self, request: wire.SetIfNotExistsRequest, cache_name: str | None
    ) -> wire.SetIfNotExistsReply:
        state = self._require_cache(cache_name)
        if self._live_entry(state, request.key) is not None:
            return wire.SetIfNotExistsReply(stored=False)
        state.items[request.key] = _Entry(request.value, self._expires_at(request.ttl_milliseconds))
        return wire.SetIfNotExistsReply(stored=True)

    # Dictionary

    def _dictionary_set(self, request: wire.DictionarySetRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        dictionary = self._upsert_collection(
            state, request.dictionary_name, dict, request.ttl_milliseconds, request.refresh_ttl
        )
        dictionary.update(request.items)
        return wire.EmptyReply()

    def _dictionary_get(
        self, request: wire.DictionaryGetRequest, cache_name: str | None
    ) -> wire.DictionaryGetReply:
        state = self._require_cache(cache_name)
        dictionary = self._typed_value(state, request.dictionary_name, dict)
        if dictionary is None:
            return wire.DictionaryGetReply(found=False)

        items = []
        for name in request.fields:
            if name in dictionary:
                items.append(wire.FieldResult(wire.ECacheResult.HIT, dictionary[name]))
            else:
                items.append(wire.FieldResult(wire.ECacheResult.MISS))
        return wire.DictionaryGetReply(found=True, items=items)

    def _dictionary_fetch(
        self, request: wire.DictionaryFetchRequest, cache_name: str | None
    ) -> wire.DictionaryFetchReply:
        state = self._require_cache(cache_name)
        dictionary = self._typed_value(state, request.dictionary_name, dict)
        if dictionary is None:
            return wire.DictionaryFetchReply(found=False)
        return wire.DictionaryFetchReply(found=True, items=list(dictionary.items()))

    def _dictionary_delete(
        self, request: wire.DictionaryDeleteRequest, cache_name: str | None
    ) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        dictionary = self._typed_value(state, request.dictionary_name, dict)
        if dictionary is not None:
            for name in request.fields:
                dictionary.pop(name, None)
            self._drop_if_empty(state, request.dictionary_name)
        return wire.EmptyReply()

    # Set

    def _set_union(self, request: wire.SetUnionRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        elements = self._upsert_collection(
            state, request.set_name, set, request.ttl_milliseconds, request.refresh_ttl
        )
        elements.update(request.elements)
        return wire.EmptyReply()

    def _set_fetch(self, request: wire.SetFetchRequest, cache_name: str | None) -> wire.SetFetchReply:
        state = self._require_cache(cache_name)
        elements = self._typed_value(state, request.set_name, set)
        if elements is None:
            return wire.SetFetchReply(found=False)
        return wire.SetFetchReply(found=True, elements=list(elements))

    def _set_difference(self, request: wire.SetDifferenceRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(cache_name)
        elements = self._typed_value(state, request.set_name, set)
        if elements is not None:
            elements.difference_update(request.elements)
            self._drop_if_empty(state, request.set_name)
        return wire.EmptyReply()

    # List

    def _list_concatenate_back(
        self, request: wire.ListConcatenateRequest, cache_name: str | None
    ) -> wire.ListLengthReply:
        state = self._require_cache(cache_name)
        values = self._upsert_collection(
            state, request.list_name, list, request.ttl_milliseconds, request.refresh_ttl
        )
        values.extend(request.values)
        if request.truncate_to_size and len(values) > request.truncate_to_size:
            del values[: len(values) - request.truncate_to_size]
        return wire.ListLengthReply(found=True, length=len(values))

    def _list_concatenate_front(
        self, request: wire.ListConcatenateRequest, cache_name: str | None
    ) -> wire.ListLengthReply:
        state = self._require_cache(cache_name)
        values = self._upsert_collection(
            state, request.list_name, list, request.ttl_milliseconds, request.refresh_ttl
        )
        values[:0] = request.values
        if request.truncate_to_size and len(values) > request.truncate_to_size:
            del values[request.truncate_to_size:]
        return wire.ListLengthReply(found=True, length=len(values))

    def _list_fetch(self, request: wire.ListNameRequest, cache_name: str | None) -> wire.ListFetchReply:
        state = self._require_cache(cache_name)
        values = self._typed_value(state, request.list_name, list)
        if values is None:
            return wire.ListFetchReply(found=False)
        return wire.ListFetchReply(found=True, values=list(values))

    def _list_pop(self, request: wire.ListNameRequest, cache_name: str | None, index: int) -> wire.ListPopReply:
        state = self._require_cache(cache_name)
        values = self._typed_value(state, request.list_name, list)
        if not values:
            return wire.ListPopReply(found=False)
        value = values.pop(index)
        self._drop_if_empty(state, request.list_name)
        return wire.ListPopReply(found=True, value=value)

    def _list_pop_front(self, request: wire.ListNameRequest, cache_name: str | None) -> wire.ListPopReply:
        return self._list_pop(request, cache_name, 0)

    def _list_pop_back(self, request: wire.ListNameRequest, cache_name: str | None) -> wire.ListPopReply:
        return self._list_pop(request, cache_name, -1)

    def _list_length(self, request: wire.ListNameRequest, cache_name: str | None) -> wire.ListLengthReply:
        state = self._require_cache(cache_name)
        values = self._typed_value(state, request.list_name, list)
        if values is None:
            return wire.ListLengthReply(found=False)
        return wire.ListLengthReply(found=True, length=len(values))

    # Control

    def _create_cache(self, request: wire.CacheNameRequest, cache_name: str | None) -> wire.EmptyReply:
        if request.cache_name in self._caches:
            raise rpc_error(grpc.StatusCode.ALREADY_EXISTS, f"Cache already exists: {request.cache_name}")
        self._caches[request.cache_name] = _Cache()
        return wire.EmptyReply()

    def _delete_cache(self, request: wire.CacheNameRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(request.cache_name)
        for topic in state.topics.values():
            for stream in list(topic.subscribers):
                stream.fail(rpc_error(grpc.StatusCode.NOT_FOUND, "Cache was deleted"))
        del self._caches[request.cache_name]
        return wire.EmptyReply()

    def _list_caches(self, request: wire.ListCachesRequest, cache_name: str | None) -> wire.ListCachesReply:
        return wire.ListCachesReply(cache_names=sorted(self._caches))

    def _flush_cache(self, request: wire.CacheNameRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(request.cache_name)
        state.items.clear()
        return wire.EmptyReply()

    def _create_signing_key(
        self, request: wire.CreateSigningKeyRequest, cache_name: str | None
    ) -> wire.CreateSigningKeyReply:
        key_id = uuid4().hex
        expires_at = int(time.time()) + request.ttl_minutes * 60
        self._signing_keys[key_id] = expires_at
        key = json.dumps({"kid": key_id, "kty": "oct", "alg": "HS256", "k": uuid4().hex})
        return wire.CreateSigningKeyReply(key=key, expires_at=expires_at)

    def _revoke_signing_key(
        self, request: wire.RevokeSigningKeyRequest, cache_name: str | None
    ) -> wire.EmptyReply:
        self._signing_keys.pop(request.key_id, None)
        return wire.EmptyReply()

    def _list_signing_keys(
        self, request: wire.ListSigningKeysRequest, cache_name: str | None
    ) -> wire.ListSigningKeysReply:
        return wire.ListSigningKeysReply(
            signing_keys=[
                wire.SigningKeyInfo(key_id=key_id, expires_at=expires_at)
                for key_id, expires_at in self._signing_keys.items()
            ]
        )

    # Topics

    def _publish(self, request: wire.PublishRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(request.cache_name)
        topic = state.topics.setdefault(request.topic, _Topic())
        topic.sequence_number += 1
        message = wire.SubscriptionMessage(
            kind="item",
            topic_sequence_number=topic.sequence_number,
            value=request.value,
        )
        for stream in list(topic.subscribers):
            stream.deliver(message)
        return wire.EmptyReply()

    # Leaderboards

    def _leaderboard(self, request: wire.LeaderboardRequest) -> dict[int, float]:
        state = self._require_cache(request.cache_name)
        return state.leaderboards.get(request.leaderboard, {})

    @staticmethod
    def _ranked(board: dict[int, float], order: wire.Order) -> list[wire.RankedElementInfo]:
        descending = order == wire.Order.DESCENDING
        ordered = sorted(board.items(), key=lambda item: (item[1], item[0]), reverse=descending)
        return [
            wire.RankedElementInfo(id=element_id, score=score, rank=rank)
            for rank, (element_id, score) in enumerate(ordered)
        ]

    def _leaderboard_upsert(
        self, request: wire.LeaderboardUpsertRequest, cache_name: str | None
    ) -> wire.EmptyReply:
        state = self._require_cache(request.cache_name)
        board = state.leaderboards.setdefault(request.leaderboard, {})
        board.update(request.elements)
        return wire.EmptyReply()

    def _leaderboard_get_by_score(
        self, request: wire.LeaderboardGetByScoreRequest, cache_name: str | None
    ) -> wire.RankedElementsReply:
        elements = [
            element
            for element in self._ranked(self._leaderboard(request), request.order)
            if (request.min_score is None or element.score >= request.min_score)
            and (request.max_score is None or element.score < request.max_score)
        ]
        return wire.RankedElementsReply(
            elements=elements[request.offset: request.offset + request.count]
        )

    def _leaderboard_get_by_rank(
        self, request: wire.LeaderboardGetByRankRequest, cache_name: str | None
    ) -> wire.RankedElementsReply:
        ranked = self._ranked(self._leaderboard(request), request.order)
        return wire.RankedElementsReply(elements=ranked[request.start_rank: request.end_rank])

    def _leaderboard_get_rank(
        self, request: wire.LeaderboardIdsRequest, cache_name: str | None
    ) -> wire.RankedElementsReply:
        wanted = set(request.ids)
        ranked = self._ranked(self._leaderboard(request), request.order)
        return wire.RankedElementsReply(elements=[e for e in ranked if e.id in wanted])

    def _leaderboard_length(
        self, request: wire.LeaderboardRequest, cache_name: str | None
    ) -> wire.LeaderboardLengthReply:
        return wire.LeaderboardLengthReply(count=len(self._leaderboard(request)))

    def _leaderboard_remove(
        self, request: wire.LeaderboardIdsRequest, cache_name: str | None
    ) -> wire.EmptyReply:
        board = self._leaderboard(request)
        for element_id in request.ids:
            board.pop(element_id, None)
        return wire.EmptyReply()

    def _leaderboard_delete(self, request: wire.LeaderboardRequest, cache_name: str | None) -> wire.EmptyReply:
        state = self._require_cache(request.cache_name)
        state.leaderboards.pop(request.leaderboard, None)
        return wire.EmptyReply()

    # Storage

    def _require_store(self, store_name: str | None) -> dict[str, wire.StoreValue]:
        store = self._stores.get(store_name or "")
        if store is None:
            raise rpc_error(
                grpc.StatusCode.NOT_FOUND,
                f"Store not found: {store_name}",
                (("err", "store_not_found"),),
            )
        return store

    def _store_get(self, request: wire.StoreKeyRequest, cache_name: str | None) -> wire.StoreGetReply:
        store = self._require_store(cache_name)
        value = store.get(request.key)
        if value is None:
            raise rpc_error(
                grpc.StatusCode.NOT_FOUND,
                f"Item not found: {request.key}",
                (("err", "item_not_found"),),
            )
        return wire.StoreGetReply(value=value)

    def _store_put(self, request: wire.StorePutRequest, cache_name: str | None) -> wire.EmptyReply:
        store = self._require_store(cache_name)
        store[request.key] = request.value
        return wire.EmptyReply()

    def _store_delete(self, request: wire.StoreKeyRequest, cache_name: str | None) -> wire.EmptyReply:
        store = self._require_store(cache_name)
        store.pop(request.key, None)
        return wire.EmptyReply()

    def _create_store(self, request: wire.StoreNameRequest, cache_name: str | None) -> wire.EmptyReply:
        if request.store_name in self._stores:
            raise rpc_error(grpc.StatusCode.ALREADY_EXISTS, f"Store already exists: {request.store_name}")
        self._stores[request.store_name] = {}
        return wire.EmptyReply()

    def _delete_store(self, request: wire.StoreNameRequest, cache_name: str | None) -> wire.EmptyReply:
        self._require_store(request.store_name)
        del self._stores[request.store_name]
        return wire.EmptyReply()

    def _list_stores(self, request: wire.ListStoresRequest, cache_name: str | None) -> wire.ListStoresReply:
        return wire.ListStoresReply(store_names=sorted(self._stores))

    # Auth

    def _valid_until(self, valid_for_seconds: int | None) -> int:
        if valid_for_seconds is None:
            return 0
        return int(time.time()) + valid_for_seconds

    def _generate_api_token(
        self, request: wire.GenerateApiTokenRequest, cache_name: str | None
    ) -> wire.TokenReply:
        api_key = f"local-{uuid4().hex}"
        refresh_token = uuid4().hex
        self._refresh_tokens[refresh_token] = api_key
        return wire.TokenReply(
            api_key=api_key,
            endpoint=self.endpoint,
            valid_until=self._valid_until(request.valid_for_seconds),
            refresh_token=refresh_token,
        )

    def _refresh_api_token(
        self, request: wire.RefreshApiTokenRequest, cache_name: str | None
    ) -> wire.TokenReply:
        if self._refresh_tokens.get(request.refresh_token) != request.api_key:
            raise rpc_error(grpc.StatusCode.UNAUTHENTICATED, "Invalid refresh token")

        del self._refresh_tokens[request.refresh_token]
        return self._generate_api_token(
            wire.GenerateApiTokenRequest(auth_token=request.api_key, permissions=wire.WirePermissions()),
            cache_name,
        )

    def _generate_disposable_token(
        self, request: wire.GenerateDisposableTokenRequest, cache_name: str | None
    ) -> wire.TokenReply:
        return wire.TokenReply(
            api_key=f"disposable-{uuid4().hex}",
            endpoint=self.endpoint,
            valid_until=self._valid_until(request.valid_for_seconds),
        )


class LocalTransport:
    """
    Transport for direct in-process calls to a ``LocalBackend``.

    No network calls are made. Failures are raised as ``grpc.aio.AioRpcError``
    exactly like a real channel would raise them.
    """

    def __init__(self, backend: LocalBackend | None = None, endpoint: str = "localhost"):
        """
        Initialize local transport.

        Args:
            backend: Backend to serve requests from (a fresh one when omitted)
            endpoint: Endpoint name this transport pretends to connect to
        """
        self.backend = backend or LocalBackend()
        self.endpoint = endpoint
        self.request_count = 0
        self._ready = False
        self._closed = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def connect(self, timeout: float | None = None) -> None:
        if self.backend.connect_delay:
            await asyncio.wait_for(asyncio.sleep(self.backend.connect_delay), timeout=timeout)
        self._ready = True

    async def send_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        if self._closed:
            raise rpc_error(grpc.StatusCode.UNAVAILABLE, "Transport is closed")

        self.request_count += 1
        self._ready = True
        try:
            if timeout:
                return await asyncio.wait_for(
                    self.backend.handle(method, request, cache_name),
                    timeout=timeout,
                )
            return await self.backend.handle(method, request, cache_name)
        except asyncio.TimeoutError:
            raise rpc_error(
                grpc.StatusCode.DEADLINE_EXCEEDED, f"Deadline of {timeout}s exceeded"
            ) from None

    def stream_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
    ) -> LocalMessageStream:
        if self._closed:
            return LocalMessageStream(None, rpc_error(grpc.StatusCode.UNAVAILABLE, "Transport is closed"))
        if method != wire.SUBSCRIBE:
            return LocalMessageStream(
                None, rpc_error(grpc.StatusCode.UNIMPLEMENTED, f"Streaming not supported for: {method}")
            )
        return self.backend.subscribe(request)

    async def close(self) -> None:
        if not self._closed:
            logger.debug(f"Closing local transport to {self.endpoint}")
        self._closed = True

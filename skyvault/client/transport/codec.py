"""
Translation between wire-neutral dataclasses and generated protobuf messages.

``ENCODERS`` turn a ``skyvault.client.wire`` request into the protobuf request
for its RPC; ``DECODERS`` turn the protobuf reply back into a wire reply.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Any, Callable

from momento_wire_types import auth_pb2 as auth_pb
from momento_wire_types import cacheclient_pb2 as cache_pb
from momento_wire_types import cachepubsub_pb2 as pubsub_pb
from momento_wire_types import controlclient_pb2 as control_pb
from momento_wire_types import leaderboard_pb2 as leaderboard_pb
from momento_wire_types import permissionmessages_pb2 as permissions_pb
from momento_wire_types import store_pb2 as store_pb
from momento_wire_types import token_pb2 as token_pb

from skyvault.client import wire


# Scalar

def _encode_get(request: wire.GetRequest) -> Any:
    return cache_pb._GetRequest(cache_key=request.key)


def _decode_get(reply: Any) -> wire.GetReply:
    return wire.GetReply(
        result=wire.ECacheResult(int(reply.result)),
        value=reply.cache_body,
        message=reply.message,
    )


def _encode_set(request: wire.SetRequest) -> Any:
    return cache_pb._SetRequest(
        cache_key=request.key,
        cache_body=request.value,
        ttl_milliseconds=request.ttl_milliseconds,
    )


def _encode_delete(request: wire.DeleteRequest) -> Any:
    return cache_pb._DeleteRequest(cache_key=request.key)


def _encode_increment(request: wire.IncrementRequest) -> Any:
    return cache_pb._IncrementRequest(
        cache_key=request.key,
        amount=request.amount,
        ttl_milliseconds=request.ttl_milliseconds,
    )


def _decode_increment(reply: Any) -> wire.IncrementReply:
    return wire.IncrementReply(value=reply.value)


def _encode_set_if_not_exists(request: wire.SetIfNotExistsRequest) -> Any:
    return cache_pb._SetIfNotExistsRequest(
        cache_key=request.key,
        cache_body=request.value,
        ttl_milliseconds=request.ttl_milliseconds,
    )


def _decode_set_if_not_exists(reply: Any) -> wire.SetIfNotExistsReply:
    return wire.SetIfNotExistsReply(stored=reply.WhichOneof("result") == "stored")


def _decode_empty(reply: Any) -> wire.EmptyReply:
    return wire.EmptyReply()


# Dictionary

def _encode_dictionary_set(request: wire.DictionarySetRequest) -> Any:
    return cache_pb._DictionarySetRequest(
        dictionary_name=request.dictionary_name,
        items=[
            cache_pb._DictionaryFieldValuePair(field=name, value=value)
            for name, value in request.items
        ],
        ttl_milliseconds=request.ttl_milliseconds,
        refresh_ttl=request.refresh_ttl,
    )


def _encode_dictionary_get(request: wire.DictionaryGetRequest) -> Any:
    return cache_pb._DictionaryGetRequest(
        dictionary_name=request.dictionary_name,
        fields=request.fields,
    )


def _decode_dictionary_get(reply: Any) -> wire.DictionaryGetReply:
    if reply.WhichOneof("dictionary") != "found":
        return wire.DictionaryGetReply(found=False)
    return wire.DictionaryGetReply(
        found=True,
        items=[
            wire.FieldResult(result=wire.ECacheResult(int(item.result)), value=item.cache_body)
            for item in reply.found.items
        ],
    )


def _encode_dictionary_fetch(request: wire.DictionaryFetchRequest) -> Any:
    return cache_pb._DictionaryFetchRequest(dictionary_name=request.dictionary_name)


def _decode_dictionary_fetch(reply: Any) -> wire.DictionaryFetchReply:
    if reply.WhichOneof("dictionary") != "found":
        return wire.DictionaryFetchReply(found=False)
    return wire.DictionaryFetchReply(
        found=True,
        items=[(item.field, item.value) for item in reply.found.items],
    )


def _encode_dictionary_delete(request: wire.DictionaryDeleteRequest) -> Any:
    return cache_pb._DictionaryDeleteRequest(
        dictionary_name=request.dictionary_name,
        some=cache_pb._DictionaryDeleteRequest.Some(fields=request.fields),
    )


# Set

def _encode_set_union(request: wire.SetUnionRequest) -> Any:
    return cache_pb._SetUnionRequest(
        set_name=request.set_name,
        elements=request.elements,
        ttl_milliseconds=request.ttl_milliseconds,
        refresh_ttl=request.refresh_ttl,
    )


def _encode_set_fetch(request: wire.SetFetchRequest) -> Any:
    return cache_pb._SetFetchRequest(set_name=request.set_name)


def _decode_set_fetch(reply: Any) -> wire.SetFetchReply:
    if reply.WhichOneof("set") != "found":
        return wire.SetFetchReply(found=False)
    return wire.SetFetchReply(found=True, elements=list(reply.found.elements))


def _encode_set_difference(request: wire.SetDifferenceRequest) -> Any:
    subtrahend = cache_pb._SetDifferenceRequest._Subtrahend(
        set=cache_pb._SetDifferenceRequest._Subtrahend._Set(elements=request.elements)
    )
    return cache_pb._SetDifferenceRequest(set_name=request.set_name, subtrahend=subtrahend)


# List

def _encode_list_concatenate_back(request: wire.ListConcatenateRequest) -> Any:
    return cache_pb._ListConcatenateBackRequest(
        list_name=request.list_name,
        values=request.values,
        ttl_milliseconds=request.ttl_milliseconds,
        refresh_ttl=request.refresh_ttl,
        truncate_front_to_size=request.truncate_to_size,
    )


def _encode_list_concatenate_front(request: wire.ListConcatenateRequest) -> Any:
    return cache_pb._ListConcatenateFrontRequest(
        list_name=request.list_name,
        values=request.values,
        ttl_milliseconds=request.ttl_milliseconds,
        refresh_ttl=request.refresh_ttl,
        truncate_back_to_size=request.truncate_to_size,
    )


def _decode_list_concatenate(reply: Any) -> wire.ListLengthReply:
    return wire.ListLengthReply(found=True, length=reply.list_length)


def _encode_list_fetch(request: wire.ListNameRequest) -> Any:
    return cache_pb._ListFetchRequest(list_name=request.list_name)


def _decode_list_fetch(reply: Any) -> wire.ListFetchReply:
    if reply.WhichOneof("list") != "found":
        return wire.ListFetchReply(found=False)
    return wire.ListFetchReply(found=True, values=list(reply.found.values))


def _encode_list_pop_front(request: wire.ListNameRequest) -> Any:
    return cache_pb._ListPopFrontRequest(list_name=request.list_name)


def _decode_list_pop_front(reply: Any) -> wire.ListPopReply:
    if reply.WhichOneof("list") != "found":
        return wire.ListPopReply(found=False)
    return wire.ListPopReply(found=True, value=reply.found.front)


def _encode_list_pop_back(request: wire.ListNameRequest) -> Any:
    return cache_pb._ListPopBackRequest(list_name=request.list_name)


def _decode_list_pop_back(reply: Any) -> wire.ListPopReply:
    if reply.WhichOneof("list") != "found":
        return wire.ListPopReply(found=False)
    return wire.ListPopReply(found=True, value=reply.found.back)


def _encode_list_length(request: wire.ListNameRequest) -> Any:
    return cache_pb._ListLengthRequest(list_name=request.list_name)


def _decode_list_length(reply: Any) -> wire.ListLengthReply:
    if reply.WhichOneof("list") != "found":
        return wire.ListLengthReply(found=False)
    return wire.ListLengthReply(found=True, length=reply.found.length)


# Control

def _encode_create_cache(request: wire.CacheNameRequest) -> Any:
    return control_pb._CreateCacheRequest(cache_name=request.cache_name)


def _encode_delete_cache(request: wire.CacheNameRequest) -> Any:
    return control_pb._DeleteCacheRequest(cache_name=request.cache_name)


def _encode_list_caches(request: wire.ListCachesRequest) -> Any:
    return control_pb._ListCachesRequest(next_token=request.next_token)


def _decode_list_caches(reply: Any) -> wire.ListCachesReply:
    return wire.ListCachesReply(
        cache_names=[cache.cache_name for cache in reply.cache],
        next_token=reply.next_token,
    )


def _encode_flush_cache(request: wire.CacheNameRequest) -> Any:
    return control_pb._FlushCacheRequest(cache_name=request.cache_name)


def _encode_create_signing_key(request: wire.CreateSigningKeyRequest) -> Any:
    return control_pb._CreateSigningKeyRequest(ttl_minutes=request.ttl_minutes)


def _decode_create_signing_key(reply: Any) -> wire.CreateSigningKeyReply:
    return wire.CreateSigningKeyReply(key=reply.key, expires_at=reply.expires_at)


def _encode_revoke_signing_key(request: wire.RevokeSigningKeyRequest) -> Any:
    return control_pb._RevokeSigningKeyRequest(key_id=request.key_id)


def _encode_list_signing_keys(request: wire.ListSigningKeysRequest) -> Any:
    return control_pb._ListSigningKeysRequest(next_token=request.next_token)


def _decode_list_signing_keys(reply: Any) -> wire.ListSigningKeysReply:
    return wire.ListSigningKeysReply(
        signing_keys=[
            wire.SigningKeyInfo(key_id=key.key_id, expires_at=key.expires_at)
            for key in reply.signing_key
        ],
        next_token=reply.next_token,
    )


# Topics

def _encode_topic_value(value: wire.TopicValue) -> Any:
    if value.text is not None:
        return pubsub_pb._TopicValue(text=value.text)
    return pubsub_pb._TopicValue(binary=value.binary or b"")


def _encode_publish(request: wire.PublishRequest) -> Any:
    return pubsub_pb._PublishRequest(
        cache_name=request.cache_name,
        topic=request.topic,
        value=_encode_topic_value(request.value),
    )


def _encode_subscribe(request: wire.SubscribeRequest) -> Any:
    return pubsub_pb._SubscriptionRequest(
        cache_name=request.cache_name,
        topic=request.topic,
        resume_at_topic_sequence_number=request.resume_at_topic_sequence_number,
    )


def decode_subscription_item(item: Any) -> wire.SubscriptionMessage:
    """Convert one ``_SubscriptionItem`` from the stream."""
    kind = item.WhichOneof("kind")
    if kind == "item":
        value = item.item.value
        if value.WhichOneof("kind") == "text":
            topic_value = wire.TopicValue(text=value.text)
        else:
            topic_value = wire.TopicValue(binary=value.binary)
        return wire.SubscriptionMessage(
            kind="item",
            topic_sequence_number=item.item.topic_sequence_number,
            value=topic_value,
        )
    if kind == "discontinuity":
        return wire.SubscriptionMessage(
            kind="discontinuity",
            last_topic_sequence=item.discontinuity.last_topic_sequence,
            new_topic_sequence=item.discontinuity.new_topic_sequence,
        )
    return wire.SubscriptionMessage(kind=kind or "unknown")


# Leaderboards

def _encode_leaderboard_upsert(request: wire.LeaderboardUpsertRequest) -> Any:
    return leaderboard_pb._UpsertElementsRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
        elements=[
            leaderboard_pb._Element(id=element_id, score=score)
            for element_id, score in request.elements
        ],
    )


def _encode_leaderboard_get_by_score(request: wire.LeaderboardGetByScoreRequest) -> Any:
    message = leaderboard_pb._GetByScoreRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
        offset=request.offset,
        limit_elements=request.count,
        order=int(request.order),
    )
    if request.min_score is None:
        message.score_range.unbounded_min.SetInParent()
    else:
        message.score_range.min_inclusive = request.min_score
    if request.max_score is None:
        message.score_range.unbounded_max.SetInParent()
    else:
        message.score_range.max_exclusive = request.max_score
    return message


def _encode_leaderboard_get_by_rank(request: wire.LeaderboardGetByRankRequest) -> Any:
    return leaderboard_pb._GetByRankRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
        rank_range=leaderboard_pb._RankRange(
            start_inclusive=request.start_rank,
            end_exclusive=request.end_rank,
        ),
        order=int(request.order),
    )


def _encode_leaderboard_get_rank(request: wire.LeaderboardIdsRequest) -> Any:
    return leaderboard_pb._GetRankRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
        ids=request.ids,
        order=int(request.order),
    )


def _decode_ranked_elements(reply: Any) -> wire.RankedElementsReply:
    return wire.RankedElementsReply(
        elements=[
            wire.RankedElementInfo(id=element.id, score=element.score, rank=element.rank)
            for element in reply.elements
        ]
    )


def _encode_leaderboard_length(request: wire.LeaderboardRequest) -> Any:
    return leaderboard_pb._GetLeaderboardLengthRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
    )


def _decode_leaderboard_length(reply: Any) -> wire.LeaderboardLengthReply:
    return wire.LeaderboardLengthReply(count=reply.count)


def _encode_leaderboard_remove(request: wire.LeaderboardIdsRequest) -> Any:
    return leaderboard_pb._RemoveElementsRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
        ids=request.ids,
    )


def _encode_leaderboard_delete(request: wire.LeaderboardRequest) -> Any:
    return leaderboard_pb._DeleteLeaderboardRequest(
        cache_name=request.cache_name,
        leaderboard=request.leaderboard,
    )


# Storage

def _encode_store_value(value: wire.StoreValue) -> Any:
    if value.integer_value is not None:
        return store_pb._StoreValue(integer_value=value.integer_value)
    if value.double_value is not None:
        return store_pb._StoreValue(double_value=value.double_value)
    if value.string_value is not None:
        return store_pb._StoreValue(string_value=value.string_value)
    return store_pb._StoreValue(bytes_value=value.bytes_value or b"")


def _encode_store_get(request: wire.StoreKeyRequest) -> Any:
    return store_pb._StoreGetRequest(key=request.key)


def _decode_store_get(reply: Any) -> wire.StoreGetReply:
    kind = reply.value.WhichOneof("value")
    if kind is None:
        return wire.StoreGetReply(value=wire.StoreValue())
    return wire.StoreGetReply(value=wire.StoreValue(**{kind: getattr(reply.value, kind)}))


def _encode_store_put(request: wire.StorePutRequest) -> Any:
    return store_pb._StorePutRequest(key=request.key, value=_encode_store_value(request.value))


def _encode_store_delete(request: wire.StoreKeyRequest) -> Any:
    return store_pb._StoreDeleteRequest(key=request.key)


def _encode_create_store(request: wire.StoreNameRequest) -> Any:
    return control_pb._CreateStoreRequest(store_name=request.store_name)


def _encode_delete_store(request: wire.StoreNameRequest) -> Any:
    return control_pb._DeleteStoreRequest(store_name=request.store_name)


def _encode_list_stores(request: wire.ListStoresRequest) -> Any:
    return control_pb._ListStoresRequest(next_token=request.next_token)


def _decode_list_stores(reply: Any) -> wire.ListStoresReply:
    return wire.ListStoresReply(
        store_names=[store.store_name for store in reply.store],
        next_token=reply.next_token,
    )


# Auth

def encode_permissions(permissions: wire.WirePermissions) -> Any:
    """Build the protobuf ``Permissions`` message."""
    message = permissions_pb.Permissions()
    if permissions.super_user:
        message.super_user = permissions_pb.SuperUserPermissions.Value("SuperUser")
        return message

    explicit = message.explicit
    for entry in permissions.explicit:
        permission = explicit.permissions.add()
        if isinstance(entry, wire.CachePermissionEntry):
            cache_permission = permission.cache_permissions
            cache_permission.role = permissions_pb.CacheRole.Value(entry.role)
            if entry.cache_name is None:
                cache_permission.all_caches.SetInParent()
            else:
                cache_permission.cache_selector.cache_name = entry.cache_name
            if entry.item_key is not None:
                cache_permission.item_selector.key = entry.item_key
            elif entry.item_key_prefix is not None:
                cache_permission.item_selector.key_prefix = entry.item_key_prefix
            elif entry.all_items:
                cache_permission.all_items.SetInParent()
        else:
            topic_permission = permission.topic_permissions
            topic_permission.role = permissions_pb.TopicRole.Value(entry.role)
            if entry.cache_name is None:
                topic_permission.all_caches.SetInParent()
            else:
                topic_permission.cache_selector.cache_name = entry.cache_name
            if entry.topic_name is None:
                topic_permission.all_topics.SetInParent()
            else:
                topic_permission.topic_selector.topic_name = entry.topic_name
    return message


def _encode_generate_api_token(request: wire.GenerateApiTokenRequest) -> Any:
    message = auth_pb._GenerateApiTokenRequest(
        auth_token=request.auth_token,
        permissions=encode_permissions(request.permissions),
    )
    if request.valid_for_seconds is None:
        message.never.SetInParent()
    else:
        message.expires.valid_for_seconds = request.valid_for_seconds
    return message


def _decode_generate_api_token(reply: Any) -> wire.TokenReply:
    return wire.TokenReply(
        api_key=reply.api_key,
        endpoint=reply.endpoint,
        valid_until=reply.valid_until,
        refresh_token=reply.refresh_token,
    )


def _encode_refresh_api_token(request: wire.RefreshApiTokenRequest) -> Any:
    return auth_pb._RefreshApiTokenRequest(
        api_key=request.api_key,
        refresh_token=request.refresh_token,
    )


def _encode_generate_disposable_token(request: wire.GenerateDisposableTokenRequest) -> Any:
    message = token_pb._GenerateDisposableTokenRequest(
        auth_token=request.auth_token,
        permissions=encode_permissions(request.permissions),
    )
    message.expires.valid_for_seconds = request.valid_for_seconds
    return message


def _decode_generate_disposable_token(reply: Any) -> wire.TokenReply:
    return wire.TokenReply(
        api_key=reply.api_key,
        endpoint=reply.endpoint,
        valid_until=reply.valid_until,
    )


ENCODERS: dict[str, Callable[[Any], Any]] = {
    wire.GET: _encode_get,
    wire.SET: _encode_set,
    wire.DELETE: _encode_delete,
    wire.INCREMENT: _encode_increment,
    wire.SET_IF_NOT_EXISTS: _encode_set_if_not_exists,
    wire.DICTIONARY_SET: _encode_dictionary_set,
    wire.DICTIONARY_GET: _encode_dictionary_get,
    wire.DICTIONARY_FETCH: _encode_dictionary_fetch,
    wire.DICTIONARY_DELETE: _encode_dictionary_delete,
    wire.SET_UNION: _encode_set_union,
    wire.SET_FETCH: _encode_set_fetch,
    wire.SET_DIFFERENCE: _encode_set_difference,
    wire.LIST_CONCATENATE_BACK: _encode_list_concatenate_back,
    wire.LIST_CONCATENATE_FRONT: _encode_list_concatenate_front,
    wire.LIST_FETCH: _encode_list_fetch,
    wire.LIST_POP_FRONT: _encode_list_pop_front,
    wire.LIST_POP_BACK: _encode_list_pop_back,
    wire.LIST_LENGTH: _encode_list_length,
    wire.CREATE_CACHE: _encode_create_cache,
    wire.DELETE_CACHE: _encode_delete_cache,
    wire.LIST_CACHES: _encode_list_caches,
    wire.FLUSH_CACHE: _encode_flush_cache,
    wire.CREATE_SIGNING_KEY: _encode_create_signing_key,
    wire.REVOKE_SIGNING_KEY: _encode_revoke_signing_key,
    wire.LIST_SIGNING_KEYS: _encode_list_signing_keys,
    wire.PUBLISH: _encode_publish,
    wire.SUBSCRIBE: _encode_subscribe,
    wire.LEADERBOARD_UPSERT: _encode_leaderboard_upsert,
    wire.LEADERBOARD_GET_BY_SCORE: _encode_leaderboard_get_by_score,
    wire.LEADERBOARD_GET_BY_RANK: _encode_leaderboard_get_by_rank,
    wire.LEADERBOARD_GET_RANK: _encode_leaderboard_get_rank,
    wire.LEADERBOARD_LENGTH: _encode_leaderboard_length,
    wire.LEADERBOARD_REMOVE: _encode_leaderboard_remove,
    wire.LEADERBOARD_DELETE: _encode_leaderboard_delete,
    wire.STORE_GET: _encode_store_get,
    wire.STORE_PUT: _encode_store_put,
    wire.STORE_DELETE: _encode_store_delete,
    wire.CREATE_STORE: _encode_create_store,
    wire.DELETE_STORE: _encode_delete_store,
    wire.LIST_STORES: _encode_list_stores,
    wire.GENERATE_API_TOKEN: _encode_generate_api_token,
    wire.REFRESH_API_TOKEN: _encode_refresh_api_token,
    wire.GENERATE_DISPOSABLE_TOKEN: _encode_generate_disposable_token,
}

DECODERS: dict[str, Callable[[Any], Any]] = {
    wire.GET: _decode_get,
    wire.SET: _decode_empty,
    wire.DELETE: _decode_empty,
    wire.INCREMENT: _decode_increment,
    wire.SET_IF_NOT_EXISTS: _decode_set_if_not_exists,
    wire.DICTIONARY_SET: _decode_empty,
    wire.DICTIONARY_GET: _decode_dictionary_get,
    wire.DICTIONARY_FETCH: _decode_dictionary_fetch,
    wire.DICTIONARY_DELETE: _decode_empty,
    wire.SET_UNION: _decode_empty,
    wire.SET_FETCH: _decode_set_fetch,
    wire.SET_DIFFERENCE: _decode_empty,
    wire.LIST_CONCATENATE_BACK: _decode_list_concatenate,
    wire.LIST_CONCATENATE_FRONT: _decode_list_concatenate,
    wire.LIST_FETCH: _decode_list_fetch,
    wire.LIST_POP_FRONT: _decode_list_pop_front,
    wire.LIST_POP_BACK: _decode_list_pop_back,
    wire.LIST_LENGTH: _decode_list_length,
    wire.CREATE_CACHE: _decode_empty,
    wire.DELETE_CACHE: _decode_empty,
    wire.LIST_CACHES: _decode_list_caches,
    wire.FLUSH_CACHE: _decode_empty,
    wire.CREATE_SIGNING_KEY: _decode_create_signing_key,
    wire.REVOKE_SIGNING_KEY: _decode_empty,
    wire.LIST_SIGNING_KEYS: _decode_list_signing_keys,
    wire.PUBLISH: _decode_empty,
    wire.LEADERBOARD_UPSERT: _decode_empty,
    wire.LEADERBOARD_GET_BY_SCORE: _decode_ranked_elements,
    wire.LEADERBOARD_GET_BY_RANK: _decode_ranked_elements,
    wire.LEADERBOARD_GET_RANK: _decode_ranked_elements,
    wire.LEADERBOARD_LENGTH: _decode_leaderboard_length,
    wire.LEADERBOARD_REMOVE: _decode_empty,
    wire.LEADERBOARD_DELETE: _decode_empty,
    wire.STORE_GET: _decode_store_get,
    wire.STORE_PUT: _decode_empty,
    wire.STORE_DELETE: _decode_empty,
    wire.CREATE_STORE: _decode_empty,
    wire.DELETE_STORE: _decode_empty,
    wire.LIST_STORES: _decode_list_stores,
    wire.GENERATE_API_TOKEN: _decode_generate_api_token,
    wire.REFRESH_API_TOKEN: _decode_generate_api_token,
    wire.GENERATE_DISPOSABLE_TOKEN: _decode_generate_disposable_token,
}

"""Tests for dictionary, set and list operations."""

from datetime import timedelta

import pytest

from skyvault.client.exceptions import ErrorCode
from skyvault.client.responses.collections import (
    DictionaryFetch,
    DictionaryGetField,
    DictionaryGetFields,
    DictionaryRemoveFields,
    DictionarySetFields,
    ListConcatenateBack,
    ListConcatenateFront,
    ListFetch,
    ListLength,
    ListPopBack,
    ListPopFront,
    SetAddElements,
    SetFetch,
    SetRemoveElements,
)
from skyvault.client.responses.scalar import CacheGet
from skyvault.client.validators import CollectionTtl
from tests.helpers import CACHE_NAME


class TestDictionary:
    """Test dictionary operations."""

    @pytest.mark.asyncio
    async def test_set_and_fetch(self, cache_client):
        """Test stored fields are fetched back."""
        response = await cache_client.dictionary_set_fields(
            CACHE_NAME, "profile", {"name": "ada", b"lang": b"en"}
        )
        assert isinstance(response, DictionarySetFields.Success)

        fetched = await cache_client.dictionary_fetch(CACHE_NAME, "profile")

        assert isinstance(fetched, DictionaryFetch.Hit)
        assert fetched.value_dictionary_string_string == {"name": "ada", "lang": "en"}

    @pytest.mark.asyncio
    async def test_fetch_missing(self, cache_client):
        """Test fetching an absent dictionary is a miss."""
        assert isinstance(await cache_client.dictionary_fetch(CACHE_NAME, "absent"), DictionaryFetch.Miss)

    @pytest.mark.asyncio
    async def test_get_fields_keeps_request_order(self, cache_client):
        """Test per-field results follow the requested order."""
        await cache_client.dictionary_set_fields(CACHE_NAME, "profile", {"a": "1", "c": "3"})

        response = await cache_client.dictionary_get_fields(CACHE_NAME, "profile", ["c", "b", "a"])

        assert isinstance(response, DictionaryGetFields.Hit)
        first, second, third = response.responses
        assert isinstance(first, DictionaryGetField.Hit) and first.value_string == "3"
        assert isinstance(second, DictionaryGetField.Miss)
        assert isinstance(third, DictionaryGetField.Hit) and third.field_string == "a"
        assert response.value_dictionary_string_string == {"c": "3", "a": "1"}

    @pytest.mark.asyncio
    async def test_get_field(self, cache_client):
        """Test single-field lookups for present and absent fields."""
        await cache_client.dictionary_set_fields(CACHE_NAME, "profile", {"name": "ada"})

        hit = await cache_client.dictionary_get_field(CACHE_NAME, "profile", "name")
        field_miss = await cache_client.dictionary_get_field(CACHE_NAME, "profile", "age")
        dictionary_miss = await cache_client.dictionary_get_field(CACHE_NAME, "absent", "name")

        assert isinstance(hit, DictionaryGetField.Hit)
        assert hit.value_string == "ada"
        assert isinstance(field_miss, DictionaryGetField.Miss)
        assert isinstance(dictionary_miss, DictionaryGetField.Miss)

    @pytest.mark.asyncio
    async def test_get_field_empty_name(self, cache_client, backend):
        """Test an empty field name is rejected without an RPC."""
        response = await cache_client.dictionary_get_field(CACHE_NAME, "profile", "")

        assert isinstance(response, DictionaryGetField.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

    @pytest.mark.asyncio
    async def test_get_fields_rejects_bare_string(self, cache_client):
        """Test a single string is not accepted as a field list."""
        response = await cache_client.dictionary_get_fields(CACHE_NAME, "profile", "name")

        assert isinstance(response, DictionaryGetFields.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_remove_fields(self, cache_client):
        """Test removed fields disappear and the last removal drops the dictionary."""
        await cache_client.dictionary_set_fields(CACHE_NAME, "profile", {"a": "1", "b": "2"})

        response = await cache_client.dictionary_remove_fields(CACHE_NAME, "profile", ["a"])
        assert isinstance(response, DictionaryRemoveFields.Success)
        fetched = await cache_client.dictionary_fetch(CACHE_NAME, "profile")
        assert fetched.value_dictionary_string_string == {"b": "2"}

        await cache_client.dictionary_remove_fields(CACHE_NAME, "profile", ["b"])
        assert isinstance(await cache_client.dictionary_fetch(CACHE_NAME, "profile"), DictionaryFetch.Miss)

    @pytest.mark.asyncio
    async def test_wrong_type(self, cache_client):
        """Test dictionary operations on a scalar item fail the precondition."""
        await cache_client.set(CACHE_NAME, "scalar", "value")

        response = await cache_client.dictionary_fetch(CACHE_NAME, "scalar")

        assert isinstance(response, DictionaryFetch.Error)
        assert response.error_code == ErrorCode.FAILED_PRECONDITION_ERROR


class TestSet:
    """Test set operations."""

    @pytest.mark.asyncio
    async def test_add_and_fetch(self, cache_client):
        """Test elements are deduplicated."""
        response = await cache_client.set_add_elements(CACHE_NAME, "tags", ["a", "b", "a"])
        assert isinstance(response, SetAddElements.Success)

        fetched = await cache_client.set_fetch(CACHE_NAME, "tags")

        assert isinstance(fetched, SetFetch.Hit)
        assert fetched.value_set_string == {"a", "b"}

    @pytest.mark.asyncio
    async def test_remove_elements(self, cache_client):
        """Test removing elements, then removing the last one."""
        await cache_client.set_add_elements(CACHE_NAME, "tags", ["a", "b"])

        response = await cache_client.set_remove_elements(CACHE_NAME, "tags", ["a", "missing"])
        assert isinstance(response, SetRemoveElements.Success)
        assert (await cache_client.set_fetch(CACHE_NAME, "tags")).value_set_bytes == {b"b"}

        await cache_client.set_remove_elements(CACHE_NAME, "tags", ["b"])
        assert isinstance(await cache_client.set_fetch(CACHE_NAME, "tags"), SetFetch.Miss)

    @pytest.mark.asyncio
    async def test_wrong_type(self, cache_client):
        """Test set writes on a list fail the precondition."""
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["x"])

        response = await cache_client.set_add_elements(CACHE_NAME, "queue", ["a"])

        assert isinstance(response, SetAddElements.Error)
        assert response.error_code == ErrorCode.FAILED_PRECONDITION_ERROR

    @pytest.mark.asyncio
    async def test_scalar_get_on_set(self, cache_client):
        """Test a scalar get on a collection fails the precondition."""
        await cache_client.set_add_elements(CACHE_NAME, "tags", ["a"])

        response = await cache_client.get(CACHE_NAME, "tags")

        assert isinstance(response, CacheGet.Error)
        assert response.error_code == ErrorCode.FAILED_PRECONDITION_ERROR


class TestList:
    """Test list operations."""

    @pytest.mark.asyncio
    async def test_concatenate_back_and_front(self, cache_client):
        """Test appends and prepends keep element order."""
        back = await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["b", "c"])
        front = await cache_client.list_concatenate_front(CACHE_NAME, "queue", ["z", "a"])

        assert isinstance(back, ListConcatenateBack.Success)
        assert back.list_length == 2
        assert isinstance(front, ListConcatenateFront.Success)
        assert front.list_length == 4

        fetched = await cache_client.list_fetch(CACHE_NAME, "queue")
        assert isinstance(fetched, ListFetch.Hit)
        assert fetched.value_list_string == ["z", "a", "b", "c"]

    @pytest.mark.asyncio
    async def test_concatenate_back_truncates_front(self, cache_client):
        """Test appending past the limit drops the oldest values."""
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["1", "2", "3"])

        response = await cache_client.list_concatenate_back(
            CACHE_NAME, "queue", ["4", "5"], truncate_front_to_size=3
        )

        assert response.list_length == 3
        assert (await cache_client.list_fetch(CACHE_NAME, "queue")).value_list_string == ["3", "4", "5"]

    @pytest.mark.asyncio
    async def test_concatenate_front_truncates_back(self, cache_client):
        """Test prepending past the limit drops values at the back."""
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["1", "2", "3"])

        response = await cache_client.list_concatenate_front(
            CACHE_NAME, "queue", ["0"], truncate_back_to_size=2
        )

        assert response.list_length == 2
        assert (await cache_client.list_fetch(CACHE_NAME, "queue")).value_list_string == ["0", "1"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("size", [0, -3])
    async def test_invalid_truncate_size(self, cache_client, size):
        """Test non-positive truncate sizes are rejected."""
        response = await cache_client.list_concatenate_back(
            CACHE_NAME, "queue", ["1"], truncate_front_to_size=size
        )

        assert isinstance(response, ListConcatenateBack.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_pop_front_and_back(self, cache_client):
        """Test pops take from the right end until the list is gone."""
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["a", "b", "c"])

        front = await cache_client.list_pop_front(CACHE_NAME, "queue")
        back = await cache_client.list_pop_back(CACHE_NAME, "queue")
        last = await cache_client.list_pop_front(CACHE_NAME, "queue")

        assert isinstance(front, ListPopFront.Hit) and front.value_string == "a"
        assert isinstance(back, ListPopBack.Hit) and back.value_string == "c"
        assert last.value_string == "b"
        assert isinstance(await cache_client.list_pop_back(CACHE_NAME, "queue"), ListPopBack.Miss)
        assert isinstance(await cache_client.list_fetch(CACHE_NAME, "queue"), ListFetch.Miss)

    @pytest.mark.asyncio
    async def test_length(self, cache_client):
        """Test length of present and absent lists."""
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["a", "b"])

        length = await cache_client.list_length(CACHE_NAME, "queue")

        assert isinstance(length, ListLength.Hit)
        assert length.length == 2
        assert isinstance(await cache_client.list_length(CACHE_NAME, "absent"), ListLength.Miss)


class TestCollectionTtl:
    """Test TTL refresh behaviour on collection writes."""

    @pytest.mark.asyncio
    async def test_refresh_on_update(self, cache_client, clock):
        """Test each write resets the TTL by default."""
        ttl = CollectionTtl.of(timedelta(seconds=10))
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["a"], ttl=ttl)

        clock.advance(8)
        await cache_client.list_concatenate_back(CACHE_NAME, "queue", ["b"], ttl=ttl)
        clock.advance(8)

        assert (await cache_client.list_length(CACHE_NAME, "queue")).length == 2

    @pytest.mark.asyncio
    async def test_no_refresh_on_update(self, cache_client, clock):
        """Test the TTL is only set at creation without refresh."""
        ttl = CollectionTtl.of(timedelta(seconds=10)).with_no_refresh_ttl_on_updates()
        await cache_client.set_add_elements(CACHE_NAME, "tags", ["a"], ttl=ttl)

        clock.advance(8)
        await cache_client.set_add_elements(CACHE_NAME, "tags", ["b"], ttl=ttl)
        clock.advance(3)

        assert isinstance(await cache_client.set_fetch(CACHE_NAME, "tags"), SetFetch.Miss)

    @pytest.mark.asyncio
    async def test_default_ttl_applies(self, cache_client, clock):
        """Test collections use the client's default TTL when none is given."""
        await cache_client.dictionary_set_fields(CACHE_NAME, "profile", {"a": "1"})

        clock.advance(61)

        assert isinstance(await cache_client.dictionary_fetch(CACHE_NAME, "profile"), DictionaryFetch.Miss)

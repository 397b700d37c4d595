"""Tests for round-robin dispatch, concurrency limits and eager connection."""

import asyncio
from datetime import timedelta

import pytest

from skyvault.client.cache_client import CacheClient
from skyvault.client.data import DataClient
from skyvault.client.exceptions import InvalidArgumentException
from skyvault.client.pool import DataClientPool
from skyvault.client.responses.scalar import CacheGet
from skyvault.client.transport.local import LocalBackend, LocalTransport
from tests.helpers import CACHE_NAME


def make_pool(configuration, size: int, limit: int = 10, backend: LocalBackend | None = None) -> DataClientPool:
    backend = backend or LocalBackend()
    clients = [
        DataClient(LocalTransport(backend, f"cache-{i}"), configuration)
        for i in range(size)
    ]
    return DataClientPool(clients, limit)


class TestRoundRobin:
    """Test strict rotation over the pool."""

    @pytest.mark.parametrize("size", [1, 2, 3, 5])
    def test_visits_every_client_before_repeating(self, configuration, size):
        """Test each window of N picks contains all N clients."""
        pool = make_pool(configuration, size)

        picks = [pool.next() for _ in range(size * 4)]

        for start in range(0, len(picks), size):
            window = picks[start:start + size]
            assert len({id(client) for client in window}) == size

        assert picks[:size] == pool.clients

    @pytest.mark.asyncio
    async def test_requests_spread_evenly(self, backend, credential_provider, configuration):
        """Test requests through the client land on every channel equally."""
        config = configuration.with_num_channels(4)
        client = CacheClient(
            credential_provider, config, timedelta(seconds=60), backend.transport_factory()
        )
        try:
            for _ in range(12):
                assert isinstance(await client.get(CACHE_NAME, "key"), CacheGet.Miss)

            counts = [data_client.transport.request_count for data_client in client._pool.clients]
            assert counts == [3, 3, 3, 3]
        finally:
            await client.close()

    def test_empty_pool_rejected(self, configuration):
        """Test a pool needs at least one client."""
        with pytest.raises(InvalidArgumentException):
            DataClientPool([], 10)


class TestConcurrencyLimit:
    """Test the semaphore gate on in-flight requests."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [1, 3, 8])
    async def test_never_exceeds_limit(self, credential_provider, configuration, limit):
        """Test no more than the configured number of requests run at once."""
        backend = LocalBackend(latency=0.02)
        backend.create_cache(CACHE_NAME)
        config = configuration.with_num_channels(2).with_max_concurrent_requests(limit)
        client = CacheClient(
            credential_provider, config, timedelta(seconds=60), backend.transport_factory()
        )
        try:
            responses = await asyncio.gather(
                *(client.get(CACHE_NAME, f"key-{i}") for i in range(limit * 4))
            )
        finally:
            await client.close()

        assert all(isinstance(response, CacheGet.Miss) for response in responses)
        assert backend.max_in_flight == limit

    @pytest.mark.asyncio
    async def test_waiting_callers_proceed_when_slot_frees(self, configuration):
        """Test callers beyond the limit block rather than fail."""
        backend = LocalBackend(latency=0.01)
        backend.create_cache(CACHE_NAME)
        pool = make_pool(configuration, 1, limit=1, backend=backend)

        from skyvault.client import wire

        replies = await asyncio.gather(
            *(
                pool.invoke(wire.GET, wire.GetRequest(key=b"k"), cache_name=CACHE_NAME)
                for _ in range(5)
            )
        )

        assert len(replies) == 5
        assert backend.max_in_flight == 1
        assert backend.request_count == 5


class TestEagerConnect:
    """Test waiting for channels at construction."""

    @pytest.mark.asyncio
    async def test_connects_all_channels(self, backend, credential_provider, configuration):
        """Test eager connection readies every channel."""
        client = await CacheClient.create(
            credential_provider,
            configuration.with_num_channels(3),
            timedelta(seconds=60),
            eager_connect_timeout=1.0,
            transport_factory=backend.transport_factory(),
        )
        try:
            assert all(c.transport.is_ready for c in client._pool.clients)
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_timeout_does_not_fail_construction(self, credential_provider, configuration):
        """Test a connect timeout still returns a usable client."""
        backend = LocalBackend(connect_delay=5.0)
        backend.create_cache(CACHE_NAME)

        client = await CacheClient.create(
            credential_provider,
            configuration,
            timedelta(seconds=60),
            eager_connect_timeout=0.05,
            transport_factory=backend.transport_factory(),
        )
        try:
            assert isinstance(await client.get(CACHE_NAME, "key"), CacheGet.Miss)
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_zero_timeout_skips_wait(self, configuration):
        """Test a timeout of 0 does not connect."""
        pool = make_pool(configuration, 2)

        assert await pool.connect(0) is False
        assert not any(c.transport.is_ready for c in pool.clients)

    @pytest.mark.asyncio
    async def test_negative_timeout_rejected(self, backend, credential_provider, configuration):
        """Test a negative eager timeout raises."""
        with pytest.raises(InvalidArgumentException):
            await CacheClient.create(
                credential_provider,
                configuration,
                timedelta(seconds=60),
                eager_connect_timeout=-1,
                transport_factory=backend.transport_factory(),
            )

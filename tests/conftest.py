"""Shared fixtures for SkyVault tests."""

from datetime import timedelta

import pytest
import pytest_asyncio

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client.auth_client import AuthClient
from skyvault.client.cache_client import CacheClient
from skyvault.client.leaderboard_client import LeaderboardClient
from skyvault.client.retry import NoRetryStrategy
from skyvault.client.storage_client import StorageClient
from skyvault.client.topic_client import TopicClient
from skyvault.client.transport.local import LocalBackend
from skyvault.config.profiles import laptop_configuration
from tests.helpers import CACHE_NAME, STORE_NAME, FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend(clock):
    backend = LocalBackend(clock=clock)
    backend.create_cache(CACHE_NAME)
    backend.create_store(STORE_NAME)
    return backend


@pytest.fixture
def credential_provider():
    return CredentialProvider(
        auth_token="test-token",
        control_endpoint="control.skyvault.local",
        cache_endpoint="cache.skyvault.local",
        token_endpoint="token.skyvault.local",
    )


@pytest.fixture
def configuration():
    return laptop_configuration().with_retry_strategy(NoRetryStrategy())


@pytest_asyncio.fixture
async def cache_client(backend, credential_provider, configuration):
    client = await CacheClient.create(
        credential_provider,
        configuration,
        timedelta(seconds=60),
        eager_connect_timeout=0,
        transport_factory=backend.transport_factory(),
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def topic_client(backend, credential_provider, configuration):
    client = TopicClient(credential_provider, configuration, backend.transport_factory())
    yield client
    await client.close()


@pytest_asyncio.fixture
async def leaderboard_client(backend, credential_provider, configuration):
    client = LeaderboardClient(credential_provider, configuration, backend.transport_factory())
    yield client
    await client.close()


@pytest_asyncio.fixture
async def auth_client(backend, credential_provider, configuration):
    client = AuthClient(credential_provider, configuration, backend.transport_factory())
    yield client
    await client.close()


@pytest_asyncio.fixture
async def storage_client(backend, credential_provider, configuration):
    client = await StorageClient.create(
        credential_provider,
        configuration,
        eager_connect_timeout=0,
        transport_factory=backend.transport_factory(),
    )
    yield client
    await client.close()

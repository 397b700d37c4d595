"""
Pool of data clients with round-robin dispatch and bounded concurrency.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio
import threading
from typing import Any

from loguru import logger

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client.data import DataClient
from skyvault.client.exceptions import InvalidArgumentException
from skyvault.client.transport.base import TransportFactory
from skyvault.config.configuration import Configuration


class DataClientPool:
    """
    Fixed set of data clients, one per channel.

    ``next()`` hands clients out in strict rotation. ``invoke()`` additionally
    holds a concurrency slot for the whole request, retries included, so no
    more than ``max_concurrent_requests`` requests are in flight at once.
    """

    def __init__(self, clients: list[DataClient], max_concurrent_requests: int):
        if not clients:
            raise InvalidArgumentException("A client pool needs at least one channel")
        if max_concurrent_requests < 1:
            raise InvalidArgumentException("max_concurrent_requests must be at least 1")

        self._clients = list(clients)
        self._index = 0
        self._lock = threading.Lock()
        self._semaphore = asyncio.Semaphore(max_concurrent_requests)
        self.max_concurrent_requests = max_concurrent_requests

    @classmethod
    def create(
        cls,
        credential_provider: CredentialProvider,
        endpoint: str,
        configuration: Configuration,
        transport_factory: TransportFactory,
        num_channels: int | None = None,
    ) -> "DataClientPool":
        grpc_configuration = configuration.grpc_configuration
        num_channels = num_channels or grpc_configuration.num_channels
        if num_channels < 1:
            raise InvalidArgumentException("num_channels must be at least 1")

        clients = [
            DataClient(transport_factory(credential_provider, endpoint, grpc_configuration), configuration)
            for _ in range(num_channels)
        ]
        logger.debug(f"Created {num_channels} channel(s) to {endpoint}")
        return cls(clients, grpc_configuration.max_concurrent_requests)

    @property
    def clients(self) -> list[DataClient]:
        return list(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    def next(self) -> DataClient:
        """Return the next client in rotation."""
        with self._lock:
            client = self._clients[self._index]
            self._index = (self._index + 1) % len(self._clients)
        return client

    async def invoke(self, method: str, request: Any, *, cache_name: str | None = None) -> Any:
        """Send a request on the next client, waiting for a free slot first."""
        client = self.next()
        async with self._semaphore:
            return await client.invoke(method, request, cache_name=cache_name)

    async def connect(self, timeout: float) -> bool:
        """
        Wait for every channel to become ready.

        Args:
            timeout: Seconds to wait; 0 skips the wait

        Returns:
            True if all channels connected in time

        Raises:
            InvalidArgumentException: If timeout is negative
        """
        if timeout < 0:
            raise InvalidArgumentException("Eager connection timeout must be non-negative")
        if timeout == 0:
            return False

        try:
            await asyncio.wait_for(
                asyncio.gather(*(client.connect() for client in self._clients)),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Channels did not become ready within {timeout}s; "
                f"continuing, requests will connect lazily"
            )
            return False

        logger.debug(f"Eagerly connected {len(self._clients)} channel(s)")
        return True

    async def close(self) -> None:
        await asyncio.gather(*(client.close() for client in self._clients))

"""
SkyVault leaderboard client.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Iterable, Mapping

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client import wire
from skyvault.client.error_mapper import handle_error
from skyvault.client.exceptions import Service
from skyvault.client.pool import DataClientPool
from skyvault.client.responses.leaderboard import (
    LeaderboardDelete,
    LeaderboardDeleteResponse,
    LeaderboardFetch,
    LeaderboardFetchResponse,
    LeaderboardLength,
    LeaderboardLengthResponse,
    LeaderboardRemoveElements,
    LeaderboardRemoveElementsResponse,
    LeaderboardUpsert,
    LeaderboardUpsertResponse,
    RankedElement,
)
from skyvault.client.transport import default_transport_factory
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import (
    LEADERBOARD_MAX_RESULTS,
    validate_cache_name,
    validate_configuration,
    validate_count,
    validate_elements,
    validate_ids,
    validate_leaderboard_name,
    validate_offset,
    validate_order,
    validate_rank_range,
    validate_score_range,
)
from skyvault.client.wire import Order
from skyvault.config.configuration import Configuration


def _ranked_elements(reply: wire.RankedElementsReply) -> list[RankedElement]:
    return [RankedElement(id=e.id, score=e.score, rank=e.rank) for e in reply.elements]


class Leaderboard:
    """
    One named leaderboard within a cache.

    Elements are integer ids with float scores. Ranks are 0-based positions
    in the requested order.
    """

    def __init__(self, pool: DataClientPool, cache_name: str, leaderboard_name: str):
        self._pool = pool
        self.cache_name = cache_name
        self.leaderboard_name = leaderboard_name

    def _validate(self) -> None:
        validate_cache_name(self.cache_name)
        validate_leaderboard_name(self.leaderboard_name)

    async def _invoke(self, method: str, request: wire.LeaderboardRequest):
        return await self._pool.invoke(method, request, cache_name=self.cache_name)

    async def upsert(self, elements: Mapping[int, float]) -> LeaderboardUpsertResponse:
        """Insert elements or update their scores."""
        try:
            self._validate()
            request = wire.LeaderboardUpsertRequest(
                self.cache_name, self.leaderboard_name, elements=validate_elements(elements)
            )
            await self._invoke(wire.LEADERBOARD_UPSERT, request)
        except Exception as e:
            return LeaderboardUpsert.Error(handle_error(e, Service.LEADERBOARD, "upsert"))
        return LeaderboardUpsert.Success()

    async def fetch_by_score(
        self,
        min_score: float | None = None,
        max_score: float | None = None,
        order: Order = Order.ASCENDING,
        offset: int = 0,
        count: int = LEADERBOARD_MAX_RESULTS,
    ) -> LeaderboardFetchResponse:
        """
        Fetch elements with ``min_score <= score < max_score``.

        Args:
            min_score: Inclusive lower bound; unbounded when None
            max_score: Exclusive upper bound; unbounded when None
            order: Ranking order
            offset: Number of matching elements to skip
            count: Maximum number of elements, at most 8192
        """
        try:
            self._validate()
            validate_score_range(min_score, max_score)
            request = wire.LeaderboardGetByScoreRequest(
                self.cache_name,
                self.leaderboard_name,
                min_score=min_score,
                max_score=max_score,
                offset=validate_offset(offset),
                count=validate_count(count),
                order=validate_order(order),
            )
            reply = await self._invoke(wire.LEADERBOARD_GET_BY_SCORE, request)
        except Exception as e:
            return LeaderboardFetch.Error(handle_error(e, Service.LEADERBOARD, "fetch_by_score"))
        return LeaderboardFetch.Success(_ranked_elements(reply))

    async def fetch_by_rank(
        self,
        start_rank: int,
        end_rank: int,
        order: Order = Order.ASCENDING,
    ) -> LeaderboardFetchResponse:
        """Fetch elements ranked in ``[start_rank, end_rank)``; the range may span at most 8192 ranks."""
        try:
            self._validate()
            validate_rank_range(start_rank, end_rank)
            request = wire.LeaderboardGetByRankRequest(
                self.cache_name,
                self.leaderboard_name,
                start_rank=start_rank,
                end_rank=end_rank,
                order=validate_order(order),
            )
            reply = await self._invoke(wire.LEADERBOARD_GET_BY_RANK, request)
        except Exception as e:
            return LeaderboardFetch.Error(handle_error(e, Service.LEADERBOARD, "fetch_by_rank"))
        return LeaderboardFetch.Success(_ranked_elements(reply))

    async def get_rank(self, ids: Iterable[int], order: Order = Order.ASCENDING) -> LeaderboardFetchResponse:
        """Look up the rank and score of specific ids; unknown ids are omitted."""
        try:
            self._validate()
            request = wire.LeaderboardIdsRequest(
                self.cache_name,
                self.leaderboard_name,
                ids=validate_ids(ids),
                order=validate_order(order),
            )
            reply = await self._invoke(wire.LEADERBOARD_GET_RANK, request)
        except Exception as e:
            return LeaderboardFetch.Error(handle_error(e, Service.LEADERBOARD, "get_rank"))
        return LeaderboardFetch.Success(_ranked_elements(reply))

    async def length(self) -> LeaderboardLengthResponse:
        try:
            self._validate()
            request = wire.LeaderboardRequest(self.cache_name, self.leaderboard_name)
            reply = await self._invoke(wire.LEADERBOARD_LENGTH, request)
        except Exception as e:
            return LeaderboardLength.Error(handle_error(e, Service.LEADERBOARD, "length"))
        return LeaderboardLength.Success(reply.count)

    async def remove_elements(self, ids: Iterable[int]) -> LeaderboardRemoveElementsResponse:
        try:
            self._validate()
            request = wire.LeaderboardIdsRequest(
                self.cache_name, self.leaderboard_name, ids=validate_ids(ids)
            )
            await self._invoke(wire.LEADERBOARD_REMOVE, request)
        except Exception as e:
            return LeaderboardRemoveElements.Error(
                handle_error(e, Service.LEADERBOARD, "remove_elements")
            )
        return LeaderboardRemoveElements.Success()

    async def delete(self) -> LeaderboardDeleteResponse:
        try:
            self._validate()
            request = wire.LeaderboardRequest(self.cache_name, self.leaderboard_name)
            await self._invoke(wire.LEADERBOARD_DELETE, request)
        except Exception as e:
            return LeaderboardDelete.Error(handle_error(e, Service.LEADERBOARD, "delete"))
        return LeaderboardDelete.Success()


class LeaderboardClient:
    """
    Async client for leaderboards.

    Example:
        ```python
        async with LeaderboardClient(credential_provider, configuration) as client:
            board = client.leaderboard("cache", "weekly")
            await board.upsert({1: 99.5, 2: 42.0})
            response = await board.fetch_by_rank(0, 10, order=Order.DESCENDING)
        ```
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        transport_factory: TransportFactory | None = None,
    ):
        validate_configuration(configuration)
        self.configuration = configuration
        self._pool = DataClientPool.create(
            credential_provider,
            credential_provider.cache_endpoint,
            configuration,
            transport_factory or default_transport_factory,
        )
        self._closed = False

    def leaderboard(self, cache_name: str, leaderboard_name: str) -> Leaderboard:
        """Return a handle; names are validated when an operation runs."""
        return Leaderboard(self._pool, cache_name, leaderboard_name)

    async def __aenter__(self) -> "LeaderboardClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._pool.close()
        for middleware in self.configuration.middlewares:
            await middleware.close()

"""Tests for leaderboard operations."""

import pytest
import pytest_asyncio

from skyvault.client.exceptions import ErrorCode
from skyvault.client.responses.leaderboard import (
    LeaderboardDelete,
    LeaderboardFetch,
    LeaderboardLength,
    LeaderboardRemoveElements,
    LeaderboardUpsert,
    RankedElement,
)
from skyvault.client.wire import Order
from tests.helpers import CACHE_NAME

SCORES = {1: 10.0, 2: 30.0, 3: 20.0, 4: 40.0}


@pytest.fixture
def board(leaderboard_client):
    return leaderboard_client.leaderboard(CACHE_NAME, "weekly")


@pytest_asyncio.fixture
async def filled_board(board):
    response = await board.upsert(SCORES)
    assert isinstance(response, LeaderboardUpsert.Success)
    return board


def ids(response) -> list[int]:
    assert isinstance(response, LeaderboardFetch.Success), response
    return [element.id for element in response.elements]


class TestUpsertAndLength:
    """Test writing elements."""

    @pytest.mark.asyncio
    async def test_length(self, filled_board):
        """Test length counts distinct ids."""
        response = await filled_board.length()

        assert isinstance(response, LeaderboardLength.Success)
        assert response.length == 4

    @pytest.mark.asyncio
    async def test_upsert_updates_score(self, filled_board):
        """Test upserting an existing id replaces its score."""
        await filled_board.upsert({1: 50.0})

        response = await filled_board.fetch_by_rank(0, 1, order=Order.DESCENDING)

        assert response.elements == [RankedElement(id=1, score=50.0, rank=0)]
        assert (await filled_board.length()).length == 4

    @pytest.mark.asyncio
    async def test_empty_upsert(self, board):
        """Test upserting nothing is rejected."""
        response = await board.upsert({})

        assert isinstance(response, LeaderboardUpsert.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_missing_board_has_no_elements(self, board):
        """Test an unknown leaderboard reads as empty."""
        assert (await board.length()).length == 0
        assert ids(await board.fetch_by_rank(0, 10)) == []


class TestFetchByScore:
    """Test score range queries."""

    @pytest.mark.asyncio
    async def test_unbounded(self, filled_board):
        """Test no bounds returns every element in ascending order."""
        assert ids(await filled_board.fetch_by_score()) == [1, 3, 2, 4]

    @pytest.mark.asyncio
    async def test_min_inclusive_max_exclusive(self, filled_board):
        """Test the range includes min and excludes max."""
        assert ids(await filled_board.fetch_by_score(min_score=20.0, max_score=40.0)) == [3, 2]

    @pytest.mark.asyncio
    async def test_descending_with_offset_and_count(self, filled_board):
        """Test order, offset and count combine."""
        response = await filled_board.fetch_by_score(order=Order.DESCENDING, offset=1, count=2)

        assert ids(response) == [2, 3]
        assert [element.rank for element in response.elements] == [1, 2]

    @pytest.mark.asyncio
    async def test_empty_range(self, board):
        """Test min >= max is rejected."""
        response = await board.fetch_by_score(min_score=5.0, max_score=5.0)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 8193])
    async def test_count_limits(self, board, count):
        """Test count must be between 1 and 8192."""
        response = await board.fetch_by_score(count=count)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR


class TestFetchByRank:
    """Test rank range queries."""

    @pytest.mark.asyncio
    async def test_ascending(self, filled_board):
        """Test ranks are 0-based positions in ascending score order."""
        response = await filled_board.fetch_by_rank(0, 2)

        assert response.elements == [
            RankedElement(id=1, score=10.0, rank=0),
            RankedElement(id=3, score=20.0, rank=1),
        ]

    @pytest.mark.asyncio
    async def test_descending(self, filled_board):
        """Test descending order ranks the highest score first."""
        assert ids(await filled_board.fetch_by_rank(1, 3, order=Order.DESCENDING)) == [2, 3]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("start,end", [(-1, 3), (3, 3), (5, 2), (0, 8193)])
    async def test_invalid_ranges(self, board, start, end):
        """Test malformed or oversized rank ranges are rejected."""
        response = await board.fetch_by_rank(start, end)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR


class TestGetRankAndRemove:
    """Test rank lookups and removals."""

    @pytest.mark.asyncio
    async def test_get_rank(self, filled_board):
        """Test ranks of requested ids; unknown ids are omitted."""
        response = await filled_board.get_rank([4, 1, 99])

        assert isinstance(response, LeaderboardFetch.Success)
        assert {element.id: element.rank for element in response.elements} == {1: 0, 4: 3}

    @pytest.mark.asyncio
    async def test_get_rank_descending(self, filled_board):
        """Test rank lookups honour the order."""
        response = await filled_board.get_rank([4], order=Order.DESCENDING)

        assert response.elements == [RankedElement(id=4, score=40.0, rank=0)]

    @pytest.mark.asyncio
    async def test_get_rank_requires_ids(self, board):
        """Test an empty id list is rejected."""
        response = await board.get_rank([])

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_remove_elements(self, filled_board):
        """Test removed ids disappear and ranks close up."""
        response = await filled_board.remove_elements([1, 99])

        assert isinstance(response, LeaderboardRemoveElements.Success)
        assert ids(await filled_board.fetch_by_rank(0, 10)) == [3, 2, 4]
        assert (await filled_board.get_rank([3])).elements[0].rank == 0

    @pytest.mark.asyncio
    async def test_delete(self, filled_board):
        """Test deleting empties the leaderboard."""
        assert isinstance(await filled_board.delete(), LeaderboardDelete.Success)

        assert (await filled_board.length()).length == 0


class TestArgumentTypes:
    """Test malformed ids, scores and bounds are rejected before any request."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "elements",
        [{1: "not-a-number"}, {"1": 10.0}, {1: float("nan")}, {True: 1.0}, [(1, 10.0)]],
        ids=["str-score", "str-id", "nan-score", "bool-id", "not-a-mapping"],
    )
    async def test_upsert_rejects_bad_elements(self, board, backend, elements):
        """Test ids must be integers and scores real numbers."""
        response = await board.upsert(elements)

        assert isinstance(response, LeaderboardUpsert.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_ids", ["1", b"\x01", 1, [1, "2"], [1.5]])
    async def test_get_rank_rejects_bad_ids(self, board, backend, bad_ids):
        """Test a string is not treated as a collection of ids."""
        response = await board.get_rank(bad_ids)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

    @pytest.mark.asyncio
    async def test_remove_rejects_string_ids(self, board):
        """Test removal validates ids the same way."""
        response = await board.remove_elements("12")

        assert isinstance(response, LeaderboardRemoveElements.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_score": "10"},
            {"max_score": None, "min_score": float("nan")},
            {"offset": 1.5},
            {"count": "10"},
            {"order": 7},
        ],
        ids=["str-min", "nan-min", "float-offset", "str-count", "unknown-order"],
    )
    async def test_fetch_by_score_rejects_bad_arguments(self, board, backend, kwargs):
        """Test score bounds, paging and order are type checked."""
        response = await board.fetch_by_score(**kwargs)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

    @pytest.mark.asyncio
    async def test_fetch_by_rank_rejects_float_ranks(self, board):
        """Test rank bounds must be integers."""
        response = await board.fetch_by_rank(0.0, 2)

        assert isinstance(response, LeaderboardFetch.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR

    @pytest.mark.asyncio
    async def test_integer_scores_accepted(self, board):
        """Test integer scores are accepted as numbers."""
        assert isinstance(await board.upsert({7: 3}), LeaderboardUpsert.Success)

        response = await board.get_rank([7])

        assert response.elements == [RankedElement(id=7, score=3.0, rank=0)]


class TestErrors:
    """Test names and service failures."""

    @pytest.mark.asyncio
    async def test_unknown_cache(self, leaderboard_client):
        """Test leaderboards in a missing cache report not found."""
        board = leaderboard_client.leaderboard("no-such-cache", "weekly")

        response = await board.upsert({1: 1.0})

        assert isinstance(response, LeaderboardUpsert.Error)
        assert response.error_code == ErrorCode.NOT_FOUND_ERROR

    @pytest.mark.asyncio
    async def test_blank_leaderboard_name(self, leaderboard_client, backend):
        """Test blank leaderboard names fail when an operation runs."""
        board = leaderboard_client.leaderboard(CACHE_NAME, " ")

        response = await board.length()

        assert isinstance(response, LeaderboardLength.Error)
        assert response.error_code == ErrorCode.INVALID_ARGUMENT_ERROR
        assert backend.request_count == 0

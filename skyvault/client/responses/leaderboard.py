"""
Responses for leaderboard operations.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from dataclasses import dataclass, field

from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase


@dataclass(frozen=True)
class RankedElement:
    """An element with its score and 0-based rank in the requested order."""

    id: int
    score: float
    rank: int


class LeaderboardUpsertResponse(ResponseBase):
    """Parent of the LeaderboardUpsert variants."""


class LeaderboardUpsert:
    @dataclass
    class Success(LeaderboardUpsertResponse):
        """The elements were inserted or their scores updated."""

    class Error(LeaderboardUpsertResponse, ErrorResponseMixin):
        """The upsert failed."""


class LeaderboardFetchResponse(ResponseBase):
    """Parent of the LeaderboardFetch variants, shared by fetch-by-score, fetch-by-rank and get-rank."""


class LeaderboardFetch:
    @dataclass
    class Success(LeaderboardFetchResponse):
        elements: list[RankedElement] = field(default_factory=list)

    class Error(LeaderboardFetchResponse, ErrorResponseMixin):
        """The fetch failed."""


class LeaderboardLengthResponse(ResponseBase):
    """Parent of the LeaderboardLength variants."""


class LeaderboardLength:
    @dataclass
    class Success(LeaderboardLengthResponse):
        length: int

    class Error(LeaderboardLengthResponse, ErrorResponseMixin):
        """The length lookup failed."""


class LeaderboardRemoveElementsResponse(ResponseBase):
    """Parent of the LeaderboardRemoveElements variants."""


class LeaderboardRemoveElements:
    @dataclass
    class Success(LeaderboardRemoveElementsResponse):
        """The elements were removed, or were not present."""

    class Error(LeaderboardRemoveElementsResponse, ErrorResponseMixin):
        """The removal failed."""


class LeaderboardDeleteResponse(ResponseBase):
    """Parent of the LeaderboardDelete variants."""


class LeaderboardDelete:
    @dataclass
    class Success(LeaderboardDeleteResponse):
        """The leaderboard was deleted."""

    class Error(LeaderboardDeleteResponse, ErrorResponseMixin):
        """The delete failed."""

"""
Token expiry helpers.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from datetime import datetime, timedelta, timezone


class ExpiresIn:
    """How long a generated token stays valid."""

    def __init__(self, valid_for: timedelta | None):
        self._valid_for = valid_for

    @classmethod
    def never(cls) -> "ExpiresIn":
        return cls(None)

    @classmethod
    def seconds(cls, seconds: int) -> "ExpiresIn":
        return cls(timedelta(seconds=seconds))

    @classmethod
    def minutes(cls, minutes: int) -> "ExpiresIn":
        return cls(timedelta(minutes=minutes))

    @classmethod
    def hours(cls, hours: int) -> "ExpiresIn":
        return cls(timedelta(hours=hours))

    @classmethod
    def days(cls, days: int) -> "ExpiresIn":
        return cls(timedelta(days=days))

    def does_expire(self) -> bool:
        return self._valid_for is not None

    def valid_for_seconds(self) -> int | None:
        if self._valid_for is None:
            return None
        return int(self._valid_for.total_seconds())

    def __repr__(self) -> str:
        if self._valid_for is None:
            return "ExpiresIn.never()"
        return f"ExpiresIn.seconds({self.valid_for_seconds()})"


class ExpiresAt:
    """Point in time a generated token stops being valid."""

    def __init__(self, epoch_seconds: int | None):
        self._epoch = epoch_seconds

    @classmethod
    def from_epoch(cls, epoch_seconds: int) -> "ExpiresAt":
        # The service reports 0 for tokens that never expire.
        return cls(epoch_seconds or None)

    def does_expire(self) -> bool:
        return self._epoch is not None

    def epoch(self) -> int | None:
        return self._epoch

    def as_datetime(self) -> datetime | None:
        if self._epoch is None:
            return None
        return datetime.fromtimestamp(self._epoch, tz=timezone.utc)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ExpiresAt) and other._epoch == self._epoch

    def __hash__(self) -> int:
        return hash(self._epoch)

    def __repr__(self) -> str:
        return f"ExpiresAt(epoch={self._epoch})"

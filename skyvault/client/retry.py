"""
Retry strategies with exponential backoff for SkyVault SDK.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, TypeVar, runtime_checkable

import grpc
from loguru import logger

from skyvault.client import wire

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset(
    {
        grpc.StatusCode.INTERNAL,
        grpc.StatusCode.UNAVAILABLE,
    }
)

# Replaying these could apply the mutation twice.
NON_IDEMPOTENT_METHODS = frozenset(
    {
        wire.INCREMENT,
        wire.LIST_CONCATENATE_BACK,
        wire.LIST_CONCATENATE_FRONT,
        wire.LIST_POP_FRONT,
        wire.LIST_POP_BACK,
        wire.PUBLISH,
        wire.GENERATE_API_TOKEN,
        wire.REFRESH_API_TOKEN,
    }
)


@dataclass(frozen=True)
class RetryableProps:
    """Facts about a failed attempt handed to a retry strategy."""

    status_code: grpc.StatusCode | None
    method: str
    attempt_number: int


class EligibilityStrategy(Protocol):
    """Decides whether a failed request may be retried at all."""

    def is_eligible_for_retry(self, props: RetryableProps) -> bool:
        ...


class DefaultEligibilityStrategy:
    """Retry transient server failures on idempotent methods only."""

    def is_eligible_for_retry(self, props: RetryableProps) -> bool:
        if props.status_code not in RETRYABLE_STATUS_CODES:
            return False
        return props.method not in NON_IDEMPOTENT_METHODS


@runtime_checkable
class RetryStrategy(Protocol):
    """Protocol for deciding whether and when a failed request is retried."""

    def determine_when_to_retry(self, props: RetryableProps) -> float | None:
        """
        Decide on a retry.

        Args:
            props: Details of the failed attempt

        Returns:
            Seconds to wait before retrying, or None to give up
        """
        ...


class NoRetryStrategy:
    """Never retries."""

    def determine_when_to_retry(self, props: RetryableProps) -> float | None:
        return None


class FixedCountRetryStrategy:
    """Retry eligible failures up to a fixed number of attempts with jittered backoff."""

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 0.1,
        max_delay: float = 2.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        eligibility_strategy: EligibilityStrategy | None = None,
    ):
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.eligibility_strategy = eligibility_strategy or DefaultEligibilityStrategy()

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given retry attempt."""
        delay = min(
            self.initial_delay * (self.exponential_base ** attempt),
            self.max_delay,
        )

        if self.jitter:
            delay = delay * (0.5 + random.random() * 0.5)

        return delay

    def determine_when_to_retry(self, props: RetryableProps) -> float | None:
        if not self.eligibility_strategy.is_eligible_for_retry(props):
            return None

        if props.attempt_number >= self.max_attempts:
            return None

        return self.calculate_delay(props.attempt_number - 1)

    def __repr__(self) -> str:
        return f"FixedCountRetryStrategy(max_attempts={self.max_attempts})"


def status_code_of(error: BaseException) -> grpc.StatusCode | None:
    """Extract a gRPC status code from an error, if it carries one."""
    if isinstance(error, grpc.RpcError):
        code = getattr(error, "code", None)
        if callable(code):
            return code()
    return None


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    method: str,
    strategy: RetryStrategy | None = None,
    **kwargs: Any,
) -> T:
    """
    Call an async function, retrying failures the strategy deems retryable.

    Args:
        func: Async function to call
        *args: Positional arguments for func
        method: Wire method name, used for eligibility checks
        strategy: Retry strategy (no retries when None)
        **kwargs: Keyword arguments for func

    Returns:
        Result of func

    Raises:
        The last error once the strategy gives up
    """
    strategy = strategy or NoRetryStrategy()
    attempt = 0

    while True:
        attempt += 1
        try:
            return await func(*args, **kwargs)
        except grpc.RpcError as e:
            props = RetryableProps(
                status_code=status_code_of(e),
                method=method,
                attempt_number=attempt,
            )
            delay = strategy.determine_when_to_retry(props)
            if delay is None:
                raise

            logger.debug(
                f"Retrying {method} after {props.status_code} "
                f"(attempt {attempt}, waiting {delay:.3f}s)"
            )
            await asyncio.sleep(delay)

"""
Request middleware hooks.

Middlewares see every RPC a client issues: once before it is sent and once
after it completes (successfully or not).

Author: Yobie Benjamin
Date: 2026-10-19
"""

import time
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from prometheus_client import CollectorRegistry, Counter, Histogram


@dataclass
class RequestContext:
    """State of one RPC as it passes through the middleware chain."""

    method: str
    request: Any
    cache_name: str | None = None
    started_at: float = field(default_factory=time.monotonic)
    reply: Any = None
    error: BaseException | None = None

    @property
    def elapsed_seconds(self) -> float:
        return time.monotonic() - self.started_at

    @property
    def outcome(self) -> str:
        return "error" if self.error is not None else "success"


class Middleware:
    """Base middleware; override the hooks you need."""

    async def on_request(self, context: RequestContext) -> None:
        """Called before the request is sent."""

    async def on_response(self, context: RequestContext) -> None:
        """Called after the request completed; ``context.error`` is set on failure."""

    async def close(self) -> None:
        """Release resources held by the middleware."""


class LoggingMiddleware(Middleware):
    """Middleware that logs all requests."""

    def __init__(self, log_level: str = "DEBUG"):
        """
        Initialize logging middleware.

        Args:
            log_level: Log level for request records
        """
        self.log_level = log_level

    async def on_request(self, context: RequestContext) -> None:
        logger.log(
            self.log_level,
            f"Issuing {context.method} (cache={context.cache_name})"
        )

    async def on_response(self, context: RequestContext) -> None:
        if context.error is not None:
            logger.log(
                self.log_level,
                f"{context.method} failed after {context.elapsed_seconds * 1000:.1f}ms: {context.error!r}"
            )
        else:
            logger.log(
                self.log_level,
                f"{context.method} completed in {context.elapsed_seconds * 1000:.1f}ms"
            )


class MetricsMiddleware(Middleware):
    """
    Middleware that records Prometheus request metrics.

    Metrics live in their own registry so several clients can coexist;
    expose it with ``prometheus_client.generate_latest(middleware.registry)``.
    """

    def __init__(self, registry: CollectorRegistry | None = None, namespace: str = "skyvault"):
        self.namespace = namespace
        self.registry = registry or CollectorRegistry()
        self.requests_total = Counter(
            "client_requests_total",
            "RPCs issued by the SDK",
            ["method", "outcome"],
            namespace=namespace,
            registry=self.registry,
        )
        self.request_duration_seconds = Histogram(
            "client_request_duration_seconds",
            "RPC latency as observed by the SDK",
            ["method"],
            namespace=namespace,
            registry=self.registry,
        )

    async def on_response(self, context: RequestContext) -> None:
        self.requests_total.labels(method=context.method, outcome=context.outcome).inc()
        self.request_duration_seconds.labels(method=context.method).observe(context.elapsed_seconds)

    def get_metrics(self) -> dict[str, float]:
        """Request counts keyed by ``method:outcome``."""
        sample_name = f"{self.namespace}_client_requests_total"
        counts: dict[str, float] = {}
        for metric in self.registry.collect():
            for sample in metric.samples:
                if sample.name == sample_name:
                    key = f"{sample.labels['method']}:{sample.labels['outcome']}"
                    counts[key] = sample.value
        return counts

"""
Immutable client configuration.

Configurations are frozen pydantic models. Every ``with_*`` method returns a
new instance, so a configuration can be shared between clients safely.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from skyvault.client.retry import FixedCountRetryStrategy, RetryStrategy
from skyvault.config.middleware import Middleware

DEFAULT_MAX_MESSAGE_SIZE = 5_243_000  # bytes


class GrpcConfiguration(BaseModel):
    """Per-channel gRPC transport parameters."""

    model_config = ConfigDict(frozen=True)

    deadline_seconds: float = 5.0
    num_channels: int = 1
    max_concurrent_requests: int = 100
    keepalive_time_ms: int | None = 5000
    keepalive_timeout_ms: int = 1000
    keepalive_permit_without_calls: bool = True
    max_send_message_length: int = DEFAULT_MAX_MESSAGE_SIZE
    max_receive_message_length: int = DEFAULT_MAX_MESSAGE_SIZE

    def with_deadline(self, deadline_seconds: float) -> "GrpcConfiguration":
        return self.model_copy(update={"deadline_seconds": deadline_seconds})

    def with_num_channels(self, num_channels: int) -> "GrpcConfiguration":
        return self.model_copy(update={"num_channels": num_channels})

    def with_max_concurrent_requests(self, limit: int) -> "GrpcConfiguration":
        return self.model_copy(update={"max_concurrent_requests": limit})

    def with_keepalive_disabled(self) -> "GrpcConfiguration":
        return self.model_copy(
            update={"keepalive_time_ms": None, "keepalive_permit_without_calls": False}
        )

    def channel_options(self) -> list[tuple[str, Any]]:
        """Options passed to ``grpc.aio`` channel construction."""
        options: list[tuple[str, Any]] = [
            ("grpc.max_send_message_length", self.max_send_message_length),
            ("grpc.max_receive_message_length", self.max_receive_message_length),
            # Each pool slot must get its own TCP connection.
            ("grpc.use_local_subchannel_pool", 1),
        ]
        if self.keepalive_time_ms is not None:
            options.extend(
                [
                    ("grpc.keepalive_time_ms", self.keepalive_time_ms),
                    ("grpc.keepalive_timeout_ms", self.keepalive_timeout_ms),
                    ("grpc.keepalive_permit_without_calls", int(self.keepalive_permit_without_calls)),
                ]
            )
        return options


class TransportStrategy(BaseModel):
    """How the SDK talks to the service."""

    model_config = ConfigDict(frozen=True)

    grpc_configuration: GrpcConfiguration = Field(default_factory=GrpcConfiguration)

    def with_grpc_configuration(self, grpc_configuration: GrpcConfiguration) -> "TransportStrategy":
        return self.model_copy(update={"grpc_configuration": grpc_configuration})

    def with_client_timeout(self, timeout_seconds: float) -> "TransportStrategy":
        return self.with_grpc_configuration(self.grpc_configuration.with_deadline(timeout_seconds))


class Configuration(BaseModel):
    """
    Top-level client configuration.

    Example:
        ```python
        config = (
            laptop_configuration()
            .with_client_timeout(2.0)
            .add_middleware(LoggingMiddleware())
        )
        client = await CacheClient.create(credential_provider, config, timedelta(seconds=60))
        ```
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    transport_strategy: TransportStrategy = Field(default_factory=TransportStrategy)
    retry_strategy: RetryStrategy = Field(default_factory=FixedCountRetryStrategy)
    middlewares: tuple[Middleware, ...] = ()

    @property
    def grpc_configuration(self) -> GrpcConfiguration:
        return self.transport_strategy.grpc_configuration

    def with_transport_strategy(self, transport_strategy: TransportStrategy) -> "Configuration":
        return self.model_copy(update={"transport_strategy": transport_strategy})

    def with_retry_strategy(self, retry_strategy: RetryStrategy) -> "Configuration":
        return self.model_copy(update={"retry_strategy": retry_strategy})

    def with_middlewares(self, middlewares: list[Middleware]) -> "Configuration":
        return self.model_copy(update={"middlewares": tuple(middlewares)})

    def add_middleware(self, middleware: Middleware) -> "Configuration":
        return self.model_copy(update={"middlewares": (*self.middlewares, middleware)})

    def with_client_timeout(self, timeout_seconds: float) -> "Configuration":
        return self.with_transport_strategy(
            self.transport_strategy.with_client_timeout(timeout_seconds)
        )

    def with_num_channels(self, num_channels: int) -> "Configuration":
        return self.with_transport_strategy(
            self.transport_strategy.with_grpc_configuration(
                self.grpc_configuration.with_num_channels(num_channels)
            )
        )

    def with_max_concurrent_requests(self, limit: int) -> "Configuration":
        return self.with_transport_strategy(
            self.transport_strategy.with_grpc_configuration(
                self.grpc_configuration.with_max_concurrent_requests(limit)
            )
        )

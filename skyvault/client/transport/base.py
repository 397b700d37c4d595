"""
Transport protocol for SkyVault SDK.

A transport owns one connection to one endpoint. Clients hand it wire-neutral
requests from ``skyvault.client.wire`` and get wire-neutral replies back.
Failures are raised as ``grpc.RpcError`` so that retry and error mapping work
the same way for every transport.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import TYPE_CHECKING, Any, Callable, Protocol

from skyvault.client.wire import SubscriptionMessage

if TYPE_CHECKING:
    from skyvault.auth.credential_provider import CredentialProvider
    from skyvault.config.configuration import GrpcConfiguration


class MessageStream(Protocol):
    """Server stream of subscription messages; cancel() tears it down."""

    def __aiter__(self) -> "MessageStream":
        ...

    async def __anext__(self) -> SubscriptionMessage:
        ...

    def cancel(self) -> bool:
        ...


class Transport(Protocol):
    """Protocol for transport layer between SDK and service."""

    endpoint: str

    async def connect(self, timeout: float | None = None) -> None:
        """
        Wait until the underlying connection is ready.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Raises:
            asyncio.TimeoutError: If the connection is not ready in time
        """
        ...

    async def send_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """
        Send a unary request and get its reply.

        Args:
            method: Wire method name (see ``skyvault.client.wire``)
            request: Wire request dataclass
            cache_name: Cache the request addresses, sent as metadata
            timeout: Deadline in seconds

        Returns:
            Wire reply dataclass

        Raises:
            grpc.RpcError: If the call fails
        """
        ...

    def stream_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
    ) -> MessageStream:
        """
        Open a server-streaming request.

        Errors surface while iterating the returned stream.
        """
        ...

    async def close(self) -> None:
        """Close transport and cleanup resources."""
        ...


TransportFactory = Callable[["CredentialProvider", str, "GrpcConfiguration"], Transport]
"""Builds one transport for ``(credential_provider, endpoint, grpc_configuration)``."""

"""
gRPC transport for SkyVault SDK.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio
from typing import Any

import grpc
from loguru import logger
from momento_wire_types.auth_pb2_grpc import AuthStub
from momento_wire_types.cachepubsub_pb2_grpc import PubsubStub
from momento_wire_types.cacheclient_pb2_grpc import ScsStub
from momento_wire_types.controlclient_pb2_grpc import ScsControlStub
from momento_wire_types.leaderboard_pb2_grpc import LeaderboardStub
from momento_wire_types.store_pb2_grpc import StoreStub
from momento_wire_types.token_pb2_grpc import TokenStub

from skyvault import __version__
from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client.transport.codec import DECODERS, ENCODERS, decode_subscription_item
from skyvault.config.configuration import GrpcConfiguration

STUB_CLASSES = {
    "cache": ScsStub,
    "control": ScsControlStub,
    "pubsub": PubsubStub,
    "leaderboard": LeaderboardStub,
    "store": StoreStub,
    "auth": AuthStub,
    "token": TokenStub,
}

AGENT = f"python:skyvault:{__version__}"


class GrpcMessageStream:
    """Subscription stream over a ``grpc.aio`` server-streaming call."""

    def __init__(self, call: Any):
        self._call = call
        self._iterator = None

    def __aiter__(self) -> "GrpcMessageStream":
        return self

    async def __anext__(self):
        if self._iterator is None:
            self._iterator = self._call.__aiter__()
        item = await self._iterator.__anext__()
        return decode_subscription_item(item)

    def cancel(self) -> bool:
        return self._call.cancel()


class GrpcTransport:
    """
    Transport over one long-lived ``grpc.aio`` channel.

    Each instance owns its own channel (and TCP connection); the data client
    pool creates one per configured channel.
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        endpoint: str,
        grpc_configuration: GrpcConfiguration,
    ):
        """
        Initialize gRPC transport.

        Args:
            credential_provider: Supplies the auth token, port and TLS setting
            endpoint: Host to connect to
            grpc_configuration: Channel options
        """
        self.endpoint = endpoint
        self._auth_token = credential_provider.auth_token
        target = f"{endpoint}:{credential_provider.port}"
        options = grpc_configuration.channel_options()

        if credential_provider.secure:
            self._channel = grpc.aio.secure_channel(
                target, grpc.ssl_channel_credentials(), options=options
            )
        else:
            self._channel = grpc.aio.insecure_channel(target, options=options)

        self._stubs: dict[str, Any] = {}
        logger.debug(f"Opened gRPC channel to {target}")

    def _stub(self, service: str) -> Any:
        stub = self._stubs.get(service)
        if stub is None:
            stub = STUB_CLASSES[service](self._channel)
            self._stubs[service] = stub
        return stub

    def _rpc(self, method: str) -> Any:
        service, rpc_name = method.split(".", 1)
        return getattr(self._stub(service), rpc_name)

    def metadata(self, cache_name: str | None = None, method: str = "") -> list[tuple[str, str]]:
        """Request metadata: authorization, agent and the target cache or store."""
        metadata = [("authorization", self._auth_token), ("agent", AGENT)]
        if cache_name:
            header = "store" if method.startswith("store.") else "cache"
            metadata.append((header, cache_name))
        return metadata

    async def connect(self, timeout: float | None = None) -> None:
        await asyncio.wait_for(self._channel.channel_ready(), timeout=timeout)

    async def send_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        reply = await self._rpc(method)(
            ENCODERS[method](request),
            metadata=self.metadata(cache_name, method),
            timeout=timeout,
        )
        return DECODERS[method](reply)

    def stream_request(
        self,
        method: str,
        request: Any,
        *,
        cache_name: str | None = None,
    ) -> GrpcMessageStream:
        call = self._rpc(method)(
            ENCODERS[method](request),
            metadata=self.metadata(cache_name, method),
        )
        return GrpcMessageStream(call)

    async def close(self) -> None:
        await self._channel.close()
        logger.debug(f"Closed gRPC channel to {self.endpoint}")

"""
Transport layer for SkyVault SDK.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Any

from skyvault.client.transport.base import MessageStream, Transport, TransportFactory
from skyvault.client.transport.local import LocalBackend, LocalMessageStream, LocalTransport


def default_transport_factory(credential_provider: Any, endpoint: str, grpc_configuration: Any) -> Transport:
    """Build a ``GrpcTransport``; the generated wire types load on first use."""
    from skyvault.client.transport.grpc_transport import GrpcTransport

    return GrpcTransport(credential_provider, endpoint, grpc_configuration)


__all__ = [
    "Transport",
    "TransportFactory",
    "MessageStream",
    "LocalBackend",
    "LocalTransport",
    "LocalMessageStream",
    "default_transport_factory",
]

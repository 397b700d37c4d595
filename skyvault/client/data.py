"""
Single-channel client: one transport plus deadline, retry and middleware.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from typing import Any

from loguru import logger

from skyvault.client.retry import retry_async
from skyvault.client.transport.base import MessageStream, Transport
from skyvault.config.configuration import Configuration
from skyvault.config.middleware import RequestContext


class DataClient:
    """
    Wraps one transport (one channel) with the per-request policy.

    Every unary request gets the configured deadline, is retried according to
    the configured retry strategy, and passes through the middleware chain
    exactly once regardless of how many attempts it took.
    """

    def __init__(self, transport: Transport, configuration: Configuration):
        self.transport = transport
        self._configuration = configuration
        self._deadline = configuration.grpc_configuration.deadline_seconds

    @property
    def endpoint(self) -> str:
        return self.transport.endpoint

    async def connect(self, timeout: float | None = None) -> None:
        await self.transport.connect(timeout)

    async def invoke(self, method: str, request: Any, *, cache_name: str | None = None) -> Any:
        """
        Send a request and return the wire reply.

        Raises:
            grpc.RpcError: If the final attempt fails
        """
        context = RequestContext(method=method, request=request, cache_name=cache_name)
        middlewares = self._configuration.middlewares

        for middleware in middlewares:
            await middleware.on_request(context)

        try:
            context.reply = await retry_async(
                self.transport.send_request,
                method,
                request,
                method=method,
                strategy=self._configuration.retry_strategy,
                cache_name=cache_name,
                timeout=self._deadline,
            )
            return context.reply
        except Exception as e:
            context.error = e
            raise
        finally:
            for middleware in middlewares:
                await middleware.on_response(context)

    def stream(self, method: str, request: Any, *, cache_name: str | None = None) -> MessageStream:
        logger.debug(f"Opening stream {method} on {self.endpoint}")
        return self.transport.stream_request(method, request, cache_name=cache_name)

    async def close(self) -> None:
        await self.transport.close()

"""
SkyVault topic client: publish and subscribe.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio

from loguru import logger

from skyvault.auth.credential_provider import CredentialProvider
from skyvault.client import wire
from skyvault.client.error_mapper import handle_error
from skyvault.client.exceptions import InvalidArgumentException, Service
from skyvault.client.pool import DataClientPool
from skyvault.client.responses.topic import (
    ErrorCallback,
    ItemCallback,
    TopicPublish,
    TopicPublishResponse,
    TopicSubscribe,
    TopicSubscribeResponse,
)
from skyvault.client.transport import default_transport_factory
from skyvault.client.transport.base import TransportFactory
from skyvault.client.validators import (
    validate_cache_name,
    validate_configuration,
    validate_topic_name,
)
from skyvault.config.configuration import Configuration


class TopicClient:
    """
    Async client for publishing to and subscribing to topics.

    Example:
        ```python
        async with TopicClient(credential_provider, configuration) as topics:
            subscription = await topics.subscribe(
                "cache", "events", on_item=lambda item: print(item.value)
            )
            await topics.publish("cache", "events", "hello")
            subscription.unsubscribe()
        ```
    """

    def __init__(
        self,
        credential_provider: CredentialProvider,
        configuration: Configuration,
        transport_factory: TransportFactory | None = None,
    ):
        validate_configuration(configuration)
        self.configuration = configuration
        self._pool = DataClientPool.create(
            credential_provider,
            credential_provider.cache_endpoint,
            configuration,
            transport_factory or default_transport_factory,
        )
        self._subscriptions: set[TopicSubscribe.Subscription] = set()
        self._closed = False

    @property
    def subscription_count(self) -> int:
        """Number of subscriptions that are still live."""
        return len(self._subscriptions)

    async def __aenter__(self) -> "TopicClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def publish(self, cache_name: str, topic_name: str, value: str | bytes) -> TopicPublishResponse:
        """
        Publish a value to a topic.

        Args:
            cache_name: Cache that namespaces the topic
            topic_name: Topic to publish to
            value: ``str`` is delivered as text, ``bytes`` as binary
        """
        try:
            validate_cache_name(cache_name)
            validate_topic_name(topic_name)
            if isinstance(value, str):
                topic_value = wire.TopicValue(text=value)
            elif isinstance(value, bytes):
                topic_value = wire.TopicValue(binary=value)
            else:
                raise InvalidArgumentException(
                    f"Topic value must be a str or bytes, got {type(value).__name__}"
                )
            await self._pool.invoke(
                wire.PUBLISH,
                wire.PublishRequest(cache_name=cache_name, topic=topic_name, value=topic_value),
                cache_name=cache_name,
            )
        except Exception as e:
            return TopicPublish.Error(handle_error(e, Service.TOPICS, "publish"))
        return TopicPublish.Success()

    async def subscribe(
        self,
        cache_name: str,
        topic_name: str,
        on_item: ItemCallback | None = None,
        on_error: ErrorCallback | None = None,
        resume_at_topic_sequence_number: int = 0,
    ) -> TopicSubscribeResponse:
        """
        Subscribe to a topic.

        The first message on the stream is awaited before returning, so an
        unknown cache or a permission problem comes back as
        ``TopicSubscribe.Error`` rather than as the first item.

        Args:
            cache_name: Cache that namespaces the topic
            topic_name: Topic to subscribe to
            on_item: Called with every Text or Binary item
            on_error: Called with the terminal Error item, if the stream fails
            resume_at_topic_sequence_number: Resume after a previous subscription

        Returns:
            ``TopicSubscribe.Subscription`` or ``TopicSubscribe.Error``
        """
        try:
            validate_cache_name(cache_name)
            validate_topic_name(topic_name)
            if resume_at_topic_sequence_number < 0:
                raise InvalidArgumentException("resume_at_topic_sequence_number must be non-negative")
        except Exception as e:
            return TopicSubscribe.Error(handle_error(e, Service.TOPICS, "subscribe"))

        request = wire.SubscribeRequest(
            cache_name=cache_name,
            topic=topic_name,
            resume_at_topic_sequence_number=resume_at_topic_sequence_number,
        )
        client = self._pool.next()
        stream = client.stream(wire.SUBSCRIBE, request, cache_name=cache_name)
        deadline = self.configuration.grpc_configuration.deadline_seconds
        try:
            first_message = await asyncio.wait_for(stream.__anext__(), timeout=deadline)
        except Exception as e:
            stream.cancel()
            return TopicSubscribe.Error(handle_error(e, Service.TOPICS, "subscribe"))

        subscription = TopicSubscribe.Subscription(
            cache_name,
            topic_name,
            stream,
            first_message=first_message,
            resume_at_topic_sequence_number=resume_at_topic_sequence_number,
            on_close=self._subscriptions.discard,
        )
        self._subscriptions.add(subscription)
        if on_item is not None or on_error is not None:
            subscription.start_callbacks(on_item, on_error)

        logger.debug(f"Subscribed to {cache_name}/{topic_name}")
        return subscription

    async def close(self) -> None:
        """Unsubscribe every live subscription and close all channels."""
        if self._closed:
            return
        self._closed = True
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()
            await subscription.wait_closed()
        self._subscriptions.clear()
        await self._pool.close()
        for middleware in self.configuration.middlewares:
            await middleware.close()

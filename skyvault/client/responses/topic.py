"""
Responses for topic publish and subscribe.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import asyncio
import inspect
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from loguru import logger

from skyvault.client.error_mapper import convert_error
from skyvault.client.exceptions import Service
from skyvault.client.responses.base import ErrorResponseMixin, ResponseBase
from skyvault.client.wire import SubscriptionMessage


class TopicPublishResponse(ResponseBase):
    """Parent of the TopicPublish variants."""


class TopicPublish:
    @dataclass
    class Success(TopicPublishResponse):
        """The value was published."""

    class Error(TopicPublishResponse, ErrorResponseMixin):
        """The publish failed."""


class TopicSubscriptionItemResponse(ResponseBase):
    """Parent of the TopicSubscriptionItem variants."""


class TopicSubscriptionItem:
    @dataclass
    class Text(TopicSubscriptionItemResponse):
        value: str
        topic_sequence_number: int = 0

    @dataclass
    class Binary(TopicSubscriptionItemResponse):
        value: bytes
        topic_sequence_number: int = 0

    class Error(TopicSubscriptionItemResponse, ErrorResponseMixin):
        """The stream failed; no further items follow."""


ItemCallback = Callable[[TopicSubscriptionItemResponse], Awaitable[None] | None]
ErrorCallback = Callable[["TopicSubscriptionItem.Error"], Awaitable[None] | None]


class TopicSubscribeResponse(ResponseBase):
    """Parent of the TopicSubscribe variants."""


class TopicSubscribe:
    class Subscription(TopicSubscribeResponse):
        """
        A live subscription.

        Iterate it with ``async for`` or pass callbacks to ``TopicClient.subscribe``.
        Call ``unsubscribe()`` to stop; no item is delivered afterwards.

        Example:
            ```python
            subscription = await topic_client.subscribe("cache", "topic")
            async for item in subscription:
                if isinstance(item, TopicSubscriptionItem.Text):
                    print(item.value)
            ```
        """

        def __init__(
            self,
            cache_name: str,
            topic_name: str,
            stream: Any,
            first_message: SubscriptionMessage | None = None,
            resume_at_topic_sequence_number: int = 0,
            on_close: Callable[["TopicSubscribe.Subscription"], None] | None = None,
        ):
            self.cache_name = cache_name
            self.topic_name = topic_name
            self.last_sequence_number = resume_at_topic_sequence_number
            self._stream = stream
            self._iterator = stream.__aiter__()
            self._pending: deque[SubscriptionMessage] = deque()
            if first_message is not None:
                self._pending.append(first_message)
            self._unsubscribed = False
            self._finished = False
            self._pump_task: asyncio.Task | None = None
            self._on_close = on_close

        @property
        def is_active(self) -> bool:
            return not (self._unsubscribed or self._finished)

        def __aiter__(self) -> "TopicSubscribe.Subscription":
            return self

        async def __anext__(self) -> TopicSubscriptionItemResponse:
            while True:
                if not self.is_active:
                    raise StopAsyncIteration

                if self._pending:
                    message = self._pending.popleft()
                else:
                    try:
                        message = await self._iterator.__anext__()
                    except StopAsyncIteration:
                        self._finish()
                        raise
                    except asyncio.CancelledError:
                        if self._unsubscribed:
                            raise StopAsyncIteration from None
                        raise
                    except Exception as e:
                        self._finish()
                        if self._unsubscribed:
                            raise StopAsyncIteration from None
                        error = convert_error(e, Service.TOPICS)
                        logger.warning(
                            f"Subscription to {self.cache_name}/{self.topic_name} ended: {error}"
                        )
                        return TopicSubscriptionItem.Error(error)

                if self._unsubscribed:
                    raise StopAsyncIteration

                item = self._to_item(message)
                if item is not None:
                    return item

        def _finish(self) -> None:
            self._finished = True
            self._release()

        def _release(self) -> None:
            on_close, self._on_close = self._on_close, None
            if on_close is not None:
                on_close(self)

        def _to_item(self, message: SubscriptionMessage) -> TopicSubscriptionItemResponse | None:
            if message.kind == "heartbeat":
                return None

            if message.kind == "discontinuity":
                logger.debug(
                    f"Discontinuity on {self.cache_name}/{self.topic_name}: "
                    f"{message.last_topic_sequence} -> {message.new_topic_sequence}"
                )
                self.last_sequence_number = message.new_topic_sequence
                return None

            if message.kind != "item" or message.value is None:
                logger.warning(f"Ignoring unrecognized subscription message: {message.kind}")
                return None

            self.last_sequence_number = message.topic_sequence_number
            if message.value.text is not None:
                return TopicSubscriptionItem.Text(message.value.text, message.topic_sequence_number)
            return TopicSubscriptionItem.Binary(message.value.binary or b"", message.topic_sequence_number)

        def start_callbacks(
            self,
            on_item: ItemCallback | None = None,
            on_error: ErrorCallback | None = None,
        ) -> None:
            """Deliver items to callbacks from a background task."""
            if self._pump_task is not None:
                return
            self._pump_task = asyncio.create_task(self._pump(on_item, on_error))

        async def _pump(self, on_item: ItemCallback | None, on_error: ErrorCallback | None) -> None:
            async for item in self:
                if self._unsubscribed:
                    break

                callback = on_error if isinstance(item, TopicSubscriptionItem.Error) else on_item
                if callback is None:
                    continue

                try:
                    result = callback(item)
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.error(f"Subscription callback failed: {e}")

        def unsubscribe(self) -> None:
            """Stop the subscription and tear down the underlying stream."""
            if self._unsubscribed:
                return

            self._unsubscribed = True
            self._pending.clear()
            self._stream.cancel()
            self._release()

            if self._pump_task is not None and self._pump_task is not asyncio.current_task():
                self._pump_task.cancel()

            logger.debug(f"Unsubscribed from {self.cache_name}/{self.topic_name}")

        async def wait_closed(self) -> None:
            """Wait for the callback task, if any, to finish."""
            if self._pump_task is None or self._pump_task is asyncio.current_task():
                return
            try:
                await self._pump_task
            except asyncio.CancelledError:
                pass

    class Error(TopicSubscribeResponse, ErrorResponseMixin):
        """The subscription could not be established."""

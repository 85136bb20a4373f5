"""Per-connection outbound delivery queue."""

import asyncio

from chat_hub.exceptions import DeliveryEnqueueError, DeliveryQueueFullError
from chat_hub.logging import logger
from chat_hub.types import Identity, OverflowPolicy, Payload
from chat_hub.utils.metrics import MetricsCollector


class DeliveryEndpoint:
    """
    Outbound queue of one connection session.

    Producers (the broadcaster) call ``send`` which never suspends. The owning
    session is the only consumer and drains it with ``async for``. Closing the
    endpoint makes further ``send`` calls fail and ends the consumer's
    iteration once already queued payloads are drained.

    When ``max_size`` is positive the queue is bounded and
    ``overflow_policy`` decides what a full queue does:

    - ``drop_oldest``: the oldest queued payload is discarded
    - ``disconnect``: the endpoint closes itself and ``send`` raises
      ``DeliveryQueueFullError``
    """

    def __init__(
        self,
        identity: Identity,
        max_size: int = 0,
        overflow_policy: OverflowPolicy = "drop_oldest",
    ) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")

        self.identity = identity
        self.max_size = max_size
        self.overflow_policy = overflow_policy

        # None is the end-of-stream sentinel, queued past max_size on close
        self._queue: asyncio.Queue[Payload | None] = asyncio.Queue()
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        """Whether the endpoint refuses new payloads."""
        return self._closed

    @property
    def pending(self) -> int:
        """Number of payloads queued and not yet consumed."""
        size = self._queue.qsize()
        return size - 1 if self._closed and size else size

    def send(self, payload: Payload) -> None:
        """
        Queue a payload for delivery without suspending.

        Args:
            payload: Frame body to deliver.

        Raises:
            DeliveryEnqueueError: If the endpoint is closed.
            DeliveryQueueFullError: If the queue is full under the
                ``disconnect`` policy.
        """
        if self._closed:
            raise DeliveryEnqueueError(
                f"Delivery endpoint {self.identity} is closed"
            )

        if self.max_size and self._queue.qsize() >= self.max_size:
            if self.overflow_policy == "disconnect":
                self.close()
                raise DeliveryQueueFullError(
                    f"Delivery queue of {self.identity} is full "
                    f"({self.max_size} payloads)"
                )

            self._queue.get_nowait()
            MetricsCollector.record_ws_message_dropped("queue_overflow")
            logger.warning(
                f"Delivery queue of {self.identity} is full, "
                f"dropped oldest payload"
            )

        self._queue.put_nowait(payload)

    def close(self) -> None:
        """Stop accepting payloads and wake the consumer. Idempotent."""
        if self._closed:
            return

        self._closed = True
        self._queue.put_nowait(None)

    def __aiter__(self) -> "DeliveryEndpoint":
        return self

    async def __anext__(self) -> Payload:
        if self._exhausted:
            raise StopAsyncIteration

        payload = await self._queue.get()
        if payload is None:
            self._exhausted = True
            raise StopAsyncIteration

        return payload

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return (
            f"<DeliveryEndpoint identity={self.identity} {state} "
            f"pending={self.pending}>"
        )

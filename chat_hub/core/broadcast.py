"""Fan-out of one message to every registered delivery endpoint."""

import time

from chat_hub.core.endpoint import DeliveryEndpoint
from chat_hub.exceptions import DeliveryEnqueueError
from chat_hub.logging import logger
from chat_hub.protocols import ConnectionRegistryProtocol
from chat_hub.types import Identity, Payload
from chat_hub.utils.metrics import MetricsCollector


class Broadcaster:
    """
    Delivers text payloads to every endpoint in a connection registry.

    The sender's own endpoint is a target like any other, so every client
    sees its own messages with its identity stamped on them.
    """

    def __init__(self, registry: ConnectionRegistryProtocol) -> None:
        self.registry = registry

    async def broadcast(self, payload: Payload) -> int:
        """
        Enqueues a text payload on every registered endpoint.

        Enqueueing never suspends, so the registry's read lock is held only
        for the fan-out itself. An endpoint that refuses the payload (closed,
        or full under the ``disconnect`` policy) is skipped so the remaining
        targets still receive it, and is removed from the registry once the
        iteration is over.

        Args:
            payload: Frame body to deliver. Binary payloads are not broadcast.

        Returns:
            int: Number of enqueue attempts made.
        """
        if not isinstance(payload, str):
            return 0

        failed: list[Identity] = []

        def deliver(identity: Identity, endpoint: DeliveryEndpoint) -> None:
            try:
                endpoint.send(payload)
            except DeliveryEnqueueError as e:
                MetricsCollector.record_ws_message_dropped("endpoint_closed")
                logger.warning(f"Skipping broadcast target {identity}: {e}")
                failed.append(identity)

        start_time = time.time()
        attempts = await self.registry.for_each(deliver)
        MetricsCollector.record_broadcast(time.time() - start_time)

        for identity in failed:
            await self.registry.remove(identity)

        return attempts

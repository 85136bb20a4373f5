"""Per-connection control loops."""

import asyncio
from enum import Enum

from chat_hub.core.broadcast import Broadcaster
from chat_hub.core.endpoint import DeliveryEndpoint
from chat_hub.core.enrichment import enrich
from chat_hub.exceptions import (
    EnvelopeParseError,
    TransportReadError,
    TransportWriteError,
)
from chat_hub.logging import logger, set_log_context
from chat_hub.protocols import ConnectionRegistryProtocol, DuplexStream
from chat_hub.types import Identity
from chat_hub.utils.metrics import MetricsCollector


class SessionState(str, Enum):
    """Lifecycle states of a connection session."""

    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


class ConnectionSession:
    """
    One client connection: an inbound loop and an outbound loop.

    The outbound loop drains the session's delivery endpoint into the
    transport. The inbound loop reads frames, enriches them with the
    session's identity and hands them to the broadcaster. Whichever loop ends
    first, ``run`` tears the whole session down: the registry entry is
    removed, the endpoint closed, the other loop cancelled and the transport
    closed. A failure in one session never propagates to another.

    Sessions are created by ``ChatHub.connect``, which performs the
    connecting step and activates them.
    """

    def __init__(
        self,
        identity: Identity,
        stream: DuplexStream,
        endpoint: DeliveryEndpoint,
        registry: ConnectionRegistryProtocol,
        broadcaster: Broadcaster,
    ) -> None:
        self.identity = identity
        self.stream = stream
        self.endpoint = endpoint
        self.registry = registry
        self.broadcaster = broadcaster
        self.state = SessionState.CONNECTING

    async def activate(self) -> None:
        """
        Registers the endpoint so broadcasts start reaching this session.

        Raises:
            RuntimeError: If the session is not connecting.
        """
        if self.state is not SessionState.CONNECTING:
            raise RuntimeError(
                f"Session {self.identity} cannot be activated "
                f"from state {self.state.value}"
            )

        await self.registry.register(self.identity, self.endpoint)
        self.state = SessionState.ACTIVE

    async def run(self) -> None:
        """
        Runs both loops until either ends, then closes the session.

        Raises:
            RuntimeError: If the session is not active.
        """
        if self.state is not SessionState.ACTIVE:
            raise RuntimeError(
                f"Session {self.identity} cannot run "
                f"from state {self.state.value}"
            )

        set_log_context(connection_id=self.identity)
        logger.info(f"Session {self.identity} started")

        outbound = asyncio.create_task(
            self._outbound_loop(), name=f"session-{self.identity}-outbound"
        )
        inbound = asyncio.create_task(
            self._inbound_loop(), name=f"session-{self.identity}-inbound"
        )

        try:
            await asyncio.wait(
                {outbound, inbound}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            await self._close(outbound, inbound)

    async def _outbound_loop(self) -> None:
        async for payload in self.endpoint:
            try:
                await self.stream.send(payload)
            except TransportWriteError as e:
                logger.warning(
                    f"Write to session {self.identity} failed, "
                    f"closing outbound side: {e}"
                )
                return
            MetricsCollector.record_ws_message_sent()

        logger.debug(f"Delivery endpoint of session {self.identity} closed")

    async def _inbound_loop(self) -> None:
        while True:
            try:
                payload = await self.stream.receive()
            except TransportReadError as e:
                logger.warning(f"Read from session {self.identity} failed: {e}")
                return

            if payload is None:
                logger.debug(f"Session {self.identity} closed by peer")
                return

            MetricsCollector.record_ws_message_received()

            try:
                enriched = enrich(payload, self.identity)
            except EnvelopeParseError as e:
                # Dropped without notifying the sender
                MetricsCollector.record_ws_message_dropped("parse_error")
                logger.debug(f"Dropping malformed message: {e}")
                continue

            await self.broadcaster.broadcast(enriched)

    async def _close(self, *tasks: asyncio.Task[None]) -> None:
        self.state = SessionState.CLOSING

        await self.registry.remove(self.identity)
        self.endpoint.close()

        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for task, result in zip(tasks, results):
            if isinstance(result, Exception):
                logger.error(
                    f"{task.get_name()} failed: {result!r}",
                    exc_info=result,
                )

        await self.stream.close()

        self.state = SessionState.CLOSED
        logger.info(f"Session {self.identity} closed")

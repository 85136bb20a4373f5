"""Entry point of the hub core: connect, disconnect, broadcast."""

from chat_hub.core.broadcast import Broadcaster
from chat_hub.core.endpoint import DeliveryEndpoint
from chat_hub.core.identity import IdentityAllocator
from chat_hub.core.registry import ConnectionRegistry
from chat_hub.core.session import ConnectionSession
from chat_hub.logging import logger
from chat_hub.protocols import ConnectionRegistryProtocol, DuplexStream
from chat_hub.settings import Settings
from chat_hub.types import Identity, OverflowPolicy, Payload


class ChatHub:
    """
    Owns the identity allocator, the connection registry and the broadcaster.

    One hub is created per application and stored on ``app.state.hub``;
    everything that needs the registry receives it from the hub instead of a
    module global, so tests can build isolated hubs or inject a mock
    registry.
    """

    def __init__(
        self,
        registry: ConnectionRegistryProtocol | None = None,
        allocator: IdentityAllocator | None = None,
        queue_max_size: int = 0,
        overflow_policy: OverflowPolicy = "drop_oldest",
        disconnect_closes_session: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.allocator = allocator if allocator is not None else IdentityAllocator()
        self.broadcaster = Broadcaster(self.registry)
        self.queue_max_size = queue_max_size
        self.overflow_policy = overflow_policy
        self.disconnect_closes_session = disconnect_closes_session

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatHub":
        """Build a hub configured from application settings."""
        return cls(
            queue_max_size=settings.WS_QUEUE_MAX_SIZE,
            overflow_policy=settings.WS_QUEUE_OVERFLOW_POLICY,
            disconnect_closes_session=settings.ADMIN_DISCONNECT_CLOSES_SESSION,
        )

    @property
    def active_connections(self) -> int:
        """Number of identities currently targeted by broadcasts."""
        return len(self.registry)

    async def connect(self, stream: DuplexStream) -> ConnectionSession:
        """
        Creates and activates a session for an accepted transport.

        Args:
            stream: The already-upgraded client connection.

        Returns:
            ConnectionSession: Active session; the caller awaits ``run()``.
        """
        identity = self.allocator.next_id()
        endpoint = DeliveryEndpoint(
            identity,
            max_size=self.queue_max_size,
            overflow_policy=self.overflow_policy,
        )
        session = ConnectionSession(
            identity, stream, endpoint, self.registry, self.broadcaster
        )
        await session.activate()

        logger.info(f"Client connected with identity {identity}")
        return session

    async def disconnect(self, identity: Identity) -> bool:
        """
        Removes an identity from broadcast targeting.

        Idempotent: unknown or already removed identities are a no-op. The
        live transport is left alone unless ``disconnect_closes_session`` is
        set, in which case the removed endpoint is closed and the session
        shuts itself down.

        Args:
            identity: Identity to disconnect.

        Returns:
            bool: Whether the identity was registered.
        """
        endpoint = await self.registry.remove(identity)
        if endpoint is None:
            logger.debug(f"Disconnect of unknown identity {identity} ignored")
            return False

        if self.disconnect_closes_session:
            endpoint.close()

        logger.info(f"Disconnected {identity}")
        return True

    async def broadcast(self, payload: Payload) -> int:
        """Deliver a payload to every registered session."""
        return await self.broadcaster.broadcast(payload)

    async def close_all(self) -> int:
        """
        Closes every registered endpoint, ending all sessions.

        Returns:
            int: Number of endpoints closed.
        """
        return await self.registry.for_each(
            lambda identity, endpoint: endpoint.close()
        )

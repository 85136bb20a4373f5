"""
Protocol classes for structural subtyping (duck typing with type safety).

The hub core depends on these interfaces rather than on concrete classes, so
tests can substitute a mock registry or an in-memory transport.

Example:
    ```python
    from chat_hub.protocols import ConnectionRegistryProtocol


    async def count_targets(registry: ConnectionRegistryProtocol) -> int:
        return await registry.for_each(lambda identity, endpoint: None)
    ```
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from chat_hub.types import Identity, Payload

if TYPE_CHECKING:
    from chat_hub.core.endpoint import DeliveryEndpoint


@runtime_checkable
class ConnectionRegistryProtocol(Protocol):
    """
    Protocol for the identity to delivery endpoint mapping.

    Implementations must make ``for_each`` mutually exclusive with
    ``register`` and ``remove``, while allowing concurrent ``for_each`` calls.
    """

    async def register(
        self, identity: Identity, endpoint: "DeliveryEndpoint"
    ) -> None:
        """
        Insert the endpoint for an identity.

        Args:
            identity: Identity of the owning session.
            endpoint: Delivery endpoint to target in broadcasts.
        """
        ...

    async def remove(self, identity: Identity) -> "DeliveryEndpoint | None":
        """
        Remove an identity, doing nothing if it is absent.

        Args:
            identity: Identity to remove.

        Returns:
            The removed endpoint, or None if the identity was not registered.
        """
        ...

    async def for_each(
        self, fn: Callable[[Identity, "DeliveryEndpoint"], Any]
    ) -> int:
        """
        Apply ``fn`` to every registered endpoint.

        Args:
            fn: Synchronous callback receiving identity and endpoint.

        Returns:
            Number of endpoints visited.
        """
        ...

    def __len__(self) -> int: ...

    def __contains__(self, identity: object) -> bool: ...


@runtime_checkable
class DuplexStream(Protocol):
    """
    Protocol for a message-framed bidirectional client connection.

    Text frames are ``str``, binary frames are ``bytes``. Control frames
    (ping/pong/close handshake) are handled below this interface.
    """

    async def receive(self) -> Payload | None:
        """
        Wait for the next data frame.

        Returns:
            The frame payload, or None once the peer has closed the stream.

        Raises:
            TransportReadError: If the frame could not be read.
        """
        ...

    async def send(self, payload: Payload) -> None:
        """
        Write one frame.

        Raises:
            TransportWriteError: If the frame could not be written.
        """
        ...

    async def close(self) -> None:
        """Close the connection; closing twice is a no-op."""
        ...

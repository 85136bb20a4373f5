"""Shared mapping of connection identities to delivery endpoints."""

from collections.abc import Callable
from typing import Any

from chat_hub.core.endpoint import DeliveryEndpoint
from chat_hub.core.locks import ReadWriteLock
from chat_hub.logging import logger
from chat_hub.types import Identity


class ConnectionRegistry:
    """
    Registry of active connection sessions used to target broadcasts.

    This is the only mutable state shared between sessions and the admin
    endpoint. Every access goes through ``register``, ``remove`` or
    ``for_each``, guarded by a reader/writer lock: broadcasts iterate under
    the read lock and may run together, inserts and removals take the write
    lock and wait for running iterations to finish.
    """

    def __init__(self) -> None:
        self._endpoints: dict[Identity, DeliveryEndpoint] = {}
        self._lock = ReadWriteLock()

    async def register(
        self, identity: Identity, endpoint: DeliveryEndpoint
    ) -> None:
        """
        Adds the delivery endpoint of a session.

        Identities are unique by construction, so overwriting an existing
        entry indicates a bug in the caller and is logged.

        Args:
            identity: Identity of the owning session.
            endpoint: Endpoint the broadcaster should enqueue onto.
        """
        async with self._lock.write():
            if identity in self._endpoints:
                logger.warning(
                    f"Identity {identity} registered twice, "
                    f"replacing existing endpoint"
                )
            self._endpoints[identity] = endpoint

        logger.debug(f"Identity {identity} added to connection registry")

    async def remove(self, identity: Identity) -> DeliveryEndpoint | None:
        """
        Removes an identity from broadcast targeting.

        Removing an identity that is not registered is a no-op.

        Args:
            identity: Identity to remove.

        Returns:
            The removed endpoint, or None if the identity was absent.
        """
        async with self._lock.write():
            endpoint = self._endpoints.pop(identity, None)

        if endpoint is not None:
            logger.debug(
                f"Identity {identity} removed from connection registry"
            )
        return endpoint

    async def for_each(
        self, fn: Callable[[Identity, DeliveryEndpoint], Any]
    ) -> int:
        """
        Applies ``fn`` to every registered endpoint under the read lock.

        Args:
            fn: Synchronous callback receiving identity and endpoint. It must
                not call ``register`` or ``remove`` (that would deadlock).

        Returns:
            Number of endpoints ``fn`` was applied to.
        """
        async with self._lock.read():
            snapshot = list(self._endpoints.items())
            for identity, endpoint in snapshot:
                fn(identity, endpoint)

        return len(snapshot)

    def identities(self) -> list[Identity]:
        """Snapshot of the registered identities, in registration order."""
        return list(self._endpoints)

    def get(self, identity: Identity) -> DeliveryEndpoint | None:
        return self._endpoints.get(identity)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, identity: object) -> bool:
        return identity in self._endpoints

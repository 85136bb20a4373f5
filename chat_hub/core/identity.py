"""Connection identity allocation."""

import itertools

from chat_hub.constants import FIRST_IDENTITY
from chat_hub.types import Identity


class IdentityAllocator:
    """
    Issues unique, monotonically increasing connection identities.

    ``next()`` on an ``itertools.count`` is a single atomic step, so the
    allocator is safe to share between tasks and threads without a lock.
    Identities are plain ints and never wrap around.
    """

    def __init__(self, start: int = FIRST_IDENTITY) -> None:
        if start < FIRST_IDENTITY:
            raise ValueError(
                f"Identities start at {FIRST_IDENTITY} or above, got {start}"
            )
        self._counter = itertools.count(start)

    def next_id(self) -> Identity:
        """
        Allocate the next identity.

        Returns:
            Identity: An identity never returned before by this allocator.
        """
        return Identity(next(self._counter))

"""
Reader/writer lock for asyncio tasks.

Any number of readers may hold the lock together; a writer holds it alone.
A waiting writer blocks new readers, so a steady stream of broadcasts cannot
starve register/remove calls.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ReadWriteLock:
    """
    Multi-reader/single-writer lock built on ``asyncio.Condition``.

    Usage:
        lock = ReadWriteLock()

        async with lock.read():
            ...  # shared access

        async with lock.write():
            ...  # exclusive access
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @property
    def write_locked(self) -> bool:
        """Whether a writer currently holds the lock."""
        return self._writer

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        """Acquire the lock for shared access."""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._waiting_writers
            )
            self._readers += 1
        try:
            yield
        finally:
            # Released before any await so a cancelled reader cannot leak
            self._readers -= 1
            if not self._readers:
                await asyncio.shield(self._notify_all())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Acquire the lock for exclusive access."""
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and not self._readers
                )
            finally:
                self._waiting_writers -= 1
                # Readers parked behind this writer must re-check if it gave up
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await asyncio.shield(self._notify_all())

    async def _notify_all(self) -> None:
        async with self._cond:
            self._cond.notify_all()

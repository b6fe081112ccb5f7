"""Asyncio reader/writer lock guarding the in-memory snapshot."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    A waiting writer blocks newly arriving readers, so a steady stream of
    reads cannot starve mutations.

    Usage:
        async with lock.read():
            ...
        async with lock.write():
            ...
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._waiting_writers == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            # Counters change before any await so a cancelled release still
            # frees the lock; only the wake-up is deferred.
            self._readers -= 1
            if self._readers == 0:
                await asyncio.shield(self._wake_all())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            finally:
                self._waiting_writers -= 1
                # Wake readers held back by this writer if it was cancelled.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await asyncio.shield(self._wake_all())

    async def _wake_all(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    @property
    def readers(self) -> int:
        return self._readers

"""Connection registry — the set of clients eligible for broadcast.

Learn: asyncio is single-threaded, but every await is a place where another
task can run. The lock keeps add/remove/snapshot from interleaving with each
other, and snapshot() hands out an immutable tuple so the fan-out loop never
iterates the live set while handlers are mutating it.

The lock is never held across network I/O. A slow client write can't stall
a new client registering.
"""

import asyncio
from typing import Iterator

from storefront.realtime.connection import Connection


class ConnectionRegistry:
    """Concurrency-safe set of live connections."""

    def __init__(self) -> None:
        self._connections: set[Connection] = set()
        self._lock = asyncio.Lock()

    async def add(self, conn: Connection) -> None:
        async with self._lock:
            self._connections.add(conn)

    async def remove(self, conn: Connection) -> bool:
        """Deregister a connection. Returns False if it was already gone."""
        async with self._lock:
            if conn not in self._connections:
                return False
            self._connections.remove(conn)
            return True

    async def snapshot(self) -> tuple[Connection, ...]:
        async with self._lock:
            return tuple(self._connections)

    def __contains__(self, conn: object) -> bool:
        return conn in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def __iter__(self) -> Iterator[Connection]:
        # Point-in-time copy; safe to mutate the registry while iterating.
        return iter(tuple(self._connections))

"""Broadcast channel — the FIFO between chat handlers and the fan-out loop.

Many producers (one per connected client), one consumer (the fan-out loop).
Capacity is an explicit choice: maxsize=0 is unbounded, so publishing never
waits on a slow broadcast. A bounded channel makes publish() wait for room,
which pushes back on the sending client's read loop.
"""

import asyncio

import structlog

from storefront.schemas.chat import ChatMessage

logger = structlog.get_logger()


class BroadcastChannel:
    """Ordered queue of chat messages awaiting fan-out."""

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue[ChatMessage] = asyncio.Queue(maxsize=maxsize)

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def __len__(self) -> int:
        return self._queue.qsize()

    async def publish(self, message: ChatMessage) -> None:
        await self._queue.put(message)

    async def next(self) -> ChatMessage:
        """Wait for the oldest undelivered message."""
        return await self._queue.get()

    def done(self) -> None:
        """Mark the message returned by next() as fully delivered."""
        self._queue.task_done()

    async def join(self) -> None:
        """Wait until every published message has been delivered."""
        await self._queue.join()

    def drop_pending(self) -> int:
        """Discard undelivered messages. Returns how many were dropped."""
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()
            dropped += 1
        if dropped:
            logger.warning("chat.messages_dropped", count=dropped)
        return dropped

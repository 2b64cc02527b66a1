"""Chat hub — connection handlers plus the broadcast fan-out loop.

Learn: Two kinds of long-lived tasks cooperate through two shared objects:

    handler task (one per client)         fan-out task (exactly one)
    ─────────────────────────────         ──────────────────────────
    accept + registry.add                 message = channel.next()
    loop: receive → channel.publish  ──▶  snapshot = registry.snapshot()
    finally: registry.remove + close      deliver to every conn concurrently,
                                          each write bounded by send_timeout

A failed or timed-out write removes and closes that one connection. The
fan-out loop itself only stops when the hub is stopped.

Ordering: the loop waits for every delivery of a message before taking the
next one, so each client sees messages in the order they were published.
Within one message, delivery order across clients is unspecified.

Usage (see main.py lifespan):
    hub = ChatHub(send_timeout=5.0)
    hub.start()
    ...
    await hub.serve(WebSocketConnection(websocket))
    ...
    await hub.stop()
"""

import asyncio

import structlog

from storefront.realtime.channel import BroadcastChannel
from storefront.realtime.connection import (
    ChatConnectionError,
    Connection,
    ConnectionState,
)
from storefront.realtime.registry import ConnectionRegistry
from storefront.schemas.chat import ChatMessage

logger = structlog.get_logger()


class ChatHub:
    """Owns the registry, the broadcast channel and every chat task."""

    def __init__(self, send_timeout: float = 5.0, queue_maxsize: int = 0):
        self.send_timeout = send_timeout
        self.registry = ConnectionRegistry()
        self.channel = BroadcastChannel(maxsize=queue_maxsize)
        self._fanout_task: asyncio.Task | None = None
        self._handlers: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._fanout_task is not None and not self._fanout_task.done()

    # ─── Lifecycle ──────────────────────────────────────

    def start(self) -> None:
        """Spawn the fan-out loop. Must be called from a running event loop."""
        if self.running:
            return
        self._fanout_task = asyncio.create_task(
            self.run_loop(), name="chat-fanout"
        )

    async def stop(self) -> None:
        """Cancel every chat task and close all remaining connections.

        Messages still waiting in the channel are dropped.
        """
        logger.info(
            "chat.stopping",
            clients=len(self.registry),
            handlers=len(self._handlers),
            pending=len(self.channel),
        )

        tasks = list(self._handlers)
        if self._fanout_task is not None:
            tasks.append(self._fanout_task)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._fanout_task = None

        for conn in await self.registry.snapshot():
            await self.disconnect(conn)
        self.channel.drop_pending()

    # ─── Producers ──────────────────────────────────────

    async def publish(self, message: ChatMessage) -> None:
        await self.channel.publish(message)

    async def join(self) -> None:
        """Wait until everything published so far has been fanned out."""
        await self.channel.join()

    # ─── Fan-out loop ───────────────────────────────────

    async def run_loop(self) -> None:
        """Drain the channel forever, delivering each message to every client."""
        logger.info("chat.fanout_started", send_timeout=self.send_timeout)
        while True:
            message = await self.channel.next()
            try:
                await self._fan_out(message)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("chat.fanout_error")
            finally:
                self.channel.done()

    async def _fan_out(self, message: ChatMessage) -> None:
        connections = await self.registry.snapshot()
        if not connections:
            return
        await asyncio.gather(*(self._deliver(conn, message) for conn in connections))

    async def _deliver(self, conn: Connection, message: ChatMessage) -> None:
        # Removed after the snapshot was taken: never write to it again.
        if conn not in self.registry:
            return
        # No await between the check above and the write: asyncio.timeout runs
        # send_message in this task, where wait_for would schedule a new one.
        try:
            async with asyncio.timeout(self.send_timeout):
                await conn.send_message(message)
        except asyncio.CancelledError:
            raise
        except TimeoutError:
            logger.warning(
                "chat.delivery_timeout", conn=repr(conn), timeout=self.send_timeout
            )
            await self.disconnect(conn)
        except Exception as e:
            logger.warning(
                "chat.delivery_failed", conn=repr(conn), error=str(e) or type(e).__name__
            )
            await self.disconnect(conn)

    async def disconnect(self, conn: Connection) -> bool:
        """Remove a connection and close it.

        Safe to call any number of times: only the caller that actually
        removed the connection closes it. Returns whether this call did.
        """
        if not await self.registry.remove(conn):
            return False

        conn.state = ConnectionState.CLOSING
        try:
            # Already unregistered, so a stuck close only costs this one timeout.
            async with asyncio.timeout(self.send_timeout):
                await conn.close()
        except TimeoutError:
            logger.warning(
                "chat.close_timeout", conn=repr(conn), timeout=self.send_timeout
            )
        except Exception as e:
            logger.warning("chat.close_failed", conn=repr(conn), error=str(e))
        finally:
            conn.state = ConnectionState.CLOSED
        logger.info("chat.client_removed", conn=repr(conn), clients=len(self.registry))
        return True

    # ─── Connection handlers ────────────────────────────

    async def serve(self, conn: Connection) -> None:
        """Run a connection handler until the client goes away.

        The handler runs in its own task, tracked by the hub, so stop() can
        cancel it. Cancelling the caller cancels the handler too.
        """
        task = asyncio.create_task(self._handle(conn))
        self._handlers.add(task)
        task.add_done_callback(self._handlers.discard)
        try:
            await task
        except asyncio.CancelledError:
            task.cancel()
            raise

    async def _handle(self, conn: Connection) -> None:
        try:
            await conn.accept()
        except ChatConnectionError as e:
            conn.state = ConnectionState.CLOSED
            logger.info("chat.accept_failed", conn=repr(conn), reason=str(e))
            return
        await self.registry.add(conn)
        conn.state = ConnectionState.ACTIVE
        logger.info("chat.client_connected", conn=repr(conn), clients=len(self.registry))

        try:
            while True:
                message = await conn.receive_message()
                await self.publish(message)
        except ChatConnectionError as e:
            logger.info("chat.client_disconnected", conn=repr(conn), reason=str(e))
        finally:
            await self.disconnect(conn)
            conn.state = ConnectionState.CLOSED

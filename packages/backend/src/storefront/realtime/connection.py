"""Chat connections — the transport seam between the hub and a client.

Learn: The hub never touches a WebSocket directly. It talks to the
Connection interface below, which keeps the fan-out logic testable with
in-memory fakes and keeps Starlette's exception zoo in one place.

Every transport or codec failure is translated into a ChatConnectionError
subclass, so callers only have to catch one family:

    ChatConnectionError
    ├── ConnectionClosedError   (peer gone, socket error)
    └── MessageDecodeError      (payload isn't a chat message)

Connections compare by identity. Two wrappers around the same socket are
two different connections.
"""

import enum
from abc import ABC, abstractmethod

from pydantic import ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from storefront.schemas.chat import ChatMessage


class ChatConnectionError(Exception):
    """Base for any failure local to a single chat connection."""


class ConnectionClosedError(ChatConnectionError):
    """The peer went away or the transport failed."""


class MessageDecodeError(ChatConnectionError):
    """An inbound frame could not be decoded into a ChatMessage."""


class ConnectionState(str, enum.Enum):
    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


class Connection(ABC):
    """One bidirectional message channel to a remote chat client."""

    def __init__(self) -> None:
        self.state = ConnectionState.CONNECTING

    @abstractmethod
    async def accept(self) -> None:
        """Complete the transport handshake."""

    @abstractmethod
    async def receive_message(self) -> ChatMessage:
        """Block until the next inbound message arrives.

        Raises ConnectionClosedError or MessageDecodeError.
        """

    @abstractmethod
    async def send_message(self, message: ChatMessage) -> None:
        """Write one message to the client."""

    @abstractmethod
    async def close(self) -> None:
        """Close the transport. Must tolerate an already-closed peer."""


class WebSocketConnection(Connection):
    """Connection backed by a Starlette/FastAPI WebSocket."""

    def __init__(self, websocket: WebSocket) -> None:
        super().__init__()
        self.websocket = websocket

    def __repr__(self) -> str:
        client = self.websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        return f"<WebSocketConnection {peer} {self.state.value}>"

    async def accept(self) -> None:
        try:
            await self.websocket.accept()
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise ConnectionClosedError(str(e) or type(e).__name__) from e

    async def receive_message(self) -> ChatMessage:
        try:
            frame = await self.websocket.receive()
        except RuntimeError as e:
            # Starlette raises RuntimeError once the socket is closed.
            raise ConnectionClosedError(str(e)) from e

        if frame["type"] == "websocket.disconnect":
            raise ConnectionClosedError(
                f"client disconnected (code={frame.get('code', 1000)})"
            )

        # Text and binary frames both carry JSON.
        raw = frame.get("text")
        if raw is None:
            raw = frame.get("bytes")
        if raw is None:
            raise MessageDecodeError("empty frame")

        try:
            return ChatMessage.model_validate_json(raw)
        except ValidationError as e:
            raise MessageDecodeError(
                f"invalid chat message: {e.error_count()} error(s)"
            ) from e

    async def send_message(self, message: ChatMessage) -> None:
        try:
            await self.websocket.send_text(message.model_dump_json())
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise ConnectionClosedError(str(e) or type(e).__name__) from e

    async def close(self) -> None:
        if (
            self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        ):
            await self.websocket.close()

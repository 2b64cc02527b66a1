"""WebSocket endpoint — the public chat room.

Learn: Each client connects to /api/ws and is handed to the ChatHub that
the lifespan stored on app.state. The route itself does nothing else: the
hub accepts, registers, reads and cleans up. There is no auth; every
client is an anonymous participant and names itself in each message.
"""

from fastapi import APIRouter, Depends, WebSocket

from storefront.realtime.connection import WebSocketConnection
from storefront.realtime.hub import ChatHub

router = APIRouter()


def get_chat_hub(websocket: WebSocket) -> ChatHub:
    """FastAPI dependency — the hub created in the app lifespan."""
    return websocket.app.state.chat_hub


@router.websocket("/api/ws")
async def chat_websocket(websocket: WebSocket, hub: ChatHub = Depends(get_chat_hub)):
    """Join the broadcast chat until the client disconnects."""
    await hub.serve(WebSocketConnection(websocket))

"""Real-time chat — WebSocket clients and the broadcast fan-out.

Learn: Messages flow through one in-process channel:
1. Client → WebSocket handler → BroadcastChannel (publish)
2. BroadcastChannel → fan-out loop → every registered WebSocket

Nothing is persisted. A client that connects late only sees messages
published after it registered.
"""

"""Storefront — products catalogue API with a live chat channel.

REST and GraphQL access to a single products table, plus a WebSocket
chat room that fans every message out to all connected clients.
"""

__version__ = "0.1.0"

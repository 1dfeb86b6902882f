"""Transport interface and adapters."""

from wsinvoker.transport.base import FrameCallback, Transport
from wsinvoker.transport.memory import MemoryTransport, create_memory_pair
from wsinvoker.transport.websocket import WebSocketTransport

__all__ = ["FrameCallback", "Transport", "MemoryTransport", "create_memory_pair", "WebSocketTransport"]

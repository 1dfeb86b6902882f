"""In-process duplex transport pair, used for tests and same-process peers."""

from __future__ import annotations

import asyncio

from wsinvoker.transport.base import FrameCallback


class MemoryTransport:
    """One end of an in-memory pair. Frames reach the peer in send order."""

    def __init__(self, name: str = "memory"):
        self.name = name
        self.peer: MemoryTransport | None = None
        self.sent: list[str] = []
        self.closed = False
        self._callback: FrameCallback | None = None

    async def send(self, text: str) -> None:
        if self.closed:
            raise ConnectionError(f"{self.name} transport is closed")
        self.sent.append(text)
        peer = self.peer
        if peer is None or peer.closed:
            return
        asyncio.get_running_loop().call_soon(peer.deliver, text)

    def on_message(self, callback: FrameCallback | None) -> None:
        self._callback = callback

    def deliver(self, text: str) -> None:
        """Hand one inbound frame to the arrival handler (no-op when unbound)."""
        if self.closed or self._callback is None:
            return
        self._callback(text)

    def close(self) -> None:
        self.closed = True


def create_memory_pair(left: str = "left", right: str = "right") -> tuple[MemoryTransport, MemoryTransport]:
    """Create two connected transports."""
    a = MemoryTransport(left)
    b = MemoryTransport(right)
    a.peer = b
    b.peer = a
    return a, b

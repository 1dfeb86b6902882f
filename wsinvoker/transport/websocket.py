"""Transport adapter over an already-connected ``websockets`` connection."""

from __future__ import annotations

from typing import Any

from loguru import logger
from websockets.exceptions import ConnectionClosed

from wsinvoker.transport.base import FrameCallback


class WebSocketTransport:
    """Thin wrapper: ``send`` writes a text frame, ``run`` pumps inbound frames.

    Works with client connections from ``websockets.connect`` and server-side
    connections handed to a ``websockets.serve`` handler.
    """

    def __init__(self, connection: Any):
        self.connection = connection
        self._callback: FrameCallback | None = None

    async def send(self, text: str) -> None:
        await self.connection.send(text)

    def on_message(self, callback: FrameCallback | None) -> None:
        self._callback = callback

    async def run(self) -> None:
        """Deliver frames to the arrival handler until the connection closes."""
        try:
            async for raw in self.connection:
                text = raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else raw
                callback = self._callback
                if callback is None:
                    logger.debug("Dropping websocket frame: no arrival handler")
                    continue
                callback(text)
        except ConnectionClosed as exc:
            rcvd = getattr(exc, "rcvd", None)
            logger.info(
                "WebSocket closed: code={} reason={}",
                getattr(rcvd, "code", None),
                getattr(rcvd, "reason", "") or "",
            )

    async def close(self) -> None:
        await self.connection.close()

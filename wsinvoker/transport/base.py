"""Transport capability set consumed by the Invoker."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

FrameCallback = Callable[[str], Any]


@runtime_checkable
class Transport(Protocol):
    """A connected duplex channel delivering ordered text frames.

    ``on_message(None)`` clears the arrival handler.
    """

    async def send(self, text: str) -> None: ...

    def on_message(self, callback: FrameCallback | None) -> None: ...

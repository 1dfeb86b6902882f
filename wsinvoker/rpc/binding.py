"""Attach the handler registry to a concrete transport."""

from __future__ import annotations

from wsinvoker.core.registry import HandlerRegistry
from wsinvoker.transport.base import FrameCallback, Transport
from wsinvoker.utils.event_log import EventLogger, safe_log


class TransportBinding:
    """Owns the current transport and routes its arrivals into one callback.

    Attaching a new transport detaches the previous one first and replays all
    registered handlers and continuations, so behaviour survives a reconnect.
    """

    def __init__(self, registry: HandlerRegistry, arrival: FrameCallback, *, logger: EventLogger | None = None):
        self._registry = registry
        self._arrival = arrival
        self._logger = logger
        self._transport: Transport | None = None

    @property
    def transport(self) -> Transport | None:
        return self._transport

    def attach(self, transport: Transport) -> None:
        if transport is None:
            self.detach()
            return
        if self._transport is not None and self._transport is not transport:
            self.detach()
        self._transport = transport
        transport.on_message(self._arrival)
        safe_log(self._logger, "Attach transport", {"transport": type(transport).__name__})
        self._replay()

    def detach(self) -> None:
        transport = self._transport
        if transport is None:
            return
        self._transport = None
        transport.on_message(None)
        safe_log(self._logger, "Detach transport", {"transport": type(transport).__name__})

    def _replay(self) -> None:
        # Entries live in the registry, not the transport, so this re-registration
        # is idempotent; it runs the normal register path and logs each rebind.
        registry = self._registry
        for name, handler in registry.iter_calls():
            registry.register_call(name, handler)
            safe_log(self._logger, "Rebind method", {"method": name})
        for name, continuation in registry.iter_success():
            registry.register_success(name, continuation)
        for name, continuation in registry.iter_error():
            registry.register_error(name, continuation)

"""Caller-facing RPC surface: implement local methods, invoke remote ones."""

from __future__ import annotations

import asyncio
from typing import Any

from wsinvoker.config.loader import convert_keys
from wsinvoker.config.schema import InvokerOptions
from wsinvoker.core.naming import SEPARATOR, is_valid_method_name
from wsinvoker.core.protocol import Envelope
from wsinvoker.core.registry import CallHandler, Continuation, HandlerRegistry
from wsinvoker.core.serialization import encode_envelope
from wsinvoker.rpc.binding import TransportBinding
from wsinvoker.rpc.dispatcher import Dispatcher
from wsinvoker.transport.base import Transport
from wsinvoker.utils.event_log import EventLogger, LoguruEventLogger, safe_log
from wsinvoker.utils.exceptions import MethodNameError, TransportNotAttachedError


def _noop(_payload: Any = None) -> None:
    return None


class Invoker:
    """Symmetric RPC endpoint over one duplex transport.

    Both peers run an Invoker. ``implement`` registers a handler the remote
    side may call; ``invoke`` calls the remote side and reports the outcome
    through ``on_success`` / ``on_error``.

    Continuations are keyed by method name only: a second ``invoke`` of the
    same method before the first reply arrives replaces the first caller's
    continuations, which then never fire.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        options: InvokerOptions | dict[str, Any] | None = None,
        *,
        logger: EventLogger | None = None,
    ):
        if isinstance(options, dict):
            options = InvokerOptions.model_validate(convert_keys(options))
        self.options = options or InvokerOptions()
        self._logger = logger if logger is not None else LoguruEventLogger(self.options.log_level)
        self._registry = HandlerRegistry()
        self._dispatcher = Dispatcher(self._registry, self._send_text, logger=self._logger, options=self.options)
        self._binding = TransportBinding(self._registry, self._on_frame, logger=self._logger)
        self._tasks: set[asyncio.Task[None]] = set()
        if transport is not None:
            self.set_transport(transport)

    @property
    def transport(self) -> Transport | None:
        return self._binding.transport

    @transport.setter
    def transport(self, value: Transport) -> None:
        self.set_transport(value)

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def set_transport(self, transport: Transport) -> None:
        """Bind to a (new) transport; registered handlers carry over."""
        self._binding.attach(transport)

    def detach(self) -> None:
        self._binding.detach()

    def implement(self, method: str, handler: CallHandler | None) -> None:
        """Register ``handler`` for calls to ``method``. Empty name or handler is ignored."""
        if not method or not handler:
            return
        self._check_method_name(method)
        self._registry.register_call(method, handler)
        safe_log(self._logger, "Implement method", {"method": method})

    async def invoke(
        self,
        method: str,
        payload: Any = None,
        on_success: Continuation | None = None,
        on_error: Continuation | None = None,
        *,
        suppress_error_reply: bool = False,
    ) -> None:
        """Send a call frame; the reply is delivered later to a continuation.

        Returns once the frame is handed to the transport.
        """
        if not method:
            raise MethodNameError(method, "method name is empty")
        self._check_method_name(method)
        if self.transport is None:
            raise TransportNotAttachedError(method)
        frame = encode_envelope(Envelope(channel_name=method, payload=payload, suppress_error_reply=suppress_error_reply))
        safe_log(self._logger, "Call remote method", {"method": method})
        self._registry.register_success(method, on_success or _noop)
        self._registry.register_error(method, on_error or _noop)
        await self._send_text(frame)

    async def drain(self) -> None:
        """Wait until every frame received so far has been fully handled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def pending(self) -> list[str]:
        """Method names with continuations still waiting for a reply."""
        return self._registry.pending()

    def _check_method_name(self, method: Any) -> None:
        if not isinstance(method, str):
            raise MethodNameError(method, "method name must be a string")
        if self.options.strict_method_names and not is_valid_method_name(method):
            raise MethodNameError(method, f"method name must not contain '{SEPARATOR}'")

    def _on_frame(self, raw: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            safe_log(self._logger, "Processing message error", {"error": "no running event loop"})
            return
        task = loop.create_task(self._dispatcher.dispatch(raw))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send_text(self, text: str) -> None:
        transport = self.transport
        if transport is None:
            raise TransportNotAttachedError("<reply>")
        await transport.send(text)

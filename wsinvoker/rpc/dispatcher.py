"""Frame arrival state machine: classify, route, execute and reply."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable

from wsinvoker.config.schema import InvokerOptions
from wsinvoker.core.naming import build_channel_name, parse_channel_name
from wsinvoker.core.protocol import ChannelRole, Envelope
from wsinvoker.core.registry import Continuation, HandlerRegistry
from wsinvoker.core.serialization import decode_envelope, encode_envelope
from wsinvoker.utils.event_log import EventLogger, safe_log
from wsinvoker.utils.exceptions import FrameDecodeError, error_reply_payload, sanitize_error_message

SendText = Callable[[str], Awaitable[None]]


class Dispatcher:
    """Handles one inbound frame at a time; never lets an exception escape ``dispatch``.

    Order of classification:
    1. undecodable frame -> dropped, no reply
    2. malformed channel name -> dropped
    3. ERROR reply -> error continuation (single use)
    4. DONE reply -> success continuation (single use)
    5. call -> handler result as DONE, failure as ERROR, unknown method as
       ERROR unless the caller suppressed it
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        send_text: SendText,
        *,
        logger: EventLogger | None = None,
        options: InvokerOptions | None = None,
    ):
        self._registry = registry
        self._send_text = send_text
        self._logger = logger
        self._options = options or InvokerOptions()

    async def dispatch(self, raw: str) -> None:
        try:
            await self._dispatch(raw)
        except Exception as exc:
            details: dict[str, Any] = {"error": sanitize_error_message(str(exc)), "type": type(exc).__name__}
            if self._options.log_raw_frames:
                details["raw"] = raw
            safe_log(self._logger, "Processing message error", details)

    async def _dispatch(self, raw: str) -> None:
        try:
            envelope = decode_envelope(raw)
        except FrameDecodeError as exc:
            details: dict[str, Any] = {"error": exc.message}
            if self._options.log_raw_frames:
                details["message"] = raw
            safe_log(self._logger, "Parse message error", details)
            return

        parsed = parse_channel_name(envelope.channel_name)
        if not parsed.well_formed:
            safe_log(self._logger, "Dropped malformed channel", {"channelName": envelope.channel_name})
            return

        if parsed.role is ChannelRole.ERROR:
            await self._resolve(parsed.base_name, self._registry.take_error(parsed.base_name), envelope)
            return
        if parsed.role is ChannelRole.DONE:
            await self._resolve(parsed.base_name, self._registry.take_success(parsed.base_name), envelope)
            return
        await self._handle_call(parsed.base_name, envelope)

    async def _resolve(self, method: str, continuation: Continuation | None, envelope: Envelope) -> None:
        if continuation is None:
            safe_log(self._logger, "Dropped unmatched reply", {"channelName": envelope.channel_name})
            return
        try:
            outcome = continuation(envelope.payload)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            safe_log(
                self._logger,
                "Continuation error",
                {"method": method, "error": sanitize_error_message(str(exc)), "type": type(exc).__name__},
            )

    async def _handle_call(self, method: str, envelope: Envelope) -> None:
        handler = self._registry.get_call(method)
        if handler is None:
            if envelope.suppress_error_reply:
                safe_log(self._logger, "Method not implemented", {"method": method, "suppressed": True})
                return
            safe_log(self._logger, "Method not implemented", {"method": method})
            await self._reply_error(method, {"message": self._options.not_implemented_message})
            return

        try:
            outcome = handler(envelope.payload)
            result = await outcome if inspect.isawaitable(outcome) else outcome
        except Exception as exc:
            payload = error_reply_payload(exc)
            details: dict[str, Any] = {"method": method, "code": payload["error"]["code"], "error": payload["message"]}
            if self._options.log_raw_frames:
                details["payload"] = envelope.payload
            safe_log(self._logger, "Processing message error", details)
            await self._reply_error(method, payload)
            return

        try:
            frame = encode_envelope(Envelope(channel_name=build_channel_name(method, ChannelRole.DONE), payload=result))
        except (TypeError, ValueError) as exc:
            safe_log(self._logger, "Processing message error", {"method": method, "error": str(exc)})
            await self._reply_error(
                method,
                {
                    "message": f"Result of '{method}' is not JSON serializable",
                    "error": {"name": type(exc).__name__, "code": "SERIALIZATION_ERROR", "category": "fatal", "details": {}},
                },
            )
            return
        await self._send_text(frame)

    async def _reply_error(self, method: str, payload: dict[str, Any]) -> None:
        channel_name = build_channel_name(method, ChannelRole.ERROR)
        try:
            frame = encode_envelope(Envelope(channel_name=channel_name, payload=payload, suppress_error_reply=True))
        except (TypeError, ValueError) as exc:
            safe_log(self._logger, "Processing message error", {"method": method, "error": str(exc)})
            error = payload.get("error") if isinstance(payload.get("error"), dict) else {}
            details = error.get("details") if isinstance(error.get("details"), dict) else {}
            fallback = {
                "message": str(payload.get("message") or f"Error of '{method}' is not JSON serializable"),
                "error": {
                    "name": str(error.get("name") or type(exc).__name__),
                    "code": "SERIALIZATION_ERROR",
                    "category": "fatal",
                    "details": {str(k): repr(v) for k, v in details.items()},
                },
            }
            frame = encode_envelope(Envelope(channel_name=channel_name, payload=fallback, suppress_error_reply=True))
        await self._send_text(frame)

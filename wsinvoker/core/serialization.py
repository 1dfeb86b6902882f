"""Serialization helpers for envelope frames (one JSON object per frame)."""

from __future__ import annotations

import json
from typing import Any

from wsinvoker.core.protocol import Envelope
from wsinvoker.utils.exceptions import FrameDecodeError


def encode_envelope(envelope: Envelope) -> str:
    """Encode an envelope into one JSON text frame.

    ``payload`` is omitted when None and ``suppressErrorReply`` when false.
    Raises TypeError/ValueError when the payload is not JSON serializable.
    """
    frame: dict[str, Any] = {"channelName": envelope.channel_name}
    if envelope.payload is not None:
        frame["payload"] = envelope.payload
    if envelope.suppress_error_reply:
        frame["suppressErrorReply"] = True
    return json.dumps(frame, ensure_ascii=False)


def decode_envelope(raw: str | bytes) -> Envelope:
    """Decode one text frame into an Envelope, raising FrameDecodeError when invalid."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FrameDecodeError(f"frame is not UTF-8: {e}") from e
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise FrameDecodeError(f"invalid JSON: {e}", raw=raw if isinstance(raw, str) else None) from e
    if not isinstance(data, dict):
        raise FrameDecodeError("frame is not a JSON object", raw=raw)
    channel_name = data.get("channelName")
    if not isinstance(channel_name, str) or not channel_name:
        raise FrameDecodeError("missing channelName", raw=raw)
    suppress = data.get("suppressErrorReply", False)
    if suppress is None:
        suppress = False
    if not isinstance(suppress, bool):
        raise FrameDecodeError("suppressErrorReply must be a boolean", raw=raw)
    return Envelope(channel_name=channel_name, payload=data.get("payload"), suppress_error_reply=suppress)

"""Wire-level protocol models shared by the codec, naming and dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChannelRole(str, Enum):
    """Purpose of a frame: a call, or one of the two replies to it."""

    CALL = ""
    DONE = "DONE"
    ERROR = "ERROR"


@dataclass(slots=True)
class Envelope:
    """One frame on the wire: ``{channelName, payload?, suppressErrorReply?}``."""

    channel_name: str
    payload: Any = None
    suppress_error_reply: bool = False


@dataclass(slots=True, frozen=True)
class ParsedChannel:
    """Result of splitting a channel name into base method and reply role."""

    base_name: str
    role: ChannelRole
    well_formed: bool

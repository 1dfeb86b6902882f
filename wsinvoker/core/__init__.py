"""Protocol core: envelope codec, channel naming and handler registry."""

from wsinvoker.core.naming import SEPARATOR, build_channel_name, is_valid_method_name, parse_channel_name
from wsinvoker.core.protocol import ChannelRole, Envelope, ParsedChannel
from wsinvoker.core.registry import HandlerRegistry
from wsinvoker.core.serialization import decode_envelope, encode_envelope

__all__ = [
    "SEPARATOR",
    "ChannelRole",
    "Envelope",
    "ParsedChannel",
    "HandlerRegistry",
    "build_channel_name",
    "parse_channel_name",
    "is_valid_method_name",
    "encode_envelope",
    "decode_envelope",
]

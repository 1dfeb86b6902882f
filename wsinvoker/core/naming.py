"""Channel naming: map a method name to its call/DONE/ERROR channels and back."""

from __future__ import annotations

from typing import Any

from wsinvoker.core.protocol import ChannelRole, ParsedChannel

SEPARATOR = "-->"

_REPLY_ROLES = {ChannelRole.DONE.value: ChannelRole.DONE, ChannelRole.ERROR.value: ChannelRole.ERROR}


def build_channel_name(method: str, role: ChannelRole = ChannelRole.CALL) -> str:
    """Return ``method`` for a call, ``method-->DONE`` / ``method-->ERROR`` for replies."""
    if role is ChannelRole.CALL:
        return method
    return f"{method}{SEPARATOR}{role.value}"


def parse_channel_name(channel: Any) -> ParsedChannel:
    """
    Split an incoming channel name into (base name, role, well-formedness).

    Never raises. A name with more than one separator, or with a suffix that is
    neither DONE nor ERROR, is reported as not well-formed and must not be routed.
    """
    if not isinstance(channel, str) or not channel:
        return ParsedChannel(base_name="", role=ChannelRole.CALL, well_formed=False)
    parts = channel.split(SEPARATOR)
    base = parts[0]
    if len(parts) == 1:
        return ParsedChannel(base_name=base, role=ChannelRole.CALL, well_formed=bool(base))
    role = _REPLY_ROLES.get(parts[1])
    if role is None:
        return ParsedChannel(base_name=base, role=ChannelRole.CALL, well_formed=False)
    return ParsedChannel(base_name=base, role=role, well_formed=len(parts) == 2 and bool(base))


def is_valid_method_name(method: Any) -> bool:
    """True for a non-empty string that does not contain the separator."""
    return isinstance(method, str) and bool(method) and SEPARATOR not in method

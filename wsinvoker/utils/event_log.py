"""Structured event logging sink used by the RPC core."""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger


class EventLogger(Protocol):
    """Anything with ``log(event, details)`` can receive core events."""

    def log(self, event: str, details: dict[str, Any]) -> None: ...


class LoguruEventLogger:
    """Default sink: forwards events to loguru with details bound as extras."""

    def __init__(self, level: str = "DEBUG"):
        self.level = level.upper()

    def log(self, event: str, details: dict[str, Any]) -> None:
        logger.bind(event=event, details=details).log(self.level, "{} {}", event, details)


def safe_log(sink: EventLogger | None, event: str, details: dict[str, Any] | None = None) -> None:
    """Emit an event; a missing or failing sink never breaks the caller."""
    if sink is None:
        return
    try:
        sink.log(event, details or {})
    except Exception as exc:
        logger.debug("Event sink failed for {}: {}", event, exc)

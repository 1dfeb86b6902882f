"""Utility functions for wsinvoker."""

from wsinvoker.utils.exceptions import (
    InvokerError,
    MethodNameError,
    FrameDecodeError,
    TransportNotAttachedError,
    RemoteMethodError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
    error_reply_payload,
)
from wsinvoker.utils.event_log import EventLogger, LoguruEventLogger, safe_log

__all__ = [
    "InvokerError",
    "MethodNameError",
    "FrameDecodeError",
    "TransportNotAttachedError",
    "RemoteMethodError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
    "error_reply_payload",
    "EventLogger",
    "LoguruEventLogger",
    "safe_log",
]

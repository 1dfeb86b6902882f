"""
Exception hierarchy and error handling utilities for wsinvoker.

Provides:
- Custom exception classes with error codes
- Error categorization (recoverable, validation, fatal)
- Safe error message formatting (no sensitive data leak)
- Conversion of handler failures into ERROR-reply payloads
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    TIMEOUT = "timeout"


class InvokerError(Exception):
    """Base exception for all wsinvoker errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MethodNameError(InvokerError):
    """Method name is empty or collides with the reply-channel separator."""

    def __init__(self, method: Any, reason: str):
        super().__init__(
            f"Invalid method name {method!r}: {reason}",
            code="INVALID_METHOD_NAME",
            category=ErrorCategory.VALIDATION,
            details={"method": method if isinstance(method, str) else repr(method), "reason": reason},
        )


class FrameDecodeError(InvokerError):
    """Incoming frame is not a valid envelope."""

    def __init__(self, reason: str, raw: str | None = None):
        details = {"raw": raw} if raw is not None else {}
        super().__init__(
            f"Cannot decode frame: {reason}",
            code="FRAME_DECODE_ERROR",
            category=ErrorCategory.VALIDATION,
            details=details,
        )


class TransportNotAttachedError(InvokerError):
    """Invocation attempted while no transport is bound."""

    def __init__(self, method: str):
        super().__init__(
            f"No transport attached, cannot call '{method}'",
            code="NOT_CONNECTED",
            category=ErrorCategory.RECOVERABLE,
            details={"method": method},
        )


class RemoteMethodError(InvokerError):
    """Raised by call handlers to fail with an explicit code sent to the caller."""

    def __init__(self, message: str, code: str = "METHOD_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, category=ErrorCategory.RECOVERABLE, details=details)


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory]:
    """
    Classify an exception and return (error_code, category).

    Returns:
        Tuple of (error_code, category)
    """
    if isinstance(exc, InvokerError):
        return exc.code, exc.category

    if isinstance(exc, NotImplementedError):
        return "NOT_IMPLEMENTED", ErrorCategory.NOT_FOUND

    if isinstance(exc, FileNotFoundError):
        return "FILE_NOT_FOUND", ErrorCategory.NOT_FOUND

    if isinstance(exc, PermissionError):
        return "PERMISSION_DENIED", ErrorCategory.PERMISSION

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION

    if isinstance(exc, ValueError):
        return "INVALID_VALUE", ErrorCategory.VALIDATION

    if isinstance(exc, KeyError):
        return "MISSING_KEY", ErrorCategory.VALIDATION

    if isinstance(exc, TypeError):
        return "TYPE_ERROR", ErrorCategory.VALIDATION

    return "INTERNAL_ERROR", ErrorCategory.FATAL


def error_reply_payload(exc: BaseException) -> dict[str, Any]:
    """Build the {message, error} payload sent back when a call handler fails."""
    code, category = classify_exception(exc)
    if isinstance(exc, InvokerError):
        message = exc.message
        details = dict(exc.details)
    else:
        message = sanitize_error_message(str(exc)) or type(exc).__name__
        details = {}
    return {
        "message": message,
        "error": {
            "name": type(exc).__name__,
            "code": code,
            "category": category.value,
            "details": details,
        },
    }

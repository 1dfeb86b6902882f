"""Per-instance registry of call handlers and pending reply continuations."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterator

CallHandler = Callable[[Any], Any | Awaitable[Any]]
Continuation = Callable[[Any], Any | Awaitable[Any]]


class HandlerRegistry:
    """Three independent maps keyed by method name.

    Call handlers are durable. Success/error continuations are single-use and
    removed when taken. Registering under an existing name replaces the entry.
    """

    def __init__(self):
        self._calls: dict[str, CallHandler] = {}
        self._success: dict[str, Continuation] = {}
        self._error: dict[str, Continuation] = {}

    def register_call(self, name: str, handler: CallHandler | None) -> bool:
        if not name or not handler:
            return False
        self._calls[name] = handler
        return True

    def register_success(self, name: str, continuation: Continuation | None) -> bool:
        if not name or not continuation:
            return False
        self._success[name] = continuation
        return True

    def register_error(self, name: str, continuation: Continuation | None) -> bool:
        if not name or not continuation:
            return False
        self._error[name] = continuation
        return True

    def has_call(self, name: str) -> bool:
        return name in self._calls

    def get_call(self, name: str) -> CallHandler | None:
        return self._calls.get(name)

    def take_success(self, name: str) -> Continuation | None:
        """Pop the success continuation; the paired error continuation is dropped too."""
        continuation = self._success.pop(name, None)
        if continuation is not None:
            self._error.pop(name, None)
        return continuation

    def take_error(self, name: str) -> Continuation | None:
        """Pop the error continuation; the paired success continuation is dropped too."""
        continuation = self._error.pop(name, None)
        if continuation is not None:
            self._success.pop(name, None)
        return continuation

    def pending(self) -> list[str]:
        """Method names that still wait for a reply."""
        return sorted(set(self._success) | set(self._error))

    def methods(self) -> list[str]:
        return sorted(self._calls)

    def iter_calls(self) -> Iterator[tuple[str, CallHandler]]:
        yield from list(self._calls.items())

    def iter_success(self) -> Iterator[tuple[str, Continuation]]:
        yield from list(self._success.items())

    def iter_error(self) -> Iterator[tuple[str, Continuation]]:
        yield from list(self._error.items())

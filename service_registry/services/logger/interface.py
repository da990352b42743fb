from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LoggingInterface(ABC):
    """Structured logging with key/value context."""

    @abstractmethod
    def info(self, msg: str, **ctx: Any) -> None: ...

    @abstractmethod
    def warn(self, msg: str, **ctx: Any) -> None: ...

    @abstractmethod
    def error(self, msg: str, **ctx: Any) -> None: ...

    @abstractmethod
    def debug(self, msg: str, **ctx: Any) -> None: ...

    def with_context(self, **ctx: Any) -> LoggingInterface:
        """Return a logger that adds ``ctx`` to every entry."""
        return ContextLogger(self, ctx)


class ContextLogger(LoggingInterface):
    """Delegates to another logger, merging fixed context into each call.

    Per-call context wins over the fixed context on key collisions.
    """

    def __init__(self, inner: LoggingInterface, ctx: dict[str, Any]) -> None:
        self._inner = inner
        self._ctx = dict(ctx)

    def info(self, msg: str, **ctx: Any) -> None:
        self._inner.info(msg, **{**self._ctx, **ctx})

    def warn(self, msg: str, **ctx: Any) -> None:
        self._inner.warn(msg, **{**self._ctx, **ctx})

    def error(self, msg: str, **ctx: Any) -> None:
        self._inner.error(msg, **{**self._ctx, **ctx})

    def debug(self, msg: str, **ctx: Any) -> None:
        self._inner.debug(msg, **{**self._ctx, **ctx})

    def with_context(self, **ctx: Any) -> LoggingInterface:
        return ContextLogger(self._inner, {**self._ctx, **ctx})

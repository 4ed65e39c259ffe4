"""Derived execution context that replaces only the reporting channel."""

from collections.abc import Callable
from typing import Any

__all__ = ["ReportingContext"]


class ReportingContext:
    """
    Read-only decorator over a host context.

    `report` is the replacement channel; every other attribute lookup falls
    through to the wrapped context, so host-specific properties and methods
    stay reachable exactly as the host defined them.
    """

    __slots__ = ("_context", "_report")

    def __init__(self, context: Any, report: Callable[..., Any]) -> None:
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_report", report)

    def report(self, *args: Any, **kwargs: Any) -> Any:
        return self._report(*args, **kwargs)

    @property
    def wrapped(self) -> Any:
        """The host context this one delegates to."""
        return self._context

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not defined on ReportingContext itself.
        return getattr(object.__getattribute__(self, "_context"), name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only; cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only; cannot delete '{name}'")

    def __dir__(self) -> list[str]:
        return sorted(set(dir(self._context)) | {"report", "wrapped"})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._context!r})"

"""Merge listener sets from several rules into one, keeping rule order per event."""

from collections.abc import Iterable, Mapping
from typing import Any

from rule_composer.domain.errors import InvalidRuleError
from rule_composer.domain.protocols import Listener, ListenerSet

__all__ = ["CombinedListener", "ListenerMerger"]


class CombinedListener:
    """Calls every handler registered for one event, in rule order, with the same arguments."""

    __slots__ = ("event", "handlers")

    def __init__(self, event: str, handlers: Iterable[Listener]) -> None:
        self.event = event
        self.handlers: tuple[Listener, ...] = tuple(handlers)

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        errors: list[Exception] = []
        for handler in self.handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:  # re-raised below once every handler ran
                errors.append(exc)
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise ExceptionGroup(
                f"{len(errors)} listeners failed for '{self.event}'", errors
            )

    def __repr__(self) -> str:
        return f"CombinedListener({self.event!r}, {len(self.handlers)} handlers)"


class ListenerMerger:
    """
    Accumulates listener sets as event name -> ordered handler list.

    Built and discarded within a single create() call.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Listener]] = {}

    def add(self, listeners: ListenerSet) -> "ListenerMerger":
        if not isinstance(listeners, Mapping):
            raise InvalidRuleError(
                f"create() must return a mapping of listeners, got {type(listeners).__name__}"
            )
        for event, handler in listeners.items():
            self._handlers.setdefault(event, []).append(handler)
        return self

    def merged(self) -> dict[str, Listener]:
        """One entry per event: the handler itself when alone, a CombinedListener otherwise."""
        result: dict[str, Listener] = {}
        for event, handlers in self._handlers.items():
            if len(handlers) == 1:
                result[event] = handlers[0]
            else:
                result[event] = CombinedListener(event, handlers)
        return result

    @staticmethod
    def merge(listener_sets: Iterable[ListenerSet]) -> dict[str, Listener]:
        merger = ListenerMerger()
        for listeners in listener_sets:
            merger.add(listeners)
        return merger.merged()

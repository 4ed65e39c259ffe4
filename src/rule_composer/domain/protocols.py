from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypeAlias

from rule_composer.domain.entities import ReportDescriptor, ReportMetadata

Listener: TypeAlias = Callable[..., Any]
ListenerSet: TypeAlias = Mapping[str, Listener]
Predicate: TypeAlias = Callable[[ReportDescriptor, ReportMetadata], bool]
Iteratee: TypeAlias = Callable[[ReportDescriptor, ReportMetadata], Any]


class SourceCodeProtocol(Protocol):
    """Source text accessor a host hands out through get_source_code()."""

    @property
    def text(self) -> str:
        ...

    def get_text(self, node: Any = None) -> str:
        ...


class RuleContext(Protocol):
    """Execution context supplied by the host for one traversal."""

    settings: Mapping[str, Any]
    options: Sequence[Any]
    filename: str

    def report(self, *args: Any, **kwargs: Any) -> None:
        """Reporting channel; accepts every call shape ReportCall.classify understands."""
        ...

    def get_source_code(self) -> SourceCodeProtocol:
        ...


class CreateFunction(Protocol):
    def __call__(self, context: RuleContext) -> ListenerSet:
        ...

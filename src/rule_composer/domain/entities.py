"""Value objects shared by the normalizer, the wrappers and the host bridge."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Position",
    "ReportDescriptor",
    "ReportMetadata",
    "RuleModule",
    "SourceLocation",
]


@dataclass(frozen=True)
class Position:
    """A single point in the source: 1-based line, 0-based column (astroid convention)."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    """A start/end span. `end` is None when it cannot be inferred."""

    start: Any
    end: Any = None


@dataclass(frozen=True)
class ReportDescriptor:
    """
    The canonical shape of one report.

    `data` keeps the distinction between the two reporting conventions:
    a mapping (possibly empty) for message_id reports, the supplied value
    (None when absent) for raw-message reports.
    """

    node: Any
    message: str
    loc: Any
    fix: Any = None
    message_id: str | None = None
    data: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class ReportMetadata:
    """Bundle handed to predicates and iteratees next to each descriptor."""

    source_code: Any
    settings: Mapping[str, Any]
    options: Sequence[Any]
    filename: str


@dataclass(frozen=True)
class RuleModule:
    """Object form of a rule unit; every composition returns one."""

    create: Callable[[Any], Mapping[str, Callable[..., Any]]]
    meta: Any = None
    schema: Any = None

"""
Call shapes accepted by a reporting channel.

A rule may report in three ways:

    context.report(descriptor)                         # DescriptorCall
    context.report(node, message, data, fix)           # MessageCall
    context.report(node, loc, message, data, fix)      # LocatedMessageCall

ReportCall.classify() picks the variant from the argument count and the type
of the second positional argument only; a location must never be read as
message text.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from rule_composer.domain.entities import ReportDescriptor
from rule_composer.domain.errors import MalformedReportError

__all__ = [
    "DescriptorCall",
    "LocatedMessageCall",
    "MessageCall",
    "RawReport",
    "ReportCall",
]

DESCRIPTOR_KEYS = frozenset({"node", "message", "message_id", "data", "loc", "fix"})
_KEY_ALIASES = {"messageId": "message_id"}


@dataclass(frozen=True)
class RawReport:
    """Report fields as supplied by the rule, before location and message resolution."""

    node: Any = None
    message: str | None = None
    message_id: str | None = None
    data: Mapping[str, Any] | None = None
    loc: Any = None
    fix: Any = None
    resolved: bool = False
    """True for a ReportDescriptor passed back in: message, message_id and data are final."""


class ReportCall(ABC):
    """Base of the three call-shape variants."""

    @abstractmethod
    def to_raw(self) -> RawReport:
        ...

    @staticmethod
    def classify(*args: Any, **kwargs: Any) -> "ReportCall":
        """Build the call-shape variant matching a report(*args, **kwargs) call."""
        if not args:
            if not kwargs:
                raise MalformedReportError("report() called without arguments")
            unknown = sorted(set(kwargs) - DESCRIPTOR_KEYS - set(_KEY_ALIASES))
            if unknown:
                raise MalformedReportError(
                    f"report() got unexpected keyword arguments: {', '.join(unknown)}"
                )
            return DescriptorCall(dict(kwargs))
        if len(args) == 1 and not kwargs:
            return DescriptorCall(args[0])
        if len(args) == 1:
            raise MalformedReportError(
                "report() takes a single descriptor or positional node and message"
            )
        if isinstance(args[1], str):
            return ReportCall._build(MessageCall, args, kwargs)
        return ReportCall._build(LocatedMessageCall, args, kwargs)

    @staticmethod
    def _build(variant: type["ReportCall"], args: tuple[Any, ...], kwargs: dict[str, Any]) -> "ReportCall":
        names = [f.name for f in fields(variant)]
        if len(args) > len(names):
            raise MalformedReportError(
                f"report() takes at most {len(names)} positional arguments ({len(args)} given)"
            )
        values = dict(zip(names, args))
        for key, value in kwargs.items():
            if key not in ("data", "fix"):
                raise MalformedReportError(f"report() got an unexpected keyword argument '{key}'")
            if key in values:
                raise MalformedReportError(f"report() got multiple values for '{key}'")
            values[key] = value
        return variant(**values)


@dataclass(frozen=True)
class DescriptorCall(ReportCall):
    descriptor: Any

    def to_raw(self) -> RawReport:
        descriptor = self.descriptor
        if isinstance(descriptor, ReportDescriptor):
            return RawReport(
                node=descriptor.node,
                message=descriptor.message,
                message_id=descriptor.message_id,
                data=descriptor.data,
                loc=descriptor.loc,
                fix=descriptor.fix,
                resolved=True,
            )
        if not isinstance(descriptor, Mapping):
            raise MalformedReportError(
                f"report() descriptor must be a mapping or ReportDescriptor, got {type(descriptor).__name__}"
            )
        values = {_KEY_ALIASES.get(key, key): value for key, value in descriptor.items()}
        return RawReport(**{key: values[key] for key in DESCRIPTOR_KEYS if key in values})


@dataclass(frozen=True)
class MessageCall(ReportCall):
    node: Any
    message: str
    data: Mapping[str, Any] | None = None
    fix: Any = None

    def to_raw(self) -> RawReport:
        return RawReport(node=self.node, message=self.message, data=self.data, fix=self.fix)


@dataclass(frozen=True)
class LocatedMessageCall(ReportCall):
    node: Any
    loc: Any
    message: str | None = None
    data: Mapping[str, Any] | None = None
    fix: Any = None

    def to_raw(self) -> RawReport:
        return RawReport(
            node=self.node,
            message=self.message,
            data=self.data,
            loc=self.loc,
            fix=self.fix,
        )

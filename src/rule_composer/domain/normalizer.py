"""Collapse any report call into a ReportDescriptor. Pure; no I/O."""

import re
from collections.abc import Mapping
from typing import Any

from rule_composer.domain.entities import Position, ReportDescriptor, SourceLocation
from rule_composer.domain.errors import MalformedReportError
from rule_composer.domain.report_calls import RawReport, ReportCall

__all__ = ["ReportNormalizer", "interpolate_message", "placeholder_names"]

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def interpolate_message(message: str, data: Mapping[str, Any] | None) -> str:
    """Replace {{ name }} placeholders found in data; unknown ones stay verbatim."""
    if data is None:
        return message

    def _substitute(match: re.Match[str]) -> str:
        term = match.group(1)
        if term in data:
            return str(data[term])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, message)


def placeholder_names(template: str) -> list[str]:
    """Names referenced by a template, in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(template)))


def _has_start(loc: Any) -> bool:
    if isinstance(loc, Mapping):
        return "start" in loc
    return hasattr(loc, "start")


class ReportNormalizer:
    """
    Resolves report calls for one rule.

    `messages` is the rule's meta messages mapping (message id -> template);
    it is only consulted for message_id reports.
    """

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages: Mapping[str, str] = messages or {}

    def normalize(self, *args: Any, **kwargs: Any) -> ReportDescriptor:
        """Normalize one report(*args, **kwargs) call into a canonical descriptor."""
        raw = ReportCall.classify(*args, **kwargs).to_raw()
        loc = self.resolve_loc(raw)
        if raw.resolved:
            return ReportDescriptor(
                node=raw.node,
                message=raw.message,
                loc=loc,
                fix=raw.fix,
                message_id=raw.message_id,
                data=raw.data,
            )
        if raw.message_id is not None:
            return self._from_message_id(raw, loc)
        if raw.message is None:
            raise MalformedReportError("report() requires a message or a message_id")
        return ReportDescriptor(
            node=raw.node,
            message=interpolate_message(raw.message, raw.data),
            loc=loc,
            fix=raw.fix,
            message_id=None,
            data=raw.data,
        )

    @staticmethod
    def resolve_loc(raw: RawReport) -> Any:
        """Explicit loc wins; a bare point becomes start-only; otherwise ask the node."""
        if raw.loc is not None:
            if _has_start(raw.loc):
                return raw.loc
            return SourceLocation(start=raw.loc, end=None)
        return ReportNormalizer.node_location(raw.node)

    @staticmethod
    def node_location(node: Any) -> Any:
        """The node's own location: its `loc` if it carries one, else astroid coordinates."""
        if node is None:
            raise MalformedReportError("report() needs a node or an explicit loc")
        own = getattr(node, "loc", None)
        if own is not None:
            return own
        lineno = getattr(node, "lineno", None)
        if lineno is None:
            raise MalformedReportError(
                f"cannot infer a location from {type(node).__name__} node without lineno"
            )
        start = Position(line=lineno, column=getattr(node, "col_offset", None) or 0)
        end_lineno = getattr(node, "end_lineno", None)
        end = None
        if end_lineno is not None:
            end = Position(line=end_lineno, column=getattr(node, "end_col_offset", None) or 0)
        return SourceLocation(start=start, end=end)

    def _from_message_id(self, raw: RawReport, loc: Any) -> ReportDescriptor:
        if raw.message is not None:
            raise MalformedReportError("report() called with both a message and a message_id")
        template = self._messages.get(raw.message_id)
        if template is None:
            raise MalformedReportError(
                f"report() called with message_id '{raw.message_id}' which is not in the rule's messages"
            )
        supplied = raw.data or {}
        data = {name: supplied[name] for name in placeholder_names(template) if name in supplied}
        return ReportDescriptor(
            node=raw.node,
            message=interpolate_message(template, data),
            loc=loc,
            fix=raw.fix,
            message_id=raw.message_id,
            data=data,
        )

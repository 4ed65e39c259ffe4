"""Execution context for a rule unit running inside pylint."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from rule_composer.domain.entities import ReportDescriptor
from rule_composer.domain.normalizer import ReportNormalizer
from rule_composer.infrastructure.source_code import AstroidSourceCode

MSG_SYMBOL = "composed-rule-report"


def _point(point: Any) -> tuple[int | None, int | None]:
    if point is None:
        return (None, None)
    if isinstance(point, Mapping):
        return (point.get("line"), point.get("column"))
    return (getattr(point, "line", None), getattr(point, "column", None))


def _bound(loc: Any, name: str) -> Any:
    if isinstance(loc, Mapping):
        return loc.get(name)
    return getattr(loc, name, None)


class PylintRuleContext:
    """
    One rule's view of one module.

    report() resolves the call with the rule's own messages and hands the
    result to `sink` (the checker's add_message) under a single pylint
    message whose args are (rule_name, message).
    """

    def __init__(
        self,
        *,
        rule_name: str,
        sink: Callable[..., Any],
        normalizer: ReportNormalizer,
        source_code: AstroidSourceCode,
        settings: Mapping[str, Any],
        options: Sequence[Any],
        filename: str,
    ) -> None:
        self.rule_name = rule_name
        self._sink = sink
        self._normalizer = normalizer
        self._source_code = source_code
        self.settings = settings
        self.options = options
        self.filename = filename

    def get_source_code(self) -> AstroidSourceCode:
        return self._source_code

    def report(self, *args: Any, **kwargs: Any) -> None:
        self.emit(self._normalizer.normalize(*args, **kwargs))

    def emit(self, descriptor: ReportDescriptor) -> None:
        line, column = _point(_bound(descriptor.loc, "start"))
        end_line, end_column = _point(_bound(descriptor.loc, "end"))
        node = descriptor.node if descriptor.node is not None else self._source_code.ast
        self._sink(
            MSG_SYMBOL,
            node=node,
            line=line,
            col_offset=column,
            end_lineno=end_line,
            end_col_offset=end_column,
            args=(self.rule_name, descriptor.message),
        )

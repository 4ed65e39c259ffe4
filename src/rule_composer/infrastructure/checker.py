"""Pylint checker hosting composed rule units. pylint's walker drives their listeners."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import astroid
from pylint.checkers import BaseChecker
from pylint.checkers.utils import only_required_for_messages

from rule_composer.domain.errors import InvalidRuleError
from rule_composer.domain.normalizer import ReportNormalizer
from rule_composer.domain.protocols import ListenerSet
from rule_composer.domain.rule_units import RuleUnit
from rule_composer.infrastructure.pylint_context import MSG_SYMBOL, PylintRuleContext
from rule_composer.infrastructure.source_code import AstroidSourceCode

if TYPE_CHECKING:
    from pylint.lint import PyLinter

logger = logging.getLogger(__name__)

MSG_ID = "W9901"


@dataclass(frozen=True)
class CheckedRule:
    """A named rule unit plus the options it runs with."""

    name: str
    rule: Any
    options: Sequence[Any] = ()


class ComposedRuleChecker(BaseChecker):
    """
    Runs rule units against every module pylint visits.

    A visit_/leave_ method exists for each astroid node class (generated
    below the class); each forwards the node to the same-named listener of
    every rule. Listener sets are created on visit_module and dropped on
    leave_module, so rules never share state across modules.
    """

    name: str = "rule-composer"
    msgs = {
        MSG_ID: (
            "[%s] %s",
            MSG_SYMBOL,
            "Emitted by a rule unit configured under [tool.rule-composer].",
        ),
    }

    def __init__(
        self,
        linter: "PyLinter",
        rules: Sequence[CheckedRule] = (),
        settings: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(linter)
        self._rules = tuple(rules)
        self._normalizers = {rule.name: ReportNormalizer(RuleUnit.messages(rule.rule)) for rule in self._rules}
        self._settings = settings if settings is not None else MappingProxyType({})
        self._listeners: list[ListenerSet] = []

    @property
    def rules(self) -> tuple[CheckedRule, ...]:
        return self._rules

    @only_required_for_messages(MSG_SYMBOL)
    def visit_module(self, node: astroid.nodes.Module) -> None:
        self._open_module(node)
        self._dispatch("visit_module", node)

    @only_required_for_messages(MSG_SYMBOL)
    def leave_module(self, node: astroid.nodes.Module) -> None:
        try:
            self._dispatch("leave_module", node)
        finally:
            self._listeners = []

    def _open_module(self, node: astroid.nodes.Module) -> None:
        source_code = AstroidSourceCode(node)
        filename = node.file or node.name
        listener_sets = []
        for checked in self._rules:
            context = PylintRuleContext(
                rule_name=checked.name,
                sink=self.add_message,
                normalizer=self._normalizers[checked.name],
                source_code=source_code,
                settings=self._settings,
                options=checked.options,
                filename=filename,
            )
            listeners = RuleUnit.create_function(checked.rule)(context)
            if not isinstance(listeners, Mapping):
                raise InvalidRuleError(
                    f"rule '{checked.name}' create() returned {type(listeners).__name__}, not a listener mapping"
                )
            listener_sets.append(listeners)
        self._listeners = listener_sets
        logger.debug("Created listeners for %d rules on %s", len(listener_sets), filename)

    def _dispatch(self, event: str, node: astroid.nodes.NodeNG) -> None:
        for listeners in self._listeners:
            handler = listeners.get(event)
            if handler is not None:
                handler(node)


def _dispatcher(event: str) -> Any:
    @only_required_for_messages(MSG_SYMBOL)
    def handler(self: ComposedRuleChecker, node: astroid.nodes.NodeNG) -> None:
        self._dispatch(event, node)

    handler.__name__ = event
    return handler


for _node_class in astroid.nodes.ALL_NODE_CLASSES:
    for _prefix in ("visit_", "leave_"):
        _event = _prefix + _node_class.__name__.lower()
        if not hasattr(ComposedRuleChecker, _event):
            setattr(ComposedRuleChecker, _event, _dispatcher(_event))

"""Read the two rule-unit shapes (bare create function or object with create/meta/schema)."""

from collections.abc import Mapping
from typing import Any

from rule_composer.domain.errors import InvalidRuleError
from rule_composer.domain.protocols import CreateFunction


class RuleUnit:
    """Accessors over any accepted rule-unit shape. No top-level functions."""

    @staticmethod
    def create_function(rule: Any) -> CreateFunction:
        if isinstance(rule, Mapping):
            create = rule.get("create")
        elif hasattr(rule, "create"):
            create = rule.create
        else:
            create = rule
        if not callable(create):
            raise InvalidRuleError(
                f"expected a create function or an object with create(), got {type(rule).__name__}"
            )
        return create

    @staticmethod
    def _field(rule: Any, name: str) -> Any:
        if isinstance(rule, Mapping):
            return rule.get(name)
        if hasattr(rule, "create"):
            return getattr(rule, name, None)
        return None

    @staticmethod
    def meta(rule: Any) -> Any:
        """The rule's meta object, None for bare create functions."""
        return RuleUnit._field(rule, "meta")

    @staticmethod
    def schema(rule: Any) -> Any:
        return RuleUnit._field(rule, "schema")

    @staticmethod
    def messages(rule: Any) -> Mapping[str, str]:
        """meta.messages (mapping or attribute), {} when the rule declares none."""
        meta = RuleUnit.meta(rule)
        if meta is None:
            return {}
        if isinstance(meta, Mapping):
            messages = meta.get("messages")
        else:
            messages = getattr(meta, "messages", None)
        return messages or {}

"""Composer configuration. Immutable value object created by Infrastructure from [tool.rule-composer]."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleEntryConfig:
    """One [tool.rule-composer.rules.<name>] table."""

    name: str
    reference: str
    options: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ComposerConfig:
    """
    Settings shared by every configured rule plus the ordered rule entries.

    Built with from_dict(); unusable entries are logged and skipped so a bad
    table never aborts the pylint run.
    """

    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    rules: tuple[RuleEntryConfig, ...] = ()

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ComposerConfig":
        raw_settings = config.get("settings", {})
        if not isinstance(raw_settings, Mapping):
            logger.warning("Configuration Warning: [tool.rule-composer] settings must be a table; ignoring it.")
            raw_settings = {}
        raw_rules = config.get("rules", {})
        if not isinstance(raw_rules, Mapping):
            logger.warning("Configuration Warning: [tool.rule-composer] rules must be a table; ignoring it.")
            raw_rules = {}
        entries = [
            entry
            for name, table in raw_rules.items()
            if (entry := cls._rule_entry(name, table)) is not None
        ]
        return cls(settings=MappingProxyType(dict(raw_settings)), rules=tuple(entries))

    @staticmethod
    def _rule_entry(name: str, table: Any) -> RuleEntryConfig | None:
        if isinstance(table, str):
            return RuleEntryConfig(name=name, reference=table)
        if not isinstance(table, Mapping) or not isinstance(table.get("rule"), str):
            logger.warning(
                "Configuration Warning: rule '%s' needs a 'rule = \"module:attribute\"' entry; skipping it.",
                name,
            )
            return None
        options = table.get("options", [])
        if not isinstance(options, list):
            logger.warning(
                "Configuration Warning: options of rule '%s' must be an array; using no options.", name
            )
            options = []
        return RuleEntryConfig(name=name, reference=table["rule"], options=tuple(options))
